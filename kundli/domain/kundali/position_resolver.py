import logging
from datetime import datetime
from typing import Dict

from kundli.domain.kundali.angles import (
    degree_in_sign,
    nakshatra_index,
    normalize,
    pada,
    sign_index,
)
from kundli.domain.kundali.constants import (
    BODIES,
    DEBILITATION,
    EXALTATION,
    LUMINARIES,
    NAKSHATRAS,
    OWN_SIGNS,
    PLANETS,
    SIGNS,
)
from kundli.domain.kundali.ephemeris import EphemerisProvider
from kundli.domain.kundali.errors import IncompleteComputationError
from kundli.domain.kundali.schemas import BodyPosition, Dignity, NodeType

logger = logging.getLogger(__name__)


def resolve_dignity(body: str, sidereal_sign: int, is_retrograde: bool) -> Dignity:
    """
    Dignity by table lookup.

    Retrograde motion (never for the luminaries) takes precedence; then
    exaltation, debilitation and own sign by direct sign match.
    """
    if is_retrograde and body not in LUMINARIES:
        return Dignity.RETROGRADE

    if body in EXALTATION and EXALTATION[body][0] == sidereal_sign:
        return Dignity.EXALTED

    if DEBILITATION.get(body) == sidereal_sign:
        return Dignity.DEBILITATED

    if sidereal_sign in OWN_SIGNS.get(body, ()):
        return Dignity.OWN_SIGN

    return Dignity.NEUTRAL


class PositionResolver:
    """
    Turns tropical ephemeris data into sidereal BodyPositions.
    """

    calculation_version = "v1"

    def __init__(self, provider: EphemerisProvider):
        self.provider = provider

    # ─────────────────────────────────────────────
    # Single body
    # ─────────────────────────────────────────────

    def resolve(
        self,
        body: str,
        tropical_longitude: float,
        speed: float,
        ayanamsa_value: float,
    ) -> BodyPosition:
        """
        Build a BodyPosition from one tropical longitude.
        """
        sidereal = normalize(tropical_longitude - ayanamsa_value)
        return self._position(body, sidereal, speed)

    # ─────────────────────────────────────────────
    # All nine bodies
    # ─────────────────────────────────────────────

    def resolve_all(
        self,
        instant: datetime,
        ayanamsa_value: float,
        node_type: NodeType = NodeType.MEAN,
    ) -> Dict[str, BodyPosition]:
        """
        Resolve the seven planets and both nodes at one instant.

        Ketu is derived as Rahu + 180°. Any missing body is fatal.
        """
        positions: Dict[str, BodyPosition] = {}

        for body in PLANETS + ["Rahu"]:
            raw = self.provider.position(body, instant, node_type)
            positions[body] = self.resolve(body, raw.longitude, raw.speed, ayanamsa_value)

        if "Rahu" in positions:
            rahu = positions["Rahu"]
            positions["Ketu"] = self._position(
                "Ketu",
                normalize(rahu.longitude + 180.0),
                rahu.speed,
            )

        missing = [b for b in BODIES if b not in positions]
        if missing:
            raise IncompleteComputationError(
                f"Resolved {len(positions)} of {len(BODIES)} bodies; missing {missing}"
            )

        logger.debug(f"Resolved {len(positions)} positions for {instant.isoformat()}")
        return positions

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _position(self, body: str, sidereal: float, speed: float) -> BodyPosition:
        s_index = sign_index(sidereal)
        n_index = nakshatra_index(sidereal)
        retrograde = speed < 0

        return BodyPosition(
            body=body,
            longitude=sidereal,
            sign_index=s_index,
            sign=SIGNS[s_index],
            degree_in_sign=degree_in_sign(sidereal),
            nakshatra_index=n_index,
            nakshatra=NAKSHATRAS[n_index],
            pada=pada(sidereal),
            speed=speed,
            is_retrograde=retrograde,
            dignity=resolve_dignity(body, s_index, retrograde),
        )
