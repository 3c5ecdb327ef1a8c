import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from kundli.config import settings
from kundli.domain.kundali.angles import house_from, normalize, sign_index
from kundli.domain.kundali.constants import SIGNS
from kundli.domain.kundali.ephemeris import EphemerisProvider
from kundli.domain.kundali.schemas import KundaliChart, NodeType
from kundli.domain.transits.schemas import (
    MajorTransitPeriod,
    SadeSatiPhase,
    SadeSatiStatus,
    TransitChart,
    TransitPeriodType,
)

logger = logging.getLogger(__name__)


# Saturn's zero-based sign distance from the natal Moon
SADE_SATI_PHASES: Dict[int, SadeSatiPhase] = {
    10: SadeSatiPhase.APPROACHING,
    11: SadeSatiPhase.RISING,
    0: SadeSatiPhase.PEAK,
    1: SadeSatiPhase.SETTING,
}

DHAIYA: Dict[int, TransitPeriodType] = {
    3: TransitPeriodType.KANTAKA_SHANI,    # 4th from Moon
    7: TransitPeriodType.ASHTAMA_SHANI,    # 8th from Moon
}

SLOW_BODIES: List[Tuple[str, TransitPeriodType]] = [
    ("Jupiter", TransitPeriodType.JUPITER_TRANSIT),
    ("Saturn", TransitPeriodType.SATURN_TRANSIT),
    ("Rahu", TransitPeriodType.RAHU_KETU_TRANSIT),
]

SEARCH_STEP = timedelta(days=1)
SEARCH_RESOLUTION = timedelta(hours=1)


def sade_sati_status(moon_sign_index: int, saturn_sign_index: int) -> SadeSatiStatus:
    distance = (saturn_sign_index - moon_sign_index) % 12
    return SadeSatiStatus(
        moon_sign_index=moon_sign_index,
        saturn_sign_index=saturn_sign_index,
        distance=distance,
        phase=SADE_SATI_PHASES.get(distance),
    )


class PeriodCalculator:
    """
    Sade-Sati, Dhaiya and sign-transit periods of the slow bodies.

    Period boundaries are ingress instants: the provider is stepped a day
    at a time until the body changes sign, then bisected to the hour. The
    query instant's ayanamsa is used for the whole search.
    """

    calculation_version = "v1"

    def __init__(
        self,
        provider: EphemerisProvider,
        search_days: int | None = None,
    ):
        self.provider = provider
        self.search_days = search_days or settings.INGRESS_SEARCH_DAYS

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def sade_sati(self, kundali: KundaliChart, transit: TransitChart) -> SadeSatiStatus:
        return sade_sati_status(
            kundali.position("Moon").sign_index,
            transit.positions["Saturn"].sign_index,
        )

    def calculate(
        self,
        kundali: KundaliChart,
        transit: TransitChart,
    ) -> List[MajorTransitPeriod]:
        moon_sign = kundali.position("Moon").sign_index
        periods: List[MajorTransitPeriod] = []
        stays: Dict[str, Tuple[Optional[datetime], Optional[datetime]]] = {}

        for body, period_type in SLOW_BODIES:
            stays[body] = self.sign_stay(body, transit, kundali.node_type)
            periods.append(self._period(period_type, body, transit, moon_sign, stays[body]))

        # ─────────────────────────────────────────────
        # Saturn relative to the Moon
        # ─────────────────────────────────────────────

        status = self.sade_sati(kundali, transit)
        if status.is_active:
            periods.append(self._period(
                TransitPeriodType.SADE_SATI, "Saturn", transit, moon_sign, stays["Saturn"],
                phase=status.phase,
            ))
        elif status.distance in DHAIYA:
            periods.append(self._period(
                DHAIYA[status.distance], "Saturn", transit, moon_sign, stays["Saturn"],
            ))

        return periods

    def sign_stay(
        self,
        body: str,
        transit: TransitChart,
        node_type: NodeType = NodeType.MEAN,
    ) -> Tuple[Optional[datetime], Optional[datetime]]:
        """
        (entry, exit) of the body's current sign around the transit instant.
        """
        start = self.find_ingress(body, transit.instant, transit.ayanamsa_value, node_type, forward=False)
        end = self.find_ingress(body, transit.instant, transit.ayanamsa_value, node_type, forward=True)
        return start, end

    def find_ingress(
        self,
        body: str,
        instant: datetime,
        ayanamsa_value: float,
        node_type: NodeType = NodeType.MEAN,
        forward: bool = True,
    ) -> Optional[datetime]:
        """
        Nearest sign change of `body` after (or before) `instant`.

        Forward searches return the first instant in the next sign;
        backward searches return the first instant in the current sign.
        """
        sign = self._sign_at(body, instant, ayanamsa_value, node_type)
        step = SEARCH_STEP if forward else -SEARCH_STEP

        inside = instant
        for _ in range(self.search_days):
            candidate = inside + step
            if self._sign_at(body, candidate, ayanamsa_value, node_type) != sign:
                return self._bisect(body, sign, inside, candidate, ayanamsa_value, node_type, forward)
            inside = candidate

        logger.debug(
            f"No {body} ingress within {self.search_days} days "
            f"{'after' if forward else 'before'} {instant.isoformat()}"
        )
        return None

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _bisect(
        self,
        body: str,
        sign: int,
        inside: datetime,
        outside: datetime,
        ayanamsa_value: float,
        node_type: NodeType,
        forward: bool,
    ) -> datetime:
        while abs(outside - inside) > SEARCH_RESOLUTION:
            middle = inside + (outside - inside) / 2
            if self._sign_at(body, middle, ayanamsa_value, node_type) == sign:
                inside = middle
            else:
                outside = middle

        return outside if forward else inside

    def _sign_at(
        self,
        body: str,
        instant: datetime,
        ayanamsa_value: float,
        node_type: NodeType,
    ) -> int:
        raw = self.provider.position(body, instant, node_type)
        return sign_index(normalize(raw.longitude - ayanamsa_value))

    def _period(
        self,
        period_type: TransitPeriodType,
        body: str,
        transit: TransitChart,
        moon_sign: int,
        stay: Tuple[Optional[datetime], Optional[datetime]],
        phase: SadeSatiPhase | None = None,
    ) -> MajorTransitPeriod:
        sign = transit.positions[body].sign_index
        house = house_from(moon_sign, sign)
        label = period_type.value.replace("_", " ")

        return MajorTransitPeriod(
            period_type=period_type,
            body=body,
            sign_index=sign,
            sign=SIGNS[sign],
            house_from_moon=house,
            start=stay[0],
            end=stay[1],
            sade_sati_phase=phase,
            description=f"{body} in {SIGNS[sign]}, house {house} from the Moon ({label})",
        )
