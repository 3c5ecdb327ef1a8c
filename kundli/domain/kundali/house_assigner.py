import logging
from datetime import datetime
from typing import Dict, List, Sequence

from kundli.domain.kundali.angles import (
    degree_in_sign,
    forward_distance,
    house_from,
    nakshatra_index,
    normalize,
    pada,
    sign_index,
)
from kundli.domain.kundali.constants import HOUSE_NAMES, NAKSHATRAS, SIGN_LORDS, SIGNS
from kundli.domain.kundali.ephemeris import EphemerisProvider
from kundli.domain.kundali.errors import InvalidInputError, ProviderUnavailableError
from kundli.domain.kundali.schemas import (
    Ascendant,
    BodyPosition,
    HouseCusp,
    HouseLayout,
    HouseSystem,
)

logger = logging.getLogger(__name__)

# Bhava Chalita houses begin half a house before each bhava madhya
BHAVA_SANDHI_OFFSET = 15.0


class HouseAssigner:
    """
    Builds the HouseLayout for one chart.

    Sign-based systems (Equal, Whole Sign) place bodies by sign arithmetic.
    Cusp-based systems place each body in the half-open interval
    [cusp_n, cusp_n+1), wrapping at 360°.
    """

    calculation_version = "v1"

    def __init__(self, provider: EphemerisProvider | None = None):
        self.provider = provider

    def assign(
        self,
        instant: datetime,
        latitude: float,
        longitude: float,
        system: HouseSystem,
        ayanamsa_value: float,
        positions: Dict[str, BodyPosition],
    ) -> HouseLayout:
        """
        Fetch tropical cusps from the provider and build the sidereal layout.
        """
        if self.provider is None:
            raise InvalidInputError("HouseAssigner.assign requires an ephemeris provider")

        system = HouseSystem(system)
        raw = self.provider.house_cusps(instant, latitude, longitude, system)

        ascendant = normalize(raw.ascendant - ayanamsa_value)
        cusps = [normalize(c - ayanamsa_value) for c in raw.cusps]

        return self.layout(ascendant, system, positions, cusps)

    def layout(
        self,
        ascendant_longitude: float,
        system: HouseSystem,
        positions: Dict[str, BodyPosition],
        cusp_longitudes: Sequence[float] | None = None,
    ) -> HouseLayout:
        """
        Build a HouseLayout from a sidereal ascendant (and cusps for
        cusp-based systems).
        """
        system = HouseSystem(system)
        asc_lon = normalize(ascendant_longitude)
        asc_sign = sign_index(asc_lon)

        # ─────────────────────────────────────────────
        # Step 1: Cusp longitudes
        # ─────────────────────────────────────────────

        if system == HouseSystem.WHOLE_SIGN:
            cusps = [((asc_sign + i) % 12) * 30.0 for i in range(12)]
        elif system == HouseSystem.EQUAL:
            cusps = [normalize(asc_lon + 30.0 * i) for i in range(12)]
        else:
            if cusp_longitudes is None or len(cusp_longitudes) != 12:
                raise InvalidInputError(f"{system.value} houses need 12 cusp longitudes")
            cusps = [normalize(c) for c in cusp_longitudes]
            if system == HouseSystem.BHAVA_CHALITA:
                cusps = [normalize(c - BHAVA_SANDHI_OFFSET) for c in cusps]
            self._validate_partition(cusps, system)

        # ─────────────────────────────────────────────
        # Step 2: Body → house
        # ─────────────────────────────────────────────

        body_houses: Dict[str, int] = {}
        for name, position in positions.items():
            if system.is_sign_based:
                body_houses[name] = house_from(asc_sign, position.sign_index)
            else:
                body_houses[name] = self._house_by_cusps(position.longitude, cusps)

        # ─────────────────────────────────────────────
        # Step 3: Assemble
        # ─────────────────────────────────────────────

        asc_nak = nakshatra_index(asc_lon)
        ascendant = Ascendant(
            longitude=asc_lon,
            sign_index=asc_sign,
            sign=SIGNS[asc_sign],
            degree_in_sign=degree_in_sign(asc_lon),
            nakshatra=NAKSHATRAS[asc_nak],
            pada=pada(asc_lon),
        )

        return HouseLayout(
            system=system.value,
            ascendant=ascendant,
            cusps=tuple(self._cusp(n, cusps[n - 1], asc_sign, system) for n in range(1, 13)),
            body_houses=body_houses,
        )

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _cusp(
        self,
        house_number: int,
        cusp_longitude: float,
        asc_sign: int,
        system: HouseSystem,
    ) -> HouseCusp:
        if system.is_sign_based:
            # The house *is* the sign in sign-based systems
            s_index = (asc_sign + house_number - 1) % 12
        else:
            s_index = sign_index(cusp_longitude)

        return HouseCusp(
            house_number=house_number,
            name=HOUSE_NAMES[house_number - 1],
            cusp_longitude=round(cusp_longitude, 6),
            sign_index=s_index,
            sign=SIGNS[s_index],
            sign_lord=SIGN_LORDS[s_index],
        )

    @staticmethod
    def _house_by_cusps(longitude: float, cusps: List[float]) -> int:
        for n in range(12):
            start = cusps[n]
            span = forward_distance(start, cusps[(n + 1) % 12])
            if forward_distance(start, longitude) < span:
                return n + 1
        # Unreachable for a validated partition
        raise ProviderUnavailableError(f"Longitude {longitude} fell outside every house")

    @staticmethod
    def _validate_partition(cusps: List[float], system: HouseSystem) -> None:
        spans = [forward_distance(cusps[n], cusps[(n + 1) % 12]) for n in range(12)]
        if abs(sum(spans) - 360.0) > 1e-6 or any(span <= 0.0 for span in spans):
            logger.error(f"Cusps for {system.value} are not a cyclic partition: {cusps}")
            raise ProviderUnavailableError(
                f"{system.value} cusps do not partition the ecliptic"
            )
