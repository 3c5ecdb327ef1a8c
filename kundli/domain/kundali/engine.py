import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from kundli.cache.ephemeris_cache import CachedEphemerisProvider
from kundli.config import settings
from kundli.domain.dasha.dasha_builder import DashaBuilder
from kundli.domain.kundali.angles import ensure_utc
from kundli.domain.kundali.derived.ashtakavarga_calculator import AshtakavargaCalculator
from kundli.domain.kundali.derived.karaka_calculator import KarakaCalculator
from kundli.domain.kundali.derived.nakshatra_calculator import NakshatraCalculator
from kundli.domain.kundali.derived.shadbala_calculator import ShadbalaCalculator
from kundli.domain.kundali.divisional.divisional_builder import DivisionalBuilder
from kundli.domain.kundali.ephemeris import EphemerisProvider, SwissEphemerisProvider
from kundli.domain.kundali.errors import InvalidInputError, ProviderUnavailableError
from kundli.domain.kundali.house_assigner import HouseAssigner
from kundli.domain.kundali.position_resolver import PositionResolver
from kundli.domain.kundali.results import ChartResult
from kundli.domain.kundali.schemas import Ayanamsa, HouseSystem, KundaliChart, NodeType
from kundli.domain.rules.rule_engine import RuleEngine
from kundli.domain.transits.schemas import TransitSnapshot
from kundli.domain.transits.transit_builder import TransitBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BirthInput:
    """
    Immutable birth input used for chart calculation.
    """
    birth_instant: datetime
    latitude: float
    longitude: float
    ayanamsa: str = settings.DEFAULT_AYANAMSA
    house_system: str = settings.DEFAULT_HOUSE_SYSTEM
    node_type: str = settings.DEFAULT_NODE_TYPE

    @classmethod
    def from_local(
        cls,
        birth_date: date,
        birth_time: time,
        timezone_name: str,
        latitude: float,
        longitude: float,
        **calculation,
    ) -> "BirthInput":
        """
        Build from civil local date/time in an IANA zone.
        """
        try:
            zone = ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError, TypeError) as exc:
            raise InvalidInputError(f"Unknown timezone: {timezone_name!r}") from exc

        local = datetime.combine(birth_date, birth_time).replace(tzinfo=zone)
        return cls(
            birth_instant=local.astimezone(timezone.utc),
            latitude=latitude,
            longitude=longitude,
            **calculation,
        )


def default_provider() -> EphemerisProvider:
    return CachedEphemerisProvider(SwissEphemerisProvider())


class ChartEngine:
    """
    Orchestrates chart calculation.

    This class:
    - Validates birth inputs and calculation settings
    - Resolves positions and houses through the injected provider
    - Runs every downstream engine on the resulting KundaliChart
    """

    calculation_version = "v1"

    def __init__(
        self,
        provider: EphemerisProvider | None = None,
        resolver: PositionResolver | None = None,
        house_assigner: HouseAssigner | None = None,
        divisional_builder: DivisionalBuilder | None = None,
        dasha_builder: DashaBuilder | None = None,
        rule_engine: RuleEngine | None = None,
        shadbala_calculator: ShadbalaCalculator | None = None,
        ashtakavarga_calculator: AshtakavargaCalculator | None = None,
        karaka_calculator: KarakaCalculator | None = None,
        nakshatra_calculator: NakshatraCalculator | None = None,
        transit_builder: TransitBuilder | None = None,
    ):
        self.provider = provider or default_provider()
        self.resolver = resolver or PositionResolver(self.provider)
        self.house_assigner = house_assigner or HouseAssigner(self.provider)
        self.divisional_builder = divisional_builder or DivisionalBuilder()
        self.dasha_builder = dasha_builder or DashaBuilder()
        self.rule_engine = rule_engine or RuleEngine()
        self.shadbala_calculator = shadbala_calculator or ShadbalaCalculator()
        self.ashtakavarga_calculator = ashtakavarga_calculator or AshtakavargaCalculator()
        self.karaka_calculator = karaka_calculator or KarakaCalculator()
        self.nakshatra_calculator = nakshatra_calculator or NakshatraCalculator()
        self.transit_builder = transit_builder or TransitBuilder(self.provider)

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def build(self, birth: BirthInput) -> ChartResult:
        return self.build_chart(
            birth.birth_instant,
            birth.latitude,
            birth.longitude,
            ayanamsa=birth.ayanamsa,
            house_system=birth.house_system,
            node_type=birth.node_type,
        )

    def build_chart(
        self,
        birth_instant: datetime,
        latitude: float,
        longitude: float,
        ayanamsa: Union[Ayanamsa, str, None] = None,
        house_system: Union[HouseSystem, str, None] = None,
        node_type: Union[NodeType, str, None] = None,
    ) -> ChartResult:
        """
        Generate the full chart for one birth.

        Raises a KundaliError subclass on invalid input or provider failure.
        """

        # ─────────────────────────────────────────────
        # Step 1: Validate input
        # ─────────────────────────────────────────────

        if not isinstance(birth_instant, datetime):
            raise InvalidInputError("Birth instant must be a timezone-aware datetime")
        instant = ensure_utc(birth_instant)
        latitude, longitude = self._validate_location(latitude, longitude)
        ayanamsa = self._parse(Ayanamsa, ayanamsa or settings.DEFAULT_AYANAMSA, "ayanamsa")
        house_system = self._parse(HouseSystem, house_system or settings.DEFAULT_HOUSE_SYSTEM, "house system")
        node_type = self._parse(NodeType, node_type or settings.DEFAULT_NODE_TYPE, "node type")

        # ─────────────────────────────────────────────
        # Step 2: Positions and houses
        # ─────────────────────────────────────────────

        try:
            ayanamsa_value = self.provider.ayanamsa_value(instant, ayanamsa)
            positions = self.resolver.resolve_all(instant, ayanamsa_value, node_type)
            houses = self.house_assigner.assign(
                instant, latitude, longitude, house_system, ayanamsa_value, positions
            )
        except ProviderUnavailableError as exc:
            logger.error(f"Ephemeris provider failed for {instant.isoformat()}: {exc}")
            raise

        kundali = KundaliChart(
            birth_instant=instant,
            latitude=latitude,
            longitude=longitude,
            ayanamsa=ayanamsa,
            ayanamsa_value=ayanamsa_value,
            house_system=house_system,
            node_type=node_type,
            positions=positions,
            houses=houses,
        )
        logger.debug(f"D1 assembled: ascendant {kundali.ascendant.sign}, {house_system.value} houses")

        # ─────────────────────────────────────────────
        # Step 3: Downstream engines
        # ─────────────────────────────────────────────

        divisional = self.divisional_builder.build(kundali)
        dashas = self.dasha_builder.build(kundali)
        rules = self.rule_engine.evaluate(kundali)
        shadbala = self.shadbala_calculator.calculate(kundali)
        ashtakavarga = self.ashtakavarga_calculator.calculate(kundali)
        karakas = self.karaka_calculator.calculate(positions)
        moon_nakshatra = self.nakshatra_calculator.calculate(positions["Moon"].longitude)

        # ─────────────────────────────────────────────
        # Step 4: Assemble result
        # ─────────────────────────────────────────────

        result = ChartResult(
            kundali=kundali,
            moon_nakshatra=moon_nakshatra,
            divisional=divisional,
            dashas=dashas,
            yogas=rules.yogas,
            doshas=rules.doshas,
            shadbala=shadbala,
            ashtakavarga=ashtakavarga,
            karakas=karakas,
            calculation_version=self.calculation_version,
        )

        logger.info(
            f"Chart built for {instant.isoformat()}: {len(result.yogas)} yogas, "
            f"{len(result.doshas)} doshas, {len(divisional.failures)} divisional failures"
        )
        return result

    def build_transit_snapshot(
        self,
        natal_chart: Union[ChartResult, KundaliChart],
        query_instant: datetime | None = None,
    ) -> TransitSnapshot:
        """
        Compare positions at `query_instant` (default: now) with a natal chart.
        """
        kundali = natal_chart.kundali if isinstance(natal_chart, ChartResult) else natal_chart
        if query_instant is not None:
            query_instant = ensure_utc(query_instant)

        try:
            return self.transit_builder.build(kundali, query_instant)
        except ProviderUnavailableError as exc:
            logger.error(f"Ephemeris provider failed during transit calculation: {exc}")
            raise

    # ─────────────────────────────────────────────
    # Validation helpers
    # ─────────────────────────────────────────────

    @staticmethod
    def _validate_location(latitude: float, longitude: float) -> tuple[float, float]:
        try:
            latitude, longitude = float(latitude), float(longitude)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError("Latitude and longitude must be numbers") from exc

        if not (math.isfinite(latitude) and -90.0 <= latitude <= 90.0):
            raise InvalidInputError(f"Latitude out of range [-90, 90]: {latitude}")
        if not (math.isfinite(longitude) and -180.0 <= longitude <= 180.0):
            raise InvalidInputError(f"Longitude out of range [-180, 180]: {longitude}")
        return latitude, longitude

    @staticmethod
    def _parse(enum_cls, value, label: str):
        try:
            return enum_cls(value)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown {label}: {value!r}") from exc


# ─────────────────────────────────────────────
# Module-level helpers
# ─────────────────────────────────────────────

def build_chart(
    birth_instant: datetime,
    latitude: float,
    longitude: float,
    ayanamsa: Union[Ayanamsa, str, None] = None,
    house_system: Union[HouseSystem, str, None] = None,
    node_type: Union[NodeType, str, None] = None,
) -> ChartResult:
    return ChartEngine().build_chart(
        birth_instant, latitude, longitude,
        ayanamsa=ayanamsa, house_system=house_system, node_type=node_type,
    )


def build_transit_snapshot(
    natal_chart: Union[ChartResult, KundaliChart],
    query_instant: datetime | None = None,
) -> TransitSnapshot:
    return ChartEngine().build_transit_snapshot(natal_chart, query_instant)
