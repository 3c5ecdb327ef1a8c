import logging
from datetime import datetime

from kundli.domain.kundali.angles import ensure_utc
from kundli.domain.kundali.ephemeris import EphemerisProvider
from kundli.domain.kundali.position_resolver import PositionResolver
from kundli.domain.kundali.schemas import KundaliChart
from kundli.domain.transits.schemas import TransitChart

logger = logging.getLogger(__name__)


class TransitEngine:
    """
    Calculates planetary transits for a given datetime.

    This engine:
    - Is ephemeris-agnostic (any EphemerisProvider)
    - Uses the natal chart's ayanamsa and node type
    - Returns pure domain schemas
    """

    calculation_version = "v1"

    def __init__(
        self,
        provider: EphemerisProvider,
        resolver: PositionResolver | None = None,
    ):
        self.provider = provider
        self.resolver = resolver or PositionResolver(provider)

    def calculate(
        self,
        kundali: KundaliChart,
        instant: datetime,
    ) -> TransitChart:
        """
        Calculate transit positions for a given datetime.
        """
        instant = ensure_utc(instant)

        # 1. Ayanamsa at the query instant
        ayanamsa_value = self.provider.ayanamsa_value(instant, kundali.ayanamsa)

        # 2. All nine bodies (Ketu derived from Rahu)
        positions = self.resolver.resolve_all(instant, ayanamsa_value, kundali.node_type)

        logger.debug(f"Transit positions resolved for {instant.isoformat()}")

        return TransitChart(
            instant=instant,
            ayanamsa_value=ayanamsa_value,
            positions=positions,
            calculation_version=self.calculation_version,
        )
