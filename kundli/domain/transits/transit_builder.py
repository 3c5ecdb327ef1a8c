import logging
from datetime import datetime, timezone

from kundli.domain.kundali.ephemeris import EphemerisProvider
from kundli.domain.kundali.schemas import KundaliChart
from kundli.domain.transits.aspect_calculator import AspectCalculator
from kundli.domain.transits.gochar_calculator import GocharCalculator
from kundli.domain.transits.period_calculator import PeriodCalculator
from kundli.domain.transits.schemas import TransitSnapshot
from kundli.domain.transits.transit_engine import TransitEngine

logger = logging.getLogger(__name__)


class TransitBuilder:
    """
    Orchestrates transit, gochar, aspect and period calculation
    for a given kundali and timestamp.
    """

    calculation_version = "v1"

    def __init__(
        self,
        provider: EphemerisProvider,
        transit_engine: TransitEngine | None = None,
        gochar_calculator: GocharCalculator | None = None,
        aspect_calculator: AspectCalculator | None = None,
        period_calculator: PeriodCalculator | None = None,
    ):
        self.transit_engine = transit_engine or TransitEngine(provider)
        self.gochar_calculator = gochar_calculator or GocharCalculator()
        self.aspect_calculator = aspect_calculator or AspectCalculator()
        self.period_calculator = period_calculator or PeriodCalculator(provider)

    def build(
        self,
        kundali: KundaliChart,
        timestamp: datetime | None = None
    ) -> TransitSnapshot:
        """
        Build the transit snapshot.

        If timestamp is None, current UTC time is used.
        """

        if timestamp is None:
            timestamp = datetime.now(timezone.utc)

        # ─────────────────────────────────────────────
        # Transit chart
        # ─────────────────────────────────────────────

        transit_chart = self.transit_engine.calculate(kundali, timestamp)

        # ─────────────────────────────────────────────
        # Gochar + aspects
        # ─────────────────────────────────────────────

        gochar = self.gochar_calculator.calculate(
            kundali=kundali,
            transit=transit_chart
        )
        aspects = self.aspect_calculator.calculate(kundali, transit_chart)

        # ─────────────────────────────────────────────
        # Sade-Sati + major periods
        # ─────────────────────────────────────────────

        sade_sati = self.period_calculator.sade_sati(kundali, transit_chart)
        periods = self.period_calculator.calculate(kundali, transit_chart)

        logger.debug(
            f"Transit snapshot {transit_chart.instant.isoformat()}: "
            f"{len(aspects)} aspects, {len(periods)} periods"
        )

        return TransitSnapshot(
            instant=transit_chart.instant,
            transit=transit_chart,
            gochar=gochar,
            aspects=tuple(aspects),
            sade_sati=sade_sati,
            periods=tuple(periods),
            calculation_version=self.calculation_version,
        )
