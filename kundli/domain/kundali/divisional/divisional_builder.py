import logging
from typing import Dict, List

from kundli.domain.kundali.divisional.base import BaseDivisionalCalculator
from kundli.domain.kundali.divisional.d9 import D9Calculator
from kundli.domain.kundali.divisional.d10 import D10Calculator
from kundli.domain.kundali.divisional.d30 import D30Calculator
from kundli.domain.kundali.divisional.schemas import DivisionalChart, DivisionalCharts
from kundli.domain.kundali.divisional.vargas import (
    D1Calculator,
    D2Calculator,
    D3Calculator,
    D4Calculator,
    D7Calculator,
    D12Calculator,
    D16Calculator,
    D20Calculator,
    D24Calculator,
    D27Calculator,
    D40Calculator,
    D45Calculator,
    D60Calculator,
)
from kundli.domain.kundali.errors import KundaliError
from kundli.domain.kundali.schemas import KundaliChart

logger = logging.getLogger(__name__)


def default_calculators() -> List[BaseDivisionalCalculator]:
    return [
        D1Calculator(),
        D2Calculator(),
        D3Calculator(),
        D4Calculator(),
        D7Calculator(),
        D9Calculator(),
        D10Calculator(),
        D12Calculator(),
        D16Calculator(),
        D20Calculator(),
        D24Calculator(),
        D27Calculator(),
        D30Calculator(),
        D40Calculator(),
        D45Calculator(),
        D60Calculator(),
    ]


class DivisionalBuilder:
    """
    Orchestrates the calculation of all divisional charts
    for a given kundali.

    A failing scheme is logged and reported in `failures`;
    the remaining schemes are still returned.
    """

    def __init__(
        self,
        calculators: List[BaseDivisionalCalculator] | None = None
    ):
        # Default: all sixteen supported vargas
        self.calculators = calculators or default_calculators()

    def build(
        self,
        kundali: KundaliChart
    ) -> DivisionalCharts:
        """
        Build all supported divisional charts.
        """

        charts: Dict[str, DivisionalChart] = {}
        failures: Dict[str, str] = {}

        for calculator in self.calculators:
            try:
                chart = calculator.calculate(kundali)
            except (KundaliError, ValueError, ArithmeticError) as exc:
                logger.warning(f"Divisional chart {calculator.chart_type} failed: {exc}")
                failures[calculator.chart_type] = str(exc)
                continue
            charts[chart.chart_type] = chart

        return DivisionalCharts(
            charts=charts,
            failures=failures,
            calculation_version=self.calculators[0].calculation_version if self.calculators else "v1"
        )
