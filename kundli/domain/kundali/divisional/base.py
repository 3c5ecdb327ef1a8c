import math
from abc import ABC, abstractmethod
from typing import Dict, Tuple

from kundli.domain.kundali.angles import degree_in_sign, sign_index
from kundli.domain.kundali.constants import SIGNS
from kundli.domain.kundali.divisional.schemas import DivisionalChart, DivisionalPlacement
from kundli.domain.kundali.errors import DivisionalChartError
from kundli.domain.kundali.schemas import KundaliChart


_EPSILON = 1e-9


class BaseDivisionalCalculator(ABC):
    """
    Abstract base class for all divisional chart calculators.

    Each divisional chart (D9, D10, etc.) must:
    - Declare `division`, `chart_type` and `name`
    - Implement `varga_position` (or `_start_sign` for equal-part schemes)
    """

    division: int
    chart_type: str
    name: str
    calculation_version: str = "v1"

    # Signs advanced per part; most schemes step one sign at a time
    step: int = 1

    def calculate(
        self,
        kundali: KundaliChart
    ) -> DivisionalChart:
        """
        Calculate the divisional chart from a D1 kundali.
        """

        # ─────────────────────────────────────────────
        # Ascendant
        # ─────────────────────────────────────────────

        ascendant = self._placement(kundali.ascendant.longitude)

        # ─────────────────────────────────────────────
        # Bodies
        # ─────────────────────────────────────────────

        placements: Dict[str, DivisionalPlacement] = {}
        for name, position in kundali.positions.items():
            placements[name] = self._placement(position.longitude)

        return self._build_chart(ascendant=ascendant, placements=placements)

    def varga_position(self, longitude: float) -> Tuple[int, float]:
        """
        Map a sidereal longitude to (varga sign index, degree in varga sign).

        Default: equal parts of 30/N degrees counted from `_start_sign`.
        """
        sign = sign_index(longitude)
        degree = degree_in_sign(longitude)
        part = self._part(degree)

        varga_sign = (self._start_sign(sign) + part * self.step) % 12
        return varga_sign, self._scaled_degree(degree, part)

    # ─────────────────────────────────────────────
    # Shared helpers
    # ─────────────────────────────────────────────

    @abstractmethod
    def _start_sign(self, sign_index: int) -> int:
        raise NotImplementedError

    @property
    def part_span(self) -> float:
        return 30.0 / self.division

    def _part(self, degree: float) -> int:
        part = int(math.floor(degree / self.part_span + _EPSILON))
        return min(max(part, 0), self.division - 1)

    def _scaled_degree(self, degree: float, part: int) -> float:
        scaled = max(0.0, degree - part * self.part_span) * self.division
        return min(scaled, math.nextafter(30.0, 0.0))

    def _placement(self, longitude: float) -> DivisionalPlacement:
        if not math.isfinite(longitude):
            raise DivisionalChartError(f"{self.chart_type}: non-finite longitude {longitude}")

        varga_sign, varga_degree = self.varga_position(longitude)
        return DivisionalPlacement(
            sign_index=varga_sign,
            sign=SIGNS[varga_sign],
            degree_in_sign=varga_degree,
        )

    def _build_chart(
        self,
        ascendant: DivisionalPlacement,
        placements: Dict[str, DivisionalPlacement],
    ) -> DivisionalChart:
        """
        Helper to assemble a DivisionalChart object.
        """
        return DivisionalChart(
            chart_type=self.chart_type,
            division=self.division,
            name=self.name,
            ascendant=ascendant,
            placements=placements,
            calculation_version=self.calculation_version,
        )
