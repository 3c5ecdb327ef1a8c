from kundli.domain.kundali.constants import is_odd_sign
from kundli.domain.kundali.divisional.base import BaseDivisionalCalculator


class D10Calculator(BaseDivisionalCalculator):
    """
    Calculates the Dashamsha (D10) chart from a D1 kundali.
    Used primarily for career and professional analysis.
    """

    division = 10
    chart_type = "D10"
    name = "Dashamsha"
    calculation_version = "v1"

    def _start_sign(self, sign_index: int) -> int:
        if is_odd_sign(sign_index):
            return sign_index
        # Even signs count from the 9th sign
        return (sign_index + 8) % 12
