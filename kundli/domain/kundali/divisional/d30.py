import math
from typing import List, Tuple

from kundli.domain.kundali.angles import degree_in_sign, sign_index
from kundli.domain.kundali.constants import is_odd_sign
from kundli.domain.kundali.divisional.base import BaseDivisionalCalculator


# (segment width, trimshamsha sign, ruler); widths sum to 30
ODD_SIGN_SEGMENTS: List[Tuple[float, int, str]] = [
    (5.0, 0, "Mars"),        # Aries
    (5.0, 10, "Saturn"),     # Aquarius
    (8.0, 8, "Jupiter"),     # Sagittarius
    (7.0, 2, "Mercury"),     # Gemini
    (5.0, 6, "Venus"),       # Libra
]

EVEN_SIGN_SEGMENTS: List[Tuple[float, int, str]] = [
    (5.0, 1, "Venus"),       # Taurus
    (7.0, 5, "Mercury"),     # Virgo
    (8.0, 11, "Jupiter"),    # Pisces
    (5.0, 9, "Saturn"),      # Capricorn
    (5.0, 7, "Mars"),        # Scorpio
]


class D30Calculator(BaseDivisionalCalculator):
    """
    Calculates the Trimshamsha (D30) chart.

    Unlike every other varga the five segments are unequal, so the degree
    inside a segment is stretched to a full 30° sign by that segment's width.
    """

    division = 30
    chart_type = "D30"
    name = "Trimshamsha"
    calculation_version = "v1"

    def varga_position(self, longitude: float) -> Tuple[int, float]:
        sign = sign_index(longitude)
        degree = degree_in_sign(longitude)
        segments = ODD_SIGN_SEGMENTS if is_odd_sign(sign) else EVEN_SIGN_SEGMENTS

        # The last segment takes whatever the earlier ones leave
        start = 0.0
        width, target_sign, _ruler = segments[-1]
        for segment in segments[:-1]:
            if degree < start + segment[0]:
                width, target_sign, _ruler = segment
                break
            start += segment[0]

        offset = max(0.0, degree - start)
        scaled = min(offset * 30.0 / width, math.nextafter(30.0, 0.0))
        return target_sign, scaled

    def ruler(self, longitude: float) -> str:
        """
        Planet ruling the trimshamsha segment of a longitude.
        """
        sign = sign_index(longitude)
        degree = degree_in_sign(longitude)
        segments = ODD_SIGN_SEGMENTS if is_odd_sign(sign) else EVEN_SIGN_SEGMENTS

        start = 0.0
        for width, _target, ruler in segments:
            start += width
            if degree < start:
                return ruler
        return segments[-1][2]

    def _start_sign(self, sign_index: int) -> int:
        raise NotImplementedError("D30 uses unequal segments; see varga_position")
