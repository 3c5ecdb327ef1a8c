"""
Equal-part vargas.

Each scheme only decides where its count starts (and, for D3/D4, how
many signs each part advances); BaseDivisionalCalculator does the rest.
"""
from typing import Tuple

from kundli.domain.kundali.angles import degree_in_sign, sign_index
from kundli.domain.kundali.constants import is_odd_sign
from kundli.domain.kundali.divisional.base import BaseDivisionalCalculator


ARIES, TAURUS, GEMINI, CANCER, LEO, VIRGO = 0, 1, 2, 3, 4, 5
LIBRA, SCORPIO, SAGITTARIUS, CAPRICORN, AQUARIUS, PISCES = 6, 7, 8, 9, 10, 11


class D1Calculator(BaseDivisionalCalculator):
    division = 1
    chart_type = "D1"
    name = "Rashi"

    def varga_position(self, longitude: float) -> Tuple[int, float]:
        return sign_index(longitude), degree_in_sign(longitude)

    def _start_sign(self, sign_index: int) -> int:
        return sign_index


class D2Calculator(BaseDivisionalCalculator):
    """
    Hora: odd signs give Leo then Cancer, even signs Cancer then Leo.
    """

    division = 2
    chart_type = "D2"
    name = "Hora"

    def _start_sign(self, sign_index: int) -> int:
        return LEO if is_odd_sign(sign_index) else CANCER

    def varga_position(self, longitude: float) -> Tuple[int, float]:
        sign = sign_index(longitude)
        degree = degree_in_sign(longitude)
        part = self._part(degree)

        first = self._start_sign(sign)
        second = CANCER if first == LEO else LEO
        return (first if part == 0 else second), self._scaled_degree(degree, part)


class D3Calculator(BaseDivisionalCalculator):
    """
    Drekkana: 1st, 5th and 9th signs from the sign.
    """

    division = 3
    chart_type = "D3"
    name = "Drekkana"
    step = 4

    def _start_sign(self, sign_index: int) -> int:
        return sign_index


class D4Calculator(BaseDivisionalCalculator):
    """
    Chaturthamsha: 1st, 4th, 7th and 10th signs from the sign.
    """

    division = 4
    chart_type = "D4"
    name = "Chaturthamsha"
    step = 3

    def _start_sign(self, sign_index: int) -> int:
        return sign_index


class D7Calculator(BaseDivisionalCalculator):
    division = 7
    chart_type = "D7"
    name = "Saptamsha"

    def _start_sign(self, sign_index: int) -> int:
        return sign_index if is_odd_sign(sign_index) else (sign_index + 6) % 12


class D12Calculator(BaseDivisionalCalculator):
    division = 12
    chart_type = "D12"
    name = "Dwadashamsha"

    def _start_sign(self, sign_index: int) -> int:
        return sign_index


class D16Calculator(BaseDivisionalCalculator):
    division = 16
    chart_type = "D16"
    name = "Shodashamsha"

    def _start_sign(self, sign_index: int) -> int:
        # movable, fixed, dual
        return (ARIES, LEO, SAGITTARIUS)[sign_index % 3]


class D20Calculator(BaseDivisionalCalculator):
    division = 20
    chart_type = "D20"
    name = "Vimshamsha"

    def _start_sign(self, sign_index: int) -> int:
        return (ARIES, SAGITTARIUS, LEO)[sign_index % 3]


class D24Calculator(BaseDivisionalCalculator):
    division = 24
    chart_type = "D24"
    name = "Chaturvimshamsha"

    def _start_sign(self, sign_index: int) -> int:
        return LEO if is_odd_sign(sign_index) else CANCER


class D27Calculator(BaseDivisionalCalculator):
    """
    Bhamsha: fire from Aries, earth from Cancer, air from Libra,
    water from Capricorn.
    """

    division = 27
    chart_type = "D27"
    name = "Saptavimshamsha"

    def _start_sign(self, sign_index: int) -> int:
        return (ARIES, CANCER, LIBRA, CAPRICORN)[sign_index % 4]


class D40Calculator(BaseDivisionalCalculator):
    division = 40
    chart_type = "D40"
    name = "Khavedamsha"

    def _start_sign(self, sign_index: int) -> int:
        return ARIES if is_odd_sign(sign_index) else LIBRA


class D45Calculator(BaseDivisionalCalculator):
    division = 45
    chart_type = "D45"
    name = "Akshavedamsha"

    def _start_sign(self, sign_index: int) -> int:
        return (ARIES, LEO, SAGITTARIUS)[sign_index % 3]


class D60Calculator(BaseDivisionalCalculator):
    division = 60
    chart_type = "D60"
    name = "Shashtiamsha"

    def _start_sign(self, sign_index: int) -> int:
        return sign_index
