from kundli.domain.kundali.divisional.base import BaseDivisionalCalculator


class D9Calculator(BaseDivisionalCalculator):
    """
    Calculates the Navamsha (D9) chart from a D1 kundali.

    Navamshas run continuously through the zodiac: fire signs begin from
    Aries, earth from Capricorn, air from Libra and water from Cancer, so
    the start sign repeats with a period of three signs.
    """

    division = 9
    chart_type = "D9"
    name = "Navamsha"
    calculation_version = "v1"

    def _start_sign(self, sign_index: int) -> int:
        # Navamsha sign progression: sign * 9 keeps the count unbroken
        return (sign_index * 9) % 12
