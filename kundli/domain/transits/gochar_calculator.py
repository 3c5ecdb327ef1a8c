from typing import Dict

from kundli.domain.kundali.angles import house_from
from kundli.domain.kundali.schemas import KundaliChart
from kundli.domain.transits.schemas import Gochar, GocharPlanet, TransitChart


class GocharCalculator:
    """
    Calculates gochar (relative transit positions)
    from Lagna and Moon.
    """

    calculation_version = "v1"

    def calculate(
        self,
        kundali: KundaliChart,
        transit: TransitChart
    ) -> Gochar:
        """
        Calculate gochar for all transit bodies.
        """

        lagna_sign = kundali.ascendant.sign_index
        moon_sign = kundali.position("Moon").sign_index

        gochar_planets: Dict[str, GocharPlanet] = {}

        for body, transit_position in transit.positions.items():
            gochar_planets[body] = GocharPlanet(
                planet=body,
                sign=transit_position.sign,
                from_lagna_house=house_from(lagna_sign, transit_position.sign_index),
                from_moon_house=house_from(moon_sign, transit_position.sign_index),
            )

        return Gochar(
            planets=gochar_planets,
            calculation_version=self.calculation_version
        )
