from kundli.domain.kundali.angles import (
    nakshatra_fraction,
    nakshatra_index,
    normalize,
    pada,
)
from kundli.domain.kundali.constants import GANA, NADI, NAKSHATRAS
from kundli.domain.kundali.derived.schemas import NakshatraInfo


# Vimshottari lords, repeating every nine nakshatras (Ashwini → Ketu)
NAKSHATRA_LORDS = [
    "Ketu", "Venus", "Sun", "Moon", "Mars",
    "Rahu", "Jupiter", "Saturn", "Mercury",
]

# Gandmool nakshatras sit on the junctions of water and fire signs
GANDMOOL_NAKSHATRAS = frozenset({0, 8, 9, 17, 18, 26})


class NakshatraCalculator:
    """
    Utility to calculate nakshatra facts from an absolute sidereal longitude.
    """

    def calculate(self, longitude: float) -> NakshatraInfo:
        """
        Calculate nakshatra, pada, lord and traversed fraction.
        """
        lon = normalize(longitude)
        index = nakshatra_index(lon)

        return NakshatraInfo(
            index=index,
            name=NAKSHATRAS[index],
            pada=pada(lon),
            lord=NAKSHATRA_LORDS[index % 9],
            fraction_elapsed=nakshatra_fraction(lon),
            gana=GANA[index],
            nadi=NADI[index],
        )

    def is_gandmool(self, longitude: float) -> bool:
        return nakshatra_index(longitude) in GANDMOOL_NAKSHATRAS
