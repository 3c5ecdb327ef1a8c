from typing import Dict, List, Tuple

from kundli.domain.dasha.base import BaseDashaSystem, cycle_from, rotated
from kundli.domain.dasha.schemas import DashaTimeline
from kundli.domain.kundali.derived.nakshatra_calculator import NakshatraCalculator
from kundli.domain.kundali.schemas import KundaliChart


# (yogini, ruling planet, years)
YOGINI_SEQUENCE: List[Tuple[str, str, float]] = [
    ("Mangala", "Moon", 1),
    ("Pingala", "Sun", 2),
    ("Dhanya", "Jupiter", 3),
    ("Bhramari", "Mars", 4),
    ("Bhadrika", "Mercury", 5),
    ("Ulka", "Saturn", 6),
    ("Siddha", "Venus", 7),
    ("Sankata", "Rahu", 8),
]

YOGINI_LORDS = [name for name, _, _ in YOGINI_SEQUENCE]
YOGINI_PLANETS: Dict[str, str] = {name: planet for name, planet, _ in YOGINI_SEQUENCE}
YOGINI_YEARS: Dict[str, float] = {name: years for name, _, years in YOGINI_SEQUENCE}


def starting_yogini(nakshatra_index: int) -> int:
    """
    Index into YOGINI_SEQUENCE for a 0-based birth nakshatra.

    Classical rule: (nakshatra number + 3) mod 8, remainder 0 → Sankata.
    Ardra (6th) therefore opens with Mangala.
    """
    return (nakshatra_index + 3) % 8


class YoginiDasha(BaseDashaSystem):
    """
    36-year cycle of the eight yoginis.
    """

    system = "Yogini"
    cycle_years = 36.0

    def __init__(self, nakshatra_calculator: NakshatraCalculator | None = None, **kwargs):
        super().__init__(**kwargs)
        self.nakshatra_calculator = nakshatra_calculator or NakshatraCalculator()

    def calculate(self, kundali: KundaliChart) -> DashaTimeline:
        moon = self.nakshatra_calculator.calculate(kundali.position("Moon").longitude)

        return self._build_timeline(
            birth=kundali.birth_instant,
            mahadasha_lords=cycle_from(YOGINI_LORDS, starting_yogini(moon.index)),
            elapsed_fraction=moon.fraction_elapsed,
            weight=YOGINI_YEARS.__getitem__,
            sub_order=lambda lord: rotated(YOGINI_LORDS, lord),
            planet_of=YOGINI_PLANETS.get,
        )
