from typing import Dict, List, Tuple

from kundli.domain.dasha.base import BaseDashaSystem, cycle_from, rotated
from kundli.domain.dasha.schemas import DashaTimeline
from kundli.domain.kundali.derived.nakshatra_calculator import NakshatraCalculator
from kundli.domain.kundali.schemas import KundaliChart


# Order of Dasha Lords and their duration in years
VIMSHOTTARI_SEQUENCE: List[Tuple[str, float]] = [
    ("Ketu", 7), ("Venus", 20), ("Sun", 6), ("Moon", 10),
    ("Mars", 7), ("Rahu", 18), ("Jupiter", 16), ("Saturn", 19), ("Mercury", 17),
]

VIMSHOTTARI_LORDS = [lord for lord, _ in VIMSHOTTARI_SEQUENCE]
VIMSHOTTARI_YEARS: Dict[str, float] = dict(VIMSHOTTARI_SEQUENCE)


class VimshottariDasha(BaseDashaSystem):
    """
    120-year nakshatra dasha.

    The Moon's nakshatra picks the first lord (the cycle of nine lords
    repeats every nine nakshatras); the unelapsed part of the nakshatra
    is the balance of that first Mahadasha.
    """

    system = "Vimshottari"
    cycle_years = 120.0

    def __init__(self, nakshatra_calculator: NakshatraCalculator | None = None, **kwargs):
        super().__init__(**kwargs)
        self.nakshatra_calculator = nakshatra_calculator or NakshatraCalculator()

    def calculate(self, kundali: KundaliChart) -> DashaTimeline:
        moon = self.nakshatra_calculator.calculate(kundali.position("Moon").longitude)
        start_index = moon.index % 9

        return self._build_timeline(
            birth=kundali.birth_instant,
            mahadasha_lords=cycle_from(VIMSHOTTARI_LORDS, start_index),
            elapsed_fraction=moon.fraction_elapsed,
            weight=VIMSHOTTARI_YEARS.__getitem__,
            sub_order=lambda lord: rotated(VIMSHOTTARI_LORDS, lord),
        )

    def balance_years(self, moon_longitude: float) -> float:
        """
        Years of the first Mahadasha remaining at birth.
        """
        moon = self.nakshatra_calculator.calculate(moon_longitude)
        lord = VIMSHOTTARI_LORDS[moon.index % 9]
        return (1.0 - moon.fraction_elapsed) * VIMSHOTTARI_YEARS[lord]
