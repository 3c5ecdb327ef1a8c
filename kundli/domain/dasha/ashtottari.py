import logging
from typing import Dict, List, Optional, Tuple

from kundli.domain.dasha.base import BaseDashaSystem, cycle_from, rotated
from kundli.domain.dasha.schemas import DashaTimeline
from kundli.domain.kundali.angles import forward_distance, house_from, is_day_birth
from kundli.domain.kundali.constants import SIGN_LORDS
from kundli.domain.kundali.derived.nakshatra_calculator import NakshatraCalculator
from kundli.domain.kundali.schemas import KundaliChart

logger = logging.getLogger(__name__)


ASHTOTTARI_SEQUENCE: List[Tuple[str, float]] = [
    ("Sun", 6), ("Moon", 15), ("Mars", 8), ("Mercury", 17),
    ("Saturn", 10), ("Jupiter", 19), ("Rahu", 12), ("Venus", 21),
]

ASHTOTTARI_LORDS = [lord for lord, _ in ASHTOTTARI_SEQUENCE]
ASHTOTTARI_YEARS: Dict[str, float] = dict(ASHTOTTARI_SEQUENCE)

# Nakshatra groups counted from Ardra (index 5), one per lord in sequence
# order; Abhijit is folded into the Saturn group.
NAKSHATRA_GROUPS: List[List[int]] = [
    [5, 6, 7, 8],        # Sun: Ardra .. Ashlesha
    [9, 10, 11],         # Moon: Magha .. Uttara Phalguni
    [12, 13, 14, 15],    # Mars: Hasta .. Vishakha
    [16, 17, 18],        # Mercury: Anuradha .. Mula
    [19, 20, 21],        # Saturn: Purva Ashadha .. Shravana
    [22, 23, 24],        # Jupiter: Dhanishta .. Purva Bhadrapada
    [25, 26, 0, 1],      # Rahu: Uttara Bhadrapada .. Bharani
    [2, 3, 4],           # Venus: Krittika .. Mrigashira
]

GROUP_OF_NAKSHATRA: Dict[int, int] = {
    nakshatra: lord_index
    for lord_index, group in enumerate(NAKSHATRA_GROUPS)
    for nakshatra in group
}

# Houses from the lagna lord that qualify Rahu
RAHU_QUALIFYING_HOUSES = frozenset({1, 4, 5, 7, 9, 10})


class AshtottariDasha(BaseDashaSystem):
    """
    108-year dasha of eight lords (Ketu has no period).

    Applies only to charts meeting one of its eligibility rules;
    otherwise `calculate` returns None.
    """

    system = "Ashtottari"
    cycle_years = 108.0

    def __init__(self, nakshatra_calculator: NakshatraCalculator | None = None, **kwargs):
        super().__init__(**kwargs)
        self.nakshatra_calculator = nakshatra_calculator or NakshatraCalculator()

    def calculate(self, kundali: KundaliChart) -> Optional[DashaTimeline]:
        reason = self.ineligibility_reason(kundali)
        if reason is not None:
            logger.info(f"Ashtottari not applicable: {reason}")
            return None

        group_index, elapsed = self.starting_point(kundali.position("Moon").longitude)

        return self._build_timeline(
            birth=kundali.birth_instant,
            mahadasha_lords=cycle_from(ASHTOTTARI_LORDS, group_index),
            elapsed_fraction=elapsed,
            weight=ASHTOTTARI_YEARS.__getitem__,
            sub_order=lambda lord: rotated(ASHTOTTARI_LORDS, lord),
        )

    # ─────────────────────────────────────────────
    # Eligibility
    # ─────────────────────────────────────────────

    def ineligibility_reason(self, kundali: KundaliChart) -> Optional[str]:
        """
        None when the chart qualifies, else a short explanation.

        Qualifies when Rahu is in a kendra or trikona from the lagna lord,
        or for a Krishna-paksha day birth / Shukla-paksha night birth.
        """
        if self.rahu_qualifies(kundali) or self.paksha_qualifies(kundali):
            return None
        return (
            "Rahu is not in a kendra/trikona from the lagna lord and the "
            "paksha/day-night rule does not hold"
        )

    def rahu_qualifies(self, kundali: KundaliChart) -> bool:
        lagna_lord = SIGN_LORDS[kundali.ascendant.sign_index]
        lord_sign = kundali.position(lagna_lord).sign_index
        rahu_sign = kundali.position("Rahu").sign_index
        return house_from(lord_sign, rahu_sign) in RAHU_QUALIFYING_HOUSES

    def paksha_qualifies(self, kundali: KundaliChart) -> bool:
        sun = kundali.position("Sun")
        moon = kundali.position("Moon")

        # Shukla (waxing) while the Moon is less than 180° ahead of the Sun
        shukla = forward_distance(sun.longitude, moon.longitude) < 180.0
        day_birth = is_day_birth(kundali.ascendant.longitude, sun.longitude)

        return (not shukla and day_birth) or (shukla and not day_birth)

    # ─────────────────────────────────────────────
    # Starting point
    # ─────────────────────────────────────────────

    def starting_point(self, moon_longitude: float) -> Tuple[int, float]:
        """
        (lord index, fraction of the lord's group already traversed).
        """
        moon = self.nakshatra_calculator.calculate(moon_longitude)

        lord_index = GROUP_OF_NAKSHATRA[moon.index]
        group = NAKSHATRA_GROUPS[lord_index]
        elapsed = (group.index(moon.index) + moon.fraction_elapsed) / len(group)
        return lord_index, min(elapsed, 1.0 - 1e-12)
