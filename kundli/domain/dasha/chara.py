from typing import Dict, List

from kundli.domain.dasha.base import BaseDashaSystem, cycle_from
from kundli.domain.dasha.schemas import DashaTimeline
from kundli.domain.kundali.constants import SIGN_LORDS, SIGNS
from kundli.domain.kundali.schemas import BodyPosition, KundaliChart


# Savya signs count zodiacally to their lord, the rest count backwards
SAVYA_SIGNS = frozenset({0, 1, 2, 6, 7, 8})


def is_savya(sign_index: int) -> bool:
    return sign_index in SAVYA_SIGNS


def sign_years(sign_index: int, positions: Dict[str, BodyPosition]) -> int:
    """
    Chara dasha years of a sign: signs from the sign to its lord,
    counted in the sign's own direction. A lord at home gives 12.
    """
    lord_sign = positions[SIGN_LORDS[sign_index]].sign_index
    if is_savya(sign_index):
        count = (lord_sign - sign_index) % 12
    else:
        count = (sign_index - lord_sign) % 12
    return count or 12


def sign_sequence(start_sign: int) -> List[int]:
    """
    Twelve signs from `start_sign`, forward when the 9th from it is savya.
    """
    step = 1 if is_savya((start_sign + 8) % 12) else -1
    return [(start_sign + step * i) % 12 for i in range(12)]


class CharaDasha(BaseDashaSystem):
    """
    Jaimini Chara dasha: every sign is a period lord.

    Durations depend on the chart, so the cycle total varies.
    """

    system = "Chara"
    cycle_years = None

    def calculate(self, kundali: KundaliChart) -> DashaTimeline:
        years: Dict[str, float] = {
            SIGNS[i]: float(sign_years(i, kundali.positions)) for i in range(12)
        }
        main_order = [SIGNS[i] for i in sign_sequence(kundali.ascendant.sign_index)]

        return self._build_timeline(
            birth=kundali.birth_instant,
            mahadasha_lords=cycle_from(main_order, 0),
            elapsed_fraction=0.0,
            weight=years.__getitem__,
            sub_order=lambda sign: [SIGNS[i] for i in sign_sequence(SIGNS.index(sign))],
            planet_of=lambda sign: SIGN_LORDS[SIGNS.index(sign)],
        )

    def cycle_total(self, kundali: KundaliChart) -> int:
        return sum(sign_years(i, kundali.positions) for i in range(12))
