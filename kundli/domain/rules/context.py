from typing import Dict, FrozenSet, Iterable, List

from kundli.domain.kundali.angles import angular_distance, house_from
from kundli.domain.kundali.constants import (
    DEBILITATION,
    EXALTATION,
    KENDRA_HOUSES,
    OWN_SIGNS,
    SIGN_LORDS,
    TRIKONA_HOUSES,
)
from kundli.domain.kundali.schemas import BodyPosition, HouseLayout, KundaliChart
from kundli.domain.rules.schemas import YogaStrength


# Graha drishti: houses counted from the aspecting body's sign
VEDIC_ASPECTS: Dict[str, FrozenSet[int]] = {
    "Mars": frozenset({4, 7, 8}),
    "Jupiter": frozenset({5, 7, 9}),
    "Saturn": frozenset({3, 7, 10}),
    "Rahu": frozenset({5, 7, 9}),
    "Ketu": frozenset({5, 7, 9}),
}
DEFAULT_ASPECTS: FrozenSet[int] = frozenset({7})


class ChartContext:
    """
    Read-only view of positions + houses with the lookups rules share.

    House placement follows the chart's house system; relative counts
    between bodies are always by sign.
    """

    def __init__(self, positions: Dict[str, BodyPosition], houses: HouseLayout):
        self.positions = positions
        self.houses = houses
        self.asc_sign = houses.ascendant.sign_index

    @classmethod
    def from_chart(cls, kundali: KundaliChart) -> "ChartContext":
        return cls(kundali.positions, kundali.houses)

    # ─────────────────────────────────────────────
    # Placement
    # ─────────────────────────────────────────────

    def pos(self, body: str) -> BodyPosition:
        return self.positions[body]

    def sign(self, body: str) -> int:
        return self.positions[body].sign_index

    def house(self, body: str) -> int:
        return self.houses.house_of(body)

    def sign_of_house(self, house: int) -> int:
        return (self.asc_sign + house - 1) % 12

    def lord_of_house(self, house: int) -> str:
        return SIGN_LORDS[self.sign_of_house(house)]

    def house_from_body(self, reference: str, body: str) -> int:
        return house_from(self.sign(reference), self.sign(body))

    def bodies_in_sign(self, sign_index: int, among: Iterable[str] | None = None) -> List[str]:
        candidates = among if among is not None else self.positions.keys()
        return [b for b in candidates if self.positions[b].sign_index == sign_index]

    def bodies_in_house(self, house: int, among: Iterable[str] | None = None) -> List[str]:
        candidates = among if among is not None else self.positions.keys()
        return [b for b in candidates if self.house(b) == house]

    def same_sign(self, a: str, b: str) -> bool:
        return self.sign(a) == self.sign(b)

    def separation(self, a: str, b: str) -> float:
        return angular_distance(self.pos(a).longitude, self.pos(b).longitude)

    def in_kendra(self, body: str) -> bool:
        return self.house(body) in KENDRA_HOUSES

    def in_trikona(self, body: str) -> bool:
        return self.house(body) in TRIKONA_HOUSES

    def in_kendra_from(self, reference: str, body: str) -> bool:
        return self.house_from_body(reference, body) in KENDRA_HOUSES

    # ─────────────────────────────────────────────
    # Dignity by sign (independent of motion)
    # ─────────────────────────────────────────────

    def is_exalted(self, body: str) -> bool:
        return body in EXALTATION and EXALTATION[body][0] == self.sign(body)

    def is_debilitated(self, body: str) -> bool:
        return DEBILITATION.get(body) == self.sign(body)

    def in_own_sign(self, body: str) -> bool:
        return self.sign(body) in OWN_SIGNS.get(body, ())

    def own_or_exalted(self, body: str) -> bool:
        return self.in_own_sign(body) or self.is_exalted(body)

    def is_retrograde(self, body: str) -> bool:
        return self.pos(body).is_retrograde

    # ─────────────────────────────────────────────
    # Aspects
    # ─────────────────────────────────────────────

    def aspects_sign(self, body: str, sign_index: int) -> bool:
        """
        Graha drishti from `body` onto a sign.
        """
        houses = VEDIC_ASPECTS.get(body, DEFAULT_ASPECTS)
        return house_from(self.sign(body), sign_index) in houses

    def aspects(self, body: str, target: str) -> bool:
        return body != target and self.aspects_sign(body, self.sign(target))

    def influences(self, body: str, target: str) -> bool:
        """
        Conjunction or graha drishti.
        """
        return body != target and (self.same_sign(body, target) or self.aspects(body, target))

    def influences_house(self, body: str, house: int) -> bool:
        sign = self.sign_of_house(house)
        return self.sign(body) == sign or self.aspects_sign(body, sign)

    # ─────────────────────────────────────────────
    # Strength
    # ─────────────────────────────────────────────

    def dignity_strength(self, bodies: Iterable[str]) -> YogaStrength:
        """
        Combined strength of the bodies forming a yoga.
        """
        bodies = list(bodies)
        if any(self.is_debilitated(b) for b in bodies):
            return YogaStrength.WEAK
        if any(self.is_exalted(b) for b in bodies):
            return YogaStrength.STRONG
        if any(self.in_own_sign(b) for b in bodies) or not any(self.is_retrograde(b) for b in bodies):
            return YogaStrength.MODERATE
        return YogaStrength.WEAK
