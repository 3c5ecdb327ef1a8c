"""
Compatibility doshas between two charts, evaluated from the two Moons.
"""
from typing import Callable, Dict, List

from kundli.domain.kundali.angles import house_from
from kundli.domain.kundali.constants import SIGN_LORDS
from kundli.domain.kundali.derived.nakshatra_calculator import NakshatraCalculator
from kundli.domain.kundali.schemas import BodyPosition
from kundli.domain.rules.schemas import (
    CancellationCondition,
    DoshaRecord,
    DoshaSeverity,
    MatchingRule,
)


_nakshatras = NakshatraCalculator()

# Sign distance pair (counted both ways) → severity
BHAKOOT_PAIRS = [
    (frozenset({6, 8}), DoshaSeverity.HIGH),
    (frozenset({2, 12}), DoshaSeverity.MEDIUM),
    (frozenset({5, 9}), DoshaSeverity.LOW),
]

GANA_CONFLICTS = {
    frozenset({"Deva", "Rakshasa"}): DoshaSeverity.HIGH,
    frozenset({"Manushya", "Rakshasa"}): DoshaSeverity.MEDIUM,
}

MATCHING_BODIES = frozenset({"Moon"})


def nadi(moon_a: BodyPosition, moon_b: BodyPosition) -> List[DoshaRecord]:
    a = _nakshatras.calculate(moon_a.longitude)
    b = _nakshatras.calculate(moon_b.longitude)
    if a.nadi != b.nadi:
        return []

    cancellations = (
        CancellationCondition(
            rule="same_sign_different_nakshatra",
            is_satisfied=moon_a.sign_index == moon_b.sign_index and a.index != b.index,
            description="Moons share a sign but not a nakshatra",
        ),
        CancellationCondition(
            rule="same_nakshatra_different_pada",
            is_satisfied=a.index == b.index and a.pada != b.pada,
            description="Moons share a nakshatra but not a pada",
        ),
    )

    return [DoshaRecord(
        rule=MatchingRule.NADI,
        name="Nadi Dosha",
        base_severity=DoshaSeverity.HIGH,
        forming_bodies=MATCHING_BODIES,
        cancellations=cancellations,
        variant=a.nadi,
        description=f"Both Moons in {a.nadi} nadi",
    )]


def bhakoot(moon_a: BodyPosition, moon_b: BodyPosition) -> List[DoshaRecord]:
    distances = frozenset({
        house_from(moon_a.sign_index, moon_b.sign_index),
        house_from(moon_b.sign_index, moon_a.sign_index),
    })

    for pair, severity in BHAKOOT_PAIRS:
        if distances == pair:
            break
    else:
        return []

    same_lord = SIGN_LORDS[moon_a.sign_index] == SIGN_LORDS[moon_b.sign_index]
    label = "/".join(str(d) for d in sorted(pair))

    return [DoshaRecord(
        rule=MatchingRule.BHAKOOT,
        name="Bhakoot Dosha",
        base_severity=severity,
        forming_bodies=MATCHING_BODIES,
        cancellations=(
            CancellationCondition(
                rule="same_sign_lord",
                is_satisfied=same_lord,
                description="Both Moon signs share a lord",
            ),
        ),
        variant=label,
        description=f"Moon signs {moon_a.sign} and {moon_b.sign} are {label} apart",
    )]


def gana(moon_a: BodyPosition, moon_b: BodyPosition) -> List[DoshaRecord]:
    a = _nakshatras.calculate(moon_a.longitude).gana
    b = _nakshatras.calculate(moon_b.longitude).gana
    severity = GANA_CONFLICTS.get(frozenset({a, b}))
    if severity is None:
        return []

    return [DoshaRecord(
        rule=MatchingRule.GANA,
        name="Gana Dosha",
        base_severity=severity,
        forming_bodies=MATCHING_BODIES,
        variant=f"{a}-{b}",
        description=f"{a} gana paired with {b} gana",
    )]


MATCHING_RULES: Dict[MatchingRule, Callable[[BodyPosition, BodyPosition], List[DoshaRecord]]] = {
    MatchingRule.NADI: nadi,
    MatchingRule.BHAKOOT: bhakoot,
    MatchingRule.GANA: gana,
}
