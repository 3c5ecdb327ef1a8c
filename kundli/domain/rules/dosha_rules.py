"""
Dosha evaluators.

A dosha record carries a base severity plus independently evaluated
cancellation predicates; the effective severity is derived on the
record itself.
"""
from typing import Callable, Dict, List

from kundli.domain.kundali.angles import forward_distance
from kundli.domain.kundali.constants import (
    DUSTHANA_HOUSES,
    PLANETS,
)
from kundli.domain.kundali.derived.nakshatra_calculator import GANDMOOL_NAKSHATRAS
from kundli.domain.rules.context import ChartContext
from kundli.domain.rules.schemas import (
    CancellationCondition,
    DoshaRecord,
    DoshaRule,
    DoshaSeverity,
)
from kundli.domain.rules.yoga_rules import gaja_kesari


MANGLIK_HOUSES = frozenset({1, 4, 7, 8, 12})

# Named by the house Rahu occupies
KAAL_SARP_TYPES = [
    "Anant", "Kulik", "Vasuki", "Shankhpal", "Padma", "Mahapadma",
    "Takshak", "Karkotak", "Shankhnath", "Ghatak", "Vishdhar", "Sheshnaag",
]

NODE_CONJUNCTION_ORB = 10.0
ECLIPSE_ORB = 12.0
KEMDRUM_PLANETS = ["Mars", "Mercury", "Jupiter", "Venus", "Saturn"]
SEVERE_GANDMOOL = frozenset({8, 17, 18})   # Ashlesha, Jyeshtha, Mula


def _cancel(rule: str, satisfied: bool, description: str) -> CancellationCondition:
    return CancellationCondition(rule=rule, is_satisfied=satisfied, description=description)


# ─────────────────────────────────────────────
# Manglik
# ─────────────────────────────────────────────

def manglik(ctx: ChartContext) -> List[DoshaRecord]:
    if ctx.house("Mars") not in MANGLIK_HOUSES:
        return []

    references = ["Lagna"]
    for reference in ("Moon", "Venus"):
        if ctx.house_from_body(reference, "Mars") in MANGLIK_HOUSES:
            references.append(reference)

    severity = DoshaSeverity.HIGH if len(references) >= 2 else DoshaSeverity.MEDIUM

    cancellations = (
        _cancel("mars_own_or_exalted", ctx.own_or_exalted("Mars"),
                "Mars in own or exaltation sign"),
        _cancel("jupiter_influence", ctx.influences("Jupiter", "Mars"),
                "Jupiter conjuncts or aspects Mars"),
        _cancel("mars_in_cancer", ctx.sign("Mars") == 3,
                "Mars in Cancer"),
        _cancel("venus_influence", ctx.influences("Venus", "Mars"),
                "Venus conjuncts or aspects Mars"),
    )

    return [DoshaRecord(
        rule=DoshaRule.MANGLIK,
        name="Manglik Dosha",
        base_severity=severity,
        forming_bodies=frozenset({"Mars"}),
        cancellations=cancellations,
        variant="+".join(references),
        description=f"Mars in house {ctx.house('Mars')} (counted from {', '.join(references)})",
    )]


# ─────────────────────────────────────────────
# Kaal Sarp
# ─────────────────────────────────────────────

def kaal_sarp(ctx: ChartContext) -> List[DoshaRecord]:
    """
    All seven planets hemmed on one side of the Rahu-Ketu axis.

    Bodies exactly on a node belong to neither arc.
    """
    rahu = ctx.pos("Rahu").longitude
    ketu = ctx.pos("Ketu").longitude

    rahu_side = [p for p in PLANETS if 0.0 < forward_distance(rahu, ctx.pos(p).longitude) < 180.0]
    ketu_side = [p for p in PLANETS if 0.0 < forward_distance(ketu, ctx.pos(p).longitude) < 180.0]
    hemmed = max(len(rahu_side), len(ketu_side))

    if hemmed == 7:
        full = True
    elif hemmed == 6:
        full = False
    else:
        return []

    rahu_house = ctx.house("Rahu")
    type_name = KAAL_SARP_TYPES[rahu_house - 1]

    if not full:
        severity = DoshaSeverity.LOW
    elif rahu_house in DUSTHANA_HOUSES:
        severity = DoshaSeverity.MEDIUM
    else:
        severity = DoshaSeverity.HIGH

    jupiter_on_axis = ctx.influences("Jupiter", "Rahu") or ctx.influences("Jupiter", "Ketu")
    cancellations = (
        _cancel("jupiter_influence", jupiter_on_axis,
                "Jupiter conjuncts or aspects the nodal axis"),
        _cancel("rahu_strong", ctx.sign("Rahu") in (1, 10),
                "Rahu in Taurus or Aquarius"),
        _cancel("gaja_kesari", bool(gaja_kesari(ctx)),
                "Gaja Kesari yoga present"),
    )

    kind = "full" if full else "partial"
    return [DoshaRecord(
        rule=DoshaRule.KAAL_SARP,
        name=f"{type_name} Kaal Sarp Dosha",
        base_severity=severity,
        forming_bodies=frozenset({"Rahu", "Ketu"}),
        cancellations=cancellations,
        variant=kind,
        description=f"{hemmed} planets between the nodes ({kind}); Rahu in house {rahu_house}",
    )]


# ─────────────────────────────────────────────
# Lunar / solar afflictions
# ─────────────────────────────────────────────

def kemdrum(ctx: ChartContext) -> List[DoshaRecord]:
    moon_sign = ctx.sign("Moon")
    flank = ctx.bodies_in_sign((moon_sign + 1) % 12, KEMDRUM_PLANETS) + \
        ctx.bodies_in_sign((moon_sign - 1) % 12, KEMDRUM_PLANETS)
    if flank:
        return []

    benefic_kendra = any(ctx.in_kendra_from("Moon", b) for b in ("Jupiter", "Venus"))
    cancellations = (
        _cancel("benefic_kendra_from_moon", benefic_kendra,
                "Jupiter or Venus in a kendra from the Moon"),
        _cancel("moon_own_or_exalted", ctx.own_or_exalted("Moon"),
                "Moon in own or exaltation sign"),
        _cancel("moon_in_kendra", ctx.in_kendra("Moon"),
                "Moon in a kendra from the Lagna"),
    )

    return [DoshaRecord(
        rule=DoshaRule.KEMDRUM,
        name="Kemdrum Dosha",
        base_severity=DoshaSeverity.MEDIUM,
        forming_bodies=frozenset({"Moon"}),
        cancellations=cancellations,
        description="No planets in the 2nd or 12th from the Moon",
    )]


def pitra(ctx: ChartContext) -> List[DoshaRecord]:
    afflictions = []
    if ctx.same_sign("Sun", "Rahu"):
        afflictions.append("Sun conjunct Rahu")
    if ctx.influences("Saturn", "Sun"):
        afflictions.append("Saturn influences the Sun")
    if ctx.house("Sun") == 9:
        afflictions.append("Sun in the 9th house")

    if not afflictions:
        return []

    if len(afflictions) >= 3:
        severity = DoshaSeverity.HIGH
    elif len(afflictions) == 2:
        severity = DoshaSeverity.MEDIUM
    else:
        severity = DoshaSeverity.LOW

    cancellations = (
        _cancel("jupiter_influence", ctx.influences("Jupiter", "Sun"),
                "Jupiter conjuncts or aspects the Sun"),
        _cancel("sun_own_or_exalted", ctx.own_or_exalted("Sun"),
                "Sun in own or exaltation sign"),
        _cancel("sun_kendra_venus", ctx.in_kendra("Sun") and ctx.influences("Venus", "Sun"),
                "Sun in a kendra with Venus' influence"),
    )

    return [DoshaRecord(
        rule=DoshaRule.PITRA,
        name="Pitra Dosha",
        base_severity=severity,
        forming_bodies=frozenset({"Sun"}),
        cancellations=cancellations,
        description="; ".join(afflictions),
    )]


def grahan(ctx: ChartContext) -> List[DoshaRecord]:
    records: List[DoshaRecord] = []

    for luminary in ("Sun", "Moon"):
        nodes = [n for n in ("Rahu", "Ketu") if ctx.separation(luminary, n) <= ECLIPSE_ORB]
        if not nodes:
            continue

        cancellations = (
            _cancel("jupiter_influence", ctx.influences("Jupiter", luminary),
                    f"Jupiter conjuncts or aspects the {luminary}"),
        )
        records.append(DoshaRecord(
            rule=DoshaRule.GRAHAN,
            name=f"{'Surya' if luminary == 'Sun' else 'Chandra'} Grahan Dosha",
            base_severity=DoshaSeverity.MEDIUM,
            forming_bodies=frozenset([luminary] + nodes),
            cancellations=cancellations,
            variant=luminary,
            description=f"{luminary} within {ECLIPSE_ORB:g}° of {' and '.join(nodes)}",
        ))

    return records


def guru_chandal(ctx: ChartContext) -> List[DoshaRecord]:
    close = ctx.separation("Jupiter", "Rahu") <= NODE_CONJUNCTION_ORB
    if not (close or ctx.aspects("Rahu", "Jupiter")):
        return []

    cancellations = (
        _cancel("jupiter_own_or_exalted", ctx.own_or_exalted("Jupiter"),
                "Jupiter in own or exaltation sign"),
        _cancel("jupiter_in_kendra", ctx.in_kendra("Jupiter"),
                "Jupiter in a kendra"),
    )

    return [DoshaRecord(
        rule=DoshaRule.GURU_CHANDAL,
        name="Guru Chandal Dosha",
        base_severity=DoshaSeverity.MEDIUM,
        forming_bodies=frozenset({"Jupiter", "Rahu"}),
        cancellations=cancellations,
        variant="conjunction" if close else "aspect",
        description="Rahu conjuncts or aspects Jupiter",
    )]


def shrapit(ctx: ChartContext) -> List[DoshaRecord]:
    if ctx.separation("Saturn", "Rahu") > NODE_CONJUNCTION_ORB:
        return []

    jupiter = ctx.influences("Jupiter", "Saturn") or ctx.influences("Jupiter", "Rahu")
    cancellations = (
        _cancel("jupiter_influence", jupiter,
                "Jupiter conjuncts or aspects Saturn or Rahu"),
        _cancel("saturn_own_or_exalted", ctx.own_or_exalted("Saturn"),
                "Saturn in own or exaltation sign"),
    )

    return [DoshaRecord(
        rule=DoshaRule.SHRAPIT,
        name="Shrapit Dosha",
        base_severity=DoshaSeverity.HIGH,
        forming_bodies=frozenset({"Saturn", "Rahu"}),
        cancellations=cancellations,
        description=f"Saturn within {NODE_CONJUNCTION_ORB:g}° of Rahu",
    )]


def gandmool(ctx: ChartContext) -> List[DoshaRecord]:
    moon = ctx.pos("Moon")
    if moon.nakshatra_index not in GANDMOOL_NAKSHATRAS:
        return []

    severity = (
        DoshaSeverity.MEDIUM if moon.nakshatra_index in SEVERE_GANDMOOL
        else DoshaSeverity.LOW
    )
    cancellations = (
        _cancel("moon_own_or_exalted", ctx.own_or_exalted("Moon"),
                "Moon in own or exaltation sign"),
        _cancel("jupiter_influence", ctx.influences("Jupiter", "Moon"),
                "Jupiter conjuncts or aspects the Moon"),
    )

    return [DoshaRecord(
        rule=DoshaRule.GANDMOOL,
        name="Gandmool Dosha",
        base_severity=severity,
        forming_bodies=frozenset({"Moon"}),
        cancellations=cancellations,
        variant=moon.nakshatra,
        description=f"Moon in {moon.nakshatra} pada {moon.pada}",
    )]


DOSHA_RULES: Dict[DoshaRule, Callable[[ChartContext], List[DoshaRecord]]] = {
    DoshaRule.MANGLIK: manglik,
    DoshaRule.KAAL_SARP: kaal_sarp,
    DoshaRule.KEMDRUM: kemdrum,
    DoshaRule.PITRA: pitra,
    DoshaRule.GRAHAN: grahan,
    DoshaRule.GURU_CHANDAL: guru_chandal,
    DoshaRule.SHRAPIT: shrapit,
    DoshaRule.GANDMOOL: gandmool,
}
