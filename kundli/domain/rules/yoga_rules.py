"""
Yoga evaluators.

Every evaluator is a pure function of a ChartContext returning the
records it detects (usually zero or one). YOGA_RULES maps each YogaRule
to its evaluator; RuleEngine checks the table is complete.
"""
from itertools import combinations
from typing import Callable, Dict, List

from kundli.domain.kundali.constants import (
    DUSTHANA_HOUSES,
    KENDRA_HOUSES,
    PLANETS,
    SIGN_LORDS,
    SIGNS,
    TRIKONA_HOUSES,
)
from kundli.domain.rules.context import ChartContext
from kundli.domain.rules.schemas import (
    YogaCategory,
    YogaRecord,
    YogaRule,
    YogaStrength,
)


# Planets counted for Moon- and Sun-relative yogas
NON_LUMINARY_PLANETS = ["Mars", "Mercury", "Jupiter", "Venus", "Saturn"]
BENEFICS = ["Jupiter", "Venus", "Mercury"]

KENDRA_LORD_HOUSES = (1, 4, 7, 10)
TRIKONA_LORD_HOUSES = (5, 9)


def _record(rule: YogaRule, name: str, category: YogaCategory, strength: YogaStrength,
            bodies, description: str) -> YogaRecord:
    return YogaRecord(
        rule=rule,
        name=name,
        category=category,
        strength=strength,
        forming_bodies=frozenset(bodies),
        description=description,
    )


# ─────────────────────────────────────────────
# Pancha Mahapurusha
# ─────────────────────────────────────────────

def _mahapurusha(ctx: ChartContext, body: str, rule: YogaRule, name: str) -> List[YogaRecord]:
    house = ctx.house(body)
    if house not in KENDRA_HOUSES or not ctx.own_or_exalted(body):
        return []

    if ctx.is_exalted(body) and house in (1, 10):
        strength = YogaStrength.STRONG
    elif ctx.is_retrograde(body):
        strength = YogaStrength.WEAK
    else:
        strength = YogaStrength.MODERATE

    dignity = "exalted" if ctx.is_exalted(body) else "in own sign"
    return [_record(
        rule, name, YogaCategory.MAHAPURUSHA, strength, [body],
        f"{body} is {dignity} in {SIGNS[ctx.sign(body)]} in house {house}",
    )]


def ruchaka(ctx: ChartContext) -> List[YogaRecord]:
    return _mahapurusha(ctx, "Mars", YogaRule.RUCHAKA, "Ruchaka Yoga")


def bhadra(ctx: ChartContext) -> List[YogaRecord]:
    return _mahapurusha(ctx, "Mercury", YogaRule.BHADRA, "Bhadra Yoga")


def hamsa(ctx: ChartContext) -> List[YogaRecord]:
    return _mahapurusha(ctx, "Jupiter", YogaRule.HAMSA, "Hamsa Yoga")


def malavya(ctx: ChartContext) -> List[YogaRecord]:
    return _mahapurusha(ctx, "Venus", YogaRule.MALAVYA, "Malavya Yoga")


def sasa(ctx: ChartContext) -> List[YogaRecord]:
    return _mahapurusha(ctx, "Saturn", YogaRule.SASA, "Sasa Yoga")


# ─────────────────────────────────────────────
# Luminary yogas
# ─────────────────────────────────────────────

def gaja_kesari(ctx: ChartContext) -> List[YogaRecord]:
    if not ctx.in_kendra_from("Moon", "Jupiter"):
        return []

    if ctx.own_or_exalted("Jupiter"):
        strength = YogaStrength.STRONG
    elif ctx.is_debilitated("Jupiter") or ctx.is_retrograde("Jupiter"):
        strength = YogaStrength.WEAK
    else:
        strength = YogaStrength.MODERATE

    return [_record(
        YogaRule.GAJA_KESARI, "Gaja Kesari Yoga", YogaCategory.LUNAR, strength,
        ["Jupiter", "Moon"],
        f"Jupiter is in house {ctx.house_from_body('Moon', 'Jupiter')} from the Moon",
    )]


def budhaditya(ctx: ChartContext) -> List[YogaRecord]:
    if not ctx.same_sign("Sun", "Mercury"):
        return []

    if ctx.house("Sun") in DUSTHANA_HOUSES or ctx.separation("Sun", "Mercury") < 3.0:
        strength = YogaStrength.WEAK
    elif ctx.is_exalted("Sun") or ctx.is_exalted("Mercury"):
        strength = YogaStrength.STRONG
    else:
        strength = YogaStrength.MODERATE

    return [_record(
        YogaRule.BUDHADITYA, "Budhaditya Yoga", YogaCategory.SOLAR, strength,
        ["Sun", "Mercury"],
        f"Sun and Mercury together in {SIGNS[ctx.sign('Sun')]}",
    )]


def _moon_flank(ctx: ChartContext):
    second = ctx.bodies_in_sign((ctx.sign("Moon") + 1) % 12, NON_LUMINARY_PLANETS)
    twelfth = ctx.bodies_in_sign((ctx.sign("Moon") - 1) % 12, NON_LUMINARY_PLANETS)
    return second, twelfth


def sunapha(ctx: ChartContext) -> List[YogaRecord]:
    second, twelfth = _moon_flank(ctx)
    if not second or twelfth:
        return []
    return [_record(
        YogaRule.SUNAPHA, "Sunapha Yoga", YogaCategory.LUNAR, ctx.dignity_strength(second),
        second, f"{', '.join(second)} in the 2nd from the Moon",
    )]


def anapha(ctx: ChartContext) -> List[YogaRecord]:
    second, twelfth = _moon_flank(ctx)
    if not twelfth or second:
        return []
    return [_record(
        YogaRule.ANAPHA, "Anapha Yoga", YogaCategory.LUNAR, ctx.dignity_strength(twelfth),
        twelfth, f"{', '.join(twelfth)} in the 12th from the Moon",
    )]


def durudhara(ctx: ChartContext) -> List[YogaRecord]:
    second, twelfth = _moon_flank(ctx)
    if not (second and twelfth):
        return []
    return [_record(
        YogaRule.DURUDHARA, "Durudhara Yoga", YogaCategory.LUNAR,
        ctx.dignity_strength(second + twelfth), second + twelfth,
        "Planets on both sides of the Moon",
    )]


def adhi(ctx: ChartContext) -> List[YogaRecord]:
    forming = [b for b in BENEFICS if ctx.house_from_body("Moon", b) in (6, 7, 8)]
    if not forming:
        return []

    if len(forming) >= 3:
        strength = YogaStrength.STRONG
    elif len(forming) == 2:
        strength = YogaStrength.MODERATE
    else:
        strength = YogaStrength.WEAK

    return [_record(
        YogaRule.ADHI, "Adhi Yoga", YogaCategory.LUNAR, strength, forming,
        f"{', '.join(forming)} in the 6th/7th/8th from the Moon",
    )]


def chandra_mangal(ctx: ChartContext) -> List[YogaRecord]:
    if not ctx.same_sign("Moon", "Mars"):
        return []
    return [_record(
        YogaRule.CHANDRA_MANGAL, "Chandra-Mangal Yoga", YogaCategory.WEALTH,
        ctx.dignity_strength(["Moon", "Mars"]), ["Moon", "Mars"],
        f"Moon and Mars together in {SIGNS[ctx.sign('Moon')]}",
    )]


def _sun_flank(ctx: ChartContext):
    second = ctx.bodies_in_sign((ctx.sign("Sun") + 1) % 12, NON_LUMINARY_PLANETS)
    twelfth = ctx.bodies_in_sign((ctx.sign("Sun") - 1) % 12, NON_LUMINARY_PLANETS)
    return second, twelfth


def vesi(ctx: ChartContext) -> List[YogaRecord]:
    second, twelfth = _sun_flank(ctx)
    if not second or twelfth:
        return []
    return [_record(
        YogaRule.VESI, "Vesi Yoga", YogaCategory.SOLAR, ctx.dignity_strength(second),
        second, f"{', '.join(second)} in the 2nd from the Sun",
    )]


def vosi(ctx: ChartContext) -> List[YogaRecord]:
    second, twelfth = _sun_flank(ctx)
    if not twelfth or second:
        return []
    return [_record(
        YogaRule.VOSI, "Vosi Yoga", YogaCategory.SOLAR, ctx.dignity_strength(twelfth),
        twelfth, f"{', '.join(twelfth)} in the 12th from the Sun",
    )]


def ubhayachari(ctx: ChartContext) -> List[YogaRecord]:
    second, twelfth = _sun_flank(ctx)
    if not (second and twelfth):
        return []
    return [_record(
        YogaRule.UBHAYACHARI, "Ubhayachari Yoga", YogaCategory.SOLAR,
        ctx.dignity_strength(second + twelfth), second + twelfth,
        "Planets on both sides of the Sun",
    )]


# ─────────────────────────────────────────────
# Lordship yogas
# ─────────────────────────────────────────────

def raja(ctx: ChartContext) -> List[YogaRecord]:
    records: List[YogaRecord] = []
    seen = set()

    for kendra in KENDRA_LORD_HOUSES:
        for trikona in TRIKONA_LORD_HOUSES:
            k_lord = ctx.lord_of_house(kendra)
            t_lord = ctx.lord_of_house(trikona)
            pair = frozenset({k_lord, t_lord})
            if k_lord == t_lord or pair in seen:
                continue

            distance = ctx.house_from_body(k_lord, t_lord)
            if distance == 1:
                relation, strength = "conjunct", ctx.dignity_strength(pair)
            elif distance == 7:
                relation, strength = "in mutual aspect", YogaStrength.MODERATE
            else:
                continue

            seen.add(pair)
            records.append(_record(
                YogaRule.RAJA, "Raja Yoga", YogaCategory.RAJA, strength, pair,
                f"Lord of {kendra} ({k_lord}) and lord of {trikona} ({t_lord}) are {relation}",
            ))

    return records


def dhana(ctx: ChartContext) -> List[YogaRecord]:
    records: List[YogaRecord] = []
    lord2 = ctx.lord_of_house(2)
    lord11 = ctx.lord_of_house(11)

    if ctx.house(lord2) == 11 or ctx.house(lord11) == 2:
        records.append(_record(
            YogaRule.DHANA, "Dhana Yoga", YogaCategory.WEALTH,
            ctx.dignity_strength([lord2, lord11]), [lord2, lord11],
            "Lords of the 2nd and 11th occupy each other's houses",
        ))

    if lord2 != lord11 and ctx.same_sign(lord2, lord11):
        records.append(_record(
            YogaRule.DHANA, "Dhana Yoga", YogaCategory.WEALTH,
            ctx.dignity_strength([lord2, lord11]), [lord2, lord11],
            f"Lords of the 2nd ({lord2}) and 11th ({lord11}) are conjunct",
        ))

    aspected = [h for h in (2, 11) if ctx.aspects_sign("Jupiter", ctx.sign_of_house(h))]
    if aspected:
        records.append(_record(
            YogaRule.DHANA, "Dhana Yoga", YogaCategory.WEALTH,
            ctx.dignity_strength(["Jupiter"]), ["Jupiter"],
            f"Jupiter aspects house {' and '.join(str(h) for h in aspected)}",
        ))

    return records


def lakshmi(ctx: ChartContext) -> List[YogaRecord]:
    lord9 = ctx.lord_of_house(9)
    if not (ctx.in_kendra(lord9) and ctx.own_or_exalted("Venus")):
        return []
    return [_record(
        YogaRule.LAKSHMI, "Lakshmi Yoga", YogaCategory.WEALTH, YogaStrength.STRONG,
        [lord9, "Venus"],
        f"Lord of 9 ({lord9}) in a kendra with Venus in own or exaltation sign",
    )]


def shubh_kartari(ctx: ChartContext) -> List[YogaRecord]:
    records: List[YogaRecord] = []

    for house in (1, 2, 7, 10):
        before = ctx.bodies_in_sign(ctx.sign_of_house(house - 1 if house > 1 else 12), BENEFICS)
        after = ctx.bodies_in_sign(ctx.sign_of_house(house % 12 + 1), BENEFICS)
        if before and after:
            records.append(_record(
                YogaRule.SHUBH_KARTARI, "Shubh Kartari Yoga", YogaCategory.WEALTH,
                ctx.dignity_strength(before + after), before + after,
                f"House {house} is hemmed by benefics",
            ))

    return records


def viparita_raja(ctx: ChartContext) -> List[YogaRecord]:
    lords = {h: ctx.lord_of_house(h) for h in sorted(DUSTHANA_HOUSES)}
    records: List[YogaRecord] = []

    for (h1, l1), (h2, l2) in combinations(lords.items(), 2):
        if l1 != l2 and ctx.same_sign(l1, l2):
            records.append(_record(
                YogaRule.VIPARITA_RAJA, "Viparita Raja Yoga", YogaCategory.RAJA,
                ctx.dignity_strength([l1, l2]), [l1, l2],
                f"Lords of {h1} ({l1}) and {h2} ({l2}) are conjunct",
            ))

    return records


def neecha_bhanga_raja(ctx: ChartContext) -> List[YogaRecord]:
    records: List[YogaRecord] = []

    for body in PLANETS:
        if not ctx.is_debilitated(body):
            continue
        dispositor = SIGN_LORDS[ctx.sign(body)]
        house = ctx.house(dispositor)
        if house in KENDRA_HOUSES:
            strength = YogaStrength.STRONG
        elif house in TRIKONA_HOUSES:
            strength = YogaStrength.MODERATE
        else:
            continue
        records.append(_record(
            YogaRule.NEECHA_BHANGA_RAJA, "Neecha Bhanga Raja Yoga", YogaCategory.RAJA,
            strength, [body, dispositor],
            f"Debilitated {body} is rescued by its sign lord {dispositor} in house {house}",
        ))

    return records


def parivartana(ctx: ChartContext) -> List[YogaRecord]:
    records: List[YogaRecord] = []

    for a, b in combinations(PLANETS, 2):
        if SIGN_LORDS[ctx.sign(a)] != b or SIGN_LORDS[ctx.sign(b)] != a:
            continue

        houses = {ctx.house(a), ctx.house(b)}
        if houses & DUSTHANA_HOUSES:
            strength = YogaStrength.WEAK
        elif houses <= (KENDRA_HOUSES | TRIKONA_HOUSES):
            strength = YogaStrength.STRONG
        else:
            strength = YogaStrength.MODERATE

        records.append(_record(
            YogaRule.PARIVARTANA, "Parivartana Yoga", YogaCategory.EXCHANGE, strength, [a, b],
            f"{a} and {b} exchange signs",
        ))

    return records


# ─────────────────────────────────────────────
# Other
# ─────────────────────────────────────────────

def amala(ctx: ChartContext) -> List[YogaRecord]:
    forming = ctx.bodies_in_house(10, BENEFICS)
    if not forming:
        return []
    return [_record(
        YogaRule.AMALA, "Amala Yoga", YogaCategory.OTHER, ctx.dignity_strength(forming),
        forming, f"{', '.join(forming)} in the 10th house",
    )]


def parvata(ctx: ChartContext) -> List[YogaRecord]:
    forming = [b for b in ("Jupiter", "Venus") if ctx.in_kendra(b)]
    if not forming or ctx.bodies_in_house(6) or ctx.bodies_in_house(8):
        return []
    return [_record(
        YogaRule.PARVATA, "Parvata Yoga", YogaCategory.OTHER, ctx.dignity_strength(forming),
        forming, "Benefic in a kendra with the 6th and 8th houses empty",
    )]


def kahala(ctx: ChartContext) -> List[YogaRecord]:
    lord4 = ctx.lord_of_house(4)
    lord9 = ctx.lord_of_house(9)
    if not (ctx.in_kendra(lord4) and ctx.in_kendra(lord9)):
        return []
    return [_record(
        YogaRule.KAHALA, "Kahala Yoga", YogaCategory.OTHER,
        ctx.dignity_strength({lord4, lord9}), [lord4, lord9],
        f"Lords of 4 ({lord4}) and 9 ({lord9}) both in kendras",
    )]


def chamara(ctx: ChartContext) -> List[YogaRecord]:
    lagna_lord = ctx.lord_of_house(1)
    if lagna_lord == "Jupiter":
        return []
    if not (ctx.is_exalted(lagna_lord) and ctx.in_kendra(lagna_lord)
            and ctx.aspects("Jupiter", lagna_lord)):
        return []
    return [_record(
        YogaRule.CHAMARA, "Chamara Yoga", YogaCategory.OTHER, YogaStrength.STRONG,
        [lagna_lord, "Jupiter"],
        f"Exalted lagna lord {lagna_lord} in a kendra, aspected by Jupiter",
    )]


YOGA_RULES: Dict[YogaRule, Callable[[ChartContext], List[YogaRecord]]] = {
    YogaRule.RUCHAKA: ruchaka,
    YogaRule.BHADRA: bhadra,
    YogaRule.HAMSA: hamsa,
    YogaRule.MALAVYA: malavya,
    YogaRule.SASA: sasa,
    YogaRule.GAJA_KESARI: gaja_kesari,
    YogaRule.BUDHADITYA: budhaditya,
    YogaRule.RAJA: raja,
    YogaRule.SUNAPHA: sunapha,
    YogaRule.ANAPHA: anapha,
    YogaRule.DURUDHARA: durudhara,
    YogaRule.ADHI: adhi,
    YogaRule.DHANA: dhana,
    YogaRule.LAKSHMI: lakshmi,
    YogaRule.CHANDRA_MANGAL: chandra_mangal,
    YogaRule.SHUBH_KARTARI: shubh_kartari,
    YogaRule.VIPARITA_RAJA: viparita_raja,
    YogaRule.NEECHA_BHANGA_RAJA: neecha_bhanga_raja,
    YogaRule.PARIVARTANA: parivartana,
    YogaRule.VESI: vesi,
    YogaRule.VOSI: vosi,
    YogaRule.UBHAYACHARI: ubhayachari,
    YogaRule.AMALA: amala,
    YogaRule.PARVATA: parvata,
    YogaRule.KAHALA: kahala,
    YogaRule.CHAMARA: chamara,
}
