import math
from typing import Dict, List

from kundli.domain.kundali.angles import (
    angular_distance,
    forward_distance,
    is_day_birth,
    julian_day,
    sign_index,
)
from kundli.domain.kundali.constants import (
    DEBILITATION,
    EXALTATION,
    KENDRA_HOUSES,
    OWN_SIGNS,
    PLANETS,
    is_odd_sign,
)
from kundli.domain.kundali.derived.schemas import ShadbalaRecord
from kundli.domain.kundali.divisional.base import BaseDivisionalCalculator
from kundli.domain.kundali.divisional.d9 import D9Calculator
from kundli.domain.kundali.divisional.d30 import D30Calculator
from kundli.domain.kundali.divisional.vargas import (
    D1Calculator,
    D2Calculator,
    D3Calculator,
    D7Calculator,
    D12Calculator,
)
from kundli.domain.kundali.schemas import KundaliChart
from kundli.domain.rules.context import ChartContext


MAX_VIRUPAS = 60.0

# Required totals (virupas) for a planet to be considered strong
REQUIRED_MINIMUM: Dict[str, float] = {
    "Sun": 390.0,
    "Moon": 360.0,
    "Mars": 300.0,
    "Mercury": 420.0,
    "Jupiter": 390.0,
    "Venus": 330.0,
    "Saturn": 300.0,
}

NAISARGIKA_BALA: Dict[str, float] = {
    "Sun": 60.0,
    "Moon": 51.43,
    "Venus": 42.86,
    "Jupiter": 34.29,
    "Mercury": 25.71,
    "Mars": 17.14,
    "Saturn": 8.57,
}

# House of directional strength
DIG_BALA_HOUSE: Dict[str, int] = {
    "Jupiter": 1,
    "Mercury": 1,
    "Sun": 10,
    "Mars": 10,
    "Saturn": 7,
    "Moon": 4,
    "Venus": 4,
}

# Mean daily motion (deg/day) of the star planets
MEAN_SPEED: Dict[str, float] = {
    "Mars": 0.524,
    "Mercury": 0.9856,
    "Jupiter": 0.0831,
    "Venus": 0.9856,
    "Saturn": 0.0335,
}

FEMALE_PLANETS = frozenset({"Moon", "Venus"})
DREKKANA_GENDER = {
    "Sun": 0, "Mars": 0, "Jupiter": 0,      # male: first drekkana
    "Mercury": 1, "Saturn": 1,              # neuter: second
    "Moon": 2, "Venus": 2,                  # female: third
}

DAY_STRONG = frozenset({"Sun", "Jupiter", "Venus"})
NIGHT_STRONG = frozenset({"Moon", "Mars", "Saturn"})
BENEFICS = frozenset({"Jupiter", "Venus", "Mercury", "Moon"})

DAY_TRIBHAGA_LORDS = ["Mercury", "Sun", "Saturn"]
NIGHT_TRIBHAGA_LORDS = ["Moon", "Venus", "Mars"]

WEEKDAY_LORDS = ["Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn"]
CHALDEAN_ORDER = ["Saturn", "Jupiter", "Mars", "Sun", "Venus", "Mercury", "Moon"]

NORTHERN_STRONG = frozenset({"Sun", "Mars", "Jupiter", "Venus"})
OBLIQUITY = 23.44

# Saptavargaja scores by sign dignity in each varga
SAPTAVARGA_SCORES = {
    "exalted": 45.0,
    "own": 30.0,
    "neutral": 7.5,
    "debilitated": 1.875,
}
SAPTAVARGA_MAX = 7 * SAPTAVARGA_SCORES["exalted"]

# Maximum of each sthana sub-score: uchcha, saptavargaja, ojhayugma, kendradi, drekkana
STHANA_MAX = 60.0 + SAPTAVARGA_MAX + 30.0 + 60.0 + 15.0


def _clamp(value: float) -> float:
    return round(min(max(value, 0.0), MAX_VIRUPAS), 2)


def _saptavarga_calculators() -> List[BaseDivisionalCalculator]:
    return [
        D1Calculator(),
        D2Calculator(),
        D3Calculator(),
        D7Calculator(),
        D9Calculator(),
        D12Calculator(),
        D30Calculator(),
    ]


class ShadbalaCalculator:
    """
    Six-fold planetary strength for the seven planets.

    Every component is reported on a 0–60 virupa scale. Components
    built from several classical sub-scores (sthana, kala) are
    normalized onto that scale.
    """

    calculation_version = "v1"

    def __init__(self, vargas: List[BaseDivisionalCalculator] | None = None):
        self.vargas = vargas or _saptavarga_calculators()
        self.navamsa = D9Calculator()

    def calculate(self, kundali: KundaliChart) -> Dict[str, ShadbalaRecord]:
        ctx = ChartContext.from_chart(kundali)

        return {
            planet: ShadbalaRecord(
                body=planet,
                sthana_bala=self.sthana_bala(planet, kundali, ctx),
                dig_bala=self.dig_bala(planet, ctx),
                kala_bala=self.kala_bala(planet, kundali),
                chesta_bala=self.chesta_bala(planet, kundali),
                naisargika_bala=NAISARGIKA_BALA[planet],
                drik_bala=self.drik_bala(planet, ctx),
                required_minimum=REQUIRED_MINIMUM[planet],
            )
            for planet in PLANETS
        }

    # ─────────────────────────────────────────────
    # Sthana (positional)
    # ─────────────────────────────────────────────

    def sthana_bala(self, planet: str, kundali: KundaliChart, ctx: ChartContext) -> float:
        position = kundali.position(planet)

        total = (
            self._uchcha(planet, position.longitude)
            + self._saptavargaja(planet, position.longitude)
            + self._ojhayugma(planet, position.longitude)
            + self._kendradi(ctx.house(planet))
            + self._drekkana(planet, position.degree_in_sign)
        )
        return _clamp(MAX_VIRUPAS * total / STHANA_MAX)

    def _uchcha(self, planet: str, longitude: float) -> float:
        sign, degree = EXALTATION[planet]
        deep_exaltation = sign * 30.0 + degree
        return (180.0 - angular_distance(longitude, deep_exaltation)) / 3.0

    def _saptavargaja(self, planet: str, longitude: float) -> float:
        score = 0.0
        for calculator in self.vargas:
            sign, _ = calculator.varga_position(longitude)
            if EXALTATION[planet][0] == sign:
                score += SAPTAVARGA_SCORES["exalted"]
            elif sign in OWN_SIGNS[planet]:
                score += SAPTAVARGA_SCORES["own"]
            elif DEBILITATION[planet] == sign:
                score += SAPTAVARGA_SCORES["debilitated"]
            else:
                score += SAPTAVARGA_SCORES["neutral"]
        return score

    def _ojhayugma(self, planet: str, longitude: float) -> float:
        # Moon and Venus favour even signs, the rest odd signs (rasi and navamsa)
        wants_odd = planet not in FEMALE_PLANETS
        score = 0.0
        for sign in (sign_index(longitude), self.navamsa.varga_position(longitude)[0]):
            if is_odd_sign(sign) == wants_odd:
                score += 15.0
        return score

    def _kendradi(self, house: int) -> float:
        if house in KENDRA_HOUSES:
            return 60.0
        if house in (2, 5, 8, 11):
            return 30.0
        return 15.0

    def _drekkana(self, planet: str, degree_in_sign: float) -> float:
        return 15.0 if int(degree_in_sign // 10.0) == DREKKANA_GENDER[planet] else 0.0

    # ─────────────────────────────────────────────
    # Dig (directional)
    # ─────────────────────────────────────────────

    def dig_bala(self, planet: str, ctx: ChartContext) -> float:
        distance = abs(ctx.house(planet) - DIG_BALA_HOUSE[planet])
        distance = min(distance, 12 - distance)
        return _clamp(MAX_VIRUPAS - 10.0 * distance)

    # ─────────────────────────────────────────────
    # Kala (temporal)
    # ─────────────────────────────────────────────

    def kala_bala(self, planet: str, kundali: KundaliChart) -> float:
        sun = kundali.position("Sun")
        moon = kundali.position("Moon")
        asc = kundali.ascendant

        sun_arc = forward_distance(asc.longitude, sun.longitude)
        day_birth = is_day_birth(asc.longitude, sun.longitude)

        # Hours since sunrise: the ascendant runs ~15° an hour ahead of the Sun
        hours_since_sunrise = forward_distance(sun.longitude, asc.longitude) / 15.0

        parts = [
            self._nathonnatha(planet, day_birth),
            self._paksha(planet, sun.longitude, moon.longitude),
            self._tribhaga(planet, sun_arc, day_birth),
            self._hora(planet, kundali, hours_since_sunrise),
            self._ayana(planet, kundali.position(planet).longitude + kundali.ayanamsa_value),
        ]
        return _clamp(sum(parts) / len(parts))

    def _nathonnatha(self, planet: str, day_birth: bool) -> float:
        if planet == "Mercury":
            return MAX_VIRUPAS
        if day_birth:
            return MAX_VIRUPAS if planet in DAY_STRONG else 0.0
        return MAX_VIRUPAS if planet in NIGHT_STRONG else 0.0

    def _paksha(self, planet: str, sun_longitude: float, moon_longitude: float) -> float:
        elongation = angular_distance(sun_longitude, moon_longitude)
        if planet in BENEFICS:
            return elongation / 3.0
        return MAX_VIRUPAS - elongation / 3.0

    def _tribhaga(self, planet: str, sun_arc: float, day_birth: bool) -> float:
        if planet == "Jupiter":
            return MAX_VIRUPAS

        # `sun_arc` runs 360 → 180 from sunrise to sunset and 180 → 0 through the night
        if day_birth:
            elapsed, lords = (360.0 - sun_arc) / 180.0, DAY_TRIBHAGA_LORDS
        else:
            elapsed, lords = (180.0 - sun_arc) / 180.0, NIGHT_TRIBHAGA_LORDS
        lord = lords[min(int(elapsed * 3), 2)]
        return MAX_VIRUPAS if planet == lord else 0.0

    def _hora(self, planet: str, kundali: KundaliChart, hours_since_sunrise: float) -> float:
        # Local mean sunrise decides the weekday
        local_jd = julian_day(kundali.birth_instant) + kundali.longitude / 360.0
        sunrise_jd = local_jd - hours_since_sunrise / 24.0
        weekday = int(math.floor(sunrise_jd + 0.5) + 1) % 7

        day_lord = WEEKDAY_LORDS[weekday]
        hour = int(hours_since_sunrise)
        hora_lord = CHALDEAN_ORDER[(CHALDEAN_ORDER.index(day_lord) + hour) % 7]
        return MAX_VIRUPAS if planet == hora_lord else 0.0

    def _ayana(self, planet: str, tropical_longitude: float) -> float:
        declination = OBLIQUITY * math.sin(math.radians(tropical_longitude))
        fraction = declination / OBLIQUITY

        if planet == "Mercury":
            fraction = abs(fraction)
        elif planet not in NORTHERN_STRONG:
            fraction = -fraction
        return 30.0 + 30.0 * fraction

    # ─────────────────────────────────────────────
    # Chesta (motional)
    # ─────────────────────────────────────────────

    def chesta_bala(self, planet: str, kundali: KundaliChart) -> float:
        if planet in ("Sun", "Moon"):
            return 30.0

        position = kundali.position(planet)
        if position.is_retrograde:
            return MAX_VIRUPAS

        ratio = position.speed / MEAN_SPEED[planet]
        if ratio < 0.25:
            return 15.0          # vikala / stationary
        if ratio < 0.9:
            return 30.0          # manda
        if ratio < 1.1:
            return 7.5           # sama
        if ratio < 1.5:
            return 45.0          # chara
        return 30.0              # atichara

    # ─────────────────────────────────────────────
    # Drik (aspectual)
    # ─────────────────────────────────────────────

    def drik_bala(self, planet: str, ctx: ChartContext) -> float:
        score = 30.0
        for other in ctx.positions:
            if other == planet or not ctx.aspects(other, planet):
                continue
            score += 7.5 if other in BENEFICS else -7.5
        return _clamp(score)
