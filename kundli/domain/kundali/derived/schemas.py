from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, computed_field


# ─────────────────────────────────────────────
# Nakshatra
# ─────────────────────────────────────────────

class NakshatraInfo(BaseModel):
    """
    Nakshatra facts for one longitude.
    """
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, le=26)
    name: str
    pada: int = Field(..., ge=1, le=4)
    lord: str
    fraction_elapsed: float = Field(..., ge=0.0, lt=1.0)
    gana: str
    nadi: str


# ─────────────────────────────────────────────
# Shadbala
# ─────────────────────────────────────────────

class StrengthTier(str, Enum):
    VERY_STRONG = "very_strong"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    VERY_WEAK = "very_weak"


# (ratio floor, tier), highest first
TIER_BREAKPOINTS = [
    (1.5, StrengthTier.VERY_STRONG),
    (1.2, StrengthTier.STRONG),
    (0.8, StrengthTier.MODERATE),
    (0.5, StrengthTier.WEAK),
]


def tier_for_ratio(ratio: float) -> StrengthTier:
    for floor, tier in TIER_BREAKPOINTS:
        if ratio >= floor:
            return tier
    return StrengthTier.VERY_WEAK


class ShadbalaRecord(BaseModel):
    """
    Six-fold strength of one planet, in virupas.
    """
    model_config = ConfigDict(frozen=True)

    body: str
    sthana_bala: float = Field(..., ge=0.0, le=60.0)
    dig_bala: float = Field(..., ge=0.0, le=60.0)
    kala_bala: float = Field(..., ge=0.0, le=60.0)
    chesta_bala: float = Field(..., ge=0.0, le=60.0)
    naisargika_bala: float = Field(..., ge=0.0, le=60.0)
    drik_bala: float = Field(..., ge=0.0, le=60.0)
    required_minimum: float = Field(..., gt=0.0)

    @computed_field
    @property
    def total(self) -> float:
        return round(
            self.sthana_bala + self.dig_bala + self.kala_bala
            + self.chesta_bala + self.naisargika_bala + self.drik_bala,
            2,
        )

    @computed_field
    @property
    def rupas(self) -> float:
        return round(self.total / 60.0, 2)

    @computed_field
    @property
    def ratio(self) -> float:
        return round(self.total / self.required_minimum, 3)

    @computed_field
    @property
    def tier(self) -> StrengthTier:
        return tier_for_ratio(self.total / self.required_minimum)


# ─────────────────────────────────────────────
# Ashtakavarga
# ─────────────────────────────────────────────

ASHTAKAVARGA_TOTAL = 337


class AshtakavargaGrid(BaseModel):
    """
    Bhinna (per planet) and Sarva (combined) ashtakavarga.

    `contributions[planet][contributor]` holds the 0/1 bindus a single
    reference point gives to each sign of that planet's chart.
    """
    model_config = ConfigDict(frozen=True)

    bhinna: Dict[str, List[int]]
    sarva: List[int]
    contributions: Dict[str, Dict[str, List[int]]] = Field(default_factory=dict)

    @computed_field
    @property
    def total(self) -> int:
        return sum(self.sarva)

    @computed_field
    @property
    def is_valid(self) -> bool:
        return self.total == ASHTAKAVARGA_TOTAL

    def bindus(self, planet: str, sign_index: int) -> int:
        return self.bhinna[planet][sign_index]


# ─────────────────────────────────────────────
# Jaimini
# ─────────────────────────────────────────────

class CharaKaraka(BaseModel):
    """
    One Jaimini significator, ranked by degree within sign.
    """
    model_config = ConfigDict(frozen=True)

    karaka: str
    abbreviation: str
    body: str
    degree_in_sign: float
