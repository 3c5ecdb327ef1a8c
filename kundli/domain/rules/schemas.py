from enum import Enum
from typing import FrozenSet, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


# ─────────────────────────────────────────────
# Closed rule sets
# ─────────────────────────────────────────────

class YogaRule(str, Enum):
    RUCHAKA = "ruchaka"
    BHADRA = "bhadra"
    HAMSA = "hamsa"
    MALAVYA = "malavya"
    SASA = "sasa"
    GAJA_KESARI = "gaja_kesari"
    BUDHADITYA = "budhaditya"
    RAJA = "raja"
    SUNAPHA = "sunapha"
    ANAPHA = "anapha"
    DURUDHARA = "durudhara"
    ADHI = "adhi"
    DHANA = "dhana"
    LAKSHMI = "lakshmi"
    CHANDRA_MANGAL = "chandra_mangal"
    SHUBH_KARTARI = "shubh_kartari"
    VIPARITA_RAJA = "viparita_raja"
    NEECHA_BHANGA_RAJA = "neecha_bhanga_raja"
    PARIVARTANA = "parivartana"
    VESI = "vesi"
    VOSI = "vosi"
    UBHAYACHARI = "ubhayachari"
    AMALA = "amala"
    PARVATA = "parvata"
    KAHALA = "kahala"
    CHAMARA = "chamara"


class DoshaRule(str, Enum):
    MANGLIK = "manglik"
    KAAL_SARP = "kaal_sarp"
    KEMDRUM = "kemdrum"
    PITRA = "pitra"
    GRAHAN = "grahan"
    GURU_CHANDAL = "guru_chandal"
    SHRAPIT = "shrapit"
    GANDMOOL = "gandmool"


class MatchingRule(str, Enum):
    NADI = "nadi"
    BHAKOOT = "bhakoot"
    GANA = "gana"


# ─────────────────────────────────────────────
# Ordinals
# ─────────────────────────────────────────────

class YogaCategory(str, Enum):
    MAHAPURUSHA = "mahapurusha"
    RAJA = "raja"
    WEALTH = "wealth"
    LUNAR = "lunar"
    SOLAR = "solar"
    EXCHANGE = "exchange"
    OTHER = "other"


class YogaNature(str, Enum):
    BENEFIC = "benefic"
    MALEFIC = "malefic"
    MIXED = "mixed"


class YogaStrength(str, Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class DoshaSeverity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    CANCELLED = "cancelled"


# ─────────────────────────────────────────────
# Records
# ─────────────────────────────────────────────

class YogaRecord(BaseModel):
    """
    A yoga formed in the chart.
    """
    model_config = ConfigDict(frozen=True)

    rule: YogaRule
    name: str
    category: YogaCategory
    nature: YogaNature = YogaNature.BENEFIC
    strength: YogaStrength
    forming_bodies: FrozenSet[str] = Field(default_factory=frozenset)
    description: Optional[str] = None


class CancellationCondition(BaseModel):
    """
    One independently evaluated cancellation predicate.
    """
    model_config = ConfigDict(frozen=True)

    rule: str
    is_satisfied: bool
    description: Optional[str] = None


class DoshaRecord(BaseModel):
    """
    A dosha present in the chart (or between two charts).

    `severity` is derived: any satisfied cancellation demotes the
    base severity to "cancelled".
    """
    model_config = ConfigDict(frozen=True)

    rule: Union[DoshaRule, MatchingRule]
    name: str
    base_severity: DoshaSeverity
    forming_bodies: FrozenSet[str] = Field(default_factory=frozenset)
    cancellations: Tuple[CancellationCondition, ...] = ()
    variant: Optional[str] = None
    description: Optional[str] = None

    @field_validator("base_severity")
    @classmethod
    def _not_cancelled(cls, value: DoshaSeverity) -> DoshaSeverity:
        if value == DoshaSeverity.CANCELLED:
            raise ValueError("base_severity cannot be 'cancelled'; it is derived")
        return value

    @computed_field
    @property
    def severity(self) -> DoshaSeverity:
        if self.is_cancelled:
            return DoshaSeverity.CANCELLED
        return self.base_severity

    @property
    def is_cancelled(self) -> bool:
        return any(c.is_satisfied for c in self.cancellations)

    @property
    def satisfied_cancellations(self) -> List[CancellationCondition]:
        return [c for c in self.cancellations if c.is_satisfied]


class RuleEvaluation(BaseModel):
    """
    Yogas and doshas detected for one chart.
    """
    model_config = ConfigDict(frozen=True)

    yogas: Tuple[YogaRecord, ...] = ()
    doshas: Tuple[DoshaRecord, ...] = ()
    calculation_version: str = "v1"
