from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# ─────────────────────────────────────────────
# Calculation settings
# ─────────────────────────────────────────────

class _LenientEnum(str, Enum):
    """
    String enum that also accepts case/space-insensitive spellings
    ("whole sign", "WHOLE_SIGN", "Whole Sign").
    """

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.replace("_", " ").replace("-", " ").strip().lower()
            for member in cls:
                if member.value.lower() == key or member.name.replace("_", " ").lower() == key:
                    return member
        return None


class Ayanamsa(_LenientEnum):
    LAHIRI = "Lahiri"
    RAMAN = "Raman"
    KRISHNAMURTI = "KP"
    FAGAN_BRADLEY = "Fagan Bradley"
    TRUE_CHITRA = "True Chitra"


class HouseSystem(_LenientEnum):
    EQUAL = "Equal"
    WHOLE_SIGN = "Whole Sign"
    PLACIDUS = "Placidus"
    KOCH = "Koch"
    SRIPATI = "Sripati"
    BHAVA_CHALITA = "Bhava Chalita"

    @property
    def is_sign_based(self) -> bool:
        return self in (HouseSystem.EQUAL, HouseSystem.WHOLE_SIGN)


class NodeType(_LenientEnum):
    MEAN = "Mean"
    TRUE = "True"


class Dignity(str, Enum):
    """
    Motion/dignity status of a body.

    The resolver never emits DIRECT: a direct body with no sign dignity is
    NEUTRAL. DIRECT stays in the value set so stored or external status
    labels ("direct") still parse.
    """
    DIRECT = "direct"
    RETROGRADE = "retrograde"
    EXALTED = "exalted"
    DEBILITATED = "debilitated"
    OWN_SIGN = "own_sign"
    NEUTRAL = "neutral"


# ─────────────────────────────────────────────
# Core Atomic Schemas
# ─────────────────────────────────────────────

class BodyPosition(BaseModel):
    """
    Represents a single body's sidereal position at one instant.
    """
    model_config = ConfigDict(frozen=True)

    body: str
    longitude: float = Field(..., ge=0.0, lt=360.0)
    sign_index: int = Field(..., ge=0, le=11)
    sign: str
    degree_in_sign: float = Field(..., ge=0.0, lt=30.0)
    nakshatra_index: int = Field(..., ge=0, le=26)
    nakshatra: str
    pada: int = Field(..., ge=1, le=4)
    speed: float
    is_retrograde: bool = False
    dignity: Dignity = Dignity.NEUTRAL


class Ascendant(BaseModel):
    """
    Represents the ascendant (Lagna).
    """
    model_config = ConfigDict(frozen=True)

    longitude: float = Field(..., ge=0.0, lt=360.0)
    sign_index: int = Field(..., ge=0, le=11)
    sign: str
    degree_in_sign: float
    nakshatra: Optional[str] = None
    pada: Optional[int] = None


class HouseCusp(BaseModel):
    """
    Represents one of the twelve house cusps.
    """
    model_config = ConfigDict(frozen=True)

    house_number: int = Field(..., ge=1, le=12)
    name: str
    cusp_longitude: float
    sign_index: int
    sign: str
    sign_lord: str


class HouseLayout(BaseModel):
    """
    Houses of a chart plus the body → house mapping.
    """
    model_config = ConfigDict(frozen=True)

    system: str
    ascendant: Ascendant
    cusps: Tuple[HouseCusp, ...]
    body_houses: Dict[str, int]

    def cusp(self, house_number: int) -> HouseCusp:
        return self.cusps[house_number - 1]

    def house_of(self, body: str) -> int:
        return self.body_houses[body]

    def bodies_in(self, house_number: int) -> List[str]:
        return [b for b, h in self.body_houses.items() if h == house_number]

    def lord_of(self, house_number: int) -> str:
        return self.cusp(house_number).sign_lord


# ─────────────────────────────────────────────
# Core Kundali Schema (D1)
# ─────────────────────────────────────────────

class KundaliChart(BaseModel):
    """
    Represents the core D1 (Rashi) kundali: settings, positions, houses.
    """
    model_config = ConfigDict(frozen=True)

    birth_instant: datetime
    latitude: float
    longitude: float
    ayanamsa: Ayanamsa
    ayanamsa_value: float
    house_system: HouseSystem
    node_type: NodeType
    positions: Dict[str, BodyPosition]
    houses: HouseLayout

    @property
    def ascendant(self) -> Ascendant:
        return self.houses.ascendant

    def position(self, body: str) -> BodyPosition:
        return self.positions[body]
