from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from kundli.domain.kundali.schemas import BodyPosition


# ─────────────────────────────────────────────
# Transit Schemas
# ─────────────────────────────────────────────

class TransitChart(BaseModel):
    """
    Represents the nine body positions at a query instant.
    """
    model_config = ConfigDict(frozen=True)

    instant: datetime
    ayanamsa_value: float
    positions: Dict[str, BodyPosition]
    calculation_version: str = "v1"


# ─────────────────────────────────────────────
# Gochar Schemas
# ─────────────────────────────────────────────

class GocharPlanet(BaseModel):
    """
    Represents a planet's gochar (relative position).
    """
    model_config = ConfigDict(frozen=True)

    planet: str
    sign: str
    from_lagna_house: int = Field(..., ge=1, le=12)
    from_moon_house: int = Field(..., ge=1, le=12)


class Gochar(BaseModel):
    """
    Represents gochar interpretation base data.
    """
    model_config = ConfigDict(frozen=True)

    planets: Dict[str, GocharPlanet]
    calculation_version: str = Field(
        default="v1",
        description="Version of gochar calculation logic"
    )


# ─────────────────────────────────────────────
# Aspects
# ─────────────────────────────────────────────

class AspectType(str, Enum):
    CONJUNCTION = "conjunction"
    SEXTILE = "sextile"
    SQUARE = "square"
    TRINE = "trine"
    QUINCUNX = "quincunx"
    OPPOSITION = "opposition"


class AspectStrength(str, Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class ActiveTransitAspect(BaseModel):
    """
    A transit body within orb of an aspect to a natal body.
    """
    model_config = ConfigDict(frozen=True)

    transit_body: str
    natal_body: str
    aspect: AspectType
    exact_angle: float
    separation: float
    orb: float = Field(..., ge=0.0)
    is_applying: bool
    strength: AspectStrength


# ─────────────────────────────────────────────
# Periods
# ─────────────────────────────────────────────

class SadeSatiPhase(str, Enum):
    APPROACHING = "approaching"
    RISING = "rising"
    PEAK = "peak"
    SETTING = "setting"


class SadeSatiStatus(BaseModel):
    """
    Saturn's position relative to the natal Moon sign.

    `distance` is the zero-based sign count from the Moon to Saturn.
    """
    model_config = ConfigDict(frozen=True)

    moon_sign_index: int = Field(..., ge=0, le=11)
    saturn_sign_index: int = Field(..., ge=0, le=11)
    distance: int = Field(..., ge=0, le=11)
    phase: Optional[SadeSatiPhase] = None

    @computed_field
    @property
    def is_active(self) -> bool:
        return self.phase in (SadeSatiPhase.RISING, SadeSatiPhase.PEAK, SadeSatiPhase.SETTING)


class TransitPeriodType(str, Enum):
    SADE_SATI = "sade_sati"
    KANTAKA_SHANI = "kantaka_shani"
    ASHTAMA_SHANI = "ashtama_shani"
    JUPITER_TRANSIT = "jupiter_transit"
    SATURN_TRANSIT = "saturn_transit"
    RAHU_KETU_TRANSIT = "rahu_ketu_transit"


class MajorTransitPeriod(BaseModel):
    """
    A slow-moving body's stay in one sign.

    `start`/`end` are the ingress instants found by the search; either
    is None when it falls outside the search window.
    """
    model_config = ConfigDict(frozen=True)

    period_type: TransitPeriodType
    body: str
    sign_index: int = Field(..., ge=0, le=11)
    sign: str
    house_from_moon: int = Field(..., ge=1, le=12)
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    sade_sati_phase: Optional[SadeSatiPhase] = None
    description: Optional[str] = None

    def is_active(self, at: datetime) -> bool:
        if self.start is not None and at < self.start:
            return False
        if self.end is not None and at >= self.end:
            return False
        return True


# ─────────────────────────────────────────────
# Snapshot
# ─────────────────────────────────────────────

class TransitSnapshot(BaseModel):
    """
    Transit positions at one instant compared against a natal chart.
    """
    model_config = ConfigDict(frozen=True)

    instant: datetime
    transit: TransitChart
    gochar: Gochar
    aspects: Tuple[ActiveTransitAspect, ...] = ()
    sade_sati: SadeSatiStatus
    periods: Tuple[MajorTransitPeriod, ...] = ()
    calculation_version: str = "v1"
