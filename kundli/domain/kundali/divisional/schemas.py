from typing import Dict
from pydantic import BaseModel, ConfigDict, Field


class DivisionalPlacement(BaseModel):
    """
    Sign and degree of one body (or the ascendant) in a varga.
    """
    model_config = ConfigDict(frozen=True)

    sign_index: int = Field(..., ge=0, le=11)
    sign: str
    degree_in_sign: float = Field(..., ge=0.0, lt=30.0)


class DivisionalChart(BaseModel):
    """
    Represents a single divisional chart (D9, D10, etc.).
    """
    model_config = ConfigDict(frozen=True)

    chart_type: str
    division: int
    name: str
    ascendant: DivisionalPlacement
    placements: Dict[str, DivisionalPlacement]
    calculation_version: str

    def house_of(self, body: str) -> int:
        """
        Whole-sign house of a body counted from the varga ascendant.
        """
        return (self.placements[body].sign_index - self.ascendant.sign_index) % 12 + 1


class DivisionalCharts(BaseModel):
    """
    Container for all divisional charts of a kundali.

    A scheme that failed appears in `failures` (chart type → reason)
    instead of `charts`.
    """
    model_config = ConfigDict(frozen=True)

    charts: Dict[str, DivisionalChart] = Field(default_factory=dict)
    failures: Dict[str, str] = Field(default_factory=dict)
    calculation_version: str = "v1"
