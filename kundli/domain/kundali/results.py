from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict

from kundli.domain.dasha.schemas import DashaTimelines
from kundli.domain.kundali.derived.schemas import (
    AshtakavargaGrid,
    CharaKaraka,
    NakshatraInfo,
    ShadbalaRecord,
)
from kundli.domain.kundali.divisional.schemas import DivisionalCharts
from kundli.domain.kundali.schemas import BodyPosition, HouseLayout, KundaliChart
from kundli.domain.rules.schemas import DoshaRecord, YogaRecord


class ChartResult(BaseModel):
    """
    Everything computed for one birth.

    `kundali` echoes the birth instant, location and calculation
    settings alongside the D1 positions and houses.
    """
    model_config = ConfigDict(frozen=True)

    kundali: KundaliChart
    moon_nakshatra: NakshatraInfo
    divisional: DivisionalCharts
    dashas: DashaTimelines
    yogas: Tuple[YogaRecord, ...] = ()
    doshas: Tuple[DoshaRecord, ...] = ()
    shadbala: Dict[str, ShadbalaRecord]
    ashtakavarga: AshtakavargaGrid
    karakas: List[CharaKaraka]
    calculation_version: str = "v1"

    @property
    def ayanamsa_value(self) -> float:
        return self.kundali.ayanamsa_value

    @property
    def positions(self) -> Dict[str, BodyPosition]:
        return self.kundali.positions

    @property
    def houses(self) -> HouseLayout:
        return self.kundali.houses
