from datetime import datetime
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class DashaLevel(IntEnum):
    MAHADASHA = 1
    ANTARDASHA = 2
    PRATYANTARDASHA = 3


class DashaPeriod(BaseModel):
    """
    One node of a dasha tree.

    Nodes live in a flat arena (`DashaTimeline.nodes`) and refer to their
    parent and children by index. Whether a period is running is never
    stored; ask `is_active(at)`.
    """
    model_config = ConfigDict(frozen=True)

    index: int
    level: DashaLevel
    lord: str
    planet: Optional[str] = Field(
        default=None,
        description="Ruling planet when the lord is a yogini or a sign"
    )
    start: datetime
    end: datetime
    parent: Optional[int] = None
    children: Tuple[int, ...] = ()

    @property
    def duration_days(self) -> float:
        return (self.end - self.start).total_seconds() / 86400.0

    def duration_years(self, days_per_year: float = 365.25) -> float:
        return self.duration_days / days_per_year

    def is_active(self, at: datetime) -> bool:
        return self.start <= at < self.end


class DashaTimeline(BaseModel):
    """
    Three-level dasha tree for one system, stored as an index-linked arena.
    """
    model_config = ConfigDict(frozen=True)

    system: str
    cycle_years: Optional[float] = Field(
        default=None,
        description="Fixed cycle total; None for variable systems (Chara)"
    )
    birth_instant: datetime
    nodes: Tuple[DashaPeriod, ...]
    roots: Tuple[int, ...]
    calculation_version: str = "v1"

    # ─────────────────────────────────────────────
    # Traversal
    # ─────────────────────────────────────────────

    def node(self, index: int) -> DashaPeriod:
        return self.nodes[index]

    def mahadashas(self) -> List[DashaPeriod]:
        return [self.nodes[i] for i in self.roots]

    def children_of(self, period: DashaPeriod) -> List[DashaPeriod]:
        return [self.nodes[i] for i in period.children]

    def parent_of(self, period: DashaPeriod) -> Optional[DashaPeriod]:
        return None if period.parent is None else self.nodes[period.parent]

    def at_level(self, level: DashaLevel) -> List[DashaPeriod]:
        return [n for n in self.nodes if n.level == level]

    # ─────────────────────────────────────────────
    # Derived "active" queries
    # ─────────────────────────────────────────────

    def active_path(self, at: datetime) -> List[DashaPeriod]:
        """
        Mahadasha → Antardasha → Pratyantardasha running at `at`
        (empty outside the timeline).
        """
        path: List[DashaPeriod] = []
        candidates = self.mahadashas()

        while candidates:
            current = next((p for p in candidates if p.is_active(at)), None)
            if current is None:
                break
            path.append(current)
            candidates = self.children_of(current)

        return path

    def active(self, at: datetime, level: DashaLevel = DashaLevel.MAHADASHA) -> Optional[DashaPeriod]:
        path = self.active_path(at)
        return path[level - 1] if len(path) >= level else None


class DashaTimelines(BaseModel):
    """
    All dasha systems for one chart.

    Systems whose eligibility rule failed are absent and listed in
    `inapplicable` (system → reason).
    """
    model_config = ConfigDict(frozen=True)

    vimshottari: DashaTimeline
    yogini: DashaTimeline
    ashtottari: Optional[DashaTimeline] = None
    chara: DashaTimeline
    inapplicable: Dict[str, str] = Field(default_factory=dict)
    calculation_version: str = "v1"
