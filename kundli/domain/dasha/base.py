import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from kundli.config import settings
from kundli.domain.dasha.schemas import DashaLevel, DashaPeriod, DashaTimeline
from kundli.domain.kundali.errors import InvalidInputError
from kundli.domain.kundali.schemas import KundaliChart

logger = logging.getLogger(__name__)


class DashaArena:
    """
    Append-only node storage used while a timeline is being built.
    """

    def __init__(self):
        self._rows: List[Dict] = []

    def add(
        self,
        level: DashaLevel,
        lord: str,
        planet: Optional[str],
        start: datetime,
        end: datetime,
        parent: Optional[int],
    ) -> int:
        index = len(self._rows)
        self._rows.append({
            "index": index,
            "level": level,
            "lord": lord,
            "planet": planet,
            "start": start,
            "end": end,
            "parent": parent,
            "children": [],
        })
        if parent is not None:
            self._rows[parent]["children"].append(index)
        return index

    def freeze(self) -> Tuple[DashaPeriod, ...]:
        return tuple(
            DashaPeriod(**{**row, "children": tuple(row["children"])})
            for row in self._rows
        )


class BaseDashaSystem(ABC):
    """
    Abstract base class for all dasha systems.

    Each system must:
    - Declare `system` (and `cycle_years` when the cycle is fixed)
    - Implement `calculate`

    Period boundaries come from successive float-day additions so that
    siblings stay contiguous and always sum to their parent.
    """

    system: str
    cycle_years: Optional[float] = None
    calculation_version: str = "v1"
    depth: int = 3

    def __init__(
        self,
        horizon_years: float | None = None,
        days_per_year: float | None = None,
    ):
        self.horizon_years = horizon_years or settings.DASHA_HORIZON_YEARS
        self.days_per_year = days_per_year or settings.DAYS_PER_YEAR

    @abstractmethod
    def calculate(self, kundali: KundaliChart) -> Optional[DashaTimeline]:
        """
        Build the timeline, or return None when the system does not apply.
        """
        raise NotImplementedError

    # ─────────────────────────────────────────────
    # Shared tree construction
    # ─────────────────────────────────────────────

    def _build_timeline(
        self,
        birth: datetime,
        mahadasha_lords: Iterable[str],
        elapsed_fraction: float,
        weight: Callable[[str], float],
        sub_order: Callable[[str], Sequence[str]],
        planet_of: Callable[[str], Optional[str]] = lambda lord: None,
    ) -> DashaTimeline:
        """
        Generate Mahadashas from `mahadasha_lords` until the horizon is
        covered, subdividing each down to `depth` levels.

        The running Mahadasha is laid out from its virtual start
        (birth minus the elapsed part) and then clipped at birth.
        """
        if not 0.0 <= elapsed_fraction < 1.0:
            raise InvalidInputError(f"Elapsed fraction must be in [0, 1): {elapsed_fraction}")

        arena = DashaArena()
        roots: List[int] = []
        horizon_end = birth + timedelta(days=self.horizon_years * self.days_per_year)

        cursor = birth
        for position, lord in enumerate(mahadasha_lords):
            full_days = weight(lord) * self.days_per_year

            if position == 0:
                virtual_start = birth - timedelta(days=full_days * elapsed_fraction)
            else:
                virtual_start = cursor
            end = virtual_start + timedelta(days=full_days)

            index = arena.add(
                DashaLevel.MAHADASHA,
                lord,
                planet_of(lord),
                max(virtual_start, birth),
                end,
                None,
            )
            self._subdivide(
                arena, index, lord, virtual_start, end,
                DashaLevel.ANTARDASHA, birth, weight, sub_order, planet_of,
            )
            roots.append(index)

            cursor = end
            if cursor >= horizon_end:
                break

        logger.debug(f"{self.system}: {len(roots)} mahadashas from {birth.isoformat()}")

        return DashaTimeline(
            system=self.system,
            cycle_years=self.cycle_years,
            birth_instant=birth,
            nodes=arena.freeze(),
            roots=tuple(roots),
            calculation_version=self.calculation_version,
        )

    def _subdivide(
        self,
        arena: DashaArena,
        parent: int,
        lord: str,
        virtual_start: datetime,
        end: datetime,
        level: int,
        clip: datetime,
        weight: Callable[[str], float],
        sub_order: Callable[[str], Sequence[str]],
        planet_of: Callable[[str], Optional[str]],
    ) -> None:
        if level > self.depth:
            return

        order = list(sub_order(lord))
        total_weight = sum(weight(sub) for sub in order)
        parent_days = (end - virtual_start).total_seconds() / 86400.0

        cursor = virtual_start
        for i, sub in enumerate(order):
            # Pin the last child to the parent's end
            if i == len(order) - 1:
                sub_end = end
            else:
                sub_end = cursor + timedelta(days=parent_days * weight(sub) / total_weight)

            if sub_end > clip:
                index = arena.add(
                    DashaLevel(level), sub, planet_of(sub), max(cursor, clip), sub_end, parent,
                )
                self._subdivide(
                    arena, index, sub, cursor, sub_end,
                    level + 1, clip, weight, sub_order, planet_of,
                )
            cursor = sub_end


def cycle_from(sequence: Sequence[str], start: int) -> Iterable[str]:
    """
    Endless cyclic iteration over `sequence` beginning at `start`.
    """
    position = start
    while True:
        yield sequence[position % len(sequence)]
        position += 1


def rotated(sequence: Sequence[str], lord: str) -> List[str]:
    i = list(sequence).index(lord)
    return list(sequence[i:]) + list(sequence[:i])
