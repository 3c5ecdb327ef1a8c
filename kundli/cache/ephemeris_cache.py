from datetime import datetime
from functools import lru_cache
from typing import Any, Dict

from kundli.config import settings
from kundli.domain.kundali.angles import ensure_utc
from kundli.domain.kundali.ephemeris import (
    EphemerisPosition,
    EphemerisProvider,
    HouseCusps,
)
from kundli.domain.kundali.schemas import Ayanamsa, HouseSystem, NodeType


class CachedEphemerisProvider(EphemerisProvider):
    """
    Memoizing wrapper around any EphemerisProvider.

    Provider calls are idempotent (same body + instant always yields the
    same data), so answers never expire; each call type keeps its own LRU
    of `max_size` entries. Failures are not cached: a provider error
    propagates every time.

    Used by:
    - ChartEngine (natal positions and ingress searches)
    - TransitEngine
    """

    def __init__(
        self,
        provider: EphemerisProvider,
        max_size: int | None = None,
    ):
        self.provider = provider
        self.max_size = max_size or settings.EPHEMERIS_CACHE_SIZE

        self._position = lru_cache(maxsize=self.max_size)(provider.position)
        self._ayanamsa_value = lru_cache(maxsize=self.max_size)(provider.ayanamsa_value)
        self._house_cusps = lru_cache(maxsize=self.max_size)(provider.house_cusps)

    # ─────────────────────────────────────────────
    # EphemerisProvider
    # ─────────────────────────────────────────────

    # Instants and enum settings are normalized so equal requests share an entry

    def position(
        self,
        body: str,
        instant: datetime,
        node_type: NodeType = NodeType.MEAN,
    ) -> EphemerisPosition:
        return self._position(body, ensure_utc(instant), NodeType(node_type))

    def ayanamsa_value(
        self,
        instant: datetime,
        system: Ayanamsa,
    ) -> float:
        return self._ayanamsa_value(ensure_utc(instant), Ayanamsa(system))

    def house_cusps(
        self,
        instant: datetime,
        latitude: float,
        longitude: float,
        system: HouseSystem,
    ) -> HouseCusps:
        return self._house_cusps(
            ensure_utc(instant), float(latitude), float(longitude), HouseSystem(system)
        )

    # ─────────────────────────────────────────────
    # Cache management
    # ─────────────────────────────────────────────

    def cache_info(self) -> Dict[str, Any]:
        """
        functools hit/miss statistics per call type.
        """
        return {
            "position": self._position.cache_info(),
            "ayanamsa_value": self._ayanamsa_value.cache_info(),
            "house_cusps": self._house_cusps.cache_info(),
        }

    def cache_clear(self) -> None:
        self._position.cache_clear()
        self._ayanamsa_value.cache_clear()
        self._house_cusps.cache_clear()
