import logging
import math
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Tuple

import swisseph as swe
from pydantic import BaseModel, ConfigDict

from kundli.config import settings
from kundli.domain.kundali.angles import decimal_year, ensure_utc, julian_day
from kundli.domain.kundali.errors import InvalidInputError, ProviderUnavailableError
from kundli.domain.kundali.schemas import Ayanamsa, HouseSystem, NodeType

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────
# Provider data
# ─────────────────────────────────────────────

class EphemerisPosition(BaseModel):
    """
    Tropical ecliptic longitude and daily speed of one body.
    """
    model_config = ConfigDict(frozen=True)

    longitude: float
    speed: float


class HouseCusps(BaseModel):
    """
    Tropical ascendant and the twelve cusp longitudes (house 1 first).
    """
    model_config = ConfigDict(frozen=True)

    ascendant: float
    cusps: Tuple[float, ...]


def estimate_ayanamsa(instant: datetime) -> float:
    """
    Linear precession estimate (≈ Lahiri) used to sanity-check providers.
    """
    return 23.8512 + (decimal_year(instant) - 2000.0) * 50.3 / 3600.0


# ─────────────────────────────────────────────
# Provider interface
# ─────────────────────────────────────────────

class EphemerisProvider(ABC):
    """
    Source of raw astronomical data.

    Implementations must raise ProviderUnavailableError, never return
    zeros, when an instant is outside their supported range.
    """

    @abstractmethod
    def position(
        self,
        body: str,
        instant: datetime,
        node_type: NodeType = NodeType.MEAN,
    ) -> EphemerisPosition:
        raise NotImplementedError

    @abstractmethod
    def ayanamsa_value(
        self,
        instant: datetime,
        system: Ayanamsa,
    ) -> float:
        raise NotImplementedError

    @abstractmethod
    def house_cusps(
        self,
        instant: datetime,
        latitude: float,
        longitude: float,
        system: HouseSystem,
    ) -> HouseCusps:
        raise NotImplementedError


# ─────────────────────────────────────────────
# Swiss Ephemeris
# ─────────────────────────────────────────────

class SwissEphemerisProvider(EphemerisProvider):
    """
    EphemerisProvider backed by pyswisseph.

    Swiss Ephemeris keeps the sidereal mode and data path as process-wide
    state, so every call into the library holds a shared lock.
    """

    PLANET_MAPPING: Dict[str, int] = {
        "Sun": swe.SUN,
        "Moon": swe.MOON,
        "Mars": swe.MARS,
        "Mercury": swe.MERCURY,
        "Jupiter": swe.JUPITER,
        "Venus": swe.VENUS,
        "Saturn": swe.SATURN,
    }

    NODE_MAPPING: Dict[NodeType, int] = {
        NodeType.MEAN: swe.MEAN_NODE,
        NodeType.TRUE: swe.TRUE_NODE,
    }

    AYANAMSA_MAPPING: Dict[Ayanamsa, int] = {
        Ayanamsa.LAHIRI: swe.SIDM_LAHIRI,
        Ayanamsa.RAMAN: swe.SIDM_RAMAN,
        Ayanamsa.KRISHNAMURTI: swe.SIDM_KRISHNAMURTI,
        Ayanamsa.FAGAN_BRADLEY: swe.SIDM_FAGAN_BRADLEY,
        Ayanamsa.TRUE_CHITRA: swe.SIDM_TRUE_CITRA,
    }

    # Sripati cusps are Porphyry; Bhava Chalita starts from equal cusps
    HOUSE_CODES: Dict[HouseSystem, bytes] = {
        HouseSystem.EQUAL: b"A",
        HouseSystem.WHOLE_SIGN: b"W",
        HouseSystem.PLACIDUS: b"P",
        HouseSystem.KOCH: b"K",
        HouseSystem.SRIPATI: b"O",
        HouseSystem.BHAVA_CHALITA: b"A",
    }

    _lock = threading.Lock()

    def __init__(
        self,
        ephe_path: str | None = None,
        min_year: int | None = None,
        max_year: int | None = None,
        ayanamsa_tolerance: float | None = None,
    ):
        self.ephe_path = ephe_path or settings.EPHE_PATH
        self.min_year = min_year if min_year is not None else settings.EPHEMERIS_MIN_YEAR
        self.max_year = max_year if max_year is not None else settings.EPHEMERIS_MAX_YEAR
        self.ayanamsa_tolerance = (
            ayanamsa_tolerance if ayanamsa_tolerance is not None else settings.AYANAMSA_TOLERANCE
        )

        if self.ephe_path:
            with self._lock:
                swe.set_ephe_path(self.ephe_path)

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def position(
        self,
        body: str,
        instant: datetime,
        node_type: NodeType = NodeType.MEAN,
    ) -> EphemerisPosition:
        if body in self.PLANET_MAPPING:
            body_id = self.PLANET_MAPPING[body]
        elif body == "Rahu":
            body_id = self.NODE_MAPPING[NodeType(node_type)]
        else:
            raise InvalidInputError(f"Unsupported body for ephemeris lookup: {body}")

        jd = self._julian_day(instant)

        try:
            with self._lock:
                xx, _ = swe.calc_ut(jd, body_id, swe.FLG_SWIEPH | swe.FLG_SPEED)
        except swe.Error as exc:
            logger.error(f"Swiss Ephemeris failed for {body} at {instant.isoformat()}: {exc}")
            raise ProviderUnavailableError(
                f"Ephemeris lookup failed for {body} at {instant.isoformat()}"
            ) from exc

        longitude, speed = xx[0], xx[3]
        self._require_finite(f"{body} position", longitude, speed)

        return EphemerisPosition(longitude=longitude % 360.0, speed=speed)

    def ayanamsa_value(
        self,
        instant: datetime,
        system: Ayanamsa,
    ) -> float:
        try:
            mode = self.AYANAMSA_MAPPING[Ayanamsa(system)]
        except (KeyError, ValueError) as exc:
            raise InvalidInputError(f"Unsupported ayanamsa: {system}") from exc

        jd = self._julian_day(instant)

        try:
            with self._lock:
                swe.set_sid_mode(mode, 0, 0)
                value = swe.get_ayanamsa_ut(jd)
        except swe.Error as exc:
            logger.error(f"Ayanamsa lookup failed at {instant.isoformat()}: {exc}")
            raise ProviderUnavailableError(
                f"Ayanamsa lookup failed at {instant.isoformat()}"
            ) from exc

        self._require_finite("ayanamsa", value)

        expected = estimate_ayanamsa(instant)
        if abs(value - expected) > self.ayanamsa_tolerance:
            raise ProviderUnavailableError(
                f"Ayanamsa {value:.4f} for {system} is outside the expected band "
                f"around {expected:.4f}"
            )

        return value

    def house_cusps(
        self,
        instant: datetime,
        latitude: float,
        longitude: float,
        system: HouseSystem,
    ) -> HouseCusps:
        code = self.HOUSE_CODES[HouseSystem(system)]
        jd = self._julian_day(instant)

        try:
            with self._lock:
                cusps, ascmc = swe.houses(jd, latitude, longitude, code)
        except swe.Error as exc:
            logger.error(f"House calculation failed ({system}) at lat={latitude}: {exc}")
            raise ProviderUnavailableError(
                f"House cusps unavailable for {system} at latitude {latitude}"
            ) from exc

        # Older pyswisseph releases return 13 values with index 0 unused
        if len(cusps) == 13:
            cusps = cusps[1:]
        cusps = tuple(cusps[:12])

        self._require_finite("house cusps", ascmc[0], *cusps)
        if len(cusps) != 12:
            raise ProviderUnavailableError(f"Expected 12 cusps, got {len(cusps)}")

        return HouseCusps(
            ascendant=ascmc[0] % 360.0,
            cusps=tuple(c % 360.0 for c in cusps),
        )

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _julian_day(self, instant: datetime) -> float:
        utc = ensure_utc(instant)
        if not (self.min_year <= utc.year <= self.max_year):
            raise ProviderUnavailableError(
                f"Instant {utc.isoformat()} is outside the supported range "
                f"{self.min_year}–{self.max_year}"
            )
        return julian_day(utc)

    @staticmethod
    def _require_finite(label: str, *values: float) -> None:
        if not all(math.isfinite(v) for v in values):
            raise ProviderUnavailableError(f"Ephemeris returned non-finite {label}")
