from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ─── App ──────────────────────────────
    APP_NAME: str = "kundli-engine"
    ENV: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ─── Ephemeris ────────────────────────
    EPHE_PATH: Optional[str] = None
    EPHEMERIS_MIN_YEAR: int = -3000
    EPHEMERIS_MAX_YEAR: int = 3000
    EPHEMERIS_CACHE_SIZE: int = 4096
    AYANAMSA_TOLERANCE: float = 3.0

    # ─── Calculation defaults ─────────────
    DEFAULT_AYANAMSA: str = "Lahiri"
    DEFAULT_HOUSE_SYSTEM: str = "Equal"
    DEFAULT_NODE_TYPE: str = "Mean"

    # ─── Dasha ────────────────────────────
    DASHA_HORIZON_YEARS: float = 120.0
    DAYS_PER_YEAR: float = 365.25

    # ─── Transits ─────────────────────────
    INGRESS_SEARCH_DAYS: int = 1200


    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
