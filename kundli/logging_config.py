import logging

from kundli.config import settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Install a basic root handler for the engine.

    Library code only creates module loggers; applications embedding
    the engine call this once at startup (or configure logging themselves).
    """
    resolved = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("kundli").setLevel(resolved)
