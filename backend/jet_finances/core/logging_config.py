"""
Logging setup for the API process and the maintenance scripts.
"""
import logging
from jet_finances.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure root logging once; later calls only adjust the level."""
    level_name = (level or settings.LOG_LEVEL or "INFO").upper()
    logging.basicConfig(level=level_name, format=LOG_FORMAT)
    logging.getLogger().setLevel(level_name)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
