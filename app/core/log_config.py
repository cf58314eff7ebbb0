"""
Logging setup

Modules log through logging.getLogger(__name__); this only configures the root handler.
"""
import logging

from app.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL):
    """
    Configure root logging once (no-op if handlers already exist, e.g. under uvicorn/pytest)
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("app").setLevel(level.upper())
