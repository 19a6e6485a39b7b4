"""
Engine configuration - environment-driven defaults and logging setup.

All settings are plain module-level constants read once at import time:
- DIAGRAM_ENGINE_WIDTH / DIAGRAM_ENGINE_HEIGHT: default canvas size
- DIAGRAM_ENGINE_LOG_LEVEL: loguru level for configure_logging()
- DIAGRAM_ENGINE_API_HOST / DIAGRAM_ENGINE_API_PORT: backend bind address
"""

import os
import sys

from loguru import logger


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back on bad values."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


DEFAULT_WIDTH = _env_float("DIAGRAM_ENGINE_WIDTH", 1200)
DEFAULT_HEIGHT = _env_float("DIAGRAM_ENGINE_HEIGHT", 800)

LOG_LEVEL = os.environ.get("DIAGRAM_ENGINE_LOG_LEVEL", "INFO")

API_HOST = os.environ.get("DIAGRAM_ENGINE_API_HOST", "127.0.0.1")
API_PORT = int(_env_float("DIAGRAM_ENGINE_API_PORT", 8765))

LOG_FORMAT = (
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str | None = None) -> None:
    """Route loguru output to stderr at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
