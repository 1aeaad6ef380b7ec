import logging
import os

# Smallest grid square shown on the in-game map, meters per grid unit.
DEFAULT_GRID_SIZE_M = 100
MRAD_PER_RAD = 1000

SERVER_HOST = os.environ.get("ARTY_HOST", "0.0.0.0")
DEFAULT_SERVER_PORT = 8000

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CRASH_LOG_FILE = os.environ.get("ARTY_CRASH_LOG", "crash_log.txt")


def server_port() -> int:
    raw = os.environ.get("ARTY_PORT", str(DEFAULT_SERVER_PORT)).strip()
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"ARTY_PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"ARTY_PORT out of range: {port}")
    return port


def log_level() -> int:
    name = os.environ.get("ARTY_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"ARTY_LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL; got {name!r}")
    return level
