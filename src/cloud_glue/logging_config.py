"""Log line format for processes using cloud_glue; timestamps are rendered in UTC."""

import logging
import time

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


class UTCFormatter(logging.Formatter):
    """Formatter whose asctime is UTC, matching the trailing Z in LOG_DATEFMT."""

    converter = time.gmtime


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: int | str = logging.INFO) -> None:
    """Attach a UTC stderr handler to the root logger. Call once at startup.

    level may be a name such as "DEBUG" (LOG_LEVEL from settings); unknown names fall back to INFO.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(UTCFormatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logging.basicConfig(level=_resolve_level(level), handlers=[handler])
