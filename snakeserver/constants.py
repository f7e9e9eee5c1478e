"""
Server constants: API version, network defaults, and log level flags.

All fixed values used by the server live here so the rest of the package
never introduces magic numbers or strings of its own.
"""

import enum

# ---------------------------------------------------------------------------
# Battlesnake API
# ---------------------------------------------------------------------------
# The game engine reads "apiversion" from the info response to decide which
# request format to send. Only version 1 exists, so the server always reports
# it, whatever the embedding program put in its InfoResponse.

API_VERSION: str = "1"

# ---------------------------------------------------------------------------
# Network defaults
# ---------------------------------------------------------------------------

DEFAULT_PORT: int = 8000
DEFAULT_HOST: str = ""  # all interfaces

JSON_MEDIA_TYPE: str = "application/json"

# ---------------------------------------------------------------------------
# Log levels
# ---------------------------------------------------------------------------


class LogLevel(enum.IntFlag):
    """
    Independent log level bits. Combine with `|`, e.g.
    ``LogLevel.WARNING | LogLevel.ERROR | LogLevel.DEBUG``.

    DEBUG is off by default because it turns on verbatim request body logging.
    """

    ERROR = 1 << 0
    WARNING = 1 << 1
    INFO = 1 << 2
    DEBUG = 1 << 3
    DEFAULT = ERROR | WARNING | INFO


# Line prefix written for each level.
LEVEL_PREFIXES: dict[LogLevel, str] = {
    LogLevel.ERROR: "ERROR",
    LogLevel.WARNING: "WARN",
    LogLevel.INFO: "INFO",
    LogLevel.DEBUG: "DEBUG",
}
