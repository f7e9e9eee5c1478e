"""
Leveled logger: four severity channels gated by a bitmask.

The server and the embedding program's move function share one Logger. Each
channel (error, warning, info, debug) is switched on or off by a bit in the
mask given at construction; the mask never changes afterwards, so a Logger
can be shared freely between request threads.

Lines are written to a stdlib ``logging.Logger`` acting as a plain line
writer. The record is emitted at the stdlib level matching the channel, so a
caller-supplied sink with its own handlers and filters keeps working. Use
new_line_logger() for a sink that passes every record through, leaving the
bitmask as the only gate.
"""

import logging
import sys
from typing import IO

from snakeserver.constants import LEVEL_PREFIXES, LogLevel

_STDLIB_LEVELS: dict[LogLevel, int] = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}

_LINE_FORMAT = "%(asctime)s %(message)s"
_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def new_line_logger(stream: IO[str] | None = None, name: str = "snakeserver") -> logging.Logger:
    """
    Build a stdlib logger that writes every record as one timestamped line.

    The logger does not propagate to the root logger and accepts all levels,
    so only the Logger bitmask decides what is written. Calling this again
    with the same name replaces the previous handler instead of stacking a
    second one.

    Args:
        stream: Text stream to write to. Defaults to stdout.
        name:   Name of the stdlib logger.

    Returns:
        The configured ``logging.Logger``.
    """
    sink = logging.getLogger(name)
    for handler in list(sink.handlers):
        sink.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter(_LINE_FORMAT, _DATE_FORMAT))
    sink.addHandler(handler)
    sink.setLevel(logging.DEBUG)
    sink.propagate = False
    return sink


class Logger:
    """
    Leveled logger over a stdlib line writer.

    The mask decides which calls produce a line; the sink must then pass
    that line on. Each channel is emitted at its matching stdlib level
    (printf at INFO), so a sink whose own level is above DEBUG, such as a
    plain ``logging.getLogger(__name__)`` under the root default of WARNING,
    drops lines the mask enables. Give the sink level DEBUG, or use
    new_line_logger(), which does.

    Attributes:
        sink:   The underlying ``logging.Logger`` every line is written to.
        levels: Bitmask of enabled LogLevel flags. Read-only after construction.
    """

    def __init__(self, sink: logging.Logger, levels: int = LogLevel.DEFAULT) -> None:
        self._sink = sink
        self._levels = LogLevel(levels)

    @property
    def sink(self) -> logging.Logger:
        return self._sink

    @property
    def levels(self) -> LogLevel:
        return self._levels

    def enabled(self, level: int) -> bool:
        """Return True if any bit of `level` is set in the mask."""
        return bool(self._levels & level)

    def printf(self, fmt: str, *args) -> None:
        """Write an unprefixed line regardless of the mask."""
        self._sink.info(fmt, *args)

    def err(self, fmt: str, *args) -> None:
        self._write(LogLevel.ERROR, fmt, args)

    def warn(self, fmt: str, *args) -> None:
        self._write(LogLevel.WARNING, fmt, args)

    def info(self, fmt: str, *args) -> None:
        self._write(LogLevel.INFO, fmt, args)

    def debug(self, fmt: str, *args) -> None:
        self._write(LogLevel.DEBUG, fmt, args)

    def _write(self, level: LogLevel, fmt: str, args: tuple) -> None:
        if not self._levels & level:
            return
        # Formatting is left to the stdlib record so that "%" in an
        # argument (e.g. a request body) is never re-interpreted.
        self._sink.log(_STDLIB_LEVELS[level], LEVEL_PREFIXES[level] + " " + fmt, *args)
