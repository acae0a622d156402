# Severity levels. Lower ordinal means more severe; an event is emitted
# when its level is <= the logger's threshold.

from __future__ import annotations
from enum import IntEnum
from typing import Union

from .errors import UnknownLevelError


class Level(IntEnum):
    FATAL = 0
    ERROR = 1
    INFO = 2
    DEBUG = 3

    def __str__(self) -> str:
        return _NAMES[self]


_NAMES = {
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.ERROR: "error",
    Level.FATAL: "fatal",
}

_PARSE = {
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "error": Level.ERROR,
    "eror": Level.ERROR,
    "err": Level.ERROR,
    "fatal": Level.FATAL,
}


def level_name(level: Union[Level, int]) -> str:
    """Name of a level; anything outside the enumeration renders as "unknown"."""
    try:
        return _NAMES[Level(level)]
    except ValueError:
        return "unknown"


def level_from_string(text: str) -> Level:
    """Parse a level name, e.g. from a command line flag or config value.

    Raises UnknownLevelError echoing the input; never guesses a default.
    """
    try:
        return _PARSE[text]
    except KeyError:
        raise UnknownLevelError(text) from None
