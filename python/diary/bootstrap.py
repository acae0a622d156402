# Package-wide default logger. Built with all defaults on first use;
# init() replaces it with a freshly built logger instead of mutating it.

from __future__ import annotations
from typing import Optional, Union

from .levels import Level
from .logger import (
    DEFAULT_CALLER_FORMAT, DEFAULT_CALLER_KEY, DEFAULT_LEVEL_KEY, DEFAULT_MESSAGE_KEY,
    DEFAULT_TIME_KEY, MIN_CALLER_SKIP, Context, Logger, Writer, _flush, new,
    set_caller_format, set_caller_key, set_caller_skip, set_level, set_level_key,
    set_message_key, set_time_key, set_writer,
)

_global_logger: Optional[Logger] = None


def init(
    level: Union[Level, str] = Level.INFO,
    context: Optional[Context] = None,
    writer: Optional[Writer] = None,
    time_key: str = DEFAULT_TIME_KEY,
    level_key: str = DEFAULT_LEVEL_KEY,
    message_key: str = DEFAULT_MESSAGE_KEY,
    caller_key: str = DEFAULT_CALLER_KEY,
    caller_skip: int = MIN_CALLER_SKIP,
    caller_format: str = DEFAULT_CALLER_FORMAT,
) -> Logger:
    """Build the default logger from keyword settings and install it.

    `level` may be a level name, e.g. straight from a --log-level flag.
    Raises ConfigError and leaves the current default in place if any
    setting is rejected.
    """
    global _global_logger
    options = [
        set_level(level),
        set_time_key(time_key),
        set_level_key(level_key),
        set_message_key(message_key),
        set_caller_key(caller_key),
        set_caller_skip(caller_skip),
        set_caller_format(caller_format),
    ]
    if writer is not None:
        options.append(set_writer(writer))
    logger = new(context, *options)
    _global_logger = logger
    return logger


def get_logger() -> Logger:
    """Return the default logger, building it with all defaults if needed."""
    global _global_logger
    if _global_logger is None:
        _global_logger = new()
    return _global_logger


def shutdown() -> None:
    """Flush the default logger's sink, if it has been built and can flush."""
    if _global_logger is not None:
        _flush(_global_logger.config.writer)


# Free functions report the location of their own caller: they call
# Logger._log directly, so the stack depth matches the methods.

def debug(msg: str, *context: Context) -> None: get_logger()._log(Level.DEBUG, msg, context)
def info(msg: str, *context: Context) -> None: get_logger()._log(Level.INFO, msg, context)
def error(msg: str, *context: Context) -> None: get_logger()._log(Level.ERROR, msg, context)
def fatal(msg: str, *context: Context) -> None: get_logger()._log(Level.FATAL, msg, context)
