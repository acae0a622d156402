__all__ = [
    "Level", "level_from_string", "level_name",
    "Logger", "LoggerConfig", "Writer", "DiscardWriter", "new",
    "set_level", "set_context", "set_writer", "set_time_key", "set_level_key",
    "set_message_key", "set_caller_key", "set_caller_skip", "set_caller_format",
    "Value", "Call", "caller",
    "init", "shutdown", "get_logger", "debug", "info", "error", "fatal",
    "DiaryError", "ConfigError", "UnknownLevelError", "ValueGeneratorError", "NoCallInfoError",
    "MIN_CALLER_SKIP", "FATAL_EXIT_CODE",
]
__version__ = "0.1.0"

from .errors import ConfigError, DiaryError, NoCallInfoError, UnknownLevelError, ValueGeneratorError
from .levels import Level, level_from_string, level_name
from .logger import (
    FATAL_EXIT_CODE, MIN_CALLER_SKIP, DiscardWriter, Logger, LoggerConfig, Writer, new,
    set_caller_format, set_caller_key, set_caller_skip, set_context, set_level,
    set_level_key, set_message_key, set_time_key, set_writer,
)
from .stack import Call, caller
from .values import Value
from .bootstrap import debug, error, fatal, get_logger, info, init, shutdown
