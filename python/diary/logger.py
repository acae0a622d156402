"""JSON line logger.

Every logging call runs the whole pipeline on the calling thread:
threshold check, merge of logger and call-site context, metadata, JSON
encoding and a single write() on the sink. There is no lock, no buffer and
no background worker. Loggers shared between threads or tasks must be given
a sink that tolerates concurrent writes, or be wrapped by the caller;
otherwise lines may interleave.

Loggers are immutable once built. Use Logger.new() to derive a child with
more context instead of changing a logger in place.
"""

from __future__ import annotations
import dataclasses, io, json, logging, os, sys, time
from dataclasses import dataclass, field, replace
from functools import partial
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Protocol, Tuple, Union

from .errors import ConfigError, UnknownLevelError
from .levels import Level, level_from_string, level_name
from .stack import VERBS, Call, caller
from .values import Value

DEFAULT_TIME_KEY = "ts"
DEFAULT_LEVEL_KEY = "lvl"
DEFAULT_MESSAGE_KEY = "message"
DEFAULT_CALLER_KEY = "caller"
DEFAULT_CALLER_FORMAT = "v"
# Reports the direct caller of a logging method. Each helper function
# wrapped around the logger adds one.
MIN_CALLER_SKIP = 2
FATAL_EXIT_CODE = 1

Context = Mapping[str, Any]

_log = logging.getLogger("diary")


class Writer(Protocol):
    def write(self, data: Any) -> Any: ...


class DiscardWriter:
    def write(self, data: Any) -> int: return len(data)


@dataclass(frozen=True)
class LoggerConfig:
    level: Level = Level.INFO
    context: Dict[str, Any] = field(default_factory=dict)
    writer: Writer = field(default_factory=lambda: sys.stdout)
    time_key: str = DEFAULT_TIME_KEY
    level_key: str = DEFAULT_LEVEL_KEY
    message_key: str = DEFAULT_MESSAGE_KEY
    caller_key: str = DEFAULT_CALLER_KEY
    caller_skip: int = MIN_CALLER_SKIP
    caller_format: str = DEFAULT_CALLER_FORMAT


Option = Callable[[LoggerConfig], LoggerConfig]


def set_level(level: Union[Level, int, str]) -> Option:
    """Set the threshold. Accepts a Level or a level name such as "debug"."""
    def apply(cfg: LoggerConfig) -> LoggerConfig:
        try:
            lvl = level_from_string(level) if isinstance(level, str) else Level(level)
        except (UnknownLevelError, ValueError) as exc:
            raise ConfigError(f"invalid level: {exc}") from exc
        return replace(cfg, level=lvl)
    return apply


def set_context(context: Optional[Context]) -> Option:
    """Replace the base context. Does not merge with what was there."""
    def apply(cfg: LoggerConfig) -> LoggerConfig:
        return replace(cfg, context=dict(context or {}))
    return apply


def set_writer(writer: Writer) -> Option:
    def apply(cfg: LoggerConfig) -> LoggerConfig:
        if not callable(getattr(writer, "write", None)):
            raise ConfigError(f"writer has no write method: {writer!r}")
        return replace(cfg, writer=writer)
    return apply


def _key_option(name: str, key: str) -> Option:
    def apply(cfg: LoggerConfig) -> LoggerConfig:
        if not isinstance(key, str):
            raise ConfigError(f"{name} must be a string, got {key!r}")
        return replace(cfg, **{name: key})
    return apply


def set_time_key(key: str) -> Option: return _key_option("time_key", key)
def set_level_key(key: str) -> Option: return _key_option("level_key", key)
def set_message_key(key: str) -> Option: return _key_option("message_key", key)


def set_caller_key(key: str) -> Option:
    """Set the caller field name. An empty name leaves the caller out."""
    return _key_option("caller_key", key)


def set_caller_skip(skip: int) -> Option:
    """Set how many frames to skip when resolving the caller.

    Raise it when logging through your own helper so the location points
    at the helper's caller rather than the helper.
    """
    def apply(cfg: LoggerConfig) -> LoggerConfig:
        if not isinstance(skip, int) or skip < MIN_CALLER_SKIP:
            raise ConfigError(f"caller skip must be >= {MIN_CALLER_SKIP}")
        return replace(cfg, caller_skip=skip)
    return apply


def set_caller_format(verb: str) -> Option:
    """Set how the caller field renders, e.g. "+v" for an import-root relative path."""
    def apply(cfg: LoggerConfig) -> LoggerConfig:
        if verb not in VERBS:
            raise ConfigError(f"unknown caller format {verb!r}, want one of {', '.join(VERBS)}")
        return replace(cfg, caller_format=verb)
    return apply


def _apply(cfg: LoggerConfig, options: Iterable[Option]) -> LoggerConfig:
    for opt in options:
        cfg = opt(cfg)
    return cfg


def new(context: Optional[Context] = None, *options: Option) -> "Logger":
    """Create a logger. Raises ConfigError if any option is rejected."""
    cfg = LoggerConfig(context=dict(context or {}))
    return Logger(_apply(cfg, options))


class Logger:
    __slots__ = ("_config",)

    def __init__(self, config: Optional[LoggerConfig] = None) -> None:
        self._config = config if config is not None else LoggerConfig()

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def level(self) -> Level:
        return self._config.level

    def new(self, context: Optional[Context] = None, *options: Option) -> "Logger":
        """Derive a child logger.

        The child starts from this logger's settings with `context` merged
        over this logger's context, then applies `options`. The two loggers
        are independent afterwards.
        """
        merged = dict(self._config.context)
        if context:
            merged.update(context)
        return Logger(_apply(replace(self._config, context=merged), options))

    def debug(self, msg: str, *context: Context) -> None: self._log(Level.DEBUG, msg, context)
    def info(self, msg: str, *context: Context) -> None: self._log(Level.INFO, msg, context)
    def error(self, msg: str, *context: Context) -> None: self._log(Level.ERROR, msg, context)

    def fatal(self, msg: str, *context: Context) -> None:
        """Log at fatal level, then terminate the process with FATAL_EXIT_CODE."""
        self._log(Level.FATAL, msg, context)

    def _log(self, level: Level, msg: str, context: Tuple[Context, ...]) -> None:
        if level is not Level.FATAL:
            self._write(level, msg, context)
            return
        try:
            self._write(level, msg, context)
            _flush(self._config.writer)
        finally:
            os._exit(FATAL_EXIT_CODE)

    def _write(self, level: Level, msg: str, context: Tuple[Context, ...]) -> None:
        c = self._config
        if level > c.level:
            return

        record: Dict[str, Any] = dict(c.context)
        for ctx in context:
            if ctx:
                record.update(ctx)

        record[c.time_key] = _timestamp()
        record[c.message_key] = msg
        record[c.level_key] = level_name(level)
        if c.caller_key:
            # _write <- _log <- public method <- caller
            record[c.caller_key] = caller(c.caller_skip + 1)

        try:
            line = json.dumps(record, separators=(",", ":"), sort_keys=True, ensure_ascii=False,
                              default=partial(_encode, c.caller_format))
        except Exception as exc:
            _log.warning("dropping %s record %r: serialization failed: %s", level_name(level), msg, exc)
            return

        line += "\n"
        w = c.writer
        try:
            w.write(line if isinstance(w, io.TextIOBase) else line.encode("utf-8"))
        except (OSError, ValueError) as exc:
            _log.warning("dropping %s record %r: write failed: %s", level_name(level), msg, exc)


def _encode(caller_format: str, o: Any) -> Any:
    if isinstance(o, Value):
        return o.evaluate()
    if isinstance(o, Call):
        return format(o, caller_format)
    if dataclasses.is_dataclass(o) and not isinstance(o, type):
        return dataclasses.asdict(o)
    if isinstance(o, BaseException):
        return str(o)
    raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")


def _timestamp() -> str:
    # RFC 3339, UTC, nanosecond precision
    secs, nanos = divmod(time.time_ns(), 1_000_000_000)
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(secs)) + f".{nanos:09d}Z"


def _flush(writer: Writer) -> None:
    flush = getattr(writer, "flush", None)
    if flush is None:
        return
    try:
        flush()
    except (OSError, ValueError) as exc:
        _log.warning("flush failed: %s", exc)
