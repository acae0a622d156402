# Lazy context values: computed when a record is serialized, after the
# threshold check, and recomputed for every record that carries them.

from __future__ import annotations
import inspect
from typing import Any, Callable

from .errors import ValueGeneratorError


class Value:
    """Wraps a zero-argument callable whose result becomes the field value.

    >>> log = diary.new({"goroutines": Value(threading.active_count)})

    A plain result is logged as is. A tuple is treated as several return
    values: one element unwraps to that element, more become a JSON array.
    """

    __slots__ = ("func",)

    def __init__(self, func: Callable[[], Any]) -> None:
        self.func = func

    def __repr__(self) -> str:
        return f"Value({self.func!r})"

    def evaluate(self) -> Any:
        func = self.func
        if not callable(func):
            raise ValueGeneratorError(f"invalid value generator: not callable: {func!r}")
        _check_signature(func)
        try:
            result = func()
        except Exception as exc:
            raise ValueGeneratorError(f"invalid value generator: {func!r} raised {exc!r}") from exc
        if isinstance(result, tuple):
            if not result:
                raise ValueGeneratorError(f"invalid value generator: no return value: {func!r}")
            if len(result) == 1:
                return result[0]
            return list(result)
        return result


def _check_signature(func: Callable[..., Any]) -> None:
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        # some builtins carry no signature; let the call decide
        return
    for p in sig.parameters.values():
        if p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD):
            continue
        if p.default is p.empty:
            raise ValueGeneratorError(f"invalid value generator: wrong arity: {func!r}")
    if sig.return_annotation in (None, "None"):
        raise ValueGeneratorError(f"invalid value generator: no return value: {func!r}")
