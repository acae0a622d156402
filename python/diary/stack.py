# Call-site resolution: turns a stack depth into a printable source location.

from __future__ import annotations
import os, sys
from dataclasses import dataclass
from types import FrameType, TracebackType
from typing import List, Optional, Protocol

from .errors import NoCallInfoError

VERBS = ("s", "+s", "#s", "d", "n", "+n", "v", "+v", "#v")


@dataclass(frozen=True)
class Frame:
    filename: str
    lineno: int
    function: str
    module: str


class FrameWalker(Protocol):
    def frame(self, depth: int) -> Optional[Frame]: ...


def _from_code(f: FrameType, lineno: int) -> Frame:
    code = f.f_code
    return Frame(
        filename=code.co_filename,
        lineno=lineno,
        function=getattr(code, "co_qualname", code.co_name),
        module=f.f_globals.get("__name__", ""),
    )


class StackWalker:
    """Walks the live interpreter stack. Depth 0 is the caller of frame()."""

    def frame(self, depth: int) -> Optional[Frame]:
        try:
            f = sys._getframe(depth + 1)
        except ValueError:
            return None
        return _from_code(f, f.f_lineno)


class TracebackWalker:
    """Walks an exception traceback from the raising frame outwards.

    Frames taken from a traceback report tb_lineno, the line that faulted,
    rather than the line the frame has since moved on to.
    """

    def __init__(self, tb: Optional[TracebackType]) -> None:
        frames: List[Frame] = []
        while tb is not None:
            frames.append(_from_code(tb.tb_frame, tb.tb_lineno))
            tb = tb.tb_next
        frames.reverse()
        self._frames = frames

    def frame(self, depth: int) -> Optional[Frame]:
        if 0 <= depth < len(self._frames):
            return self._frames[depth]
        return None


_default_walker = StackWalker()


def caller(skip: int, walker: Optional[FrameWalker] = None) -> "Call":
    """Resolve the frame `skip` levels above the function calling caller().

    With skip=0 that is the function that called caller() itself.
    """
    if walker is None:
        # one extra for this function's own frame
        return Call(_default_walker.frame(skip + 1))
    return Call(walker.frame(skip))


class Call:
    """A single resolved stack frame, or an empty one when resolution failed.

    Supports these format specs:

        s    source file base name
        +s   source file path relative to its import root
        #s   full path of source file
        d    line number
        n    function name
        +n   module qualified function name
        v    equivalent to s:d  (also +v, #v)
    """

    __slots__ = ("frame",)

    def __init__(self, frame: Optional[Frame] = None) -> None:
        self.frame = frame

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Call":
        return cls(TracebackWalker(exc.__traceback__).frame(0))

    def __bool__(self) -> bool:
        return self.frame is not None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Call) and self.frame == other.frame

    def __hash__(self) -> int:
        return hash(self.frame)

    def __repr__(self) -> str:
        return f"Call({self.frame!r})"

    def __str__(self) -> str:
        return format(self, "v")

    def marshal_text(self) -> str:
        if self.frame is None:
            raise NoCallInfoError()
        return str(self)

    def __format__(self, spec: str) -> str:
        spec = spec or "v"
        if spec not in VERBS:
            raise ValueError(f"unknown call format {spec!r}")
        verb = spec[-1]
        flag = spec[:-1]
        if self.frame is None:
            return f"%!{verb}(NOFUNC)"
        fr = self.frame
        if verb == "d":
            return str(fr.lineno)
        if verb == "n":
            if flag == "+" and fr.module:
                return f"{fr.module}.{fr.function}"
            return fr.function
        if flag == "#":
            file = fr.filename
        elif flag == "+":
            file = fr.filename[_root_index(fr.filename, fr.module):]
        else:
            file = os.path.basename(fr.filename)
        if verb == "v":
            return f"{file}:{fr.lineno}"
        return file


def _root_index(file: str, module: str) -> int:
    """Index at which file stops being the import root and becomes the module path.

    A module named pkg.sub.mod lives at <root>/pkg/sub/mod.py, so we keep one
    segment per dotted component, plus one for a package __init__.py.
    """
    if not module or module == "__main__":
        keep = 1
    else:
        keep = module.count(".") + 1
        if os.path.basename(file) == "__init__.py":
            keep += 1
    sep = os.sep
    i = len(file)
    for _ in range(keep):
        i = file.rfind(sep, 0, i)
        if i == -1:
            return 0
    return i + len(sep)
