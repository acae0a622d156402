import sys
import pytest
from diary import Call, NoCallInfoError, caller
from diary.stack import Frame, StackWalker, TracebackWalker


@pytest.mark.parametrize("spec,want", [
    ("s", "handlers.py"),
    ("+s", "shop/orders/handlers.py"),
    ("#s", "/srv/app/src/shop/orders/handlers.py"),
    ("d", "42"),
    ("n", "OrderHandler.place"),
    ("+n", "shop.orders.handlers.OrderHandler.place"),
    ("v", "handlers.py:42"),
    ("+v", "shop/orders/handlers.py:42"),
    ("#v", "/srv/app/src/shop/orders/handlers.py:42"),
    ("", "handlers.py:42"),
])
def test_format_verbs(fake_walker, spec, want):
    assert format(caller(2, fake_walker), spec) == want


def test_skip_counts_from_walker_depth(fake_walker):
    assert caller(0, fake_walker).frame.function == "Logger._write"
    assert caller(1, fake_walker).frame.function == "Logger.info"
    assert fake_walker.asked == [0, 1]


def test_package_init_keeps_package_dir(fake_walker):
    assert format(caller(3, fake_walker), "+v") == "shop/__init__.py:7"


def test_str_and_marshal_text(fake_walker):
    c = caller(2, fake_walker)
    assert str(c) == "handlers.py:42"
    assert c.marshal_text() == "handlers.py:42"
    assert bool(c)


def test_too_deep_is_empty(fake_walker):
    c = caller(9, fake_walker)
    assert not c
    assert c.frame is None
    assert format(c, "v") == "%!v(NOFUNC)"
    assert format(c, "+n") == "%!n(NOFUNC)"
    with pytest.raises(NoCallInfoError, match="no call stack information"):
        c.marshal_text()


def test_unknown_verb(fake_walker):
    with pytest.raises(ValueError):
        format(caller(2, fake_walker), "x")


def test_relative_path_without_enough_segments():
    c = Call(Frame("mod.py", 3, "f", "a.b.mod"))
    assert format(c, "+s") == "mod.py"


def test_main_module_uses_base_name():
    c = Call(Frame("/tmp/scripts/run.py", 3, "main", "__main__"))
    assert format(c, "+v") == "run.py:3"


def test_live_caller_is_current_function():
    c = caller(0); line = sys._getframe().f_lineno
    assert c.frame.lineno == line
    assert c.frame.function.endswith("test_live_caller_is_current_function")
    assert c.frame.module == __name__
    assert format(c, "s") == "test_stack.py"


def test_live_caller_skip_one():
    def inner():
        return caller(1)
    c = inner(); line = sys._getframe().f_lineno
    assert c.frame.lineno == line


def test_live_too_deep():
    assert not caller(100000)


def test_stack_walker_depth_zero_is_caller():
    fr = StackWalker().frame(0)
    assert fr.function.endswith("test_stack_walker_depth_zero_is_caller")


def raiser():
    raise ValueError("boom")


def test_from_exception_reports_faulting_line():
    try:
        raiser()
    except ValueError as exc:
        c = Call.from_exception(exc)
    assert c.frame.function == "raiser"
    assert c.frame.lineno == raiser.__code__.co_firstlineno + 1


def test_traceback_walker_uses_fault_line_not_current_line():
    try:
        call_line = sys._getframe().f_lineno + 1
        raiser()
    except ValueError as exc:
        walker = TracebackWalker(exc.__traceback__)
    # depth 1 is this test's frame, which has since moved past the except clause
    assert walker.frame(1).lineno == call_line
    assert walker.frame(2) is None


def test_from_exception_without_traceback():
    assert not Call.from_exception(ValueError("never raised"))


def test_equality():
    f = Frame("a.py", 1, "f", "a")
    assert Call(f) == Call(f)
    assert Call() != Call(f)
    assert len({Call(f), Call(f)}) == 1
