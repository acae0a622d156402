import io, json, pytest
import diary
from diary import bootstrap
from diary.stack import Frame


class FakeWalker:
    def __init__(self, frames):
        self.frames = list(frames)
        self.asked = []

    def frame(self, depth):
        self.asked.append(depth)
        if 0 <= depth < len(self.frames):
            return self.frames[depth]
        return None


def records(buf):
    return [json.loads(line) for line in buf.getvalue().splitlines()]


@pytest.fixture()
def buf():
    return io.StringIO()


@pytest.fixture()
def log(buf):
    return diary.new(None, diary.set_writer(buf))


@pytest.fixture()
def fake_walker():
    return FakeWalker([
        Frame("/srv/app/python/diary/logger.py", 10, "Logger._write", "diary.logger"),
        Frame("/srv/app/python/diary/logger.py", 20, "Logger.info", "diary.logger"),
        Frame("/srv/app/src/shop/orders/handlers.py", 42, "OrderHandler.place", "shop.orders.handlers"),
        Frame("/srv/app/src/shop/__init__.py", 7, "main", "shop"),
    ])


@pytest.fixture(autouse=True)
def reset_default_logger(monkeypatch):
    monkeypatch.setattr(bootstrap, "_global_logger", None)


@pytest.fixture()
def read(buf):
    return lambda: records(buf)
