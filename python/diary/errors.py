# Exception hierarchy. Raised at configuration time, caught at emission time.


class DiaryError(Exception):
    """Base class for every error raised by diary."""


class ConfigError(DiaryError, ValueError):
    """An option was given a value it cannot accept."""


class UnknownLevelError(DiaryError, ValueError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Unknown level: {text}")
        self.text = text


class ValueGeneratorError(DiaryError):
    """A lazy value's generator broke its contract."""


class NoCallInfoError(DiaryError):
    def __init__(self) -> None:
        super().__init__("no call stack information")
