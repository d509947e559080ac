from pithos.clock.base import Clock


class FakeClock(Clock):
    """Fake clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000) -> None:
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> None:
        self._now += seconds

    def set(self, timestamp: int) -> None:
        self._now = timestamp
