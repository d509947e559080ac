import time


def unix_now() -> int:
    return int(time.time())


class SystemClock:
    """Wall clock, clamped so readings never go backwards."""

    def __init__(self) -> None:
        self._last = 0

    def now(self) -> int:
        self._last = max(self._last, unix_now())
        return self._last
