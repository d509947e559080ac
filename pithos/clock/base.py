from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        """Current time in unix seconds."""
        ...
