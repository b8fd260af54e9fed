import time
from datetime import datetime, timezone
from typing import Callable, Collection, Optional


def now_ms() -> int:
    return time.time_ns() // 1_000_000


class IdGenerator:
    """Produce ``<prefix>-<millis>`` identifiers that never repeat.

    The numeric part follows the wall clock but is bumped past the previous
    value whenever the clock has not advanced, so two ids requested within
    the same millisecond still differ. ``taken`` lets the caller exclude ids
    that already exist in a loaded board.
    """

    def __init__(self, prefix: str, clock: Optional[Callable[[], int]] = None) -> None:
        self.prefix = prefix
        self._clock = clock or now_ms
        self._last = -1

    def next(self, taken: Collection[str] = ()) -> str:
        value = max(self._clock(), self._last + 1)
        while f"{self.prefix}-{value}" in taken:
            value += 1
        self._last = value
        return f"{self.prefix}-{value}"


def format_card_date(created_at: int) -> str:
    """Short day/month label shown on a card, e.g. ``"05 Mar"``."""
    return datetime.fromtimestamp(created_at / 1000, tz=timezone.utc).strftime("%d %b")
