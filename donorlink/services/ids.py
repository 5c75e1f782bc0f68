"""Time-derived record identifiers."""

import time
from collections.abc import Callable, Iterable


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def _numeric(record_id: str) -> int | None:
    return int(record_id) if record_id.isdigit() else None


class MonotonicIdGenerator:
    """
    Issues millisecond-timestamp ids that never repeat.

    Each id is the current time in milliseconds, bumped past the last id this
    generator issued and past every existing id it is shown, so two records
    created within the same millisecond still get distinct, increasing ids.
    """

    def __init__(self, clock: Callable[[], int] = now_ms):
        self._clock = clock
        self._last = 0

    def next_id(self, existing_ids: Iterable[str] = ()) -> str:
        floor = self._last
        for record_id in existing_ids:
            value = _numeric(record_id)
            if value is not None and value > floor:
                floor = value

        self._last = max(self._clock(), floor + 1)
        return str(self._last)


def id_sort_key(record_id: str) -> tuple[int, int | str]:
    """Numeric ids sort by value and ahead of any non-numeric ids."""
    value = _numeric(record_id)
    if value is None:
        return (1, record_id)
    return (0, value)
