"""Time-ordered 64-bit ids.

Layout, high to low: 41 bits of milliseconds since ``EPOCH_MS``, 5 bits
datacenter, 5 bits worker, 12 bits per-millisecond sequence. The sign bit
is never set, so every id fits a signed BIGINT column.
"""
import time
import threading
from datetime import datetime, timezone

EPOCH_MS = 1704067200000  # 2024-01-01 UTC

SEQUENCE_BITS = 12
WORKER_BITS = 5
DATACENTER_BITS = 5

WORKER_SHIFT = SEQUENCE_BITS
DATACENTER_SHIFT = SEQUENCE_BITS + WORKER_BITS
TIMESTAMP_SHIFT = SEQUENCE_BITS + WORKER_BITS + DATACENTER_BITS

SEQUENCE_MASK = (1 << SEQUENCE_BITS) - 1
MAX_WORKER = (1 << WORKER_BITS) - 1
MAX_DATACENTER = (1 << DATACENTER_BITS) - 1

# largest value a signed BIGINT column can hold
MAX_ID = (1 << 63) - 1


class ClockMovedBackwards(RuntimeError):
    pass


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def is_valid_id(value: int) -> bool:
    return 0 < value <= MAX_ID


def created_at(snowflake_id: int) -> datetime:
    """The UTC instant encoded in ``snowflake_id``, to the millisecond."""
    millis = (snowflake_id >> TIMESTAMP_SHIFT) + EPOCH_MS
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


class Snowflake:

    def __init__(self, datacenter_id: int = 1, worker_id: int = 1, clock=_now_ms):
        if not 0 <= worker_id <= MAX_WORKER:
            raise ValueError(f"worker_id must be between 0 and {MAX_WORKER}")
        if not 0 <= datacenter_id <= MAX_DATACENTER:
            raise ValueError(f"datacenter_id must be between 0 and {MAX_DATACENTER}")

        self._node = (datacenter_id << DATACENTER_SHIFT) | (worker_id << WORKER_SHIFT)
        self._clock = clock
        self._lock = threading.Lock()
        self._last_ms = -1
        self._sequence = 0

    def get_id(self) -> int:
        with self._lock:
            now = self._clock()
            if now < self._last_ms:
                raise ClockMovedBackwards(f"clock moved backwards by {self._last_ms - now}ms")

            if now == self._last_ms:
                self._sequence = (self._sequence + 1) & SEQUENCE_MASK
                if self._sequence == 0:
                    # 4096 ids already handed out this millisecond
                    while now <= self._last_ms:
                        now = self._clock()
            else:
                self._sequence = 0

            self._last_ms = now
            return ((now - EPOCH_MS) << TIMESTAMP_SHIFT) | self._node | self._sequence


# process-wide instance, used as the column default for every table
snowflake = Snowflake()


def next_id() -> int:
    return snowflake.get_id()
