"""Snowflake IDs: time-ordered 64-bit identifiers for gif rows.

Layout, most significant bit first:

    | 42 bits timestamp delta | 5 bits worker | 5 bits process | 12 bits sequence |

Invariants:
    - Ids from one generator strictly increase in call order
    - sequence resets to 0 on every new millisecond
    - Sequence overflow waits for the next millisecond; it never wraps in place
    - Clock moving backwards (or behind the epoch) raises ClockMovedBackwardsError,
      no id is emitted
    - Timestamp delta is kept below 2**41 so ids are positive signed int64 (BIGINT)
    - last_timestamp/sequence are touched only inside next_id() under _lock
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable

from gifapi.core.errors import ClockMovedBackwardsError, TimestampOverflowError

DISCORD_EPOCH_MS = 1420070400000

TIMESTAMP_BITS = 42
WORKER_ID_BITS = 5
PROCESS_ID_BITS = 5
SEQUENCE_BITS = 12

MAX_WORKER_ID = (1 << WORKER_ID_BITS) - 1
MAX_PROCESS_ID = (1 << PROCESS_ID_BITS) - 1
MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1
# One bit of the 42-bit field is reserved for the int64 sign.
MAX_TIMESTAMP_DELTA = (1 << (TIMESTAMP_BITS - 1)) - 1

PROCESS_ID_SHIFT = SEQUENCE_BITS
WORKER_ID_SHIFT = SEQUENCE_BITS + PROCESS_ID_BITS
TIMESTAMP_SHIFT = SEQUENCE_BITS + PROCESS_ID_BITS + WORKER_ID_BITS


def wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class SnowflakeParts:
    """Decoded fields of a snowflake id. timestamp_ms is absolute Unix ms."""
    timestamp_ms: int
    worker_id: int
    process_id: int
    sequence: int


def decode(snowflake_id: int, epoch_ms: int = DISCORD_EPOCH_MS) -> SnowflakeParts:
    """Split an id back into its fields."""
    if snowflake_id < 0:
        raise ValueError("snowflake id must be non-negative")
    return SnowflakeParts(
        timestamp_ms=(snowflake_id >> TIMESTAMP_SHIFT) + epoch_ms,
        worker_id=(snowflake_id >> WORKER_ID_SHIFT) & MAX_WORKER_ID,
        process_id=(snowflake_id >> PROCESS_ID_SHIFT) & MAX_PROCESS_ID,
        sequence=snowflake_id & MAX_SEQUENCE,
    )


class SnowflakeGenerator:
    """Thread-safe snowflake generator for one worker/process pair.

    next_id() never awaits, so one threading.Lock serializes both event-loop
    tasks and threadpool callers.
    """

    def __init__(
        self,
        epoch_ms: int = DISCORD_EPOCH_MS,
        worker_id: int = 1,
        process_id: int = 1,
        clock: Callable[[], int] = wall_clock_ms,
    ):
        if not 0 <= worker_id <= MAX_WORKER_ID:
            raise ValueError(f"worker_id must be between 0 and {MAX_WORKER_ID}")
        if not 0 <= process_id <= MAX_PROCESS_ID:
            raise ValueError(
                f"process_id must be between 0 and {MAX_PROCESS_ID}",
            )
        if epoch_ms < 0:
            raise ValueError("epoch_ms must be non-negative")
        if epoch_ms > clock():
            raise ValueError("epoch_ms is in the future")

        self._epoch_ms = epoch_ms
        self._worker_id = worker_id
        self._process_id = process_id
        self._clock = clock
        self._lock = threading.Lock()
        self._sequence = 0
        self._last_timestamp = -1

    @property
    def epoch_ms(self) -> int:
        return self._epoch_ms

    @property
    def worker_id(self) -> int:
        return self._worker_id

    @property
    def process_id(self) -> int:
        return self._process_id

    def next_id(self) -> int:
        """Return the next id.

        Raises:
            ClockMovedBackwardsError: clock is behind the last issued timestamp
                or behind the epoch.
            TimestampOverflowError: epoch too far in the past for 41 bits.
        """
        with self._lock:
            now = self._clock()

            if now < self._last_timestamp:
                raise ClockMovedBackwardsError(self._last_timestamp, now)

            if now == self._last_timestamp:
                self._sequence = (self._sequence + 1) & MAX_SEQUENCE
                if self._sequence == 0:
                    now = self._wait_next_millis(self._last_timestamp)
            else:
                self._sequence = 0

            delta = now - self._epoch_ms
            if delta < 0:
                raise ClockMovedBackwardsError(self._epoch_ms, now)
            if delta > MAX_TIMESTAMP_DELTA:
                raise TimestampOverflowError(delta, MAX_TIMESTAMP_DELTA)

            self._last_timestamp = now
            return (
                (delta << TIMESTAMP_SHIFT)
                | (self._worker_id << WORKER_ID_SHIFT)
                | (self._process_id << PROCESS_ID_SHIFT)
                | self._sequence
            )

    def decode(self, snowflake_id: int) -> SnowflakeParts:
        return decode(snowflake_id, self._epoch_ms)

    def _wait_next_millis(self, last_timestamp: int) -> int:
        now = self._clock()
        while now <= last_timestamp:
            now = self._clock()
        return now
