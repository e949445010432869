"""In-memory failed-login limiter keyed by client address. State is lost on restart."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

MAX_FAILED_ATTEMPTS = 3
BLOCK_DURATION_SECONDS = 15 * 60


def _wall_clock() -> float:
    return datetime.now(UTC).timestamp()


@dataclass
class AttemptRecord:
    """Failed-attempt state for one client key."""

    attempts: int
    window_started_at: float
    blocked_since: float | None = None

    @property
    def blocked(self) -> bool:
        return self.blocked_since is not None


class FailedLoginLimiter:
    """Count failed logins per key and block a key after too many failures.

    A key is blocked once it reaches ``max_attempts`` failures; the block lasts
    ``block_seconds`` and the failure count is frozen while it is in force.
    Unblocked windows expire after the same duration. Expired records are
    swept lazily at the start of ``record_failed_attempt`` and ``is_blocked``.

    Thread-safety: every method is synchronous with no await points, so each
    call is atomic under asyncio's cooperative model. A caller that awaits
    between ``is_blocked`` and ``record_failed_attempt`` may let concurrent
    requests from one key overshoot the threshold by the number in flight.
    Do NOT use from multiple OS threads without external synchronization.
    """

    def __init__(
        self,
        max_attempts: int = MAX_FAILED_ATTEMPTS,
        block_seconds: float = BLOCK_DURATION_SECONDS,
        clock: Callable[[], float] = _wall_clock,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if block_seconds <= 0:
            raise ValueError("block_seconds must be positive")
        self._max_attempts = max_attempts
        self._block_seconds = block_seconds
        self._clock = clock
        self._records: dict[str, AttemptRecord] = {}

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def block_duration_minutes(self) -> int:
        return math.ceil(self._block_seconds / 60)

    def _is_expired(self, record: AttemptRecord, now: float) -> bool:
        if record.blocked_since is not None:
            return now - record.blocked_since >= self._block_seconds
        return now - record.window_started_at >= self._block_seconds

    def sweep(self) -> None:
        """Drop elapsed blocks and idle failure windows."""
        now = self._clock()
        expired = [key for key, record in self._records.items() if self._is_expired(record, now)]
        for key in expired:
            del self._records[key]

    def record_failed_attempt(self, key: str) -> int:
        """Record one failed login and return the attempt count for the key."""
        self.sweep()
        now = self._clock()
        record = self._records.get(key)
        if record is None:
            record = AttemptRecord(attempts=1, window_started_at=now)
            self._records[key] = record
        elif record.blocked:
            return record.attempts
        else:
            record.attempts += 1

        if record.attempts >= self._max_attempts:
            record.blocked_since = now
        return record.attempts

    def is_blocked(self, key: str) -> bool:
        """Return True while the key is serving a block."""
        self.sweep()
        record = self._records.get(key)
        if record is None or record.blocked_since is None:
            return False
        if self._clock() - record.blocked_since >= self._block_seconds:
            del self._records[key]
            return False
        return True

    def reset_attempts(self, key: str) -> None:
        """Forget all state for a key."""
        self._records.pop(key, None)

    def get_block_time_remaining(self, key: str) -> int:
        """Minutes left on the key's block, rounded up; 0 when not blocked."""
        record = self._records.get(key)
        if record is None or record.blocked_since is None:
            return 0
        remaining = self._block_seconds - (self._clock() - record.blocked_since)
        if remaining <= 0:
            del self._records[key]
            return 0
        return math.ceil(remaining / 60)

    def get_failed_attempts(self, key: str) -> int:
        record = self._records.get(key)
        return record.attempts if record is not None else 0
