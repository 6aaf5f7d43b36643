"""
PollState — single source of truth for the polling engine.

Holds the unread cursor, the backoff counters and a few totals that make the
state machine observable from tests and diagnostics. Only the polling thread
mutates it; snapshot() hands out a plain dict copy for everyone else.
"""

from dataclasses import dataclass, asdict

from .constants import (
    ERROR_THRESHOLD, INITIAL_BACKOFF_SEC, MAX_BACKOFF_SEC,
    PHASE_BACKING_OFF, PHASE_IDLE, PHASE_POLLING, SUCCESS_RESET_STREAK,
)


@dataclass
class PollState:
    # ── Cursor ────────────────────────────────────────────────
    last_unread: int = 0

    # ── Backoff ───────────────────────────────────────────────
    error_count: int = 0
    current_delay: int = INITIAL_BACKOFF_SEC
    success_count: int = 0

    # ── Observability ─────────────────────────────────────────
    phase: str = PHASE_IDLE
    cycles: int = 0
    total_errors: int = 0
    backoff_rounds: int = 0
    surfaced: int = 0

    # ── Tunables ──────────────────────────────────────────────
    error_threshold: int = ERROR_THRESHOLD
    initial_delay: int = INITIAL_BACKOFF_SEC
    max_delay: int = MAX_BACKOFF_SEC
    success_streak: int = SUCCESS_RESET_STREAK

    @property
    def over_threshold(self) -> bool:
        return self.error_count > self.error_threshold

    def on_logged_out(self):
        """No token: forget the cursor so the next login starts fresh."""
        self.phase = PHASE_IDLE
        self.last_unread = 0

    def on_failure(self):
        self.error_count += 1
        self.total_errors += 1
        self.success_count = 0
        if self.over_threshold:
            self.phase = PHASE_BACKING_OFF

    def on_success(self, unread):
        self.last_unread = unread
        self.error_count = 0
        self.success_count += 1
        if self.success_count >= self.success_streak:
            self.current_delay = self.initial_delay
            self.success_count = 0
        self.phase = PHASE_POLLING

    def take_backoff(self) -> int:
        """Consume one backoff round. Returns the delay to sleep now."""
        delay = self.current_delay
        self.current_delay = min(self.current_delay * 2, self.max_delay)
        self.error_count = 0
        self.backoff_rounds += 1
        self.phase = PHASE_BACKING_OFF
        return delay

    def snapshot(self) -> dict:
        return asdict(self)
