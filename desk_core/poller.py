"""
NotificationPoller — the background notification loop.

One tick at a time (step()), each returning how long to wait before the
next one:

  logged out            → idle interval, no network, no error counted
  errors over threshold → sleep current backoff, double it (capped), retry
  otherwise             → fetch unread count, surface the growth, steady interval

Waits go through a threading.Event so stop() wakes a sleeping loop at once.
A request that is in flight when stop() lands is allowed to finish, but its
result is dropped: no events, no cursor update.
"""

import threading

from .config import log
from .constants import (
    EVENT_COUNT_UPDATED, EVENT_NEW_NOTIFICATION, IDLE_INTERVAL_SEC,
    MAX_POLL_INTERVAL_SEC, MIN_POLL_INTERVAL_SEC, PHASE_CANCELLED, POLL_INTERVAL_SEC,
)
from .errors import GatewayError, Unauthenticated
from .notifications import get_notification_count, get_notifications, notification_title
from .state import PollState


class NotificationPoller:
    def __init__(self, gateway, credentials, sink,
                 interval=POLL_INTERVAL_SEC, idle_interval=IDLE_INTERVAL_SEC, state=None):
        self._gateway = gateway
        self._credentials = credentials
        self._sink = sink
        self._interval = _clamp_interval(interval)
        self._idle_interval = idle_interval
        self._stop = threading.Event()
        self.state = state or PollState()

    # ─── Control ─────────────────────────────────────────────

    @property
    def interval(self):
        return self._interval

    def set_interval(self, seconds):
        """Change the steady-state cadence; applies from the next wait."""
        self._interval = _clamp_interval(seconds)
        log.info("Notification polling interval set to %ds", self._interval)

    def stop(self):
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def snapshot(self) -> dict:
        return self.state.snapshot()

    # ─── Loop ────────────────────────────────────────────────

    def run(self):
        """Blocking loop. Returns only after stop()."""
        log.info("Notification polling started (interval=%ds)", self._interval)
        try:
            while not self._stop.is_set():
                try:
                    delay = self.step()
                except Exception as e:
                    log.error("Unexpected error in polling loop: %s", e, exc_info=True)
                    self.state.on_failure()
                    self._gateway.reset()
                    delay = self._interval
                if delay > 0:
                    self._stop.wait(delay)
        finally:
            self.state.phase = PHASE_CANCELLED
            log.info("Notification polling stopped")

    def step(self) -> float:
        """Run one tick. Returns seconds to wait before the next."""
        if self._stop.is_set():
            return 0

        state = self.state
        if not self._credentials.is_authenticated():
            state.on_logged_out()
            return self._idle_interval

        if state.over_threshold:
            delay = state.take_backoff()
            log.info("Multiple errors in notification polling, backing off for %ds", delay)
            return delay

        state.cycles += 1
        try:
            unread = get_notification_count(self._gateway)
        except Unauthenticated:
            # Token vanished between the check above and the request (logout race)
            log.debug("Notification poll skipped: not logged in")
            return self._interval
        except GatewayError as e:
            state.on_failure()
            log.warning("Error polling notifications (%d consecutive): %s",
                        state.error_count, e.message)
            return self._interval

        if self._stop.is_set():
            return 0

        self._emit(EVENT_COUNT_UPDATED, unread)

        last = state.last_unread
        delta = unread - last
        if last > 0 and delta > 0:
            self._surface_new(delta)
            if self._stop.is_set():
                return 0

        state.on_success(unread)
        return self._interval

    # ─── Helpers ─────────────────────────────────────────────

    def _surface_new(self, delta):
        """Emit one event per newly arrived item, at most `delta` of them."""
        try:
            items = get_notifications(self._gateway)
        except Unauthenticated:
            log.debug("New notification fetch skipped: logged out mid-cycle")
            return
        except GatewayError as e:
            self.state.total_errors += 1
            log.error("Failed to fetch new notifications: %s", e.message)
            return
        if self._stop.is_set():
            return

        fresh = items[:min(delta, len(items))]
        for item in fresh:
            log.info("New notification: %s", notification_title(item) or "(untitled)")
            self._emit(EVENT_NEW_NOTIFICATION, item)
        self.state.surfaced += len(fresh)

    def _emit(self, name, payload):
        try:
            self._sink.emit(name, payload)
        except Exception as e:
            log.error("Failed to emit %s event: %s", name, e)


def _clamp_interval(seconds):
    return min(MAX_POLL_INTERVAL_SEC, max(MIN_POLL_INTERVAL_SEC, int(seconds)))
