"""
PollingController — starts and stops the notification poller exactly once.

start() and stop() may be called from any thread. The lock covers only the
handle bookkeeping; joining the old thread happens outside it.
"""

import threading
from dataclasses import dataclass

from .config import log


@dataclass
class PollHandle:
    poller: object
    thread: threading.Thread


class PollingController:
    def __init__(self, poller_factory):
        """`poller_factory()` must return a fresh NotificationPoller."""
        self._factory = poller_factory
        self._lock = threading.Lock()
        self._handle = None

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._handle is not None and self._handle.thread.is_alive()

    def start(self) -> bool:
        """Spawn the polling thread. Returns False if it was already running."""
        with self._lock:
            if self._handle is not None and self._handle.thread.is_alive():
                log.info("Notification polling already active")
                return False

            poller = self._factory()
            thread = threading.Thread(
                target=poller.run,
                name="notification-poller",
                daemon=True,
            )
            self._handle = PollHandle(poller=poller, thread=thread)
            thread.start()
        log.info("Notification polling thread launched")
        return True

    def stop(self, timeout=1.0) -> bool:
        """Cancel the running poller, if any. Returns True if one was stopped."""
        with self._lock:
            handle, self._handle = self._handle, None
        if handle is None:
            return False

        handle.poller.stop()
        if handle.thread is not threading.current_thread():
            handle.thread.join(timeout)
        if handle.thread.is_alive():
            log.info("Polling thread still finishing an in-flight request; result will be discarded")
        return True

    def update_interval(self, seconds) -> bool:
        with self._lock:
            handle = self._handle
        if handle is None:
            return False
        handle.poller.set_interval(seconds)
        return True

    def snapshot(self):
        with self._lock:
            handle = self._handle
        return handle.poller.snapshot() if handle else None
