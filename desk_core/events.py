"""
UI boundary. The backend never touches the front end directly: it hands
UiEvent records to a sink, and the front end drains them on its own thread
(same shape as the input queue a Tk main loop polls with root.after).
"""

import queue
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UiEvent:
    name: str
    payload: Any = None


class EventSink:
    def emit(self, name, payload=None):
        raise NotImplementedError


class QueueEventSink(EventSink):
    """Thread-safe FIFO of UiEvents. Producers never block."""

    def __init__(self, maxsize=0):
        self._queue = queue.Queue(maxsize=maxsize)

    def emit(self, name, payload=None):
        self._queue.put_nowait(UiEvent(name, payload))

    def get(self, timeout=None):
        """Block for the next event; returns None on timeout."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self, limit=200):
        """Return up to `limit` queued events without blocking."""
        events = []
        while len(events) < limit:
            try:
                events.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return events


class CallbackEventSink(EventSink):
    """Forward each event to a callable(name, payload)."""

    def __init__(self, callback):
        self._callback = callback

    def emit(self, name, payload=None):
        self._callback(name, payload)
