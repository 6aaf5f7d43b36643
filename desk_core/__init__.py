"""
desk_core — desktop backend for the review API
==============================================
Architecture: blocking calls on the caller's thread, one daemon thread for
notification polling.

  constants.py     → Version, intervals, thresholds, endpoints, event names
  config.py        → Logging, env-driven AppConfig, safe_print
  errors.py        → Unauthenticated / Transport / Remote / Decode / Auth errors
  credentials.py   → CredentialStore (bearer token behind a lock)
  http_client.py   → requests.Session with pooling + CA bundle
  gateway.py       → ApiGateway (URL building, auth header, status mapping)
  auth.py          → login / register / logout / me
  notifications.py → count, list, dismiss, manual refresh
  events.py        → UiEvent + sinks (queue drained by the front end)
  state.py         → PollState (cursor + backoff counters, observable)
  poller.py        → NotificationPoller (backoff + delta surfacing)
  lifecycle.py     → PollingController (exactly one poller thread)
  app.py           → DeskBackend (wiring + command table)
  runner.py        → main() for headless runs
"""

from .app import DeskBackend
from .credentials import CredentialStore
from .errors import (
    AuthError, DecodeError, GatewayError, RemoteError, TransportError, Unauthenticated,
)

__all__ = [
    "AuthError",
    "CredentialStore",
    "DecodeError",
    "DeskBackend",
    "GatewayError",
    "RemoteError",
    "TransportError",
    "Unauthenticated",
]
