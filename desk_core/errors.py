"""
Error taxonomy for outbound calls.

  Unauthenticated  → no token stored; expected during logout, never sent
  TransportError   → DNS / connection / timeout; transient
  RemoteError      → server answered with a non-2xx status
  DecodeError      → body was not the JSON we expected
  AuthError        → login/register rejected by the server
  InvalidArgument  → command argument out of its accepted range
"""

import json


class GatewayError(Exception):
    """Base class for everything the gateway and commands raise."""

    kind = "error"

    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class Unauthenticated(GatewayError):
    kind = "unauthenticated"

    def __init__(self, message="No valid authentication token found. Please log in."):
        super().__init__(message)


class TransportError(GatewayError):
    kind = "transport"


class RemoteError(GatewayError):
    """Raised for non-2xx responses. Keeps the status and raw body."""

    kind = "remote"

    def __init__(self, status, body, message=None):
        self.status = status
        self.body = body or ""
        super().__init__(message or _message_from_body(status, self.body))


class DecodeError(GatewayError):
    kind = "decode"


class AuthError(RemoteError):
    kind = "auth"


class InvalidArgument(GatewayError, ValueError):
    """A command was called with a value outside what it accepts."""

    kind = "invalid_arguments"


def _message_from_body(status, body):
    """Prefer the server's own `message` field; fall back to status + snippet."""
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        data = None
    if isinstance(data, dict):
        msg = data.get("message") or data.get("error")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
    snippet = (body or "").strip()[:200]
    return f"HTTP {status}: {snippet}" if snippet else f"HTTP {status}"


def describe_error(exc):
    """Human-readable message for the UI."""
    if isinstance(exc, Unauthenticated):
        return "You are not logged in. Please log in and try again."
    if isinstance(exc, TransportError):
        return f"Could not reach the server: {exc.message}"
    if isinstance(exc, DecodeError):
        return f"The server sent an unexpected response: {exc.message}"
    if isinstance(exc, GatewayError):
        return exc.message
    return f"Unexpected error: {exc}"
