"""
Login / register / logout. The only code that writes to the CredentialStore.
"""

from .config import log
from .constants import LOGIN_PATH, ME_PATH, REGISTER_PATH
from .errors import AuthError, DecodeError, RemoteError
from .gateway import decode_json


def login(gateway, credentials, username, password):
    """POST credentials, store the token. Returns (token, role)."""
    payload = {"username": username, "password": password}
    try:
        text = gateway.post_no_auth(LOGIN_PATH, payload)
    except RemoteError as e:
        log.warning("Login rejected for %s: HTTP %d", username, e.status)
        raise AuthError(e.status, e.body) from e

    data = decode_json(text, "login response")
    token = data.get("token") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token:
        raise DecodeError("Login response did not include a token")
    role = data.get("role")
    role = str(role) if role is not None else ""

    credentials.set(token, role)
    log.info("Login successful for %s (role=%s)", username, role or "?")
    return token, role


def register(gateway, credentials, username, password):
    """Create a `user` account, then log straight in."""
    payload = {"username": username, "password": password, "role": "user"}
    try:
        text = gateway.post_no_auth(REGISTER_PATH, payload)
    except RemoteError as e:
        raise AuthError(e.status, e.body) from e

    data = decode_json(text, "registration response")
    if not isinstance(data, dict) or not data.get("success"):
        message = data.get("message") if isinstance(data, dict) else None
        message = message or "Registration failed. Try again."
        log.error("Registration failed for %s: %s", username, message)
        raise AuthError(200, text, message)

    log.info("Registration succeeded for %s — logging in", username)
    return login(gateway, credentials, username, password)


def logout(credentials):
    credentials.clear()
    log.info("Logged out; token cleared")


def get_me(gateway):
    return decode_json(gateway.get(ME_PATH), "profile")
