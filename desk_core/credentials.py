"""
CredentialStore — the one piece of state shared between the login flow,
foreground commands and the polling thread.

Every read and write goes through a single lock. Reads copy one attribute,
so header construction never waits on anything slower than a login/logout
assignment.
"""

import threading

from .errors import Unauthenticated


class CredentialStore:
    def __init__(self, token=None, role=None):
        self._lock = threading.Lock()
        self._token = token
        self._role = role

    def set(self, token, role=None):
        """Replace the current token (None logs out)."""
        with self._lock:
            self._token = token or None
            self._role = role if self._token else None

    def clear(self):
        self.set(None)

    def header(self) -> str:
        with self._lock:
            token = self._token
        if token is None:
            raise Unauthenticated()
        return f"Bearer {token}"

    def is_authenticated(self) -> bool:
        with self._lock:
            return self._token is not None

    @property
    def role(self):
        with self._lock:
            return self._role
