"""
ApiGateway — builds and sends every outbound call to the REST API.

Blocking; safe to call from any thread. Returns the raw response body on
2xx and leaves parsing to the caller. Everything else becomes one of the
errors in errors.py.
"""

import json

import requests

from .config import log
from .errors import DecodeError, RemoteError, TransportError
from . import http_client


class ApiGateway:
    def __init__(self, config, credentials, session=None):
        self._base_url = config.api_base_url.rstrip("/")
        self._timeout = config.api_timeout_seconds
        self._credentials = credentials
        self._session = session or http_client.create_session()

    @property
    def base_url(self):
        return self._base_url

    def url_for(self, path):
        if not path.startswith("/"):
            path = "/" + path
        return self._base_url + path

    def call(self, method, path, body=None, auth_required=True) -> str:
        """Send one request. Raises Unauthenticated before any I/O if needed."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if auth_required:
            headers["Authorization"] = self._credentials.header()

        method = method.upper()
        url = self.url_for(path)
        log.debug("%s %s", method, url)

        try:
            resp = self._session.request(
                method,
                url,
                json=body,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.Timeout as e:
            log.warning("%s %s timed out after %ss", method, path, self._timeout)
            raise TransportError(f"Request timed out: {e}") from e
        except requests.RequestException as e:
            log.warning("%s %s network error: %s", method, path, e)
            raise TransportError(f"Request failed: {e}") from e

        text = resp.text or ""
        if 200 <= resp.status_code < 300:
            return text

        log.warning("%s %s failed: HTTP %d — %s", method, path, resp.status_code, text[:200])
        raise RemoteError(resp.status_code, text)

    # ─── Verb helpers ────────────────────────────────────────

    def get(self, path):
        return self.call("GET", path)

    def post(self, path, body=None):
        return self.call("POST", path, body)

    def put(self, path, body=None):
        return self.call("PUT", path, body)

    def delete(self, path):
        return self.call("DELETE", path)

    def get_no_auth(self, path):
        return self.call("GET", path, auth_required=False)

    def post_no_auth(self, path, body=None):
        return self.call("POST", path, body, auth_required=False)

    def put_no_auth(self, path, body=None):
        return self.call("PUT", path, body, auth_required=False)

    def delete_no_auth(self, path):
        return self.call("DELETE", path, auth_required=False)

    def reset(self):
        """Swap in a fresh session after unexpected failures."""
        self._session = http_client.reset_session(self._session)


def decode_json(text, what="response"):
    """Parse a response body, mapping malformed JSON to DecodeError."""
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Failed to parse {what}: {e}") from e
