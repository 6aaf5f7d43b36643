import json
import os
import sys

import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from desk_core.config import AppConfig  # noqa: E402
from desk_core.credentials import CredentialStore  # noqa: E402
from desk_core.events import QueueEventSink  # noqa: E402


class FakeResponse:
    """Just enough of requests.Response for the gateway."""

    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """
    Records every request and replays scripted outcomes in order.
    An outcome is a FakeResponse or an exception instance to raise.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.requests.append({"method": method, "url": url, **kwargs})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


class ScriptedGateway:
    """
    Stand-in for ApiGateway.get(): each path prefix owns a list of outcomes
    (body text or exception). The last outcome repeats once the list runs dry.
    """

    def __init__(self, routes=None):
        self.routes = {k: list(v) for k, v in (routes or {}).items()}
        self.calls = []
        self.resets = 0
        self.on_call = None

    def get(self, path):
        self.calls.append(path)
        if self.on_call is not None:
            self.on_call(path)
        for prefix, outcomes in self.routes.items():
            if path.startswith(prefix):
                outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        raise AssertionError(f"unexpected path {path}")

    def reset(self):
        self.resets += 1


def count_body(unread, total=None):
    return json.dumps({
        "success": True,
        "status_code": 200,
        "message": "ok",
        "timestamp": "2026-01-01T00:00:00Z",
        "data": {"total": unread if total is None else total, "unread": unread},
    })


def list_body(n, start_id=1):
    items = [
        {
            "notification": {
                "id": start_id + i,
                "title": f"Review {start_id + i} ready",
                "body": None,
                "type": "info",
                "global": False,
                "dismissible": True,
                "created_at": "2026-01-01T00:00:00Z",
            },
            "targets": [],
            "dismissed": False,
        }
        for i in range(n)
    ]
    return json.dumps({
        "success": True,
        "status_code": 200,
        "message": "ok",
        "timestamp": "2026-01-01T00:00:00Z",
        "data": items,
    })


@pytest.fixture
def config():
    return AppConfig(api_base_url="http://api.test", api_timeout_seconds=12)


@pytest.fixture
def credentials():
    return CredentialStore()


@pytest.fixture
def logged_in():
    return CredentialStore(token="tok-123", role="user")


@pytest.fixture
def sink():
    return QueueEventSink()
