import pytest

from desk_core import runner
from desk_core.app import DeskBackend
from desk_core.config import log
from desk_core.errors import AuthError
from desk_core.events import QueueEventSink, UiEvent


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    for h in list(log.handlers):
        log.removeHandler(h)
        h.close()
    log.propagate = True


def test_login_failure_exits_nonzero(monkeypatch) -> None:  # noqa: ANN001
    def reject(self, username, password):  # noqa: ANN001
        raise AuthError(401, '{"message": "Invalid credentials"}')

    monkeypatch.setattr(DeskBackend, "login", reject)
    env = {"API_BASE_URL": "http://api.test", "DESK_USERNAME": "ann", "DESK_PASSWORD": "bad"}
    assert runner.main(env) == 1


def test_prints_events_until_interrupted(monkeypatch, capsys) -> None:  # noqa: ANN001
    script = [UiEvent("notification_count_updated", 3), None]

    def fake_get(self, timeout=None):  # noqa: ANN001
        if script:
            return script.pop(0)
        raise KeyboardInterrupt

    monkeypatch.setattr(QueueEventSink, "get", fake_get)
    stopped = []
    monkeypatch.setattr(DeskBackend, "shutdown", lambda self: stopped.append(self.polling.stop()))

    assert runner.main({"API_BASE_URL": "http://api.test"}) == 0

    out = capsys.readouterr().out
    assert "notification_count_updated: 3" in out
    assert "Stopped by user." in out
    assert stopped == [True]
