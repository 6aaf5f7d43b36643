import threading

import pytest

from desk_core.credentials import CredentialStore
from desk_core.errors import Unauthenticated


def test_header_requires_token() -> None:
    store = CredentialStore()
    with pytest.raises(Unauthenticated):
        store.header()
    assert store.is_authenticated() is False


def test_header_tracks_most_recent_set() -> None:
    store = CredentialStore()
    store.set("abc", "admin")
    assert store.header() == "Bearer abc"
    assert store.role == "admin"

    store.set(None)
    with pytest.raises(Unauthenticated):
        store.header()
    assert store.role is None

    store.set("def")
    assert store.header() == "Bearer def"


def test_empty_string_token_counts_as_logged_out() -> None:
    store = CredentialStore()
    store.set("")
    assert store.is_authenticated() is False


def test_clear_logs_out() -> None:
    store = CredentialStore(token="t")
    store.clear()
    with pytest.raises(Unauthenticated):
        store.header()


def test_concurrent_readers_never_see_torn_header() -> None:
    store = CredentialStore(token="a" * 64)
    seen = set()
    errors = []
    done = threading.Event()

    def reader() -> None:
        while not done.is_set():
            try:
                seen.add(store.header())
            except Unauthenticated:
                seen.add(None)
            except Exception as e:  # noqa: BLE001
                errors.append(e)

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for i in range(500):
        store.set(("a" if i % 2 else "b") * 64 if i % 5 else None)
    done.set()
    for t in threads:
        t.join()

    assert not errors
    assert seen <= {"Bearer " + "a" * 64, "Bearer " + "b" * 64, None}
