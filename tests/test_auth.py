import json

import pytest

from conftest import FakeResponse, FakeSession
from desk_core import auth
from desk_core.errors import AuthError, DecodeError, Unauthenticated
from desk_core.gateway import ApiGateway


def test_login_stores_token_and_role(config, credentials) -> None:  # noqa: ANN001
    session = FakeSession(FakeResponse(200, json.dumps({"token": "jwt", "role": "team_lead"})))
    gw = ApiGateway(config, credentials, session=session)

    token, role = auth.login(gw, credentials, "ann", "pw")

    assert (token, role) == ("jwt", "team_lead")
    assert credentials.header() == "Bearer jwt"
    assert session.requests[0]["json"] == {"username": "ann", "password": "pw"}
    assert "Authorization" not in session.requests[0]["headers"]


def test_login_rejected_leaves_store_untouched(config) -> None:  # noqa: ANN001
    from desk_core.credentials import CredentialStore

    store = CredentialStore(token="old")
    gw = ApiGateway(config, store, session=FakeSession(FakeResponse(401, '{"message": "Invalid credentials"}')))
    with pytest.raises(AuthError) as info:
        auth.login(gw, store, "ann", "bad")
    assert info.value.message == "Invalid credentials"
    assert store.header() == "Bearer old"


def test_login_malformed_body(config, credentials) -> None:  # noqa: ANN001
    gw = ApiGateway(config, credentials, session=FakeSession(FakeResponse(200, '{"role": "user"}')))
    with pytest.raises(DecodeError):
        auth.login(gw, credentials, "ann", "pw")
    assert credentials.is_authenticated() is False


def test_register_then_login(config, credentials) -> None:  # noqa: ANN001
    session = FakeSession(
        FakeResponse(200, '{"success": true}'),
        FakeResponse(200, '{"token": "t2", "role": "user"}'),
    )
    gw = ApiGateway(config, credentials, session=session)
    assert auth.register(gw, credentials, "bob", "pw") == ("t2", "user")
    assert session.requests[0]["json"]["role"] == "user"
    assert session.requests[1]["url"].endswith("/auth/login")


def test_register_failure_surfaces_server_message(config, credentials) -> None:  # noqa: ANN001
    gw = ApiGateway(
        config, credentials,
        session=FakeSession(FakeResponse(200, '{"success": false, "message": "Username taken"}')),
    )
    with pytest.raises(AuthError) as info:
        auth.register(gw, credentials, "bob", "pw")
    assert info.value.message == "Username taken"


def test_logout_clears_token(logged_in) -> None:  # noqa: ANN001
    auth.logout(logged_in)
    with pytest.raises(Unauthenticated):
        logged_in.header()
