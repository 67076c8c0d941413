"""Tests for sign-in and the saved CLI session."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from pantry_chef.auth import current_user, restore_session, save_session, sign_in, sign_out
from pantry_chef.errors import AuthError


def _session(user_id="user-1", email="cook@example.com", access="a1", refresh="r1"):
    return SimpleNamespace(
        user=SimpleNamespace(id=user_id, email=email),
        access_token=access,
        refresh_token=refresh,
    )


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def session_file(tmp_path):
    return tmp_path / "pantry" / "session.json"


class TestSignIn:
    def test_success(self, client):
        client.auth.sign_in_with_password.return_value = _session()

        user = sign_in(client, "cook@example.com", "secret")

        assert user.id == "user-1"
        assert user.email == "cook@example.com"

    def test_failure_becomes_auth_error(self, client):
        client.auth.sign_in_with_password.side_effect = RuntimeError("Invalid login credentials")

        with pytest.raises(AuthError, match="Invalid login credentials"):
            sign_in(client, "cook@example.com", "wrong")

    def test_no_user_returned(self, client):
        client.auth.sign_in_with_password.return_value = SimpleNamespace(user=None)

        with pytest.raises(AuthError):
            sign_in(client, "cook@example.com", "secret")


class TestSavedSession:
    def test_save_then_restore(self, client, session_file):
        client.auth.get_session.return_value = _session()
        save_session(client, session_file)

        assert json.loads(session_file.read_text()) == {"access_token": "a1", "refresh_token": "r1"}
        assert session_file.stat().st_mode & 0o777 == 0o600

        client.auth.set_session.return_value = _session()
        user = restore_session(client, session_file)

        assert user.id == "user-1"
        client.auth.set_session.assert_called_once_with("a1", "r1")

    def test_restore_without_file(self, client, session_file):
        assert restore_session(client, session_file) is None
        client.auth.set_session.assert_not_called()

    def test_stale_session_is_removed(self, client, session_file):
        session_file.parent.mkdir(parents=True)
        session_file.write_text(json.dumps({"access_token": "old", "refresh_token": "old"}))
        client.auth.set_session.side_effect = RuntimeError("Invalid Refresh Token")

        assert restore_session(client, session_file) is None
        assert not session_file.exists()

    def test_sign_out_forgets_tokens(self, client, session_file):
        session_file.parent.mkdir(parents=True)
        session_file.write_text("{}")

        sign_out(client, session_file)

        client.auth.sign_out.assert_called_once()
        assert not session_file.exists()


def test_current_user(client):
    client.auth.get_session.return_value = None
    assert current_user(client) is None

    client.auth.get_session.return_value = _session(user_id="user-2", email=None)
    assert current_user(client).email == ""
