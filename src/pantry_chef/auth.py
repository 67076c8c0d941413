"""
Pantry Chef - Authentication.

Email/password sign-in against Supabase Auth. The CLI keeps the session
tokens in a small JSON file so one sign-in covers later commands.
"""

import json
import logging
from pathlib import Path
from typing import Any

from supabase import Client

from pantry_chef.errors import AuthError
from pantry_chef.models import User

logger = logging.getLogger(__name__)

SESSION_FILE = Path.home() / ".pantry_chef" / "session.json"


def _to_user(auth_user: Any) -> User:
    return User(id=str(auth_user.id), email=auth_user.email or "")


def sign_in(client: Client, email: str, password: str) -> User:
    """Sign in with email and password."""
    try:
        response = client.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        logger.warning(f"Sign-in failed for {email}: {e}")
        raise AuthError(f"Sign-in failed: {e}") from e

    if not response.user:
        raise AuthError("Sign-in failed: no user returned")
    return _to_user(response.user)


def sign_out(client: Client, path: Path = SESSION_FILE) -> None:
    """End the Supabase session and forget the stored tokens."""
    try:
        client.auth.sign_out()
    finally:
        path.unlink(missing_ok=True)


def current_user(client: Client) -> User | None:
    """User of the client's active session, if any."""
    session = client.auth.get_session()
    if not session or not session.user:
        return None
    return _to_user(session.user)


def save_session(client: Client, path: Path = SESSION_FILE) -> None:
    session = client.auth.get_session()
    if not session:
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(mode=0o600, exist_ok=True)
    path.write_text(
        json.dumps(
            {"access_token": session.access_token, "refresh_token": session.refresh_token}
        ),
        encoding="utf-8",
    )
    path.chmod(0o600)


def restore_session(client: Client, path: Path = SESSION_FILE) -> User | None:
    """
    Re-establish a saved session.

    Returns None when there is no saved session or it can no longer be
    refreshed; a stale file is removed.
    """
    if not path.exists():
        return None

    try:
        tokens = json.loads(path.read_text(encoding="utf-8"))
        response = client.auth.set_session(tokens["access_token"], tokens["refresh_token"])
    except Exception as e:
        logger.info(f"Saved session could not be restored: {e}")
        path.unlink(missing_ok=True)
        return None

    if not response.user:
        return None

    # Tokens may have been refreshed
    save_session(client, path)
    return _to_user(response.user)
