# Tests for the SQLite user store and token revocation.

import pytest

from core.storage.auth_manager import AuthManager
from core.storage.exceptions import InvalidUserError, UserExistsError


@pytest.fixture
def auth(tmp_path):
    m = AuthManager(str(tmp_path / "db" / "users.db"))
    m.connect()
    return m


class TestUsers:
    def test_ensure_admin_once(self, auth):
        assert auth.ensure_admin() is True
        assert auth.ensure_admin() is False
        assert auth.verify_credentials("admin", "admin")["username"] == "admin"

    def test_create_and_verify(self, auth):
        auth.create_user("bob", "pw1")
        assert auth.verify_credentials("bob", "pw1")["username"] == "bob"
        assert auth.verify_credentials("BOB", "pw1") is not None
        assert auth.verify_credentials("bob", "nope") is None
        assert auth.verify_credentials("", "") is None

    def test_created_at_is_utc_aware(self, auth):
        auth.create_user("bob", "pw1")
        assert auth.users_cache["bob"]["created_at"].endswith("+00:00")

    def test_passwords_are_hashed(self, auth):
        auth.create_user("bob", "pw1")
        assert auth.users_cache["bob"]["password_hash"] != "pw1"

    def test_duplicate_is_case_insensitive(self, auth):
        auth.create_user("bob", "pw1")
        with pytest.raises(UserExistsError):
            auth.create_user("Bob", "pw2")

    @pytest.mark.parametrize("user,pw", [("", "pw"), ("bob", ""), ("admin", "pw"), ("bo b", "pw")])
    def test_rejected_input(self, auth, user, pw):
        with pytest.raises(InvalidUserError):
            auth.create_user(user, pw)

    def test_users_survive_reconnect(self, auth):
        auth.create_user("bob", "pw1")
        again = AuthManager(auth.db_path)
        again.connect()
        assert again.user_exists("bob")
        assert again.verify_credentials("bob", "pw1")["username"] == "bob"
        assert not again.user_exists("admin")


class TestRevocation:
    def test_revoke(self, auth):
        auth.revoke("j1", 4_000_000_000)
        assert auth.is_revoked("j1")
        assert not auth.is_revoked("j2")

    def test_purge_expired(self, auth):
        auth.revoke("old", 4_000_000_000)
        assert auth.purge_expired(now=4_000_000_001) == 1
        assert not auth.is_revoked("old")
