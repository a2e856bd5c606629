"""Tests for the User model: registration, credentials and updates."""

import pytest
from identity.sessions import MemorySessionStore
from identity.user.user import User, UserRole, hash_password, verify_password
from protean.exceptions import ValidationError


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret-pass")
        assert hashed != "secret-pass"
        assert hashed.startswith("$2")

    def test_verify_round_trip(self):
        hashed = hash_password("secret-pass")
        assert verify_password("secret-pass", hashed) is True
        assert verify_password("wrong-pass", hashed) is False

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("secret-pass", "not-a-bcrypt-hash") is False


class TestUserRegistration:
    def test_register_defaults(self):
        user = User.register(username="  lan  ", password="secret-pass")

        assert user.username == "lan"
        assert user.role == UserRole.USER.value
        assert user.is_active is True
        assert user.is_admin is False
        assert user.check_password("secret-pass")
        assert user.created_at is not None

    def test_register_admin(self):
        user = User.register(username="boss", password="secret-pass", role="admin")
        assert user.is_admin is True

    def test_username_is_required(self):
        with pytest.raises(ValidationError) as exc:
            User.register(username="   ", password="secret-pass")
        assert "username" in exc.value.messages

    def test_password_is_required(self):
        with pytest.raises(ValidationError) as exc:
            User.register(username="lan", password="")
        assert "password" in exc.value.messages

    def test_unknown_role_is_rejected(self):
        with pytest.raises(ValueError):
            User.register(username="lan", password="secret-pass", role="superuser")


class TestUserUpdate:
    def test_partial_update_ignores_none(self):
        user = User.register(username="lan", password="secret-pass", email="lan@example.com")
        user.update(full_name="Nguyen Thi Lan", email=None)

        assert user.full_name == "Nguyen Thi Lan"
        assert user.email == "lan@example.com"

    def test_deactivate_and_promote(self):
        user = User.register(username="lan", password="secret-pass")
        user.update(is_active=False, role="admin")

        assert user.is_active is False
        assert user.is_admin is True

    def test_set_password(self):
        user = User.register(username="lan", password="secret-pass")
        user.set_password("new-secret")

        assert user.check_password("new-secret")
        assert not user.check_password("secret-pass")


class TestSessionStore:
    def test_create_and_resolve(self):
        store = MemorySessionStore(max_age=60)
        token = store.create(7)

        assert store.get(token) == 7
        assert len(store) == 1

    def test_unknown_token(self):
        assert MemorySessionStore(max_age=60).get("nope") is None

    def test_expired_session_is_dropped(self, monkeypatch):
        from datetime import timedelta

        import identity.sessions as sessions
        from shared.clock import utcnow

        store = MemorySessionStore(max_age=60)
        token = store.create(7)

        later = utcnow() + timedelta(seconds=61)
        monkeypatch.setattr(sessions, "utcnow", lambda: later)

        assert store.get(token) is None
        assert len(store) == 0

    def test_delete_for_user(self):
        store = MemorySessionStore(max_age=60)
        first, second = store.create(7), store.create(7)
        other = store.create(8)

        store.delete_for_user(7)

        assert store.get(first) is None
        assert store.get(second) is None
        assert store.get(other) == 8
