# backend/tests/test_session_manager.py
import pytest
from unittest.mock import AsyncMock, MagicMock

from storefront.core.config import Settings
from storefront.core.exceptions import Unauthorized
from storefront.core.security import hash_password
from storefront.models.user import UserRecord
from storefront.services.auth.session import SessionManager, require_authenticated
from storefront.services.auth.store import FileSessionStore, MemorySessionStore

DAY_MS = 24 * 60 * 60 * 1000
START_MS = 1_700_000_000_000


class FakeClock:
    def __init__(self, now: int = START_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now


def make_user(**overrides) -> UserRecord:
    data = {
        "id": "u1",
        "username": "alice",
        "password_hash": hash_password("secret"),
        "role": "admin",
        "email": "alice@example.com",
        "active": True,
    }
    data.update(overrides)
    return UserRecord(**data)


def make_manager(user=None, store=None, project_id="shinora", clock=None) -> SessionManager:
    users = MagicMock()
    users.get_user_by_username = AsyncMock(return_value=user)
    return SessionManager(
        users,
        store if store is not None else MemorySessionStore(),
        Settings(firebase_project_id=project_id, session_timeout_hours=24),
        clock=clock or FakeClock(),
    )


@pytest.mark.asyncio
async def test_login_success_persists_admin_session():
    store = MemorySessionStore()
    manager = make_manager(user=make_user(), store=store)

    assert await manager.login("alice", "secret") is True

    stored = store.load()
    assert stored["role"] == "admin"
    assert stored["username"] == "alice"
    assert stored["loginTime"] == START_MS
    assert stored["projectId"] == "shinora"
    assert stored["token"]
    assert manager.is_authenticated() is True


@pytest.mark.asyncio
async def test_login_unknown_user_returns_false():
    store = MemorySessionStore()
    manager = make_manager(user=None, store=store)

    assert await manager.login("nobody", "secret") is False
    assert store.load() is None
    assert manager.current_user is None


@pytest.mark.asyncio
async def test_login_inactive_user_returns_false():
    manager = make_manager(user=make_user(active=False))

    assert await manager.login("alice", "secret") is False
    assert manager.is_authenticated() is False


@pytest.mark.asyncio
async def test_login_wrong_password_returns_false():
    manager = make_manager(user=make_user())

    assert await manager.login("alice", "wrong") is False
    assert manager.is_authenticated() is False


@pytest.mark.asyncio
async def test_session_expires_after_timeout_and_clears_store():
    store = MemorySessionStore()
    clock = FakeClock()
    manager = make_manager(user=make_user(), store=store, clock=clock)
    await manager.login("alice", "secret")

    clock.now = START_MS + DAY_MS - 1
    assert manager.is_authenticated() is True

    clock.now = START_MS + DAY_MS
    assert manager.is_authenticated() is False
    assert manager.current_user is None
    assert store.load() is None


@pytest.mark.asyncio
async def test_project_mismatch_is_unauthenticated():
    store = MemorySessionStore()
    manager = make_manager(user=make_user(), store=store)
    await manager.login("alice", "secret")

    manager.config = Settings(firebase_project_id="other-project")

    assert manager.is_authenticated() is False
    assert store.load() is None


@pytest.mark.asyncio
async def test_refresh_session_slides_login_time():
    store = MemorySessionStore()
    clock = FakeClock()
    manager = make_manager(user=make_user(), store=store, clock=clock)
    await manager.login("alice", "secret")

    clock.now = START_MS + DAY_MS - 1000
    manager.refresh_session()

    assert store.load()["loginTime"] == START_MS + DAY_MS - 1000
    clock.now = START_MS + DAY_MS + 1000
    assert manager.is_authenticated() is True


def test_refresh_session_when_anonymous_does_nothing():
    store = MemorySessionStore()
    manager = make_manager(store=store)

    manager.refresh_session()

    assert store.load() is None


@pytest.mark.asyncio
async def test_logout_clears_memory_and_store():
    store = MemorySessionStore()
    manager = make_manager(user=make_user(), store=store)
    await manager.login("alice", "secret")

    manager.logout()

    assert manager.current_user is None
    assert store.load() is None
    assert manager.is_authenticated() is False


def stored_session(login_time: int, project_id: str = "shinora") -> dict:
    return {
        "id": "u1",
        "username": "alice",
        "email": "",
        "role": "admin",
        "loginTime": login_time,
        "token": "tok",
        "projectId": project_id,
    }


def test_restore_valid_session():
    manager = make_manager(store=MemorySessionStore(stored_session(START_MS - 1000)))

    assert manager.restore() is True
    assert manager.current_user.username == "alice"


def test_restore_expired_session_clears_store():
    store = MemorySessionStore(stored_session(START_MS - DAY_MS))
    manager = make_manager(store=store)

    assert manager.restore() is False
    assert store.load() is None


def test_restore_session_from_other_project_is_rejected():
    store = MemorySessionStore(stored_session(START_MS, project_id="someone-else"))
    manager = make_manager(store=store)

    assert manager.restore() is False
    assert manager.is_authenticated() is False
    assert store.load() is None


def test_restore_malformed_session_clears_store():
    store = MemorySessionStore({"username": "alice"})
    manager = make_manager(store=store)

    assert manager.restore() is False
    assert store.load() is None


@pytest.mark.asyncio
async def test_session_survives_restart_through_file_store(tmp_path):
    path = tmp_path / "session.json"
    first = make_manager(user=make_user(), store=FileSessionStore(path))
    await first.login("alice", "secret")

    second = make_manager(store=FileSessionStore(path))

    assert second.restore() is True
    assert second.current_user.token == first.current_user.token


def test_require_authenticated_raises_when_anonymous():
    manager = make_manager()

    with pytest.raises(Unauthorized):
        manager.require_authenticated()
    with pytest.raises(Unauthorized):
        require_authenticated(None)


def test_auth_context_aliases():
    manager = make_manager(store=MemorySessionStore(stored_session(START_MS)))
    manager.restore()

    assert manager.is_valid() is True
    manager.clear()
    assert manager.is_valid() is False
