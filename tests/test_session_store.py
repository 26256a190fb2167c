import asyncio

import pytest

from wmsconsole.session import InMemorySessionPersistence, SessionSnapshot, SessionStore, SessionUser
from wmsconsole.utils import AuthenticationFailure


def test_store_starts_empty_and_not_hydrated(store):
    state = store.state
    assert state.user is None
    assert state.token is None
    assert state.is_authenticated is False
    assert state.has_hydrated is False


def test_login_sets_session_atomically_and_persists(store, persistence):
    seen = []
    store.subscribe(seen.append)

    asyncio.run(store.login("  boss@wms.test ", "secret"))

    state = store.state
    assert state.is_authenticated is True
    assert state.token == "token-boss"
    assert state.user.role == "super_admin"
    assert state.error is None
    assert state.is_loading is False
    # loading flag, then the committed session in one step
    assert [s.is_loading for s in seen] == [True, False]
    assert seen[-1].user is state.user
    assert persistence.save_count == 1
    saved = asyncio.run(persistence.load())
    assert saved.user.email == "boss@wms.test"
    assert saved.token == "token-boss"


def test_login_failure_sets_error_and_reraises(store, persistence):
    with pytest.raises(AuthenticationFailure) as excinfo:
        asyncio.run(store.login("boss@wms.test", "wrong"))

    assert excinfo.value.status_code == 401
    assert store.state.error == "Invalid email or password"
    assert store.state.is_authenticated is False
    assert store.state.is_loading is False
    assert persistence.save_count == 0


def test_login_clears_previous_error(store):
    with pytest.raises(AuthenticationFailure):
        asyncio.run(store.login("boss@wms.test", "wrong"))
    asyncio.run(store.login("boss@wms.test", "secret"))
    assert store.state.error is None


def test_stale_login_response_is_discarded(store, auth_client):
    async def scenario():
        auth_client.gates["boss@wms.test"] = asyncio.Event()
        first = asyncio.create_task(store.login("boss@wms.test", "secret"))
        await asyncio.sleep(0)
        await store.login("pick@wms.test", "secret")
        auth_client.gates["boss@wms.test"].set()
        await first

    asyncio.run(scenario())
    assert store.state.user.email == "pick@wms.test"
    assert store.state.token == "token-pick"


def test_login_reports_whether_it_committed(store, auth_client):
    async def scenario():
        auth_client.gates["boss@wms.test"] = asyncio.Event()
        first = asyncio.create_task(store.login("boss@wms.test", "secret"))
        await asyncio.sleep(0)
        second = await store.login("pick@wms.test", "secret")
        auth_client.gates["boss@wms.test"].set()
        return await first, second

    assert asyncio.run(scenario()) == (False, True)


def test_logout_wins_over_in_flight_login(store, auth_client):
    async def scenario():
        auth_client.gates["wm@wms.test"] = asyncio.Event()
        pending = asyncio.create_task(store.login("wm@wms.test", "secret"))
        await asyncio.sleep(0)
        await store.logout()
        auth_client.gates["wm@wms.test"].set()
        await pending

    asyncio.run(scenario())
    assert store.state.is_authenticated is False
    assert store.state.user is None


class SlowFirstSave(InMemorySessionPersistence):
    """Holds the first save until `release` is set."""

    def __init__(self):
        super().__init__()
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def save(self, snapshot):
        if not self.started.is_set():
            self.started.set()
            await self.release.wait()
        await super().save(snapshot)


def test_logout_during_slow_save_stays_signed_out(auth_client):
    async def scenario():
        backend = SlowFirstSave()
        store = SessionStore(auth_client, backend)
        login = asyncio.create_task(store.login("wm@wms.test", "secret"))
        await backend.started.wait()
        logout = asyncio.create_task(store.logout())
        await asyncio.sleep(0)
        backend.release.set()
        await asyncio.gather(login, logout)
        return store, await backend.load()

    store, saved = asyncio.run(scenario())
    assert store.state.is_authenticated is False
    assert saved.is_authenticated is False
    assert saved.user is None
    assert saved.token is None


def test_logout_clears_session(store, persistence):
    asyncio.run(store.login("wm@wms.test", "secret"))
    asyncio.run(store.logout())

    state = store.state
    assert (state.user, state.token, state.is_authenticated, state.error) == (None, None, False, None)
    saved = asyncio.run(persistence.load())
    assert saved.is_authenticated is False
    assert saved.user is None


def test_register_with_session(store):
    assert asyncio.run(store.register("new@wms.test", "pw", "New Operator")) is True
    assert store.state.is_authenticated is True
    assert store.state.user.role == "viewer"
    assert store.state.token == "token-new"


def test_register_without_session_leaves_store_signed_out(store):
    assert asyncio.run(store.register("new@wms.test", "pw", "no-session")) is False
    assert store.state.is_authenticated is False
    assert store.state.is_loading is False


def test_register_failure(store):
    with pytest.raises(AuthenticationFailure):
        asyncio.run(store.register("boss@wms.test", "pw", "Dup"))
    assert store.state.error == "Email already registered"


def test_set_user_normalizes_role_and_authenticates(store, persistence):
    asyncio.run(store.set_user({"id": 5, "email": "x@wms.test", "role": "Warehouse-Staff"}))
    assert store.state.user.role == "warehouse_staff"
    assert store.state.is_authenticated is True
    assert persistence.save_count == 1


def test_set_token(store, persistence):
    asyncio.run(store.set_token("rotated"))
    assert store.state.token == "rotated"
    asyncio.run(store.set_token("rotated"))
    assert persistence.save_count == 1


def test_clear_error(store):
    with pytest.raises(AuthenticationFailure):
        asyncio.run(store.login("nobody@wms.test", "x"))
    store.clear_error()
    assert store.state.error is None


def test_hydration_gate_is_one_way(store):
    store.set_has_hydrated(False)
    assert store.state.has_hydrated is False
    store.set_has_hydrated(True)
    store.set_has_hydrated(True)
    assert store.state.has_hydrated is True
    with pytest.raises(RuntimeError):
        store.set_has_hydrated(False)


def test_restore_does_not_write_back(store, persistence):
    snapshot = SessionSnapshot(
        user=SessionUser(id=1, email="a@wms.test", role="packer"),
        token="t",
        is_authenticated=True,
    )
    store.restore(snapshot)
    assert store.state.user.role == "packer"
    assert persistence.save_count == 0


def test_unsubscribe(store):
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.clear_error()
    unsubscribe()
    store.clear_error()
    assert len(seen) == 1


def test_session_user_aliases():
    user = SessionUser.model_validate(
        {"id": 1, "role": "Company-Admin", "companyId": 4, "warehouseId": None, "status": None, "Company": {"id": 4}}
    )
    assert user.role == "company_admin"
    assert user.company_id == 4
    assert user.status == "ACTIVE"
    assert user.company == {"id": 4}
