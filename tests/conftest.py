import asyncio

import pytest

from wmsconsole.auth import AuthResult
from wmsconsole.session import InMemorySessionPersistence, SessionStore
from wmsconsole.utils import AuthenticationFailure


def make_user(user_id, email, role, **extra):
    return {"id": user_id, "email": email, "name": email.split("@")[0], "role": role, **extra}


USERS = {
    "boss@wms.test": {
        "password": "secret",
        "token": "token-boss",
        "user": make_user(1, "boss@wms.test", "Super-Admin", companyId=None),
    },
    "wm@wms.test": {
        "password": "secret",
        "token": "token-wm",
        "user": make_user(2, "wm@wms.test", "warehouse_manager", companyId=7, warehouseId=3),
    },
    "pick@wms.test": {
        "password": "secret",
        "token": "token-pick",
        "user": make_user(3, "pick@wms.test", "PICKER", companyId=7, warehouseId=3),
    },
}


class FakeAuthClient:
    """Stands in for the WMS auth API."""

    def __init__(self, users=None):
        self.users = dict(USERS if users is None else users)
        self.gates: dict[str, asyncio.Event] = {}
        self.login_calls: list[str] = []
        self.closed = False

    async def login(self, email, password):
        self.login_calls.append(email)
        gate = self.gates.get(email)
        if gate is not None:
            await gate.wait()
        entry = self.users.get(email.strip())
        if entry is None or entry["password"] != password:
            raise AuthenticationFailure("Invalid email or password")
        return AuthResult(success=True, user=entry["user"], token=entry["token"])

    async def register(self, email, password, name):
        if email in self.users:
            raise AuthenticationFailure("Email already registered")
        user = make_user(99, email, "viewer", name=name)
        self.users[email] = {"password": password, "token": "token-new", "user": user}
        if name == "no-session":
            return AuthResult(success=True)
        return AuthResult(success=True, user=user, token="token-new")

    async def close(self):
        self.closed = True


@pytest.fixture
def auth_client():
    return FakeAuthClient()


@pytest.fixture
def persistence():
    return InMemorySessionPersistence()


@pytest.fixture
def store(auth_client, persistence):
    return SessionStore(auth_client, persistence)


class FakeCollection:
    """The two motor collection calls the session backend uses."""

    def __init__(self):
        self.docs = {}

    async def find_one(self, query):
        return self.docs.get(query["_id"])

    async def replace_one(self, query, doc, upsert=False):
        assert upsert
        self.docs[query["_id"]] = doc


class FakeDatabase(dict):
    def __missing__(self, name):
        self[name] = FakeCollection()
        return self[name]


class FakeAdmin:
    def __init__(self, error=None):
        self.error = error
        self.commands = []

    async def command(self, name):
        self.commands.append(name)
        if self.error is not None:
            raise self.error
        return {"ok": 1}


class FakeMotorClient(dict):
    """Stands in for AsyncIOMotorClient; pass `error` to make the ping fail."""

    def __init__(self, error=None):
        super().__init__()
        self.admin = FakeAdmin(error)
        self.uris = []
        self.closed = False

    def __missing__(self, name):
        self[name] = FakeDatabase()
        return self[name]

    def __call__(self, uri):
        self.uris.append(uri)
        return self

    def close(self):
        self.closed = True
