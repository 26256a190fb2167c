"""
Session persistence backends and hydration.

A backend offers two coroutines:
    load() -> SessionSnapshot | None     once, at start-up
    save(snapshot)                       after every persisted mutation

`hydrate_session` restores whatever was saved and then opens the
`has_hydrated` gate, whether or not anything was found.
"""

from typing import Optional, Protocol

from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError

from wmsconsole.auth.tokens import token_is_expired
from wmsconsole.utils import Logger
from .models import SessionSnapshot
from .store import SessionStore

logger = Logger("session.persistence")


class SessionPersistence(Protocol):
    async def load(self) -> Optional[SessionSnapshot]: ...

    async def save(self, snapshot: SessionSnapshot) -> None: ...


class InMemorySessionPersistence:
    """Keeps the last saved snapshot in process memory."""

    def __init__(self, initial: Optional[SessionSnapshot] = None):
        self._data: Optional[dict] = initial.model_dump(mode="json") if initial else None
        self.save_count = 0

    async def load(self) -> Optional[SessionSnapshot]:
        if self._data is None:
            return None
        return SessionSnapshot.model_validate(self._data)

    async def save(self, snapshot: SessionSnapshot) -> None:
        self._data = snapshot.model_dump(mode="json")
        self.save_count += 1


class MongoSessionPersistence:
    """Stores the snapshot as a single document keyed by `storage_key`."""

    def __init__(self, collection: AsyncIOMotorCollection, storage_key: str):
        self.collection = collection
        self.storage_key = storage_key

    async def load(self) -> Optional[SessionSnapshot]:
        doc = await self.collection.find_one({"_id": self.storage_key})
        if not doc:
            return None
        try:
            return SessionSnapshot.model_validate(doc.get("state") or {})
        except ValidationError:
            logger.warning(f"Ignoring unreadable session document '{self.storage_key}'")
            return None

    async def save(self, snapshot: SessionSnapshot) -> None:
        await self.collection.replace_one(
            {"_id": self.storage_key},
            {"_id": self.storage_key, "state": snapshot.model_dump(mode="json", by_alias=True)},
            upsert=True,
        )


async def hydrate_session(
    store: SessionStore,
    persistence: SessionPersistence,
    discard_expired_tokens: bool = True,
) -> None:
    """
    Restore the persisted session into `store`, then mark it hydrated.

    A backend failure leaves the session empty (signed out) rather than
    keeping the gate closed forever.
    """
    try:
        snapshot = await persistence.load()
    except Exception:
        logger.exception("Failed to load persisted session; starting signed out")
        snapshot = None

    if snapshot is not None and discard_expired_tokens and token_is_expired(snapshot.token):
        logger.info("Persisted session token has expired; starting signed out")
        snapshot = None

    if snapshot is not None:
        store.restore(snapshot)
        logger.debug(f"Restored session (authenticated={snapshot.is_authenticated})")

    store.set_has_hydrated(True)
