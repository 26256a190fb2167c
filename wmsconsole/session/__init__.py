from .models import SessionUser, SessionSnapshot, SessionState
from .store import SessionStore
from .persistence import (
    SessionPersistence,
    InMemorySessionPersistence,
    MongoSessionPersistence,
    hydrate_session,
)

__all__ = [
    "SessionUser",
    "SessionSnapshot",
    "SessionState",
    "SessionStore",
    "SessionPersistence",
    "InMemorySessionPersistence",
    "MongoSessionPersistence",
    "hydrate_session",
]
