"""
Session store: the single writer of the operator session.

Holds who is signed in (user, role, token), whether they are authenticated,
and whether persisted state has finished loading (`has_hydrated`).
Everything else only reads `store.state` or calls the mutators below.

Every mutation swaps the whole SessionState in one assignment, notifies
subscribers, and saves the persisted fields when they changed.

Login, register and logout each take a request sequence number. A login or
register response that arrives after a newer one of those calls started is
stale: it is dropped instead of overwriting the newer session.
"""

import asyncio
import itertools
from typing import Callable, Optional, Protocol

from wmsconsole.utils import AuthenticationFailure, Logger
from .models import PERSISTED_FIELDS, SessionSnapshot, SessionState, SessionUser

logger = Logger("session.store")

Listener = Callable[[SessionState], None]


def _failure_message(exc: Exception, default: str) -> str:
    if isinstance(exc, AuthenticationFailure):
        return exc.message or default
    return default


class AuthClient(Protocol):
    async def login(self, email: str, password: str): ...

    async def register(self, email: str, password: str, name: str): ...


class SessionStore:
    def __init__(self, auth_client: AuthClient, persistence=None):
        self._auth = auth_client
        self.persistence = persistence
        self._state = SessionState()
        self._listeners: list[Listener] = []
        self._sequence = itertools.count(1)
        self._current_request = 0
        self._save_lock = asyncio.Lock()

    # ── Reading ──────────────────────────────────────────────────
    @property
    def state(self) -> SessionState:
        return self._state

    def snapshot(self) -> SessionSnapshot:
        return self._state.to_snapshot()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns the matching unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Internals ────────────────────────────────────────────────
    def _set(self, **changes) -> bool:
        """Apply changes atomically; returns True if a persisted field changed."""
        previous = self._state
        self._state = previous.evolve(**changes)
        for listener in list(self._listeners):
            listener(self._state)
        return any(
            getattr(previous, name) != getattr(self._state, name)
            for name in PERSISTED_FIELDS.intersection(changes)
        )

    async def _commit(self, **changes) -> None:
        if self._set(**changes) and self.persistence is not None:
            # one save at a time, each writing the state current when it starts
            async with self._save_lock:
                await self.persistence.save(self.snapshot())

    def _begin_request(self) -> int:
        self._current_request = next(self._sequence)
        return self._current_request

    def _is_stale(self, request_id: int, operation: str) -> bool:
        if request_id == self._current_request:
            return False
        logger.info(
            f"Discarding stale {operation} response "
            f"(request {request_id}, current {self._current_request})"
        )
        return True

    # ── Mutators ─────────────────────────────────────────────────
    async def login(self, email: str, password: str) -> bool:
        """Sign in; returns False when a newer request superseded this one."""
        request_id = self._begin_request()
        self._set(is_loading=True, error=None)
        try:
            result = await self._auth.login(email, password)
        except Exception as exc:
            if not self._is_stale(request_id, "login"):
                self._set(is_loading=False, error=_failure_message(exc, "Login failed"))
            raise

        if self._is_stale(request_id, "login"):
            return False
        await self._commit(
            user=result.user,
            token=result.token,
            is_authenticated=True,
            is_loading=False,
            error=None,
        )
        logger.info(f"Signed in {result.user.email} as {result.user.role}")
        return True

    async def register(self, email: str, password: str, name: str) -> bool:
        """Create an account; returns True only if it also opened a session."""
        request_id = self._begin_request()
        self._set(is_loading=True, error=None)
        try:
            result = await self._auth.register(email, password, name)
        except Exception as exc:
            if not self._is_stale(request_id, "register"):
                self._set(is_loading=False, error=_failure_message(exc, "Registration failed"))
            raise

        if self._is_stale(request_id, "register"):
            return False
        if result.user is not None and result.token:
            await self._commit(
                user=result.user,
                token=result.token,
                is_authenticated=True,
                is_loading=False,
                error=None,
            )
            return True
        # account created without a session; the operator signs in next
        self._set(is_loading=False, error=None)
        return False

    async def logout(self) -> None:
        self._begin_request()
        await self._commit(
            user=None,
            token=None,
            is_authenticated=False,
            is_loading=False,
            error=None,
        )
        logger.info("Signed out")

    async def set_user(self, user: SessionUser | dict) -> None:
        if not isinstance(user, SessionUser):
            user = SessionUser.model_validate(user)
        await self._commit(user=user, is_authenticated=True)

    async def set_token(self, token: Optional[str]) -> None:
        await self._commit(token=token)

    def clear_error(self) -> None:
        self._set(error=None)

    def restore(self, snapshot: SessionSnapshot) -> None:
        """Load persisted fields without writing them back."""
        self._set(
            user=snapshot.user,
            token=snapshot.token,
            is_authenticated=snapshot.is_authenticated,
        )

    def set_has_hydrated(self, value: bool) -> None:
        """One-way gate, called once persisted state has been restored."""
        if self._state.has_hydrated:
            if not value:
                raise RuntimeError("Session hydration cannot be undone")
            return
        if value:
            self._set(has_hydrated=True)
            logger.debug("Session hydrated")
