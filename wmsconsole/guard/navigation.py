"""
Navigation guard.

Gates a protected screen on hydration, authentication and route permission:

    HYDRATING ──> UNAUTHENTICATED                    (redirect to login)
             └──> CHECKING ──> AUTHORIZED            (render the screen)
                          └──> UNAUTHORIZED          (redirect to landing page)

Each evaluation starts from the top; no "authorized" result is carried
over to another path or another session state. The guard never navigates
itself: it returns a decision, and ProtectedRoute hands redirects to the
host's navigate callback.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional
from urllib.parse import urlencode

from wmsconsole.rbac import (
    ROUTE_PERMISSIONS,
    RoutePermissionTable,
    get_default_route_for_role,
    has_any_role,
    has_route_permission,
)
from wmsconsole.session import SessionState, SessionStore
from wmsconsole.utils import Logger

logger = Logger("guard")


class GuardState(str, Enum):
    HYDRATING = "hydrating"
    UNAUTHENTICATED = "unauthenticated"
    CHECKING = "checking"
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    redirect_to: Optional[str] = None
    replace: bool = False

    @property
    def should_render(self) -> bool:
        return self.state is GuardState.AUTHORIZED

    @property
    def is_waiting(self) -> bool:
        return self.state is GuardState.HYDRATING


class NavigationGuard:
    def __init__(
        self,
        table: RoutePermissionTable = ROUTE_PERMISSIONS,
        login_path: str = "/auth/login",
    ):
        self.table = table
        self.login_path = login_path

    def login_redirect(self, requested_path: str) -> str:
        return f"{self.login_path}?{urlencode({'redirect': requested_path})}"

    def evaluate(
        self,
        session: SessionState,
        requested_path: str,
        allowed_roles: Optional[Iterable[str]] = None,
    ) -> GuardDecision:
        """
        Decide what to do with a navigation to `requested_path`.

        `allowed_roles` is a per-screen allow-list; it is AND-ed with the
        route table, so it can narrow access but never widen it.
        """
        if not session.has_hydrated:
            return GuardDecision(GuardState.HYDRATING)

        if not session.is_authenticated or session.user is None:
            return GuardDecision(
                GuardState.UNAUTHENTICATED,
                redirect_to=self.login_redirect(requested_path),
                replace=True,
            )

        role = session.user.role
        logger.debug(f"{GuardState.CHECKING.value}: {role} -> {requested_path}")

        permitted = has_route_permission(role, requested_path, self.table)
        allowed_roles = list(allowed_roles) if allowed_roles else []
        passes_explicit = not allowed_roles or has_any_role(role, allowed_roles)

        if permitted and passes_explicit:
            return GuardDecision(GuardState.AUTHORIZED)

        target = get_default_route_for_role(role)
        logger.warning(f"Access denied: {role} cannot access {requested_path}")
        logger.info(f"Redirecting unauthorized user to: {target}")
        return GuardDecision(GuardState.UNAUTHORIZED, redirect_to=target, replace=True)


Navigate = Callable[..., None]


class ProtectedRoute:
    """
    A guard bound to a live session store and one requested path.

    Re-evaluates whenever hydration, authentication or the user changes in
    the store, or when the path / allow-list is updated. Redirects are sent
    to `navigate(path, replace=True)`.
    """

    def __init__(
        self,
        store: SessionStore,
        guard: NavigationGuard,
        path: str,
        navigate: Navigate,
        allowed_roles: Optional[Iterable[str]] = None,
    ):
        self.store = store
        self.guard = guard
        self.path = path
        self.allowed_roles = tuple(allowed_roles) if allowed_roles else None
        self._navigate = navigate
        self._inputs = None
        self.decision: Optional[GuardDecision] = None
        self._unsubscribe = store.subscribe(self._on_session_change)
        self.evaluate()

    @staticmethod
    def _session_inputs(state: SessionState):
        return (state.has_hydrated, state.is_authenticated, state.user)

    def _on_session_change(self, state: SessionState) -> None:
        if self._session_inputs(state) != self._inputs:
            self.evaluate()

    def evaluate(self) -> GuardDecision:
        state = self.store.state
        self._inputs = self._session_inputs(state)
        self.decision = self.guard.evaluate(state, self.path, self.allowed_roles)
        if self.decision.redirect_to:
            self._navigate(self.decision.redirect_to, replace=self.decision.replace)
        return self.decision

    def update(
        self,
        path: Optional[str] = None,
        allowed_roles: Optional[Iterable[str]] = None,
    ) -> GuardDecision:
        if path is not None:
            self.path = path
        if allowed_roles is not None:
            self.allowed_roles = tuple(allowed_roles) or None
        return self.evaluate()

    @property
    def state(self) -> Optional[GuardState]:
        return self.decision.state if self.decision else None

    def close(self) -> None:
        self._unsubscribe()
