from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wmsconsole.rbac import normalize_role


class SessionUser(BaseModel):
    """Signed-in operator as returned by the WMS auth API."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Any = None
    email: Optional[str] = None
    name: Optional[str] = None
    role: str = ""
    company_id: Optional[Any] = Field(default=None, alias="companyId")
    warehouse_id: Optional[Any] = Field(default=None, alias="warehouseId")
    status: str = "ACTIVE"
    company: Optional[dict] = Field(default=None, alias="Company")
    warehouse: Optional[dict] = Field(default=None, alias="Warehouse")

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value):
        if value is not None and not isinstance(value, (str, Enum)):
            raise ValueError(f"role must be a string, got {type(value).__name__}")
        return normalize_role(value) or ""

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value):
        return value or "ACTIVE"


class SessionSnapshot(BaseModel):
    """The persisted part of the session."""

    user: Optional[SessionUser] = None
    token: Optional[str] = None
    is_authenticated: bool = False


@dataclass(frozen=True)
class SessionState:
    """
    In-memory session record owned by SessionStore.

    Replaced as a whole on every mutation, never edited in place.
    `has_hydrated` flips False -> True once, after persisted state loads.
    """

    user: Optional[SessionUser] = None
    token: Optional[str] = None
    is_authenticated: bool = False
    has_hydrated: bool = False
    is_loading: bool = False
    error: Optional[str] = None

    def evolve(self, **changes) -> "SessionState":
        return replace(self, **changes)

    def to_snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            user=self.user,
            token=self.token,
            is_authenticated=self.is_authenticated,
        )


PERSISTED_FIELDS = frozenset({"user", "token", "is_authenticated"})
