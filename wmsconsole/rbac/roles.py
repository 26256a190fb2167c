"""
Role definitions, capability matrix and feature flags.

Role names are compared after normalization: lower-case, "-" rewritten to "_".
So "Super-Admin", "SUPER_ADMIN" and "super_admin" are the same role.

Two tables live here and are independent of route access:
  - ROLE_ACTIONS  : coarse CRUD verbs a role may perform
  - ROLE_FEATURES : UI affordances a role unlocks ("show delete button")

Unknown roles fail closed everywhere.
"""

from enum import Enum
from typing import Iterable, Optional


class Role(str, Enum):
    SUPER_ADMIN = "super_admin"
    COMPANY_ADMIN = "company_admin"
    WAREHOUSE_MANAGER = "warehouse_manager"
    INVENTORY_MANAGER = "inventory_manager"
    ADMIN = "admin"
    MANAGER = "manager"
    PICKER = "picker"
    PACKER = "packer"
    WAREHOUSE_STAFF = "warehouse_staff"
    VIEWER = "viewer"


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


def normalize_role(role: Optional[str]) -> Optional[str]:
    """Lower-case a role and rewrite "-" to "_". Falsy input comes back as is."""
    if not role:
        return role
    if isinstance(role, Enum):
        role = role.value
    return role.lower().replace("-", "_")


# ── Role groups ──────────────────────────────────────────────────
ALL_ROLES: tuple[str, ...] = tuple(r.value for r in Role)
ADMIN_ROLES: tuple[str, ...] = ("super_admin", "company_admin", "admin")
USER_MANAGEMENT_ROLES: tuple[str, ...] = (
    "super_admin",
    "company_admin",
    "warehouse_manager",
    "admin",
)
MANAGEMENT_ROLES: tuple[str, ...] = (
    "super_admin",
    "company_admin",
    "warehouse_manager",
    "inventory_manager",
    "admin",
    "manager",
)
# Elevated roles: default-allow where no route rule exists
FULL_ACCESS_ROLES: tuple[str, ...] = MANAGEMENT_ROLES + ("warehouse_staff",)
# Minimal-privilege roles: never get an implicit fallback
MINIMAL_ROLES: frozenset[str] = frozenset({"picker", "packer", "viewer"})

_CRUD = frozenset(a.value for a in Action)

ROLE_ACTIONS: dict[str, frozenset[str]] = {
    "super_admin": _CRUD,
    "company_admin": _CRUD,
    "warehouse_manager": _CRUD,
    "inventory_manager": _CRUD,
    "admin": _CRUD,
    "manager": frozenset({"create", "read", "update"}),
    "picker": frozenset({"read", "update"}),
    "packer": frozenset({"read", "update"}),
    "warehouse_staff": frozenset({"create", "read", "update"}),
    "viewer": frozenset({"read"}),
}

ROLE_FEATURES: dict[str, frozenset[str]] = {
    "super_admin": frozenset(
        {
            "company_management",
            "user_management",
            "system_settings",
            "all_companies",
            "delete_records",
        }
    ),
    "company_admin": frozenset({"user_management", "company_settings", "delete_records"}),
    "warehouse_manager": frozenset({"user_management", "warehouse_settings", "delete_records"}),
    "inventory_manager": frozenset({"inventory_settings", "delete_records"}),
    "admin": frozenset({"user_management", "system_settings", "delete_records"}),
    "manager": frozenset({"daily_operations"}),
    "picker": frozenset({"picking_operations"}),
    "packer": frozenset({"packing_operations"}),
    "warehouse_staff": frozenset({"warehouse_operations"}),
    "viewer": frozenset({"view_reports"}),
}

# ── Display metadata ─────────────────────────────────────────────
ROLE_COLORS: dict[str, str] = {
    "super_admin": "gold",
    "company_admin": "blue",
    "warehouse_manager": "green",
    "inventory_manager": "purple",
    "admin": "red",
    "manager": "cyan",
    "picker": "orange",
    "packer": "magenta",
    "warehouse_staff": "geekblue",
    "viewer": "default",
}

ROLE_DESCRIPTIONS: dict[str, str] = {
    "super_admin": "Full system access including all companies",
    "company_admin": "Full access to company resources and settings",
    "warehouse_manager": "Manage warehouse operations and staff",
    "inventory_manager": "Manage inventory, products, and stock",
    "admin": "Administrative access to system settings",
    "manager": "Manage daily operations and reports",
    "picker": "Picking tasks only",
    "packer": "Packing and shipping",
    "warehouse_staff": "General warehouse operations access",
    "viewer": "Read-only access to reports and analytics",
}


# ── Capability checks ────────────────────────────────────────────
def can_perform_action(role: Optional[str], action: str) -> bool:
    if not role:
        return False
    allowed = ROLE_ACTIONS.get(normalize_role(role))
    if allowed is None:
        return False
    return action in allowed


def can_create(role: Optional[str]) -> bool:
    return can_perform_action(role, Action.CREATE.value)


def can_update(role: Optional[str]) -> bool:
    return can_perform_action(role, Action.UPDATE.value)


def can_delete(role: Optional[str]) -> bool:
    return can_perform_action(role, Action.DELETE.value)


def has_feature(role: Optional[str], feature: str) -> bool:
    if not role:
        return False
    features = ROLE_FEATURES.get(normalize_role(role))
    if features is None:
        return False
    return feature in features


def get_role_features(role: Optional[str]) -> frozenset[str]:
    """Feature tags unlocked by a role (empty for unknown roles)."""
    if not role:
        return frozenset()
    return ROLE_FEATURES.get(normalize_role(role), frozenset())


def can_manage_users(role: Optional[str]) -> bool:
    return has_feature(role, "user_management")


def has_any_role(role: Optional[str], roles: Iterable[str]) -> bool:
    """True if the role matches any entry of `roles` after normalization."""
    if not role:
        return False
    wanted = normalize_role(role)
    return any(normalize_role(r) == wanted for r in roles)


def is_admin(role: Optional[str]) -> bool:
    return has_any_role(role, ADMIN_ROLES)


def is_management(role: Optional[str]) -> bool:
    return has_any_role(role, MANAGEMENT_ROLES)


def is_super_admin(role: Optional[str]) -> bool:
    return has_any_role(role, (Role.SUPER_ADMIN.value,))


def is_company_admin(role: Optional[str]) -> bool:
    return has_any_role(role, (Role.COMPANY_ADMIN.value,))


def is_warehouse_manager(role: Optional[str]) -> bool:
    return has_any_role(role, (Role.WAREHOUSE_MANAGER.value,))


def is_inventory_manager(role: Optional[str]) -> bool:
    return has_any_role(role, (Role.INVENTORY_MANAGER.value,))


def is_picker(role: Optional[str]) -> bool:
    return has_any_role(role, (Role.PICKER.value,))


def is_packer(role: Optional[str]) -> bool:
    return has_any_role(role, (Role.PACKER.value,))


def is_viewer(role: Optional[str]) -> bool:
    return has_any_role(role, (Role.VIEWER.value,))


def format_role(role: Optional[str]) -> str:
    """"warehouse_manager" -> "Warehouse Manager"."""
    if not role:
        return "Unknown"
    name = role.value if isinstance(role, Enum) else str(role)
    return " ".join(word.capitalize() for word in name.split("_"))


def get_role_color(role: Optional[str]) -> str:
    return ROLE_COLORS.get(normalize_role(role) or "", "default")


def get_role_description(role: Optional[str]) -> str:
    return ROLE_DESCRIPTIONS.get(normalize_role(role) or "", "Standard user access")
