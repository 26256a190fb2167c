"""
Permission resolution.

Decides whether a role may view a path, using the route permission table:
exact match first, then the longest matching prefix. Minimal-privilege
roles (picker, packer, viewer) only ever get explicitly listed routes;
every other role falls back to FULL_ACCESS_ROLES membership when no rule
covers the path.
"""

from typing import Optional

from .roles import FULL_ACCESS_ROLES, MINIMAL_ROLES, normalize_role
from .routes import ROUTE_PERMISSIONS, RoutePermissionTable

FALLBACK_ROUTE = "/dashboard"

DEFAULT_ROUTES: dict[str, str] = {
    "super_admin": "/dashboards/super-admin",
    "company_admin": "/dashboards/company",
    "inventory_manager": "/dashboards/inventory-manager",
    "warehouse_manager": "/dashboards/manager",
    "manager": "/dashboards/manager",
    "admin": "/dashboards/manager",
    "picker": "/dashboards/picker",
    "packer": "/dashboards/packer",
    "viewer": "/dashboards/viewer",
    "warehouse_staff": "/dashboards/warehouse-staff",
}


def has_route_permission(
    role: Optional[str],
    path: str,
    table: RoutePermissionTable = ROUTE_PERMISSIONS,
) -> bool:
    """
    Check whether `role` may view `path`.

    A falsy role is always denied; there is no anonymous access to
    protected screens.
    """
    if not role:
        return False

    role = normalize_role(role)
    allowed = table.resolve(path)

    if role in MINIMAL_ROLES:
        return allowed is not None and role in allowed

    if allowed is None:
        return role in FULL_ACCESS_ROLES

    return role in allowed


def get_accessible_routes(
    role: Optional[str],
    table: RoutePermissionTable = ROUTE_PERMISSIONS,
) -> list[str]:
    """Table keys that explicitly list `role`, in table order."""
    if not role:
        return []
    role = normalize_role(role)
    return [path for path, roles in table.items() if role in roles]


def get_default_route_for_role(role: Optional[str]) -> str:
    """Landing page for a role; unknown or missing roles get FALLBACK_ROUTE."""
    return DEFAULT_ROUTES.get(normalize_role(role) or "", FALLBACK_ROUTE)
