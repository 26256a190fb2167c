"""
Route permission table.

Maps a route path (a leaf like "/roles" or a section root like "/inventory")
to the roles allowed to view it. A section entry also covers every sub-path
that has no more specific entry of its own.

Matching is by raw string prefix, not by path segment:  a rule for
"/inventory" also matches "/inventoryProduct" when nothing more specific
exists. Authorization outcomes depend on this, so it is kept as is.
"""

from collections.abc import Mapping
from typing import Iterable, Iterator, Optional

from wmsconsole.utils import RouteTableError
from .roles import (
    ALL_ROLES,
    ADMIN_ROLES,
    FULL_ACCESS_ROLES,
    MANAGEMENT_ROLES,
    USER_MANAGEMENT_ROLES,
    normalize_role,
)


class RoutePermissionTable(Mapping):
    """Immutable, validated mapping of route path -> normalized role tuple."""

    def __init__(self, entries: Iterable[tuple[str, Iterable[str]]]):
        rules: dict[str, tuple[str, ...]] = {}
        for path, roles in entries:
            if not isinstance(path, str) or not path.startswith("/"):
                raise RouteTableError(f"Invalid route key {path!r}: must start with '/'")
            if path in rules:
                raise RouteTableError(f"Duplicate route key {path!r}")
            normalized = tuple(normalize_role(r) for r in roles)
            if not all(normalized):
                raise RouteTableError(f"Empty role name in rule for {path!r}")
            rules[path] = normalized
        self._rules = rules

    # ── Mapping protocol ─────────────────────────────────────────
    def __getitem__(self, path: str) -> tuple[str, ...]:
        return self._rules[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RoutePermissionTable({len(self._rules)} rules)"

    # ── Lookups ──────────────────────────────────────────────────
    def exact(self, path: str) -> Optional[tuple[str, ...]]:
        return self._rules.get(path)

    def longest_prefix(self, path: str) -> Optional[str]:
        """
        Longest key (other than "/") that `path` starts with.

        Equal-length keys resolve to the one inserted first.
        """
        best: Optional[str] = None
        for key in self._rules:
            if key == "/" or not path.startswith(key):
                continue
            if best is None or len(key) > len(best):
                best = key
        return best

    def resolve(self, path: str) -> Optional[tuple[str, ...]]:
        """Exact entry if present, else the longest-prefix entry, else None."""
        roles = self.exact(path)
        if roles is not None:
            return roles
        key = self.longest_prefix(path)
        return self._rules[key] if key is not None else None


PICKER_ROUTES = ("picker",) + MANAGEMENT_ROLES
PACKER_ROUTES = ("packer",) + MANAGEMENT_ROLES
VIEWER_ROUTES = ("viewer",) + MANAGEMENT_ROLES

ROUTE_PERMISSIONS = RoutePermissionTable(
    [
        # ── Role dashboards ──────────────────────────────────────
        ("/dashboards/super-admin", ["super_admin"]),
        ("/dashboards/company", ["company_admin"]),
        ("/dashboards/inventory-manager", ["inventory_manager"]),
        ("/dashboards/picker", PICKER_ROUTES),
        ("/dashboards/packer", PACKER_ROUTES),
        ("/dashboards/manager", ("warehouse_manager",) + MANAGEMENT_ROLES),
        ("/dashboards/warehouse-staff", ("warehouse_staff",) + MANAGEMENT_ROLES),
        ("/dashboards/viewer", VIEWER_ROUTES),
        ("/dashboard", ALL_ROLES),
        ("/profile", ALL_ROLES),
        # ── Administration ───────────────────────────────────────
        ("/settings", FULL_ACCESS_ROLES),
        ("/users", USER_MANAGEMENT_ROLES),
        ("/roles", ADMIN_ROLES),
        ("/companies", ["super_admin", "company_admin"]),
        ("/warehouses", FULL_ACCESS_ROLES),
        # ── Inventory & inbound ──────────────────────────────────
        ("/inventory", FULL_ACCESS_ROLES),
        ("/products", FULL_ACCESS_ROLES),
        ("/products/add", FULL_ACCESS_ROLES),
        ("/purchase-orders", FULL_ACCESS_ROLES),
        ("/goods-receiving", FULL_ACCESS_ROLES),
        ("/suppliers", FULL_ACCESS_ROLES),
        # ── Outbound ─────────────────────────────────────────────
        ("/sales-orders", FULL_ACCESS_ROLES),
        ("/customers", FULL_ACCESS_ROLES),
        ("/clients", FULL_ACCESS_ROLES),
        ("/picking", PICKER_ROUTES),
        ("/packing", PACKER_ROUTES),
        ("/shipments", PACKER_ROUTES),
        ("/returns", FULL_ACCESS_ROLES),
        ("/transfers", FULL_ACCESS_ROLES),
        ("/replenishment", FULL_ACCESS_ROLES),
        # ── Insights & tools ─────────────────────────────────────
        ("/integrations", MANAGEMENT_ROLES),
        ("/analytics", VIEWER_ROUTES),
        ("/reports", VIEWER_ROUTES),
        ("/scanner", ALL_ROLES),
        # ── Auth screens ─────────────────────────────────────────
        ("/auth/login", ALL_ROLES),
        ("/auth/register", ALL_ROLES),
        ("/auth/forgot-password", ALL_ROLES),
    ]
)
