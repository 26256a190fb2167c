from .roles import (
    Role,
    Action,
    ALL_ROLES,
    ADMIN_ROLES,
    MANAGEMENT_ROLES,
    FULL_ACCESS_ROLES,
    MINIMAL_ROLES,
    ROLE_ACTIONS,
    ROLE_FEATURES,
    normalize_role,
    can_perform_action,
    can_create,
    can_update,
    can_delete,
    has_feature,
    get_role_features,
    can_manage_users,
    has_any_role,
    is_admin,
    is_management,
    is_super_admin,
    is_company_admin,
    is_warehouse_manager,
    is_inventory_manager,
    is_picker,
    is_packer,
    is_viewer,
    format_role,
    get_role_color,
    get_role_description,
)
from .routes import ROUTE_PERMISSIONS, RoutePermissionTable
from .permissions import (
    FALLBACK_ROUTE,
    has_route_permission,
    get_accessible_routes,
    get_default_route_for_role,
)

__all__ = [
    "Role",
    "Action",
    "ALL_ROLES",
    "ADMIN_ROLES",
    "MANAGEMENT_ROLES",
    "FULL_ACCESS_ROLES",
    "MINIMAL_ROLES",
    "ROLE_ACTIONS",
    "ROLE_FEATURES",
    "normalize_role",
    "can_perform_action",
    "can_create",
    "can_update",
    "can_delete",
    "has_feature",
    "get_role_features",
    "can_manage_users",
    "has_any_role",
    "is_admin",
    "is_management",
    "is_super_admin",
    "is_company_admin",
    "is_warehouse_manager",
    "is_inventory_manager",
    "is_picker",
    "is_packer",
    "is_viewer",
    "format_role",
    "get_role_color",
    "get_role_description",
    "ROUTE_PERMISSIONS",
    "RoutePermissionTable",
    "FALLBACK_ROUTE",
    "has_route_permission",
    "get_accessible_routes",
    "get_default_route_for_role",
]
