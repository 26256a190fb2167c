import pytest

from wmsconsole.rbac import ROUTE_PERMISSIONS, RoutePermissionTable
from wmsconsole.utils import RouteTableError


def test_duplicate_route_keys_are_rejected():
    with pytest.raises(RouteTableError):
        RoutePermissionTable([("/roles", ["admin"]), ("/roles", ["viewer"])])


@pytest.mark.parametrize("key", ["", "roles", None])
def test_route_keys_must_be_paths(key):
    with pytest.raises(RouteTableError):
        RoutePermissionTable([(key, ["admin"])])


def test_role_literals_are_normalized_on_load():
    table = RoutePermissionTable([("/roles", ["Super-Admin", "COMPANY-ADMIN"])])
    assert table["/roles"] == ("super_admin", "company_admin")


def test_empty_role_literal_is_rejected():
    with pytest.raises(RouteTableError):
        RoutePermissionTable([("/roles", ["admin", ""])])


def test_longest_prefix_wins():
    table = RoutePermissionTable(
        [("/products", ["manager"]), ("/products/add", ["admin"])]
    )
    assert table.longest_prefix("/products/add/bulk") == "/products/add"
    assert table.longest_prefix("/products/12") == "/products"
    assert table.longest_prefix("/orders") is None


def test_table_keeps_insertion_order():
    table = RoutePermissionTable([("/y", ["admin"]), ("/x", ["viewer"]), ("/xy", ["picker"])])
    assert list(table) == ["/y", "/x", "/xy"]
    assert table.longest_prefix("/xyz") == "/xy"


def test_root_key_never_matches_as_prefix():
    table = RoutePermissionTable([("/", ["admin"]), ("/reports", ["viewer"])])
    assert table.longest_prefix("/settings") is None
    assert table.resolve("/") == ("admin",)


def test_prefix_match_is_raw_string_not_segment_aware():
    assert ROUTE_PERMISSIONS.longest_prefix("/inventoryProduct") == "/inventory"
    assert ROUTE_PERMISSIONS.resolve("/inventory-foo") == ROUTE_PERMISSIONS["/inventory"]


def test_exact_match_takes_precedence():
    assert ROUTE_PERMISSIONS.resolve("/dashboards/picker") == ROUTE_PERMISSIONS["/dashboards/picker"]
    assert ROUTE_PERMISSIONS.resolve("/dashboard") == ROUTE_PERMISSIONS["/dashboard"]


def test_default_table_keys_are_unique_paths():
    assert all(key.startswith("/") for key in ROUTE_PERMISSIONS)
    assert len(set(ROUTE_PERMISSIONS)) == len(ROUTE_PERMISSIONS)
