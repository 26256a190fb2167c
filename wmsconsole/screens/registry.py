"""
Console screens.

Each screen is a protected GET route. Path parameters use the FastAPI
"{name}" form; the guard always checks the concrete request path, so
"/picking/{id}" is authorized through the "/picking" rule.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Screen:
    path: str
    title: str
    allowed_roles: Optional[tuple[str, ...]] = None


SCREENS: list[Screen] = [
    # ── Dashboards ───────────────────────────────────────────────
    Screen("/dashboard", "Dashboard"),
    Screen("/dashboards/super-admin", "Super Admin Dashboard"),
    Screen("/dashboards/company", "Company Dashboard"),
    Screen("/dashboards/inventory-manager", "Inventory Manager Dashboard"),
    Screen("/dashboards/manager", "Warehouse Manager Dashboard"),
    Screen("/dashboards/warehouse-staff", "Warehouse Staff Dashboard"),
    Screen("/dashboards/picker", "Picker Dashboard"),
    Screen("/dashboards/packer", "Packer Dashboard"),
    Screen("/dashboards/viewer", "Viewer Dashboard"),
    Screen("/profile", "Profile"),
    # ── Administration ───────────────────────────────────────────
    Screen("/companies", "Companies"),
    Screen("/users", "Users"),
    Screen("/roles", "Roles & Permissions"),
    Screen("/settings", "Settings"),
    Screen("/settings/marketplace-api", "Marketplace API"),
    Screen("/warehouses", "Warehouses"),
    Screen("/warehouses/zones", "Zones"),
    Screen("/warehouses/locations", "Locations"),
    Screen("/vat-codes", "VAT Codes"),
    # ── Inventory ────────────────────────────────────────────────
    Screen("/inventory", "Inventory"),
    Screen("/inventory/by-best-before-date", "Stock by Best-Before Date"),
    Screen("/inventory/by-location", "Stock by Location"),
    Screen("/inventory/adjustments", "Stock Adjustments"),
    Screen("/inventory/cycle-counts", "Cycle Counts"),
    Screen("/inventory/batches", "Batches"),
    Screen("/inventory/movements", "Stock Movements"),
    Screen("/inventoryProduct", "Inventory by Product"),
    Screen("/products", "Products"),
    Screen("/products/add", "Add Product"),
    Screen("/products/import-export", "Product Import / Export"),
    Screen("/products/categories", "Categories"),
    Screen("/products/bundles", "Bundles"),
    Screen("/products/{id}/edit", "Edit Product"),
    Screen("/products/{id}", "Product"),
    # ── Inbound ──────────────────────────────────────────────────
    Screen("/purchase-orders", "Purchase Orders"),
    Screen("/goods-receiving", "Goods Receiving"),
    Screen("/suppliers", "Suppliers"),
    # ── Outbound ─────────────────────────────────────────────────
    Screen("/sales-orders", "Sales Orders"),
    Screen("/sales-orders/new", "New Sales Order"),
    Screen("/sales-orders/{id}/edit", "Edit Sales Order"),
    Screen("/sales-orders/{id}", "Sales Order"),
    Screen("/customers", "Customers"),
    Screen("/clients", "Clients"),
    Screen("/picking", "Picking"),
    Screen("/picking/{id}", "Pick List"),
    Screen("/packing", "Packing"),
    Screen("/shipments", "Shipments"),
    Screen("/returns", "Returns"),
    Screen("/replenishment/tasks", "Replenishment Tasks"),
    Screen("/replenishment/settings", "Replenishment Settings"),
    # ── Insights ─────────────────────────────────────────────────
    Screen("/analytics/margins", "Margin Analysis"),
    Screen("/analytics/pricing-calculator", "Pricing Calculator"),
    Screen("/reports", "Reports"),
    Screen("/integrations", "Integrations"),
    Screen("/scanner", "Scanner"),
]

