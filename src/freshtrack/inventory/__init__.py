"""Perishable inventory: expiry status, dashboard figures, CSV import/export"""

from .categorizer import suggest_category
from .csv_codec import export_filename, export_to_csv, import_from_csv
from .expiry import calculate_expiry_status, categorize_products_by_expiry
from .models import DashboardStats, ExpiryStatus, Product, ProductDraft
from .stats import (
    calculate_dashboard_stats,
    calculate_total_value,
    filter_products,
    get_low_stock_products,
    get_products_by_category,
    sort_products,
)
from .validation import validate_draft

__all__ = [
    "DashboardStats",
    "ExpiryStatus",
    "Product",
    "ProductDraft",
    "calculate_dashboard_stats",
    "calculate_expiry_status",
    "calculate_total_value",
    "categorize_products_by_expiry",
    "export_filename",
    "export_to_csv",
    "filter_products",
    "get_low_stock_products",
    "get_products_by_category",
    "import_from_csv",
    "sort_products",
    "suggest_category",
    "validate_draft",
]
