"""freshtrack - perishable inventory tracking: expiry alerts, dashboard, CSV import/export"""

__version__ = "0.1.0"

from freshtrack.inventory.csv_codec import export_to_csv, import_from_csv
from freshtrack.inventory.expiry import calculate_expiry_status
from freshtrack.inventory.models import DashboardStats, ExpiryStatus, Product, ProductDraft
from freshtrack.inventory.stats import calculate_dashboard_stats
from freshtrack.store.client import ProductStoreClient, ProductStoreError

__all__ = [
    "DashboardStats",
    "ExpiryStatus",
    "Product",
    "ProductDraft",
    "ProductStoreClient",
    "ProductStoreError",
    "calculate_dashboard_stats",
    "calculate_expiry_status",
    "export_to_csv",
    "import_from_csv",
]
