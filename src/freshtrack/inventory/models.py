"""Inventory data model definitions"""

from dataclasses import asdict, dataclass, replace
from datetime import date, datetime
from typing import Any, Optional

FRESH = "fresh"
WARNING = "warning"
EXPIRED = "expired"
STATUSES = (FRESH, WARNING, EXPIRED)

DEFAULT_CATEGORY = "Others"
DEFAULT_ALERT_DAYS = 7

# Suggested in the product form; the store does not enforce them.
CATEGORIES = [
    "Food & Beverages",
    "Dairy Products",
    "Medicines",
    "Cosmetics",
    "Household Items",
    "Electronics",
    "Clothing",
    "Others",
]


def parse_date(value: Any) -> date:
    """Accept a date or an ISO string ("2024-01-10" or a full timestamp)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class ProductDraft:
    """Product data before the store assigns an id and timestamps"""
    name: str
    category: str
    expiry_date: date
    purchase_date: date
    price: float = 0.0
    quantity: int = 1
    barcode: Optional[str] = None
    supplier: Optional[str] = None
    alert_days: int = DEFAULT_ALERT_DAYS

    def cleaned(self) -> "ProductDraft":
        """Trim text fields; blank optional text becomes None."""
        return replace(
            self,
            name=self.name.strip(),
            category=self.category.strip(),
            barcode=_blank_to_none(self.barcode),
            supplier=_blank_to_none(self.supplier),
        )

    def to_record(self) -> dict:
        """Row payload for the store (dates as ISO strings)."""
        record = asdict(self)
        record["expiry_date"] = self.expiry_date.isoformat()
        record["purchase_date"] = self.purchase_date.isoformat()
        return record


@dataclass
class Product:
    """A stored inventory item"""
    id: str
    name: str
    category: str
    expiry_date: date
    purchase_date: date
    price: float
    quantity: int
    barcode: Optional[str] = None
    supplier: Optional[str] = None
    alert_days: int = DEFAULT_ALERT_DAYS
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict) -> "Product":
        """Build a Product from a store row."""
        return cls(
            id=str(record["id"]),
            name=record["name"],
            category=record.get("category") or DEFAULT_CATEGORY,
            expiry_date=parse_date(record["expiry_date"]),
            purchase_date=parse_date(record["purchase_date"]),
            price=float(record.get("price") or 0),
            quantity=int(record.get("quantity") or 0),
            barcode=record.get("barcode"),
            supplier=record.get("supplier"),
            alert_days=int(record.get("alert_days") or DEFAULT_ALERT_DAYS),
            created_at=record.get("created_at"),
            updated_at=record.get("updated_at"),
        )

    def to_draft(self) -> ProductDraft:
        return ProductDraft(
            name=self.name,
            category=self.category,
            expiry_date=self.expiry_date,
            purchase_date=self.purchase_date,
            price=self.price,
            quantity=self.quantity,
            barcode=self.barcode,
            supplier=self.supplier,
            alert_days=self.alert_days,
        )

    @property
    def value(self) -> float:
        """Stock value (price x quantity)"""
        return self.price * self.quantity


@dataclass(frozen=True)
class ExpiryStatus:
    """Freshness of one product relative to a given day"""
    status: str                  # fresh / warning / expired
    days_until_expiry: int       # negative once expired
    color: str = ""              # badge style class


@dataclass
class DashboardStats:
    """Summary figures over a product collection"""
    total_products: int = 0
    expired_products: int = 0
    warning_products: int = 0
    fresh_products: int = 0
    total_value: float = 0.0
