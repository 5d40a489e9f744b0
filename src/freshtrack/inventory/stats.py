"""Dashboard statistics and product list helpers"""

from datetime import date
from typing import Iterable, Sequence

from .expiry import DateLike, calculate_expiry_status
from .models import EXPIRED, STATUSES, WARNING, DashboardStats, Product

LOW_STOCK_THRESHOLD = 5

SORT_KEYS = ("expiry_date", "name", "category", "price", "quantity")

MONTH_ABBR = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def calculate_dashboard_stats(
    products: Iterable[Product], today: DateLike
) -> DashboardStats:
    """Count products per expiry status and sum their stock value.

    Every product is classified against the same ``today``. Duplicates are
    counted as given.

    Args:
        products: the full loaded product set (not a filtered view)
        today: reference day for classification

    Returns:
        DashboardStats
    """
    stats = DashboardStats()

    for product in products:
        status = calculate_expiry_status(product.expiry_date, today).status
        stats.total_value += product.price * product.quantity

        if status == EXPIRED:
            stats.expired_products += 1
        elif status == WARNING:
            stats.warning_products += 1
        else:
            stats.fresh_products += 1

    stats.total_products = (
        stats.expired_products + stats.warning_products + stats.fresh_products
    )
    return stats


def fresh_ratio(stats: DashboardStats) -> float:
    """Share of fresh products; 0.0 when there are none at all."""
    if not stats.total_products:
        return 0.0
    return stats.fresh_products / stats.total_products


def calculate_total_value(products: Iterable[Product]) -> float:
    return sum(p.price * p.quantity for p in products)


def get_low_stock_products(
    products: Iterable[Product], threshold: int = LOW_STOCK_THRESHOLD
) -> list[Product]:
    return [p for p in products if p.quantity <= threshold]


def get_products_by_category(products: Iterable[Product]) -> dict[str, list[Product]]:
    by_category: dict[str, list[Product]] = {}
    for product in products:
        by_category.setdefault(product.category, []).append(product)
    return by_category


# ── list view ──

def filter_products(
    products: Iterable[Product],
    today: DateLike,
    search: str = "",
    status: str = "all",
) -> list[Product]:
    """Filter by free text and expiry status.

    Name, category and supplier match case-insensitively; barcodes match as
    typed.

    Raises:
        ValueError: unknown status
    """
    if status != "all" and status not in STATUSES:
        raise ValueError(f"unknown status: {status}")

    term = search.lower()
    result = []
    for product in products:
        matches = (
            term in product.name.lower()
            or term in product.category.lower()
            or (product.barcode is not None and search in product.barcode)
            or (product.supplier is not None and term in product.supplier.lower())
        )
        if not matches:
            continue
        if status != "all":
            if calculate_expiry_status(product.expiry_date, today).status != status:
                continue
        result.append(product)
    return result


def sort_products(products: Sequence[Product], sort_by: str = "expiry_date") -> list[Product]:
    """Sort for display: soonest expiry, A-Z, dearest first or lowest stock first.

    Raises:
        ValueError: unknown sort key
    """
    if sort_by == "expiry_date":
        return sorted(products, key=lambda p: p.expiry_date)
    if sort_by == "name":
        return sorted(products, key=lambda p: p.name.lower())
    if sort_by == "category":
        return sorted(products, key=lambda p: p.category.lower())
    if sort_by == "price":
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort_by == "quantity":
        return sorted(products, key=lambda p: p.quantity)
    raise ValueError(f"unknown sort key: {sort_by}")


# ── formatting ──

def format_currency(amount: float) -> str:
    """Rupee amount with Indian digit grouping, e.g. ₹1,23,456.50"""
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.2f}".split(".")

    # last three digits, then groups of two
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ",".join(groups + [tail])

    return f"{sign}₹{grouped}.{fraction}"


def format_date(value: date) -> str:
    """e.g. 10 Jan 2024"""
    return f"{value.day} {MONTH_ABBR[value.month - 1]} {value.year}"
