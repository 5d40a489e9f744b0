"""Expiry classification"""

from datetime import date, datetime
from typing import Iterable, Union

from .models import EXPIRED, FRESH, WARNING, ExpiryStatus, Product

# Products expiring within this many days (today included) are flagged.
WARNING_WINDOW_DAYS = 7

STATUS_COLORS = {
    FRESH: "text-green-600 bg-green-50",
    WARNING: "text-yellow-600 bg-yellow-50",
    EXPIRED: "text-red-600 bg-red-50",
}

DateLike = Union[date, datetime]


def _to_day(value: DateLike) -> date:
    # drop the time of day so that both sides are compared at midnight
    return value.date() if isinstance(value, datetime) else value


def calculate_expiry_status(expiry_date: DateLike, today: DateLike) -> ExpiryStatus:
    """Classify an expiry date relative to ``today``.

    Args:
        expiry_date: product expiry date
        today: reference day, captured once by the caller

    Returns:
        ExpiryStatus with the whole number of days left (negative once expired)
    """
    days = (_to_day(expiry_date) - _to_day(today)).days

    if days < 0:
        status = EXPIRED
    elif days <= WARNING_WINDOW_DAYS:
        status = WARNING
    else:
        status = FRESH

    return ExpiryStatus(status=status, days_until_expiry=days, color=STATUS_COLORS[status])


def categorize_products_by_expiry(
    products: Iterable[Product], today: DateLike
) -> dict[str, list[Product]]:
    """Split products into fresh / warning / expired lists, keeping input order."""
    buckets: dict[str, list[Product]] = {FRESH: [], WARNING: [], EXPIRED: []}
    for product in products:
        status = calculate_expiry_status(product.expiry_date, today)
        buckets[status.status].append(product)
    return buckets
