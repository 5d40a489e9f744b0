"""CSV export / import of the product list

Every field is wrapped in double quotes and nothing inside a field is escaped;
the reader splits on commas and strips all quotes. Text containing a comma or a
double quote does not survive a round trip.
"""

import logging
import math
from datetime import date
from typing import Iterable, Optional

from .expiry import DateLike, calculate_expiry_status
from .models import DEFAULT_ALERT_DAYS, DEFAULT_CATEGORY, Product, ProductDraft

logger = logging.getLogger(__name__)

HEADERS = [
    "Name",
    "Category",
    "Barcode",
    "Expiry Date",
    "Purchase Date",
    "Price",
    "Quantity",
    "Supplier",
    "Alert Days",
    "Status",
]

DEFAULT_PRICE = 0.0
DEFAULT_QUANTITY = 1


def export_filename(today: date) -> str:
    """Download name for an export made on ``today``."""
    return f"inventory-export-{today.isoformat()}.csv"


def export_to_csv(products: Iterable[Product], today: DateLike) -> str:
    """Serialize products, one quoted row per product after the header.

    The Status column is the expiry classification at export time.
    """
    rows = [HEADERS]
    for product in products:
        status = calculate_expiry_status(product.expiry_date, today)
        rows.append([
            product.name,
            product.category,
            product.barcode or "",
            product.expiry_date.isoformat(),
            product.purchase_date.isoformat(),
            _format_number(product.price),
            str(product.quantity),
            product.supplier or "",
            str(product.alert_days),
            status.status,
        ])

    return "\n".join(",".join(f'"{field}"' for field in row) for row in rows)


def import_from_csv(text: str, today: date) -> list[ProductDraft]:
    """Parse exported CSV text back into drafts.

    Best effort: the first line is skipped as a header, missing or unreadable
    fields take their defaults, and rows without a name are dropped. The Status
    column is ignored.

    Args:
        text: CSV file contents
        today: fallback for missing expiry / purchase dates

    Returns:
        list of ProductDraft, in file order
    """
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    drafts = []

    for line_no, line in enumerate(lines[1:], start=2):
        values = [v.replace('"', "") for v in line.split(",")]

        name = _column(values, 0)
        if not name:
            logger.debug("line %d: no name, skipped", line_no)
            continue

        drafts.append(ProductDraft(
            name=name,
            category=_column(values, 1) or DEFAULT_CATEGORY,
            barcode=_column(values, 2) or None,
            expiry_date=_to_date(_column(values, 3), today, line_no),
            purchase_date=_to_date(_column(values, 4), today, line_no),
            price=_to_price(_column(values, 5), line_no),
            quantity=_to_count(_column(values, 6), DEFAULT_QUANTITY, line_no, minimum=0),
            supplier=_column(values, 7) or None,
            alert_days=_to_count(_column(values, 8), DEFAULT_ALERT_DAYS, line_no, minimum=1),
        ))

    return drafts


def _column(values: list[str], index: int) -> str:
    return values[index] if index < len(values) else ""


def _format_number(value: float) -> str:
    """50.0 -> "50", 12.5 -> "12.5" """
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _to_float(value: str) -> Optional[float]:
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _to_price(value: str, line_no: int) -> float:
    number = _to_float(value)
    if number is None or number < 0:
        if value:
            logger.debug("line %d: bad price %r, using %s", line_no, value, DEFAULT_PRICE)
        return DEFAULT_PRICE
    return number


def _to_count(value: str, default: int, line_no: int, minimum: int) -> int:
    """Whole number; "3.0" is accepted, anything below ``minimum`` is not."""
    number = _to_float(value)
    if number is None or int(number) < minimum:
        if value:
            logger.debug("line %d: bad count %r, using %d", line_no, value, default)
        return default
    return int(number)


def _to_date(value: str, today: date, line_no: int) -> date:
    if not value:
        return today
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        logger.debug("line %d: bad date %r, using %s", line_no, value, today)
        return today
