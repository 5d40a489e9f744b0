"""Product form checks"""

from .expiry import DateLike, calculate_expiry_status
from .models import EXPIRED, ProductDraft


def validate_draft(draft: ProductDraft, today: DateLike) -> list[str]:
    """Check a draft before it is sent to the store.

    Args:
        draft: cleaned form data
        today: reference day

    Returns:
        warnings the user should confirm (empty when there are none)

    Raises:
        ValueError: a required field is missing or a number is out of range
    """
    if not draft.name.strip():
        raise ValueError("name is required")
    if not draft.category.strip():
        raise ValueError("category is required")
    if draft.price < 0:
        raise ValueError("price must not be negative")
    if draft.quantity < 0:
        raise ValueError("quantity must not be negative")
    if draft.alert_days <= 0:
        raise ValueError("alert days must be a positive number")

    warnings = []
    if calculate_expiry_status(draft.expiry_date, today).status == EXPIRED:
        warnings.append(
            "The expiry date is in the past. This product will be marked as expired."
        )
    return warnings
