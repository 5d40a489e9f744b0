"""Category suggestion from a product name - local keyword match"""

from typing import Optional

from .models import DEFAULT_CATEGORY

# ── keyword table ──
# keywords found in the product name -> category. First match wins.

KEYWORD_RULES: list[tuple[list[str], str]] = [
    # medicines
    (["tablet", "capsule", "syrup", "paracetamol", "ibuprofen", "antacid",
      "ointment", "vitamin", "bandage", "antiseptic", "cough", "drops"], "Medicines"),
    # cosmetics
    (["shampoo", "conditioner", "lotion", "moisturizer", "sunscreen", "lipstick",
      "face wash", "facewash", "perfume", "deodorant", "kajal", "serum", "toothpaste"], "Cosmetics"),
    # dairy
    (["milk", "curd", "yogurt", "yoghurt", "paneer", "cheese", "butter", "ghee",
      "buttermilk", "lassi", "dahi"], "Dairy Products"),
    # food & beverages
    (["juice", "tea", "coffee", "bread", "biscuit", "cookie", "chocolate", "rice",
      "atta", "flour", "dal", "oil", "sugar", "salt", "noodles", "pasta", "sauce",
      "ketchup", "jam", "egg", "chicken", "fish", "fruit", "vegetable", "snack",
      "chips", "soda", "water", "cereal", "honey", "spice", "masala"], "Food & Beverages"),
    # household
    (["detergent", "soap", "dishwash", "cleaner", "bleach", "phenyl", "tissue",
      "toilet", "garbage bag", "foil", "mosquito", "broom", "sponge", "air freshener"], "Household Items"),
    # electronics
    (["battery", "charger", "cable", "bulb", "earphone", "headphone", "adapter",
      "power bank", "remote", "led", "usb"], "Electronics"),
    # clothing
    (["shirt", "t-shirt", "trouser", "jeans", "sock", "saree", "kurta", "jacket",
      "towel", "handkerchief", "cap"], "Clothing"),
]


def suggest_category(product_name: str) -> str:
    """Pick a category for the product form.

    Args:
        product_name: name as typed or scanned

    Returns:
        one of the suggested categories, "Others" when nothing matches
    """
    return _match_local_keywords(product_name) or DEFAULT_CATEGORY


def _match_local_keywords(product_name: str) -> Optional[str]:
    """Keyword table lookup (case-insensitive, whole words)"""
    words = f" {_normalize(product_name)} "
    for keywords, category in KEYWORD_RULES:
        for kw in keywords:
            if f" {kw} " in words or f" {kw}s " in words:
                return category
    return None


def _normalize(text: str) -> str:
    cleaned = "".join(ch if ch.isalnum() or ch == "-" else " " for ch in text.lower())
    return " ".join(cleaned.split())
