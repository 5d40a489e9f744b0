#!/usr/bin/env python3
"""
Perishable inventory CLI

Usage:
    freshtrack dashboard
    freshtrack list [--search TEXT] [--status fresh|warning|expired] [--sort KEY]
    freshtrack expiring | expired | low-stock [--threshold N]
    freshtrack search QUERY
    freshtrack barcode CODE
    freshtrack add --name NAME --expiry YYYY-MM-DD [...]
    freshtrack update ID [--price 45 ...]
    freshtrack delete ID
    freshtrack export [--output FILE]
    freshtrack import FILE

Every command accepts --today YYYY-MM-DD to classify against a fixed day.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

from freshtrack.config import ConfigError, load_settings, setup_logging
from freshtrack.inventory import (
    ProductDraft,
    calculate_dashboard_stats,
    calculate_expiry_status,
    export_filename,
    export_to_csv,
    filter_products,
    import_from_csv,
    sort_products,
    suggest_category,
    validate_draft,
)
from freshtrack.inventory.models import DEFAULT_ALERT_DAYS, STATUSES
from freshtrack.inventory.stats import SORT_KEYS, format_currency, format_date
from freshtrack.store import ProductStoreClient, ProductStoreError

# Alert panels on the dashboard show this many items before "+N more".
PANEL_SIZE = 3


def _day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a date (YYYY-MM-DD): {value}")


def _days_text(days: int) -> str:
    if days < 0:
        return f"expired {-days} day{'s' if days != -1 else ''} ago"
    if days == 0:
        return "expires today"
    return f"{days} day{'s' if days != 1 else ''} left"


def _confirm(prompt: str) -> bool:
    """Ask a yes/no question; a closed stdin answers no."""
    try:
        return input(prompt).strip().lower() == "y"
    except EOFError:
        print()
        return False


def _print_product(product, today: date):
    status = calculate_expiry_status(product.expiry_date, today)
    print(
        f"  {product.name} [{product.category}]  x{product.quantity}  "
        f"{format_currency(product.price)}  expires {format_date(product.expiry_date)}  "
        f"{status.status} ({_days_text(status.days_until_expiry)})"
    )
    extra = [f"id: {product.id}"]
    if product.barcode:
        extra.append(f"barcode: {product.barcode}")
    if product.supplier:
        extra.append(f"supplier: {product.supplier}")
    print(f"    {'  '.join(extra)}")


def _print_products(title: str, products, today: date, empty: str):
    if not products:
        print(empty)
        return
    print(f"=== {title} ({len(products)} items) ===\n")
    for product in products:
        _print_product(product, today)


# ── commands ──

def cmd_dashboard(args, client: ProductStoreClient, settings):
    """Summary cards and alert panels"""
    today = args.today
    products = client.get_all_products()
    expiring = client.get_expiring_products(today)
    low_stock = client.get_low_stock_products(settings.low_stock_threshold)
    stats = calculate_dashboard_stats(products, today)

    print(f"=== Dashboard ({format_date(today)}) ===\n")
    cards = [
        ("Total Products", stats.total_products),
        ("Fresh Items", stats.fresh_products),
        ("Warning Items", stats.warning_products),
        ("Expired Items", stats.expired_products),
        ("Low Stock", len(low_stock)),
        ("Total Value", format_currency(stats.total_value)),
    ]
    for title, value in cards:
        print(f"  {title:<16}{value}")

    if expiring:
        print(f"\nExpiring soon ({len(expiring)}):")
        for product in expiring[:PANEL_SIZE]:
            days = calculate_expiry_status(product.expiry_date, today).days_until_expiry
            print(f"  {product.name}  {format_date(product.expiry_date)}  ({_days_text(days)})")
        if len(expiring) > PANEL_SIZE:
            print(f"  +{len(expiring) - PANEL_SIZE} more expiring products")

    if low_stock:
        print(f"\nLow stock ({len(low_stock)}):")
        for product in low_stock[:PANEL_SIZE]:
            print(f"  {product.name}  {product.quantity} left")
        if len(low_stock) > PANEL_SIZE:
            print(f"  +{len(low_stock) - PANEL_SIZE} more low stock products")


def cmd_list(args, client: ProductStoreClient, settings):
    """Filtered, sorted product list"""
    products = client.get_all_products()
    shown = sort_products(
        filter_products(products, args.today, search=args.search, status=args.status),
        args.sort,
    )
    if not shown and (args.search or args.status != "all"):
        print("No products match. Try adjusting your search or filter criteria.")
        return
    _print_products("Products", shown, args.today, "No products in inventory.")


def cmd_expiring(args, client: ProductStoreClient, settings):
    products = client.get_expiring_products(args.today)
    _print_products("Expiring soon", products, args.today, "Nothing is about to expire.")


def cmd_expired(args, client: ProductStoreClient, settings):
    products = client.get_expired_products(args.today)
    _print_products("Expired", products, args.today, "No expired products.")


def cmd_low_stock(args, client: ProductStoreClient, settings):
    threshold = args.threshold if args.threshold is not None else settings.low_stock_threshold
    products = client.get_low_stock_products(threshold)
    _print_products(
        f"Low stock (<= {threshold})", products, args.today, "No low stock products."
    )


def cmd_search(args, client: ProductStoreClient, settings):
    products = client.search_products(args.query)
    _print_products(f"Search: {args.query}", products, args.today, "No products found.")


def cmd_barcode(args, client: ProductStoreClient, settings):
    """Look up a scanned or typed barcode"""
    product = client.get_product_by_barcode(args.code.strip())
    if product is None:
        print(f"No product with barcode {args.code}.")
        return
    _print_product(product, args.today)


def cmd_add(args, client: ProductStoreClient, settings):
    """Add one product"""
    draft = ProductDraft(
        name=args.name,
        category=args.category or suggest_category(args.name),
        expiry_date=args.expiry,
        purchase_date=args.purchase or args.today,
        price=args.price,
        quantity=args.quantity,
        barcode=args.barcode,
        supplier=args.supplier,
        alert_days=args.alert_days,
    ).cleaned()

    for warning in validate_draft(draft, args.today):
        print(f"Warning: {warning}")
        if not args.yes and not _confirm("Do you want to continue? [y/N] "):
            print("Cancelled.")
            return

    product = client.create_product(draft)
    print(f"Added {product.name} [{product.category}] (id: {product.id})")


def cmd_update(args, client: ProductStoreClient, settings):
    """Change some fields of a product"""
    fields = {
        "name": args.name,
        "category": args.category,
        "barcode": args.barcode,
        "expiry_date": args.expiry,
        "purchase_date": args.purchase,
        "price": args.price,
        "quantity": args.quantity,
        "supplier": args.supplier,
        "alert_days": args.alert_days,
    }
    updates = {key: value for key, value in fields.items() if value is not None}
    if not updates:
        raise ValueError("nothing to update")
    if updates.get("price", 0) < 0 or updates.get("quantity", 0) < 0:
        raise ValueError("price and quantity must not be negative")
    if updates.get("alert_days", 1) <= 0:
        raise ValueError("alert days must be a positive number")

    product = client.update_product(args.id, updates)
    if product is None:
        print(f"Error: no product with id {args.id}", file=sys.stderr)
        sys.exit(1)
    print(f"Updated {product.name} (id: {product.id})")


def cmd_delete(args, client: ProductStoreClient, settings):
    client.delete_product(args.id)
    print(f"Deleted {args.id}")


def cmd_export(args, client: ProductStoreClient, settings):
    """Write the whole inventory to CSV"""
    products = client.get_all_products()
    path = Path(args.output or export_filename(args.today))
    path.write_text(export_to_csv(products, args.today), encoding="utf-8")
    print(f"Exported {len(products)} products to {path}")


def cmd_import(args, client: ProductStoreClient, settings):
    """Read a CSV file and create its products in one batch"""
    text = Path(args.file).read_text(encoding="utf-8-sig")
    drafts = import_from_csv(text, args.today)
    if not drafts:
        print(f"Error: no products found in {args.file}. Please check the file format.", file=sys.stderr)
        sys.exit(1)

    created = client.bulk_create_products(drafts)
    print(f"Imported {len(created)} products from {args.file}")


COMMANDS = {
    "dashboard": cmd_dashboard,
    "list": cmd_list,
    "expiring": cmd_expiring,
    "expired": cmd_expired,
    "low-stock": cmd_low_stock,
    "search": cmd_search,
    "barcode": cmd_barcode,
    "add": cmd_add,
    "update": cmd_update,
    "delete": cmd_delete,
    "export": cmd_export,
    "import": cmd_import,
}


def _add_product_fields(parser: argparse.ArgumentParser, creating: bool):
    parser.add_argument("--name", required=creating, help="product name")
    parser.add_argument("--category", help="category (guessed from the name when adding)")
    parser.add_argument("--barcode", help="barcode or QR code")
    parser.add_argument("--expiry", type=_day, required=creating, help="expiry date (YYYY-MM-DD)")
    parser.add_argument("--purchase", type=_day, help="purchase date (default: today)")
    parser.add_argument("--price", type=float, default=0.0 if creating else None, help="unit price")
    parser.add_argument("--quantity", type=int, default=1 if creating else None, help="quantity")
    parser.add_argument("--supplier", help="supplier")
    parser.add_argument(
        "--alert-days", type=int, default=DEFAULT_ALERT_DAYS if creating else None,
        help=f"days before expiry to alert (default: {DEFAULT_ALERT_DAYS})",
    )


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--today", type=_day, help="reference day (YYYY-MM-DD, default: today)")

    parser = argparse.ArgumentParser(prog="freshtrack", description="Perishable inventory tracker")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("dashboard", parents=[common], help="summary and alerts")

    p_list = subparsers.add_parser("list", parents=[common], help="list products")
    p_list.add_argument("--search", default="", help="name, category, barcode or supplier text")
    p_list.add_argument("--status", default="all", choices=("all",) + STATUSES)
    p_list.add_argument("--sort", default="expiry_date", choices=SORT_KEYS)

    subparsers.add_parser("expiring", parents=[common], help="products inside their alert window")
    subparsers.add_parser("expired", parents=[common], help="expired products")

    p_low = subparsers.add_parser("low-stock", parents=[common], help="products running out")
    p_low.add_argument("--threshold", type=int, help="quantity at or below which stock is low")

    p_search = subparsers.add_parser("search", parents=[common], help="search the store")
    p_search.add_argument("query")

    p_barcode = subparsers.add_parser("barcode", parents=[common], help="look up a barcode")
    p_barcode.add_argument("code")

    p_add = subparsers.add_parser("add", parents=[common], help="add a product")
    _add_product_fields(p_add, creating=True)
    p_add.add_argument("--yes", action="store_true", help="do not ask for confirmation")

    p_update = subparsers.add_parser("update", parents=[common], help="update a product")
    p_update.add_argument("id")
    _add_product_fields(p_update, creating=False)

    p_delete = subparsers.add_parser("delete", parents=[common], help="delete a product")
    p_delete.add_argument("id")

    p_export = subparsers.add_parser("export", parents=[common], help="export to CSV")
    p_export.add_argument("--output", help="output file (default: inventory-export-<date>.csv)")

    p_import = subparsers.add_parser("import", parents=[common], help="import from CSV")
    p_import.add_argument("file")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command not in COMMANDS:
        parser.print_help()
        return

    args.today = args.today or date.today()

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    setup_logging(settings.log_level)

    client = ProductStoreClient(
        settings.supabase_url,
        settings.supabase_key,
        table=settings.table,
        timeout=settings.timeout,
    )
    try:
        COMMANDS[args.command](args, client, settings)
    except (ProductStoreError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
