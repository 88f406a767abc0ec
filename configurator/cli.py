"""Command-line interface for resolving selections against a catalog file."""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv

from configurator.catalog_io import export_listing_csv, load_products
from configurator.config import get_store_settings
from configurator.errors import CatalogLoadError, LinkConfigurationError
from configurator.links import build_link
from configurator.listing import expand_listing, listing_frame
from configurator.logging_config import get_logger, setup_logging
from configurator.models import NavigationContext, Product
from configurator.selection import (
    apply_attribute_selection,
    get_active_product,
    resolve,
    selection_changed,
)
from configurator.stock import is_in_stock
from configurator.thumbnail import thumbnail_for_selection

__all__ = ["main", "parse_args", "parse_pairs", "parse_click_pairs"]

logger = get_logger(__name__)


def parse_click_pairs(pairs: Optional[List[str]]) -> List[Tuple[str, str]]:
    """Parse ``code=value`` arguments into an ordered list of pairs."""
    result: List[Tuple[str, str]] = []
    for pair in pairs or []:
        code, sep, value = pair.partition("=")
        if not sep or not code.strip():
            raise argparse.ArgumentTypeError(f"Expected code=value, got: {pair!r}")
        result.append((code.strip(), value.strip()))
    return result


def parse_pairs(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Parse ``code=value`` arguments; later pairs win."""
    return dict(parse_click_pairs(pairs))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resolve configurable product selections and build product links",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resolve a selection made of two attribute clicks
  python -m configurator.cli --catalog data/catalog.json --sku shirt --select color=red --select size=M

  # Pin the card to the second variant and build its link under a category page
  python -m configurator.cli --catalog data/catalog.json --sku shirt --index 1 --pathname /men/shirts.html

  # Show the expanded listing, keeping only red and blue variants
  python -m configurator.cli --catalog data/catalog.json --listing --custom-filters color_name:red,blue

  # Export the listing to CSV
  python -m configurator.cli --catalog data/catalog.json --export-csv data/listing.csv
        """,
    )

    parser.add_argument("--catalog", required=True, metavar="PATH", help="JSON catalog file")
    parser.add_argument("--sku", help="Product to resolve (default: first product in the catalog)")
    parser.add_argument(
        "--select",
        action="append",
        metavar="CODE=VALUE",
        help="Attribute click, applied in order (repeatable)",
    )
    parser.add_argument(
        "--filter",
        action="append",
        metavar="CODE=VALUE",
        help="Listing filter shared by all cards (repeatable)",
    )
    parser.add_argument("--index", type=int, default=-1, help="Forced variant index (default: -1)")

    # Navigation snapshot
    parser.add_argument("--pathname", default="/", help="Current page pathname (default: /)")
    parser.add_argument("--category-id", help="Category being browsed, kept in link state")

    # Listing
    parser.add_argument("--listing", action="store_true", help="Print the expanded listing")
    parser.add_argument("--custom-filters", metavar="CODE:V1,V2", help="Variant filter for the listing")
    parser.add_argument("--export-csv", metavar="PATH", help="Export the expanded listing to CSV")

    # Logging
    parser.add_argument("--verbose", action="store_true", help="Debug output on the console")
    parser.add_argument("--no-log-file", action="store_true", help="Don't write JSONL logs")

    return parser.parse_args(argv)


def _pick_product(products: List[Product], sku: Optional[str]) -> Optional[Product]:
    if not products:
        return None
    if sku is None:
        return products[0]
    return next((p for p in products if p.sku == sku), None)


def _navigation(settings: Dict, args: argparse.Namespace) -> NavigationContext:
    return NavigationContext.from_base_link_url(
        settings["base_link_url"],
        current_pathname=args.pathname,
        category_url_suffix=settings["category_url_suffix"],
        use_categories=settings["use_categories"],
        current_category_id=args.category_id,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI. Returns the process exit code."""
    load_dotenv()
    args = parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_to_file=not args.no_log_file,
    )

    try:
        filters = parse_pairs(args.filter)
        clicks = parse_click_pairs(args.select)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        products = load_products(args.catalog)
    except CatalogLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    settings = get_store_settings()
    try:
        nav = _navigation(settings, args)
    except LinkConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.listing or args.export_csv:
        cards = expand_listing(
            products,
            selected_filters=filters,
            custom_filters=args.custom_filters,
            media_base_url=settings["media_base_url"],
        )
        if args.export_csv:
            count = export_listing_csv(cards, args.export_csv, nav=nav)
            print(f"Exported {count} cards to {args.export_csv}")
        if args.listing:
            df = listing_frame(cards, nav=nav, currency=settings["currency"])
            print(df.to_string(index=False) if not df.empty else "No cards")
        return 0

    product = _pick_product(products, args.sku)
    if product is None:
        print(f"Error: product {args.sku or ''} not found in {args.catalog}", file=sys.stderr)
        return 1

    state = resolve(product, filters, args.index)
    for code, value in clicks:
        new_state = apply_attribute_selection(state, product, code, value)
        if selection_changed(state, new_state):
            logger.info("Selection of %s now resolves to index %d", product.sku, new_state.resolved_index)
        state = new_state

    active = get_active_product(product, state)
    link = build_link(product, state, nav)

    result = {
        "sku": product.sku,
        "parameters": dict(state.parameters),
        "resolved_index": state.resolved_index,
        "variant_sku": active.sku if active is not product else None,
        "in_stock": is_in_stock(product, state),
        "thumbnail": thumbnail_for_selection(product, state),
        "link": None if link is None else {
            "pathname": link.pathname,
            "search": link.search,
            "prev_category_id": link.state.prev_category_id,
        },
    }
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
