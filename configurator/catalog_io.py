"""Catalog file loading and listing export."""

import json
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from configurator.errors import CatalogLoadError
from configurator.listing import ProductCard, listing_frame
from configurator.logging_config import get_logger
from configurator.models import NavigationContext, Product

__all__ = ["CatalogLoadError", "products_from_payload", "load_products", "export_listing_csv"]

logger = get_logger(__name__)


def products_from_payload(payload: Any) -> List[Product]:
    """Parse products from a decoded payload.

    Accepts a bare list of product records or an object holding them under
    ``products`` or ``items``.
    """
    if isinstance(payload, dict):
        payload = payload.get("products", payload.get("items"))
    if not isinstance(payload, list):
        raise CatalogLoadError("Catalog must be a list of products or contain 'products'/'items'")
    return [Product.from_dict(record) for record in payload if isinstance(record, dict)]


def load_products(path: Union[str, Path]) -> List[Product]:
    """Load product records from a JSON catalog file.

    Raises:
        CatalogLoadError: If the file is missing, unreadable or not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as e:
        raise CatalogLoadError(f"Cannot read catalog {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Catalog {path} is not valid JSON: {e}") from e

    products = products_from_payload(payload)
    logger.info("Loaded %d products from %s", len(products), path)
    return products


def export_listing_csv(
    cards: Iterable[ProductCard],
    path: Union[str, Path],
    nav: Optional[NavigationContext] = None,
) -> int:
    """Write the listing summary to CSV and return the number of rows."""
    df = listing_frame(cards, nav=nav)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logger.info("Exported %d cards to %s", len(df), path)
    return len(df)
