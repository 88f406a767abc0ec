"""Product listing expansion.

A category listing shows configurable products as one card per variant:
each card is pinned to its variant through a forced index and takes the
variant's SKU, name, price and image. Other product types render as a
single card resolved from the shared listing filters.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import pandas as pd

from configurator.config import (
    COLOR_FILTER_ATTRIBUTE,
    DEFAULT_CURRENCY,
    DEFAULT_MEDIA_BASE_URL,
    THUMBNAIL_ATTRIBUTE,
)
from configurator.links import build_link
from configurator.logging_config import get_logger
from configurator.models import NavigationContext, Product, ProductType, SelectionState, Variant
from configurator.selection import resolve
from configurator.stock import is_in_stock
from configurator.thumbnail import media_url, thumbnail_for_selection

__all__ = [
    "ProductCard",
    "parse_custom_filters",
    "expand_listing",
    "listing_frame",
]

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProductCard:
    """One rendered card of a listing page."""

    product: Product
    selection: SelectionState
    forced_index: int = -1
    thumbnail: str = ""
    in_stock: bool = False

    @property
    def sku(self) -> str:
        return self.product.sku

    @property
    def name(self) -> Optional[str]:
        return self.product.name

    @property
    def price(self) -> Optional[float]:
        return self.product.price


def parse_custom_filters(custom_filters: Optional[str]) -> Optional[Tuple[str, List[str]]]:
    """Parse ``color_name:red,blue`` into ``("color_name", ["red", "blue"])``.

    Without a ``code:`` prefix the values apply to the color filter
    attribute.
    """
    if not custom_filters:
        return None
    code, sep, values = custom_filters.partition(":")
    if not sep:
        code, values = COLOR_FILTER_ATTRIBUTE, custom_filters
    accepted = [value.strip() for value in values.split(",") if value.strip()]
    return code.strip(), accepted


def _passes_custom_filter(variant: Variant, custom: Optional[Tuple[str, List[str]]]) -> bool:
    if custom is None:
        return True
    code, accepted = custom
    value = variant.attribute_value(code)
    # Variants without the attribute are not filtered out
    return value is None or value in accepted


def _variant_card_product(product: Product, variant: Variant, media_base_url: str) -> Product:
    image = media_url(variant.attribute_value(THUMBNAIL_ATTRIBUTE), media_base_url)
    return dataclasses.replace(
        product,
        sku=variant.sku or product.sku,
        name=variant.name or product.name,
        price=variant.price if variant.price is not None else product.price,
        small_image_url=image or product.small_image_url,
    )


def _make_card(
    product: Product,
    selected_filters: Mapping[str, Any],
    forced_index: int = -1,
) -> ProductCard:
    selection = resolve(product, selected_filters, forced_index)
    return ProductCard(
        product=product,
        selection=selection,
        forced_index=forced_index,
        thumbnail=thumbnail_for_selection(product, selection),
        in_stock=is_in_stock(product, selection),
    )


def expand_listing(
    products: Iterable[Product],
    selected_filters: Optional[Mapping[str, Any]] = None,
    custom_filters: Optional[str] = None,
    media_base_url: str = DEFAULT_MEDIA_BASE_URL,
) -> List[ProductCard]:
    """Expand products into listing cards.

    Args:
        products: Products of the listing page, in display order
        selected_filters: Filters applied to the whole listing
        custom_filters: Optional ``code:v1,v2`` filter on variants
        media_base_url: Base URL for variant media paths

    Returns:
        Cards in display order
    """
    selected_filters = dict(selected_filters or {})
    custom = parse_custom_filters(custom_filters)
    cards: List[ProductCard] = []

    for product in products:
        if product.type_id is not ProductType.CONFIGURABLE:
            cards.append(_make_card(product, selected_filters))
            continue

        if not product.variants:
            logger.debug("Configurable product %s has no variants; no cards", product.sku)
            continue

        for index, variant in enumerate(product.variants):
            if not _passes_custom_filter(variant, custom):
                continue
            card_product = _variant_card_product(product, variant, media_base_url)
            cards.append(_make_card(card_product, selected_filters, forced_index=index))

    logger.debug("Expanded %d cards from listing", len(cards))
    return cards


def listing_frame(
    cards: Iterable[ProductCard],
    nav: Optional[NavigationContext] = None,
    currency: str = DEFAULT_CURRENCY,
) -> pd.DataFrame:
    """Summarize cards as a DataFrame (one row per card).

    Link columns are filled when a navigation context is given.
    """
    rows: List[Dict[str, Any]] = []
    for card in cards:
        row: Dict[str, Any] = {
            "sku": card.sku,
            "name": card.name,
            "price": card.price,
            "currency": currency,
            "type": card.product.type_id.value,
            "resolved_index": card.selection.resolved_index,
            "parameters": ", ".join(f"{k}={v}" for k, v in sorted(card.selection.parameters.items())),
            "in_stock": card.in_stock,
            "thumbnail": card.thumbnail,
        }
        if nav is not None:
            link = build_link(card.product, card.selection, nav)
            row["pathname"] = link.pathname if link else None
            row["search"] = link.search if link else None
        rows.append(row)

    columns = [
        "sku", "name", "price", "currency", "type",
        "resolved_index", "parameters", "in_stock", "thumbnail",
    ]
    if nav is not None:
        columns += ["pathname", "search"]
    return pd.DataFrame(rows, columns=columns)
