"""Thumbnail selection for product cards.

Fallback order: the active product or variant image, then the parent
product image, then an empty string.
"""

from typing import Optional, Union

from configurator.config import DEFAULT_MEDIA_BASE_URL, NO_SELECTION
from configurator.models import Product, SelectionState, Variant
from configurator.selection import get_active_product

__all__ = [
    "is_thumbnail_available",
    "resolve_thumbnail",
    "thumbnail_for_selection",
    "media_url",
]


def is_thumbnail_available(path: Optional[str]) -> bool:
    return bool(path) and path != NO_SELECTION


def resolve_thumbnail(product_or_variant: Union[Product, Variant], parent: Product) -> str:
    """Return the first usable image URL of the active record or its parent."""
    if is_thumbnail_available(product_or_variant.small_image_url):
        return product_or_variant.small_image_url

    if is_thumbnail_available(parent.small_image_url):
        return parent.small_image_url

    return ""


def thumbnail_for_selection(product: Product, state: SelectionState) -> str:
    return resolve_thumbnail(get_active_product(product, state), product)


def media_url(path: Optional[str], media_base_url: str = DEFAULT_MEDIA_BASE_URL) -> str:
    """Turn a catalog media path (``/r/e/red.jpg``) into an image URL.

    Absolute URLs pass through unchanged; empty or ``no_selection`` paths
    give an empty string.
    """
    if not is_thumbnail_available(path):
        return ""
    if path.startswith(("http://", "https://", "//")):
        return path
    return f"{media_base_url.rstrip('/')}/{path.lstrip('/')}"
