"""Variant resolution engine for configurable storefront products."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from configurator.links import build_link
from configurator.listing import ProductCard, expand_listing, listing_frame
from configurator.matcher import find_exact_index, find_matching_indexes
from configurator.models import (
    LinkDescriptor,
    NavigationContext,
    Product,
    ProductType,
    SelectionState,
    StockStatus,
    Variant,
)
from configurator.selection import (
    apply_attribute_selection,
    get_active_product,
    resolve,
    selection_changed,
    selection_from_search,
)
from configurator.stock import is_bundle_out_of_stock, is_configurable_out_of_stock, is_in_stock
from configurator.thumbnail import resolve_thumbnail, thumbnail_for_selection
from configurator.errors import CatalogLoadError, ConfiguratorError, LinkConfigurationError

__all__ = [
    # Version
    "__version__",
    # Models
    "Product",
    "ProductType",
    "StockStatus",
    "Variant",
    "SelectionState",
    "NavigationContext",
    "LinkDescriptor",
    # Matching and selection
    "find_matching_indexes",
    "find_exact_index",
    "resolve",
    "apply_attribute_selection",
    "selection_changed",
    "selection_from_search",
    "get_active_product",
    # Derived values
    "is_configurable_out_of_stock",
    "is_bundle_out_of_stock",
    "is_in_stock",
    "resolve_thumbnail",
    "thumbnail_for_selection",
    "build_link",
    # Errors
    "ConfiguratorError",
    "LinkConfigurationError",
    "CatalogLoadError",
    # Listing
    "ProductCard",
    "expand_listing",
    "listing_frame",
]
