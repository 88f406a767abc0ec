"""Stock status for each product type."""

from typing import Callable, Dict, Optional

from configurator.logging_config import get_logger
from configurator.models import Product, ProductType, SelectionState, StockStatus

__all__ = ["is_configurable_out_of_stock", "is_bundle_out_of_stock", "is_in_stock"]

logger = get_logger(__name__)


def is_configurable_out_of_stock(product: Product, is_preview: bool = False) -> bool:
    """True unless at least one variant is in stock.

    Preview (placeholder) cards are never purchasable.
    """
    if is_preview:
        return True
    return not any(variant.in_stock for variant in product.variants)


def is_bundle_out_of_stock(product: Product) -> bool:
    """True unless an option of the first bundle group is in stock.

    Only the first group is inspected; bundles are assumed to have a single
    option group.
    """
    if not product.bundle_items:
        return True

    if len(product.bundle_items) > 1:
        logger.debug(
            "Bundle %s has %d option groups; only the first is checked",
            product.sku, len(product.bundle_items),
        )

    first = product.bundle_items[0]
    return not any(
        option.stock_status is StockStatus.IN_STOCK
        for option in first.options
    )


def _simple_in_stock(product: Product, state: Optional[SelectionState]) -> bool:
    return product.in_stock


def _configurable_in_stock(product: Product, state: Optional[SelectionState]) -> bool:
    if state is not None and 0 <= state.resolved_index < len(product.variants):
        return product.variants[state.resolved_index].in_stock
    return not is_configurable_out_of_stock(product)


def _bundle_in_stock(product: Product, state: Optional[SelectionState]) -> bool:
    return not is_bundle_out_of_stock(product)


_STOCK_STRATEGIES: Dict[ProductType, Callable[[Product, Optional[SelectionState]], bool]] = {
    ProductType.SIMPLE: _simple_in_stock,
    ProductType.CONFIGURABLE: _configurable_in_stock,
    ProductType.BUNDLE: _bundle_in_stock,
}


def is_in_stock(
    product: Product,
    state: Optional[SelectionState] = None,
    is_preview: bool = False,
) -> bool:
    """Whether the displayed product (or its resolved variant) can be bought.

    Args:
        product: Displayed product
        state: Current selection; a resolved configurable variant uses its
            own stock status
        is_preview: Placeholder card flag

    Returns:
        True if purchasable
    """
    if is_preview:
        return False
    return _STOCK_STRATEGIES[product.type_id](product, state)
