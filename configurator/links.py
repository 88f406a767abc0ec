"""Link building for product cards.

``build_link`` derives the pathname, query string and history state a card
links to. When the store uses category paths in product URLs, a URL rewrite
matching the category currently being browsed is preferred over the
product's default URL.
"""

from typing import Optional

from configurator.logging_config import get_logger, log_selection_event
from configurator.models import (
    LinkDescriptor,
    LinkState,
    NavigationContext,
    Product,
    SelectionState,
    UrlRewrite,
)
from configurator.url_utils import (
    LinkConfigurationError,
    append_with_store_code,
    object_to_uri,
    validate_pathname,
)

__all__ = ["build_link", "canonical_product_url", "find_url_rewrite"]

logger = get_logger(__name__)


def _check_navigation(nav: NavigationContext) -> None:
    validate_pathname(nav.base_path, "base_path", allow_empty=True)
    validate_pathname(nav.current_pathname, "current_pathname")
    if not isinstance(nav.category_url_suffix, str):
        raise LinkConfigurationError(
            f"category_url_suffix must be a string, got {type(nav.category_url_suffix).__name__}"
        )


def canonical_product_url(product_url: str, nav: NavigationContext) -> str:
    """Product URL as it would appear under the category being browsed.

    ``/store1/men/shirts.html`` + ``red-shirt.html`` -> ``/men/shirts/red-shirt.html``
    """
    category_part = (
        nav.current_pathname
        .replace(nav.base_path, "", 1)
        .replace(nav.category_url_suffix, "", 1)
    )
    return f"{category_part}/{product_url.replace(nav.base_path, '', 1)}"


def find_url_rewrite(product: Product, canonical_url: str) -> Optional[UrlRewrite]:
    """First rewrite whose URL contains ``canonical_url``.

    Containment, not equality: a longer rewrite sharing the prefix also
    matches.
    """
    for rewrite in product.url_rewrites:
        if canonical_url in rewrite.url:
            return rewrite
    return None


def build_link(
    product: Product,
    state: SelectionState,
    nav: NavigationContext,
) -> Optional[LinkDescriptor]:
    """Build the link descriptor for a product card.

    Args:
        product: Product the card shows
        state: Current selection, encoded into the query string
        nav: Routing snapshot

    Returns:
        LinkDescriptor, or None when the product has no URL

    Raises:
        LinkConfigurationError: If the navigation context is malformed
    """
    _check_navigation(nav)

    if not product.url:
        return None

    pathname = product.url
    if nav.use_categories:
        rewrite = find_url_rewrite(product, canonical_product_url(product.url, nav))
        if rewrite is not None:
            pathname = append_with_store_code(rewrite.url, nav.base_path)
        else:
            logger.debug("No URL rewrite for %s under %s", product.sku, nav.current_pathname)

    link = LinkDescriptor(
        pathname=pathname,
        search=object_to_uri(state.parameters),
        state=LinkState(product=product, prev_category_id=nav.current_category_id),
    )
    log_selection_event(
        "link_built",
        {"sku": product.sku, "pathname": link.pathname, "search": link.search},
        logger_name=__name__,
    )
    return link
