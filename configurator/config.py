"""Configuration and constants for variant resolution and link building.

Store settings can be overridden from the environment (or a ``.env`` file,
loaded by the CLI through python-dotenv).
"""

import os
from typing import Any, Dict

__all__ = [
    "NO_SELECTION",
    "THUMBNAIL_ATTRIBUTE",
    "COLOR_FILTER_ATTRIBUTE",
    "DEFAULT_BASE_LINK_URL",
    "DEFAULT_CATEGORY_URL_SUFFIX",
    "DEFAULT_MEDIA_BASE_URL",
    "DEFAULT_CURRENCY",
    "get_store_settings",
]

# Magento stores this value when no image was picked for a product
NO_SELECTION = "no_selection"

# Variant attribute holding the media path of the variant image
THUMBNAIL_ATTRIBUTE = "thumbnail"

# Attribute used by the "customFilters=color_name:red,blue" listing filter
COLOR_FILTER_ATTRIBUTE = "color_name"

DEFAULT_BASE_LINK_URL = "http://localhost/"
DEFAULT_CATEGORY_URL_SUFFIX = ".html"
DEFAULT_MEDIA_BASE_URL = "/media/catalog/product"
DEFAULT_CURRENCY = "EUR"


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def get_store_settings() -> Dict[str, Any]:
    """Read store settings from the environment.

    Read on every call so a ``.env`` loaded after import still applies.
    """
    return {
        "base_link_url": os.getenv("BASE_LINK_URL", DEFAULT_BASE_LINK_URL),
        "use_categories": _env_flag("PRODUCT_USE_CATEGORIES"),
        "category_url_suffix": os.getenv("CATEGORY_URL_SUFFIX", DEFAULT_CATEGORY_URL_SUFFIX),
        "media_base_url": os.getenv("MEDIA_BASE_URL", DEFAULT_MEDIA_BASE_URL),
        "currency": os.getenv("STORE_CURRENCY", DEFAULT_CURRENCY),
    }
