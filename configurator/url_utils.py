"""URL helpers for building storefront links.

Covers store prefix extraction from the configured base link URL, store
code prefixing and query string encoding of attribute selections.
"""

import re
from typing import Any, Dict, Mapping
from urllib.parse import parse_qsl, quote, urlencode, urlparse

from configurator.errors import LinkConfigurationError

__all__ = [
    "LinkConfigurationError",
    "store_prefix",
    "trim_end_slash",
    "append_with_store_code",
    "object_to_uri",
    "parse_search",
    "validate_pathname",
]


def store_prefix(base_link_url: str) -> str:
    """Extract the store prefix (path part) from the store's base link URL.

    Args:
        base_link_url: Absolute URL such as ``https://shop.example/store1/``

    Returns:
        Path of the URL, ``/`` when the URL has none

    Raises:
        LinkConfigurationError: If the URL is empty, relative or malformed
    """
    if not base_link_url or not isinstance(base_link_url, str):
        raise LinkConfigurationError("Base link URL is empty")

    try:
        parsed = urlparse(base_link_url.strip())
    except ValueError as e:
        raise LinkConfigurationError(f"Failed to parse base link URL: {e}") from e

    if parsed.scheme.lower() not in ("http", "https"):
        raise LinkConfigurationError(
            f"Base link URL must be http(s), got: {base_link_url!r}"
        )
    if not parsed.netloc:
        raise LinkConfigurationError(f"Base link URL has no host: {base_link_url!r}")

    return parsed.path or "/"


def trim_end_slash(path: str) -> str:
    return path[:-1] if path.endswith("/") else path


def append_with_store_code(pathname: str, prefix: str) -> str:
    """Prefix ``pathname`` with the store prefix unless it already carries it."""
    if not pathname:
        return trim_end_slash(prefix)

    store_root = trim_end_slash(prefix)
    if store_root and (pathname == store_root or pathname.startswith(store_root + "/")):
        return pathname

    if not pathname.startswith("/"):
        pathname = f"/{pathname}"

    return trim_end_slash(prefix) + pathname


def object_to_uri(parameters: Mapping[str, Any]) -> str:
    """Encode parameters as ``?code=value&...`` with keys in sorted order.

    Values are percent-encoded (spaces become ``%20``). Returns an empty
    string when there is nothing to encode.
    """
    if not parameters:
        return ""
    pairs = sorted((str(key), str(value)) for key, value in parameters.items())
    return "?" + urlencode(pairs, quote_via=quote)


def parse_search(search: str) -> Dict[str, str]:
    """Decode a query string into a dict, keeping the first value per key."""
    if not search:
        return {}
    result: Dict[str, str] = {}
    for key, value in parse_qsl(search.lstrip("?"), keep_blank_values=False):
        result.setdefault(key, value)
    return result


# Control characters never appear in a routable pathname
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def validate_pathname(pathname: Any, field_name: str, allow_empty: bool = False) -> str:
    """Check that a navigation path is a usable absolute path.

    Raises:
        LinkConfigurationError: If the path is not a string, is relative or
            contains control characters
    """
    if not isinstance(pathname, str):
        raise LinkConfigurationError(
            f"{field_name} must be a string, got {type(pathname).__name__}"
        )
    if not pathname:
        if allow_empty:
            return pathname
        raise LinkConfigurationError(f"{field_name} is empty")
    if not pathname.startswith("/"):
        raise LinkConfigurationError(f"{field_name} must be absolute, got: {pathname!r}")
    if _CONTROL_CHARS_RE.search(pathname):
        raise LinkConfigurationError(f"{field_name} contains control characters")
    return pathname
