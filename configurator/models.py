"""Data models for products, variants and selection state.

Records are built from the catalog payloads handed over by the data layer
(``Product.from_dict``). Parsing is forgiving: a missing or malformed
collection becomes empty so resolution degrades to "unresolved" instead of
failing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from configurator.url_utils import store_prefix

__all__ = [
    "ProductType",
    "StockStatus",
    "OptionValue",
    "AttributeOption",
    "AttributeValue",
    "Variant",
    "BundleOption",
    "BundleItem",
    "UrlRewrite",
    "Product",
    "SelectionState",
    "NavigationContext",
    "LinkState",
    "LinkDescriptor",
]


class ProductType(Enum):
    """Closed set of product types the engine knows how to resolve."""

    SIMPLE = "simple"
    CONFIGURABLE = "configurable"
    BUNDLE = "bundle"

    @classmethod
    def parse(cls, raw: Any) -> "ProductType":
        """Parse a ``type_id`` string; anything unknown resolves like a simple product."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).lower())
        except ValueError:
            return cls.SIMPLE


class StockStatus(Enum):
    IN_STOCK = "IN_STOCK"
    OUT_OF_STOCK = "OUT_OF_STOCK"

    @classmethod
    def parse(cls, raw: Any) -> "StockStatus":
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).upper())
        except ValueError:
            return cls.OUT_OF_STOCK


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _image_url(value: Any) -> Optional[str]:
    # small_image arrives either as {"url": ...} or as a bare string
    if isinstance(value, str):
        return value
    url = _as_dict(value).get("url")
    return url if isinstance(url, str) else None


def _price(data: Dict[str, Any]) -> Optional[float]:
    """Extract a price from a flat ``price`` field or a ``price_range`` block."""
    raw = data.get("price")
    if raw is None:
        final = (
            _as_dict(_as_dict(_as_dict(data.get("price_range")).get("maximum_price")).get("final_price"))
        )
        raw = final.get("value")
    try:
        return float(raw) if raw is not None else None
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class OptionValue:
    """One selectable value of a configurable axis (e.g. ``red`` for color)."""

    value: str
    label: str = ""
    swatch_data: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], fallback_value: str = "") -> "OptionValue":
        value = data.get("value", fallback_value)
        swatch = data.get("swatch_data")
        return cls(
            value=str(value),
            label=str(data.get("label") or value),
            swatch_data=swatch if isinstance(swatch, dict) else None,
        )


@dataclass(frozen=True)
class AttributeOption:
    """A configurable axis defined once on the parent product."""

    code: str
    label: str = ""
    values: Dict[str, OptionValue] = field(default_factory=dict)

    @property
    def is_swatch(self) -> bool:
        """Swatch axes are rendered as clickable chips instead of a dropdown."""
        first = next(iter(self.values.values()), None)
        return bool(first and first.swatch_data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], code: str = "") -> "AttributeOption":
        code = str(data.get("attribute_code") or code)
        values: Dict[str, OptionValue] = {}

        options = data.get("attribute_options")
        if isinstance(options, dict):
            for key, option in options.items():
                parsed = OptionValue.from_dict(_as_dict(option), fallback_value=str(key))
                values[parsed.value] = parsed

        # attribute_values lists the selectable values even when labels are absent
        for raw in _as_list(data.get("attribute_values")):
            if isinstance(raw, dict):
                parsed = OptionValue.from_dict(raw)
            else:
                parsed = OptionValue(value=str(raw), label=str(raw))
            values.setdefault(parsed.value, parsed)

        return cls(
            code=code,
            label=str(data.get("attribute_label") or data.get("label") or code),
            values=values,
        )


@dataclass(frozen=True)
class AttributeValue:
    """The value an attribute takes on a product or variant.

    ``options`` is populated for parent product attributes, which carry the
    full list of values for the axis.
    """

    code: str
    value: Optional[str] = None
    label: Optional[str] = None
    options: Dict[str, OptionValue] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], code: str = "") -> "AttributeValue":
        raw_value = data.get("attribute_value")
        options = {}
        for key, option in _as_dict(data.get("attribute_options")).items():
            parsed = OptionValue.from_dict(_as_dict(option), fallback_value=str(key))
            options[parsed.value] = parsed
        return cls(
            code=str(data.get("attribute_code") or code),
            value=str(raw_value) if raw_value is not None else None,
            label=data.get("attribute_label"),
            options=options,
        )


def _parse_attributes(raw: Any) -> Dict[str, AttributeValue]:
    attributes: Dict[str, AttributeValue] = {}
    for code, data in _as_dict(raw).items():
        if isinstance(data, dict):
            attributes[str(code)] = AttributeValue.from_dict(data, code=str(code))
    return attributes


@dataclass(frozen=True)
class Variant:
    """A concrete purchasable SKU fixing one value per configurable axis."""

    sku: str
    name: Optional[str] = None
    attributes: Dict[str, AttributeValue] = field(default_factory=dict)
    stock_status: StockStatus = StockStatus.OUT_OF_STOCK
    price: Optional[float] = None
    small_image_url: Optional[str] = None
    id: Optional[int] = None

    def attribute_value(self, code: str) -> Optional[str]:
        """Return the value for ``code``, or None when the variant lacks it."""
        attribute = self.attributes.get(code)
        return attribute.value if attribute is not None else None

    @property
    def in_stock(self) -> bool:
        return self.stock_status is StockStatus.IN_STOCK

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Variant":
        # Some payloads nest the SKU data under "product"
        product = _as_dict(data.get("product"))
        source = {**product, **{k: v for k, v in data.items() if k != "product"}}
        return cls(
            sku=str(source.get("sku") or ""),
            name=source.get("name"),
            attributes=_parse_attributes(source.get("attributes")),
            stock_status=StockStatus.parse(source.get("stock_status")),
            price=_price(source),
            small_image_url=_image_url(source.get("small_image")),
            id=source.get("id"),
        )


@dataclass(frozen=True)
class BundleOption:
    label: str = ""
    sku: Optional[str] = None
    stock_status: Optional[StockStatus] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BundleOption":
        product = data.get("product")
        if not isinstance(product, dict):
            return cls(label=str(data.get("label") or ""))
        return cls(
            label=str(data.get("label") or product.get("name") or ""),
            sku=product.get("sku"),
            stock_status=StockStatus.parse(product.get("stock_status")),
        )


@dataclass(frozen=True)
class BundleItem:
    """A bundle option group; each option points at a nested product."""

    title: str = ""
    options: List[BundleOption] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BundleItem":
        return cls(
            title=str(data.get("title") or ""),
            options=[
                BundleOption.from_dict(option)
                for option in _as_list(data.get("options"))
                if isinstance(option, dict)
            ],
        )


@dataclass(frozen=True)
class UrlRewrite:
    url: str


@dataclass(frozen=True)
class Product:
    """A catalog product as handed over by the data layer.

    Configurable products define their axes in ``configurable_options`` and
    list one ``Variant`` per SKU. Bundle products group nested products in
    ``bundle_items``.
    """

    sku: str
    type_id: ProductType = ProductType.SIMPLE
    name: Optional[str] = None
    id: Optional[int] = None
    configurable_options: Dict[str, AttributeOption] = field(default_factory=dict)
    variants: List[Variant] = field(default_factory=list)
    bundle_items: List[BundleItem] = field(default_factory=list)
    url: Optional[str] = None
    url_rewrites: List[UrlRewrite] = field(default_factory=list)
    small_image_url: Optional[str] = None
    attributes: Dict[str, AttributeValue] = field(default_factory=dict)
    stock_status: StockStatus = StockStatus.OUT_OF_STOCK
    price: Optional[float] = None

    @property
    def configurable_codes(self) -> List[str]:
        """Attribute codes of every configurable axis, in definition order."""
        return list(self.configurable_options)

    @property
    def in_stock(self) -> bool:
        return self.stock_status is StockStatus.IN_STOCK

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Build a product from a catalog payload.

        Args:
            data: Product record, typically decoded from JSON

        Returns:
            Parsed Product; missing collections are left empty
        """
        raw_options = data.get("configurable_options")
        options: Dict[str, AttributeOption] = {}
        if isinstance(raw_options, dict):
            for code, option in raw_options.items():
                parsed = AttributeOption.from_dict(_as_dict(option), code=str(code))
                options[parsed.code] = parsed
        else:
            for option in _as_list(raw_options):
                if isinstance(option, dict):
                    parsed = AttributeOption.from_dict(option)
                    options[parsed.code] = parsed

        bundle_items = data.get("bundle_items", data.get("items"))

        return cls(
            sku=str(data.get("sku") or ""),
            type_id=ProductType.parse(data.get("type_id")),
            name=data.get("name"),
            id=data.get("id"),
            configurable_options=options,
            variants=[
                Variant.from_dict(variant)
                for variant in _as_list(data.get("variants"))
                if isinstance(variant, dict)
            ],
            bundle_items=[
                BundleItem.from_dict(item)
                for item in _as_list(bundle_items)
                if isinstance(item, dict)
            ],
            url=data.get("url") or None,
            url_rewrites=[
                UrlRewrite(url=str(rewrite["url"]))
                for rewrite in _as_list(data.get("url_rewrites"))
                if isinstance(rewrite, dict) and rewrite.get("url")
            ],
            small_image_url=_image_url(data.get("small_image")),
            attributes=_parse_attributes(data.get("attributes")),
            stock_status=StockStatus.parse(data.get("stock_status")),
            price=_price(data),
        )


@dataclass(frozen=True)
class SelectionState:
    """The (possibly partial) attribute selection for one display context.

    ``resolved_index`` is -1 unless the selection identifies exactly one
    variant. States are replaced, never mutated; compare two states to find
    out whether dependents need to be refreshed.
    """

    parameters: Mapping[str, str] = field(default_factory=dict)
    resolved_index: int = -1

    def __post_init__(self):
        object.__setattr__(self, "parameters", dict(self.parameters))

    @property
    def is_resolved(self) -> bool:
        return self.resolved_index >= 0

    @classmethod
    def unresolved(cls) -> "SelectionState":
        return cls(parameters={}, resolved_index=-1)


@dataclass(frozen=True)
class NavigationContext:
    """Snapshot of the routing state a link is built against.

    ``base_path`` is the store prefix taken from the store's base link URL
    (e.g. ``/store1/``).
    """

    base_path: str
    current_pathname: str
    category_url_suffix: str = ""
    use_categories: bool = False
    current_category_id: Optional[Any] = None

    @classmethod
    def from_base_link_url(
        cls,
        base_link_url: str,
        current_pathname: str,
        category_url_suffix: str = "",
        use_categories: bool = False,
        current_category_id: Optional[Any] = None,
    ) -> "NavigationContext":
        """Build a context from the store's configured base link URL.

        Raises:
            LinkConfigurationError: If the base link URL cannot be parsed
        """
        return cls(
            base_path=store_prefix(base_link_url),
            current_pathname=current_pathname,
            category_url_suffix=category_url_suffix or "",
            use_categories=use_categories,
            current_category_id=current_category_id,
        )


@dataclass(frozen=True)
class LinkState:
    """History state carried with a link so back-navigation skips a refetch."""

    product: Product
    prev_category_id: Optional[Any] = None


@dataclass(frozen=True)
class LinkDescriptor:
    pathname: str
    search: str
    state: LinkState
