"""Tests for catalog record parsing and value types."""

import pytest

from configurator.models import (
    NavigationContext,
    Product,
    ProductType,
    SelectionState,
    StockStatus,
    Variant,
)
from configurator.url_utils import LinkConfigurationError


class TestProductParsing:
    """Tests for Product.from_dict."""

    def test_configurable_product(self, shirt):
        """Verify a configurable record parses into options, variants and rewrites."""
        assert shirt.type_id is ProductType.CONFIGURABLE
        assert shirt.configurable_codes == ["color", "size"]
        assert len(shirt.variants) == 2
        assert shirt.small_image_url == "/media/parent.jpg"
        assert [r.url for r in shirt.url_rewrites] == ["/red-shirt.html", "/men/shirts/red-shirt.html"]

    def test_option_values_and_labels(self, shirt):
        """Verify option values keep labels and swatch data."""
        color = shirt.configurable_options["color"]
        assert color.label == "Color"
        assert set(color.values) == {"red", "blue"}
        assert color.values["red"].label == "Red"
        assert color.is_swatch is True
        assert shirt.configurable_options["size"].is_swatch is False

    def test_variant_fields(self, shirt):
        """Verify variant attributes and stock status are parsed."""
        variant = shirt.variants[1]
        assert variant.sku == "shirt-red-m"
        assert variant.attribute_value("color") == "red"
        assert variant.attribute_value("size") == "M"
        assert variant.attribute_value("material") is None
        assert variant.stock_status is StockStatus.OUT_OF_STOCK
        assert variant.in_stock is False

    def test_price_from_price_range(self, full_shirt):
        """Verify the price falls back to the price range."""
        assert full_shirt.variants[0].price == 10.0

    def test_flat_price(self, simple_product):
        """Verify a flat price and stock status on a simple product."""
        assert simple_product.price == 5.0
        assert simple_product.in_stock is True

    def test_bundle_items_from_items_key(self, bundle_record):
        """Verify bundle groups are parsed from the items key."""
        product = Product.from_dict(bundle_record)
        assert product.type_id is ProductType.BUNDLE
        assert len(product.bundle_items) == 1
        options = product.bundle_items[0].options
        assert [o.sku for o in options] == ["chain-a", "chain-b"]
        assert options[1].stock_status is StockStatus.IN_STOCK

    def test_configurable_options_as_list(self):
        """Verify configurable options may be given as a list."""
        product = Product.from_dict({
            "sku": "p",
            "type_id": "configurable",
            "configurable_options": [
                {"attribute_code": "color", "attribute_values": ["red"]},
                {"attribute_code": "size", "attribute_values": [{"value": "S", "label": "Small"}]},
            ],
        })
        assert product.configurable_codes == ["color", "size"]
        assert product.configurable_options["size"].values["S"].label == "Small"

    @pytest.mark.parametrize("raw", ["virtual", "grouped", None, 12])
    def test_unknown_type_is_simple(self, raw):
        """Verify unknown product types parse as simple."""
        assert ProductType.parse(raw) is ProductType.SIMPLE

    def test_missing_collections_are_empty(self):
        """Verify missing collections default to empty."""
        product = Product.from_dict({"sku": "bare", "type_id": "configurable"})
        assert product.configurable_options == {}
        assert product.variants == []
        assert product.bundle_items == []
        assert product.url_rewrites == []
        assert product.url is None
        assert product.small_image_url is None

    def test_malformed_collections_are_ignored(self):
        """Verify malformed collection entries are skipped."""
        product = Product.from_dict({
            "sku": "broken",
            "type_id": "configurable",
            "configurable_options": "color,size",
            "variants": [None, "x", {"sku": "ok", "attributes": None}],
            "url_rewrites": [{"url": ""}, {"nope": 1}, {"url": "/a.html"}],
        })
        assert product.configurable_options == {}
        assert len(product.variants) == 1
        assert product.variants[0].attributes == {}
        assert [r.url for r in product.url_rewrites] == ["/a.html"]

    def test_unknown_stock_status_is_out_of_stock(self):
        """Verify an unknown stock status counts as out of stock."""
        variant = Variant.from_dict({"sku": "v", "stock_status": "BACKORDER"})
        assert variant.stock_status is StockStatus.OUT_OF_STOCK

    def test_variant_nested_under_product(self):
        """Verify variant fields nested under product are merged."""
        variant = Variant.from_dict({
            "product": {
                "sku": "nested",
                "stock_status": "IN_STOCK",
                "attributes": {"color": {"attribute_value": "red"}},
            },
        })
        assert variant.sku == "nested"
        assert variant.in_stock is True
        assert variant.attribute_value("color") == "red"

    def test_numeric_attribute_values_become_strings(self):
        """Verify numeric attribute values are stored as strings."""
        variant = Variant.from_dict({"sku": "v", "attributes": {"size": {"attribute_value": 42}}})
        assert variant.attribute_value("size") == "42"


class TestSelectionState:
    """Tests for the SelectionState value type."""

    def test_unresolved(self):
        """Verify the unresolved state is empty with index -1."""
        state = SelectionState.unresolved()
        assert state.parameters == {}
        assert state.resolved_index == -1
        assert state.is_resolved is False

    def test_parameters_are_copied(self):
        """Verify the state copies its parameters on creation."""
        source = {"color": "red"}
        state = SelectionState(parameters=source, resolved_index=-1)
        source["size"] = "M"
        assert state.parameters == {"color": "red"}

    def test_value_equality(self):
        """Verify states compare by value."""
        assert SelectionState({"color": "red"}, 0) == SelectionState({"color": "red"}, 0)
        assert SelectionState({"color": "red"}, 0) != SelectionState({"color": "red"}, -1)

    def test_frozen(self):
        """Verify SelectionState cannot be mutated."""
        state = SelectionState({}, -1)
        with pytest.raises(AttributeError):
            state.resolved_index = 3


class TestNavigationContext:
    """Tests for building a navigation context from store settings."""

    def test_from_base_link_url(self):
        """Verify the base path is taken from the base link URL."""
        nav = NavigationContext.from_base_link_url(
            "https://shop.example/store1/",
            current_pathname="/store1/men.html",
            category_url_suffix=".html",
            use_categories=True,
        )
        assert nav.base_path == "/store1/"
        assert nav.use_categories is True
        assert nav.current_category_id is None

    def test_none_suffix_becomes_empty(self):
        """Verify a None suffix becomes an empty string."""
        nav = NavigationContext.from_base_link_url(
            "https://shop.example", current_pathname="/", category_url_suffix=None
        )
        assert nav.base_path == "/"
        assert nav.category_url_suffix == ""

    def test_invalid_base_link_url_raises(self):
        """Verify a relative base link URL raises LinkConfigurationError."""
        with pytest.raises(LinkConfigurationError):
            NavigationContext.from_base_link_url("store1", current_pathname="/")
