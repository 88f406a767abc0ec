"""Shared product fixtures for the configurator test suite."""

import json

import pytest

from configurator.models import NavigationContext, Product, SelectionState


def _variant(sku, color, size, stock="IN_STOCK", image=None, thumbnail=None, price=None):
    attributes = {
        "color": {"attribute_code": "color", "attribute_value": color},
        "size": {"attribute_code": "size", "attribute_value": size},
    }
    if thumbnail is not None:
        attributes["thumbnail"] = {"attribute_code": "thumbnail", "attribute_value": thumbnail}
    record = {
        "sku": sku,
        "name": f"Shirt {color} {size}",
        "stock_status": stock,
        "attributes": attributes,
    }
    if image is not None:
        record["small_image"] = {"url": image}
    if price is not None:
        record["price_range"] = {"maximum_price": {"final_price": {"currency": "EUR", "value": price}}}
    return record


SHIRT_OPTIONS = {
    "color": {
        "attribute_code": "color",
        "attribute_label": "Color",
        "attribute_values": ["red", "blue"],
        "attribute_options": {
            "red": {"value": "red", "label": "Red", "swatch_data": {"value": "#ff0000"}},
            "blue": {"value": "blue", "label": "Blue", "swatch_data": {"value": "#0000ff"}},
        },
    },
    "size": {
        "attribute_code": "size",
        "attribute_label": "Size",
        "attribute_values": ["S", "M"],
        "attribute_options": {
            "S": {"value": "S", "label": "Small"},
            "M": {"value": "M", "label": "Medium"},
        },
    },
}


@pytest.fixture
def shirt_record():
    """Two-axis configurable product: red/S in stock, red/M out of stock."""
    return {
        "id": 1,
        "sku": "shirt",
        "name": "Shirt",
        "type_id": "configurable",
        "url": "red-shirt.html",
        "url_rewrites": [
            {"url": "/red-shirt.html"},
            {"url": "/men/shirts/red-shirt.html"},
        ],
        "small_image": {"url": "/media/parent.jpg"},
        "configurable_options": SHIRT_OPTIONS,
        "variants": [
            _variant("shirt-red-s", "red", "S", "IN_STOCK", image="/media/red-s.jpg"),
            _variant("shirt-red-m", "red", "M", "OUT_OF_STOCK"),
        ],
    }


@pytest.fixture
def shirt(shirt_record):
    return Product.from_dict(shirt_record)


@pytest.fixture
def full_shirt():
    """All four color/size combinations, blue/M out of stock."""
    return Product.from_dict({
        "sku": "full-shirt",
        "name": "Full Shirt",
        "type_id": "configurable",
        "url": "full-shirt.html",
        "small_image": {"url": "no_selection"},
        "configurable_options": SHIRT_OPTIONS,
        "variants": [
            _variant("fs-red-s", "red", "S", thumbnail="/r/e/red-s.jpg", price=10),
            _variant("fs-red-m", "red", "M", thumbnail="/r/e/red-m.jpg", price=11),
            _variant("fs-blue-s", "blue", "S", thumbnail="/b/l/blue-s.jpg", price=12),
            _variant("fs-blue-m", "blue", "M", "OUT_OF_STOCK", thumbnail="no_selection", price=13),
        ],
    })


@pytest.fixture
def simple_product():
    return Product.from_dict({
        "sku": "mug",
        "name": "Mug",
        "type_id": "simple",
        "url": "mug.html",
        "stock_status": "IN_STOCK",
        "price": 5,
        "small_image": {"url": "/media/mug.jpg"},
    })


@pytest.fixture
def bundle_record():
    return {
        "sku": "kit",
        "name": "Starter Kit",
        "type_id": "bundle",
        "url": "kit.html",
        "items": [
            {
                "title": "Chain",
                "options": [
                    {"label": "Chain A", "product": {"sku": "chain-a", "stock_status": "OUT_OF_STOCK"}},
                    {"label": "Chain B", "product": {"sku": "chain-b", "stock_status": "IN_STOCK"}},
                ],
            },
        ],
    }


@pytest.fixture
def nav():
    """Navigation inside store1 while browsing /men/shirts.html."""
    return NavigationContext(
        base_path="/store1",
        current_pathname="/store1/men/shirts.html",
        category_url_suffix=".html",
        use_categories=True,
        current_category_id=42,
    )


@pytest.fixture
def empty_state():
    return SelectionState.unresolved()


@pytest.fixture
def catalog_file(tmp_path, shirt_record, bundle_record):
    """Write a small JSON catalog and return its path."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"products": [shirt_record, bundle_record]}), encoding="utf-8")
    return path
