"""Selection resolution for configurable products.

Turns a selection input into a ``SelectionState``:

- ``resolve`` handles the two render-time strategies: shared listing
  filters, or a forced variant index (one card per variant).
- ``apply_attribute_selection`` handles one attribute click at a time.

A state only carries a resolved index when every configurable axis has a
value and a variant with exactly that combination exists.
"""

import dataclasses
from typing import Any, Mapping, Optional, Union

from configurator.logging_config import get_logger, log_selection_event
from configurator.matcher import find_exact_index, find_matching_indexes
from configurator.models import (
    AttributeValue,
    Product,
    ProductType,
    SelectionState,
    Variant,
)
from configurator.url_utils import parse_search

__all__ = [
    "resolve",
    "apply_attribute_selection",
    "selection_changed",
    "get_active_product",
    "get_attribute",
    "is_value_available",
    "is_value_selected",
    "selected_option_label",
    "selection_from_search",
]

logger = get_logger(__name__)


def _covers_all_axes(product: Product, parameters: Mapping[str, Any]) -> bool:
    codes = set(product.configurable_codes)
    return bool(codes) and set(parameters) == codes


def _resolve_forced(product: Product, forced_index: int) -> SelectionState:
    """Pin the state to one variant, taking all of its configurable values."""
    if forced_index >= len(product.variants):
        logger.debug(
            "Forced index %d out of range for %s (%d variants)",
            forced_index, product.sku, len(product.variants),
        )
        return SelectionState.unresolved()

    variant = product.variants[forced_index]
    parameters = {
        code: variant.attribute_value(code)
        for code in product.configurable_codes
        if variant.attribute_value(code) is not None
    }
    if not _covers_all_axes(product, parameters):
        logger.debug(
            "Variant %d of %s lacks configurable values %s",
            forced_index, product.sku,
            sorted(set(product.configurable_codes) - set(parameters)),
        )
        return SelectionState(parameters=parameters, resolved_index=-1)

    return SelectionState(parameters=parameters, resolved_index=forced_index)


def _resolve_filtered(product: Product, selected_filters: Mapping[str, Any]) -> SelectionState:
    """Derive the state from shared filters; partial filters stay unresolved."""
    candidates = find_matching_indexes(product.variants, selected_filters)
    if not candidates:
        return SelectionState.unresolved()

    index = candidates[0]
    variant = product.variants[index]
    codes = set(product.configurable_codes)

    # Take the candidate's concrete value so multi-value filters collapse to one
    parameters = {
        code: variant.attribute_value(code)
        for code in selected_filters
        if code in codes
    }

    resolved_index = index if _covers_all_axes(product, parameters) else -1
    return SelectionState(parameters=parameters, resolved_index=resolved_index)


def resolve(
    product: Product,
    selected_filters: Optional[Mapping[str, Any]] = None,
    forced_index: Optional[int] = -1,
) -> SelectionState:
    """Resolve the selection for one product display.

    Args:
        product: Product being displayed
        selected_filters: Attribute filters shared by the listing; a value may
            be a single value or a collection of accepted values
        forced_index: Variant to pin the display to, -1/None for none. When
            given, the filters are ignored.

    Returns:
        New SelectionState
    """
    selected_filters = dict(selected_filters or {})
    forced = forced_index if forced_index is not None else -1

    if not selected_filters and forced < 0:
        return SelectionState.unresolved()

    if forced >= 0:
        state = _resolve_forced(product, forced)
    else:
        state = _resolve_filtered(product, selected_filters)

    log_selection_event(
        "selection_resolved",
        {
            "sku": product.sku,
            "forced_index": forced,
            "filters": {k: str(v) for k, v in selected_filters.items()},
            "resolved_index": state.resolved_index,
        },
        logger_name=__name__,
    )
    return state


def apply_attribute_selection(
    state: SelectionState,
    product: Product,
    attribute_code: str,
    value: str,
    toggle: bool = False,
) -> SelectionState:
    """Apply one attribute click and return the next state.

    The new value overwrites any previous value for the axis. With
    ``toggle`` set, clicking the already selected value clears the axis.
    The index is only looked up once every axis has a value; a complete
    combination without a variant yields -1.
    """
    parameters = dict(state.parameters)
    if toggle and parameters.get(attribute_code) == value:
        del parameters[attribute_code]
    else:
        parameters[attribute_code] = value

    if _covers_all_axes(product, parameters):
        resolved_index = find_exact_index(product.variants, parameters)
    else:
        resolved_index = -1

    new_state = SelectionState(parameters=parameters, resolved_index=resolved_index)
    if selection_changed(state, new_state):
        log_selection_event(
            "selection_changed",
            {
                "sku": product.sku,
                "attribute_code": attribute_code,
                "value": value,
                "previous_index": state.resolved_index,
                "resolved_index": resolved_index,
            },
            logger_name=__name__,
        )
    return new_state


def selection_changed(old: SelectionState, new: SelectionState) -> bool:
    """True when dependents (stock, thumbnail, link) must be recomputed."""
    return old.resolved_index != new.resolved_index


def get_active_product(product: Product, state: SelectionState) -> Union[Product, Variant]:
    """Return the resolved variant of a configurable product, else the product."""
    if product.type_id is ProductType.CONFIGURABLE and product.variants:
        if 0 <= state.resolved_index < len(product.variants):
            return product.variants[state.resolved_index]
    return product


def get_attribute(
    product: Product,
    state: SelectionState,
    code: str,
    selected_filters: Optional[Mapping[str, Any]] = None,
) -> Optional[AttributeValue]:
    """Look up an attribute for display.

    Without filters this is the parent's own attribute. With filters it is
    the active variant's value, carrying the parent's option list for the
    axis so labels can be rendered.
    """
    if not selected_filters:
        return product.attributes.get(code)

    active = get_active_product(product, state)
    attribute = active.attributes.get(code) or product.attributes.get(code)
    if attribute is None:
        return None

    parent = product.attributes.get(code)
    options = parent.options if parent is not None else {}
    if not options and code in product.configurable_options:
        options = product.configurable_options[code].values
    return dataclasses.replace(attribute, options=dict(options))


def is_value_available(product: Product, state: SelectionState, code: str, value: str) -> bool:
    """Whether picking ``value`` for ``code`` can still lead to an in-stock variant."""
    parameters = {**state.parameters, code: value}
    return any(
        product.variants[index].in_stock
        for index in find_matching_indexes(product.variants, parameters)
    )


def is_value_selected(state: SelectionState, code: str, value: str) -> bool:
    return state.parameters.get(code) == value


def selected_option_label(product: Product, state: SelectionState, code: str) -> str:
    selected = state.parameters.get(code)
    option = product.configurable_options.get(code)
    if not selected or option is None:
        return ""
    option_value = option.values.get(selected)
    return option_value.label if option_value is not None else ""


def selection_from_search(
    product: Product,
    search: str,
    state: Optional[SelectionState] = None,
) -> SelectionState:
    """Restore a selection from a deep link query string (``?color=red``).

    Each configurable axis present in the query is applied as a click, in
    axis order. Unknown query keys are ignored.
    """
    state = state or SelectionState.unresolved()
    query = parse_search(search)
    for code in product.configurable_codes:
        if code in query:
            state = apply_attribute_selection(state, product, code, query[code])
    return state
