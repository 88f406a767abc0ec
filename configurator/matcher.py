"""Variant lookup by attribute values."""

from typing import Any, Iterable, List, Mapping, Sequence

from configurator.models import Variant

__all__ = ["find_matching_indexes", "find_exact_index", "variant_matches"]


def _accepts(expected: Any, actual: Any) -> bool:
    if actual is None:
        return False
    # Listing filters may allow several values per attribute
    if isinstance(expected, (list, tuple, set, frozenset)):
        return actual in expected
    return expected == actual


def variant_matches(variant: Variant, attribute_filter: Mapping[str, Any]) -> bool:
    """Check a variant against every key of ``attribute_filter``.

    A variant lacking one of the filtered attributes does not match.
    """
    return all(
        _accepts(expected, variant.attribute_value(code))
        for code, expected in attribute_filter.items()
    )


def find_matching_indexes(
    variants: Sequence[Variant],
    attribute_filter: Mapping[str, Any],
) -> List[int]:
    """Return indexes of all variants matching the filter, in variant order.

    Args:
        variants: Variant list of a configurable product
        attribute_filter: Attribute code -> value (or collection of accepted
            values). May cover only some of the configurable axes.

    Returns:
        Matching indexes, ascending
    """
    return [
        index
        for index, variant in enumerate(variants)
        if variant_matches(variant, attribute_filter)
    ]


def find_exact_index(variants: Iterable[Variant], full_parameters: Mapping[str, str]) -> int:
    """Return the index of the first variant matching every parameter, or -1.

    Duplicate attribute combinations are a catalog data error; the first
    variant wins.
    """
    for index, variant in enumerate(variants):
        if variant_matches(variant, full_parameters):
            return index
    return -1
