"""
Size Sort Operations for Confecção OP.

Size-aware ordering of grade lines and size labels.
Pure functions - no database access, no side effects.

Items are grouped by product (text before ";TAMANHO:"), groups are ordered
alphabetically and items inside a group by size weight, so that
"Camiseta;TAMANHO:P" comes before "Camiseta;TAMANHO:GG".
"""

import logging
from functools import cmp_to_key
from typing import Any, Dict, List, Sequence

from domain.sizing import (
    get_size_weight,
    locale_compare,
    locale_sort_key,
    product_group,
)

logger = logging.getLogger(__name__)


def get_field_value(item: Any, field: str) -> Any:
    """
    Read a field from a dict or an object.

    Returns:
        The field value, or None if the item has no such field
    """
    if isinstance(item, dict):
        return item.get(field)
    return getattr(item, field, None)


def _label_of(item: Any, size_key: str) -> str:
    value = get_field_value(item, size_key)
    return "" if value is None else str(value)


def compare_size_labels(a: str, b: str) -> int:
    """
    Three-way comparison of two size labels.

    Order: product prefix (alphabetical), then size weight, then the full
    label. Negate the result for descending order.

    Returns:
        -1, 0 or 1
    """
    product_a = product_group(a)
    product_b = product_group(b)
    if product_a != product_b:
        return locale_compare(product_a, product_b)

    weight_a = get_size_weight(a).weight
    weight_b = get_size_weight(b).weight
    if weight_a != weight_b:
        return -1 if weight_a < weight_b else 1

    return locale_compare(a, b)


def _compare_within_group(a: str, b: str) -> int:
    weight_a = get_size_weight(a).weight
    weight_b = get_size_weight(b).weight
    if weight_a == weight_b:
        return locale_compare(a, b)
    return -1 if weight_a < weight_b else 1


def sort_by_size(items: Sequence[Any], size_key: str) -> List[Any]:
    """
    Sort records by a size-label field, grouped by product.

    Args:
        items: Dicts or objects holding a size label
        size_key: Field holding the label (e.g. "nome")

    Returns:
        New list; groups in alphabetical product order, each group in
        ascending size order. The input is not modified.

    Example:
        >>> grades = [{"nome": "Camiseta;TAMANHO:GG"}, {"nome": "Camiseta;TAMANHO:P"}]
        >>> [g["nome"] for g in sort_by_size(grades, "nome")]
        ['Camiseta;TAMANHO:P', 'Camiseta;TAMANHO:GG']
    """
    groups: Dict[str, List[Any]] = {}
    for item in items:
        product = product_group(_label_of(item, size_key))
        groups.setdefault(product, []).append(item)

    within = cmp_to_key(
        lambda x, y: _compare_within_group(_label_of(x, size_key), _label_of(y, size_key))
    )

    result = []
    for product in sorted(groups, key=locale_sort_key):
        result.extend(sorted(groups[product], key=within))

    logger.debug(f"Sorted {len(result)} items by size in {len(groups)} product groups")
    return result


def sort_size_labels(labels: Sequence[str]) -> List[str]:
    """
    Sort plain size labels, grouped by product.

    Example:
        >>> sort_size_labels(["GG", "PP", "M", "P", "G"])
        ['PP', 'P', 'M', 'G', 'GG']
    """
    return sorted(labels, key=cmp_to_key(compare_size_labels))
