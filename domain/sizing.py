"""
Size classification for Confecção OP.

Maps garment size labels ("Camiseta;TAMANHO:GG", "G1", "42") to numeric
weights so that sizes sort in domain order (PP < P < M < G < GG < ...)
instead of alphabetically. Pure functions with no side effects.
"""

import re
import unicodedata
from typing import Tuple

from config.constants import (
    SIZE_SEPARATOR,
    LETTER_SIZE_WEIGHTS,
    COMBINATION_SUFFIX_STEP,
)
from .models import SizeWeight


SIZE_TYPE_NUMBER = "number"
SIZE_TYPE_COMBINATION = "combination"
SIZE_TYPE_LETTER = "letter"
SIZE_TYPE_UNKNOWN = "unknown"

_NUMBER_PATTERN = re.compile(r"^\d+$")
_COMBINATION_PATTERN = re.compile(r"^X*[GM]\d+$", re.IGNORECASE)
_LETTER_PATTERN = re.compile(r"^X*[PMG]+$", re.IGNORECASE)
_COMBINATION_LETTERS = re.compile(r"^X*[GM]", re.IGNORECASE)
_COMBINATION_DIGITS = re.compile(r"\d+$")

UNKNOWN_WEIGHT = float("inf")


def split_product_and_size(label: str) -> Tuple[str, str]:
    """
    Split a size label into product and size parts.

    Examples:
        "Camiseta;TAMANHO:GG" -> ("Camiseta", "GG")
        "GG" -> ("GG", "GG")

    Args:
        label: Size label, with or without the ;TAMANHO: separator

    Returns:
        (product, size) tuple. Without a separator both parts are the label.
    """
    parts = label.split(SIZE_SEPARATOR)
    if len(parts) == 2:
        return parts[0], parts[1]
    return label, label


def detect_size_type(label: str) -> str:
    """
    Classify the size part of a label.

    Checked in order: number, combination (G1, XG2), letter (PP, XGG).

    Returns:
        One of "number", "combination", "letter", "unknown"
    """
    _, size = split_product_and_size(label)

    if _NUMBER_PATTERN.fullmatch(size):
        return SIZE_TYPE_NUMBER
    if _COMBINATION_PATTERN.fullmatch(size):
        return SIZE_TYPE_COMBINATION
    if _LETTER_PATTERN.fullmatch(size):
        return SIZE_TYPE_LETTER
    return SIZE_TYPE_UNKNOWN


def _letter_weight(size: str) -> float:
    normalized = size.upper()

    weight = LETTER_SIZE_WEIGHTS.get(normalized)
    if weight is not None:
        return float(weight)

    # Sizes beyond the table: XGG = 6, XXGG = 7 / XG = 6, XXG = 7
    if normalized.startswith("X"):
        x_count = normalized.count("X")
        if normalized.endswith("GG"):
            return float(6 + (x_count - 1))
        if "G" in normalized:
            return float(5 + x_count)

    return UNKNOWN_WEIGHT


def _combination_weight(size: str) -> float:
    letters = _COMBINATION_LETTERS.match(size)
    digits = _COMBINATION_DIGITS.search(size)
    letter_part = letters.group(0) if letters else ""
    number_part = int(digits.group(0)) if digits else 0
    return _letter_weight(letter_part) + number_part * COMBINATION_SUFFIX_STEP


def get_size_weight(label: str) -> SizeWeight:
    """
    Compute the ordering weight of a size label.

    Never raises: labels that match no known size format get an infinite
    weight and therefore sort last.

    Args:
        label: Size label (e.g. "Camiseta;TAMANHO:G1")

    Returns:
        SizeWeight with the weight and the unsplit label

    Example:
        >>> get_size_weight("Camiseta;TAMANHO:GG").weight
        5.0
    """
    _, size = split_product_and_size(label)
    size_type = detect_size_type(label)

    if size_type == SIZE_TYPE_NUMBER:
        weight = float(int(size))
    elif size_type == SIZE_TYPE_COMBINATION:
        weight = _combination_weight(size)
    elif size_type == SIZE_TYPE_LETTER:
        weight = _letter_weight(size)
    else:
        weight = UNKNOWN_WEIGHT

    return SizeWeight(weight=weight, original=label)


def _strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def locale_sort_key(value: str) -> Tuple[str, str, str, str]:
    """
    Sort key approximating a locale-aware string comparison.

    Base letters first (accents and case ignored), then accents, then
    case with lowercase before uppercase. Strings that still tie
    ("Maß" and "Mass" fold alike) are ordered by code point, so only
    identical strings compare equal.
    """
    folded = value.casefold()
    return (_strip_accents(folded), folded, value.swapcase(), value)


def locale_compare(a: str, b: str) -> int:
    """Three-way locale-aware comparison of two strings."""
    key_a = locale_sort_key(a)
    key_b = locale_sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def product_group(label: str) -> str:
    """
    Grouping key of a size label: the product name before ";TAMANHO:".

    Bare size tokens ("GG", "42") have no product and share the "" group,
    so a plain list of sizes is ordered by size alone.
    """
    if SIZE_SEPARATOR not in label:
        return ""
    product, _ = split_product_and_size(label)
    return product
