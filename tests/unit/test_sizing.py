"""
Unit tests for size classification.

Tests cover label splitting, size type detection and size weights.
"""

import math

import pytest

from domain.models import SizeWeight
from domain.sizing import (
    split_product_and_size,
    detect_size_type,
    get_size_weight,
    product_group,
    locale_compare,
)


def test_split_product_and_size_with_separator():
    """Test splitting a full size label."""
    assert split_product_and_size("Camiseta Básica;TAMANHO:GG") == ("Camiseta Básica", "GG")


def test_split_product_and_size_bare_token():
    """Test that a bare token is both product and size."""
    assert split_product_and_size("GG") == ("GG", "GG")


def test_product_group():
    """Test grouping key: product name, or "" for bare tokens."""
    assert product_group("Camiseta;TAMANHO:P") == "Camiseta"
    assert product_group("P") == ""


def test_detect_size_type():
    """Test size type detection order."""
    assert detect_size_type("42") == "number"
    assert detect_size_type("G1") == "combination"
    assert detect_size_type("xg2") == "combination"  # Case-insensitive
    assert detect_size_type("XGG") == "letter"
    assert detect_size_type("Camiseta;TAMANHO:M") == "letter"
    assert detect_size_type("XL-CUSTOM") == "unknown"
    assert detect_size_type("Camiseta;TAMANHO:Único") == "unknown"


@pytest.mark.parametrize(
    "label,expected",
    [
        ("PP", 1),
        ("P", 2),
        ("M", 3),
        ("G", 4),
        ("GG", 5),
        ("XGG", 6),
        ("XXGG", 7),
        ("XXXGG", 8),
        ("gg", 5),
    ],
)
def test_letter_weights_from_table(label, expected):
    """Test fixed letter size weights."""
    assert get_size_weight(label).weight == expected


def test_letter_weights_beyond_table():
    """Test computed weights for X-prefixed sizes not in the table."""
    assert get_size_weight("XG").weight == 6
    assert get_size_weight("XXG").weight == 7
    assert get_size_weight("XXXXGG").weight == 9


def test_letter_pattern_without_known_weight_is_unknown():
    """Test letter tokens that match the pattern but have no weight."""
    assert math.isinf(get_size_weight("MM").weight)
    assert math.isinf(get_size_weight("XM").weight)


def test_combination_weights():
    """Test letter + numeric suffix weights."""
    assert get_size_weight("G1").weight == pytest.approx(4.01)
    assert get_size_weight("XG2").weight == pytest.approx(6.02)
    assert get_size_weight("M10").weight == pytest.approx(3.10)


def test_number_weights():
    """Test numeric sizes weigh their value."""
    assert get_size_weight("Calça;TAMANHO:42").weight == 42
    assert get_size_weight("2").weight == 2


def test_unknown_weight_is_infinite():
    """Test unclassifiable sizes degrade to infinity without raising."""
    weight = get_size_weight("Camiseta;TAMANHO:XL-CUSTOM")
    assert math.isinf(weight.weight)
    assert math.isinf(get_size_weight("").weight)


def test_size_weight_keeps_original_label():
    """Test the unsplit label is returned."""
    result = get_size_weight("Camiseta;TAMANHO:M")
    assert result == SizeWeight(weight=3, original="Camiseta;TAMANHO:M")


def test_locale_compare():
    """Test locale-aware string comparison."""
    assert locale_compare("abacate", "Banana") == -1  # Case ignored for base letters
    assert locale_compare("ética", "fruta") == -1  # Accent ignored for base letters
    assert locale_compare("e", "é") == -1  # Unaccented first on tie
    assert locale_compare("a", "A") == -1  # Lowercase first on tie
    assert locale_compare("Alfa", "Alfa") == 0


def test_locale_compare_only_identical_strings_tie():
    """Test strings that fold alike still have a definite order."""
    assert locale_compare("Mass", "Maß") == -1
    assert locale_compare("Maß", "Mass") == 1
