"""
Unit tests for Sort Operations.

Tests cover direction cycling, multi-column state updates, column
comparison strategies and the TableSorter controller.
"""

from datetime import date, datetime

import pytest

from config.settings import Settings
from domain.exceptions import ValidationError
from domain.models import ColumnKind, SortConfig
from operations.sort_ops import (
    next_direction,
    make_sort_state,
    request_sort,
    compare_generic,
    compare_values,
    get_sorted_items,
    TableSorter,
)
from operations.size_sort_ops import sort_by_size


@pytest.fixture
def rows():
    """Order table rows."""
    return [
        {"ordem": "0003", "cliente": "Beta", "total": 10, "inicio": "05-03-2024"},
        {"ordem": "0001", "cliente": "alfa", "total": 9, "inicio": "01-12-2023"},
        {"ordem": "0002", "cliente": "Beta", "total": 2, "inicio": "20-01-2024"},
        {"ordem": "0004", "cliente": "Alfa", "total": 9, "inicio": None},
    ]


def _keys(state):
    return [(c.key, c.direction) for c in state]


# ============================================================================
# Direction cycling and state updates
# ============================================================================

def test_next_direction_cycle():
    """Test none -> asc -> desc -> none."""
    assert next_direction(None) == "asc"
    assert next_direction("asc") == "desc"
    assert next_direction("desc") is None


def test_request_sort_single_column_cycle():
    """Test repeated clicks on one column."""
    state = request_sort((), "cliente")
    assert _keys(state) == [("cliente", "asc")]

    state = request_sort(state, "cliente")
    assert _keys(state) == [("cliente", "desc")]

    state = request_sort(state, "cliente")
    assert state == ()


def test_request_sort_replaces_other_columns():
    """Test a plain click drops other active columns."""
    state = make_sort_state([("ordem", "desc"), ("cliente", "asc")])
    state = request_sort(state, "total")
    assert _keys(state) == [("total", "asc")]


def test_request_sort_plain_click_keeps_cycle_of_clicked_column():
    """Test a plain click on an active column advances its own direction."""
    state = make_sort_state([("ordem", "asc"), ("cliente", "asc")])
    state = request_sort(state, "cliente")
    assert _keys(state) == [("cliente", "desc")]


def test_request_sort_additive_appends():
    """Test shift-click appends a new column with lowest priority."""
    state = request_sort((), "cliente")
    state = request_sort(state, "total", additive=True)
    assert _keys(state) == [("cliente", "asc"), ("total", "asc")]


def test_request_sort_additive_updates_in_place():
    """Test shift-click on an active column keeps its priority."""
    state = make_sort_state([("cliente", "asc"), ("total", "asc")])
    state = request_sort(state, "cliente", additive=True)
    assert _keys(state) == [("cliente", "desc"), ("total", "asc")]


def test_request_sort_additive_removes_on_none():
    """Test shift-click removes a column cycling back to none."""
    state = make_sort_state([("cliente", "desc"), ("total", "asc")])
    state = request_sort(state, "cliente", additive=True)
    assert _keys(state) == [("total", "asc")]


def test_request_sort_does_not_mutate_state():
    """Test state tuples are never modified."""
    state = make_sort_state([("cliente", "asc")])
    request_sort(state, "total", additive=True)
    assert _keys(state) == [("cliente", "asc")]


def test_request_sort_empty_key():
    """Test empty keys are rejected."""
    with pytest.raises(ValidationError):
        request_sort((), "  ")


def test_make_sort_state():
    """Test building state from pairs and configs."""
    state = make_sort_state([("ordem", "DESC"), SortConfig("cliente", "asc"), ("total", None)])
    assert _keys(state) == [("ordem", "desc"), ("cliente", "asc")]


def test_make_sort_state_invalid_direction():
    """Test invalid directions are rejected."""
    with pytest.raises(ValidationError):
        make_sort_state([("ordem", "up")])


def test_sort_config_validation():
    """Test SortConfig model validation."""
    with pytest.raises(ValueError):
        SortConfig("")
    with pytest.raises(ValueError):
        SortConfig("ordem", "sideways")


# ============================================================================
# Comparators
# ============================================================================

def test_compare_generic_numbers():
    """Test numeric values compare numerically."""
    assert compare_generic(2, 10) == -1
    assert compare_generic(10.5, 10) == 1
    assert compare_generic(3, 3) == 0


def test_compare_generic_text_is_case_insensitive():
    """Test text comparison ignores case."""
    assert compare_generic("alfa", "Beta") == -1
    assert compare_generic("Alfa", "alfa") == 0
    assert compare_generic("Éder", "Edson") == -1


def test_compare_generic_dates():
    """Test date objects compare by instant."""
    assert compare_generic(date(2024, 1, 1), datetime(2024, 1, 2)) == -1
    assert compare_generic(datetime(2024, 5, 1), datetime(2024, 1, 1)) == 1


def test_compare_generic_none_sorts_last():
    """Test missing values sort after present values."""
    assert compare_generic(None, "a") == 1
    assert compare_generic("a", None) == -1
    assert compare_generic(None, None) == 0


def test_compare_generic_numeric_kind_converts_text():
    """Test NUMERIC columns compare text numbers as numbers."""
    assert compare_generic("9", "10", ColumnKind.NUMERIC) == -1
    assert compare_generic("9", "10") == 1  # Text compare without a kind
    assert compare_generic("1,5", "1.2", ColumnKind.NUMERIC) == 1


def test_compare_generic_date_kind_parses_strings():
    """Test DATE columns parse stored dd-mm-yyyy strings."""
    assert compare_generic("05-03-2024", "20-01-2024", ColumnKind.DATE) == 1
    assert compare_generic("01-12-2023", "2024-01-01", ColumnKind.DATE) == -1


def test_compare_values_size_detection():
    """Test size labels are detected in undeclared columns."""
    assert compare_values("C;TAMANHO:GG", "C;TAMANHO:P") == 1
    # Declared STRING columns compare as text
    assert compare_values("C;TAMANHO:GG", "C;TAMANHO:P", ColumnKind.STRING) == -1


def test_compare_values_force_size():
    """Test force_size compares bare tokens as sizes."""
    assert compare_values("GG", "P") == -1  # Text
    assert compare_values("GG", "P", force_size=True) == 1
    assert compare_values("GG", "P", ColumnKind.SIZE_LABEL) == 1


def test_compare_values_custom_comparator():
    """Test a custom comparator takes over non-size columns."""
    by_length = lambda a, b: len(a) - len(b)
    assert compare_values("ccc", "a", custom_comparator=by_length) > 0
    # Size labels still win over the custom comparator
    assert compare_values("C;TAMANHO:P", "C;TAMANHO:GG", custom_comparator=by_length) == -1


# ============================================================================
# get_sorted_items
# ============================================================================

def test_get_sorted_items_passthrough(rows):
    """Test the same sequence is returned when nothing is active."""
    assert get_sorted_items((), rows) is rows


def test_get_sorted_items_single_desc(rows):
    """Test single column descending."""
    state = make_sort_state([("ordem", "desc")])
    result = get_sorted_items(state, rows)
    assert [r["ordem"] for r in result] == ["0004", "0003", "0002", "0001"]


def test_get_sorted_items_multi_column(rows):
    """Test ties on the first column are broken by the second."""
    state = make_sort_state([("cliente", "asc"), ("ordem", "desc")])
    result = get_sorted_items(state, rows)
    assert [r["ordem"] for r in result] == ["0004", "0001", "0003", "0002"]


def test_get_sorted_items_is_stable(rows):
    """Test rows equal on every key keep input order."""
    state = make_sort_state([("total", "asc")])
    result = get_sorted_items(state, rows)
    assert [r["ordem"] for r in result] == ["0002", "0001", "0004", "0003"]


def test_get_sorted_items_is_idempotent(rows):
    """Test sorting sorted rows changes nothing."""
    state = make_sort_state([("cliente", "desc"), ("total", "asc")])
    once = get_sorted_items(state, rows)
    twice = get_sorted_items(state, once)
    assert list(once) == list(twice)


def test_get_sorted_items_does_not_mutate(rows):
    """Test input rows keep their order."""
    original = list(rows)
    get_sorted_items(make_sort_state([("total", "asc")]), rows)
    assert rows == original


def test_get_sorted_items_date_column(rows):
    """Test DATE column ordering with a missing value."""
    state = make_sort_state([("inicio", "asc")])
    result = get_sorted_items(state, rows, column_kinds={"inicio": ColumnKind.DATE})
    assert [r["ordem"] for r in result] == ["0001", "0002", "0003", "0004"]


def test_get_sorted_items_size_desc():
    """Test descending size labels reverse groups and sizes."""
    items = [
        {"nome": "Alfa;TAMANHO:P"},
        {"nome": "Zeta;TAMANHO:GG"},
        {"nome": "Alfa;TAMANHO:GG"},
        {"nome": "Zeta;TAMANHO:P"},
    ]
    state = make_sort_state([("nome", "desc")])
    result = get_sorted_items(state, items)
    assert [i["nome"] for i in result] == [
        "Zeta;TAMANHO:GG",
        "Zeta;TAMANHO:P",
        "Alfa;TAMANHO:GG",
        "Alfa;TAMANHO:P",
    ]


# ============================================================================
# TableSorter
# ============================================================================

def test_table_sorter_header_clicks(rows):
    """Test the controller tracks header clicks."""
    sorter = TableSorter(initial=[("ordem", "desc")])
    assert sorter.direction_for("ordem") == "desc"
    assert sorter.sort_index("ordem") == 1

    sorter.request_sort("cliente")
    sorter.request_sort("total", additive=True)
    assert sorter.sort_index("cliente") == 1
    assert sorter.sort_index("total") == 2
    assert sorter.sort_index("ordem") == 0
    assert sorter.direction_for("ordem") is None

    result = sorter.get_sorted_items(rows)
    assert [r["ordem"] for r in result] == ["0001", "0004", "0002", "0003"]


def test_table_sorter_reset():
    """Test reset restores the initial configs."""
    sorter = TableSorter(initial=[("ordem", "desc")])
    sorter.request_sort("cliente")
    sorter.reset()
    assert [(c.key, c.direction) for c in sorter.sort_configs] == [("ordem", "desc")]


def test_table_sorter_custom_column_requires_comparator():
    """Test CUSTOM columns need a comparator."""
    with pytest.raises(ValidationError):
        TableSorter(column_kinds={"x": ColumnKind.CUSTOM})


def test_table_sorter_from_settings():
    """Test default sort column comes from settings."""
    settings = Settings(default_sort_key="cliente", default_sort_direction="asc")
    sorter = TableSorter.from_settings(settings)
    assert sorter.direction_for("cliente") == "asc"


def test_get_sorted_items_size_column_matches_sort_by_size():
    """Test the table sort groups size labels like sort_by_size."""
    items = [{"nome": "Maß;TAMANHO:GG"}, {"nome": "Mass;TAMANHO:P"}, {"nome": "Maß;TAMANHO:P"}]
    result = get_sorted_items(make_sort_state([("nome", "asc")]), items)

    assert [i["nome"] for i in result] == [i["nome"] for i in sort_by_size(items, "nome")]
