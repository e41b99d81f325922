"""
Sort Operations for Confecção OP.

Multi-column sorting for order tables.

The sort state is an ordered tuple of SortConfig (first = highest
priority). Clicking a column header cycles its direction
none -> asc -> desc -> none; shift-click adds the column as a secondary
key instead of replacing the current ones.

Pure functions over (state, event) -> state and (state, items) -> items,
plus TableSorter, which owns the state of one table.
"""

import logging
from datetime import date, datetime
from functools import cmp_to_key
from numbers import Number
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from config.constants import SIZE_MARKER, SORT_ASC, SORT_DESC
from config.settings import Settings, get_settings
from domain.exceptions import ValidationError
from domain.models import ColumnKind, SortConfig
from domain.rules import parse_date
from domain.sizing import locale_sort_key
from domain.validators import validate_sort_direction, validate_sort_key
from operations.size_sort_ops import compare_size_labels, get_field_value

logger = logging.getLogger(__name__)

SortState = Tuple[SortConfig, ...]
Comparator = Callable[[Any, Any], int]

_DIRECTION_CYCLE = {None: SORT_ASC, SORT_ASC: SORT_DESC, SORT_DESC: None}


def next_direction(current: Optional[str]) -> Optional[str]:
    """
    Next direction when a column header is clicked.

    None -> "asc" -> "desc" -> None
    """
    return _DIRECTION_CYCLE[current]


def make_sort_state(configs: Sequence[Any] = ()) -> SortState:
    """
    Build a sort state from SortConfig objects or (key, direction) pairs.

    Configs with direction None are dropped.

    Raises:
        ValidationError: If a key or direction is invalid
    """
    state = []
    for config in configs:
        if isinstance(config, SortConfig):
            key, direction = config.key, config.direction
        else:
            key, direction = config
        direction = validate_sort_direction(direction)
        if direction is None:
            continue
        state.append(SortConfig(key=validate_sort_key(key), direction=direction))
    return tuple(state)


def request_sort(state: SortState, key: str, additive: bool = False) -> SortState:
    """
    Apply a header click to the sort state.

    Args:
        state: Current sort state
        key: Column field that was clicked
        additive: True when shift was held (multi-column sort)

    Returns:
        New sort state. Without additive, only the clicked column stays
        active. With additive, other columns keep their position and
        priority; the clicked column is updated in place, appended if new,
        or removed when its direction cycles back to none.

    Example:
        >>> state = request_sort((), "nome")
        >>> state = request_sort(state, "cliente", additive=True)
        >>> [(c.key, c.direction) for c in state]
        [('nome', 'asc'), ('cliente', 'asc')]
    """
    key = validate_sort_key(key)
    existing = next((c for c in state if c.key == key), None)
    direction = next_direction(existing.direction if existing else None)

    if not additive:
        new_state = (SortConfig(key=key, direction=direction),) if direction else ()
    elif existing is None:
        new_state = tuple(state) + (SortConfig(key=key, direction=direction),)
    elif direction is None:
        new_state = tuple(c for c in state if c.key != key)
    else:
        new_state = tuple(
            SortConfig(key=key, direction=direction) if c.key == key else c
            for c in state
        )

    logger.debug(
        f"Sort request '{key}' (additive={additive}): "
        f"{[(c.key, c.direction) for c in new_state]}"
    )
    return new_state


def _compare_text(a: str, b: str) -> int:
    # Case-insensitive: accents and case only matter through the base letters
    key_a = locale_sort_key(a)[:2]
    key_b = locale_sort_key(b)[:2]
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def _compare_ordered(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def _compare_instants(a: datetime, b: datetime) -> int:
    if (a.tzinfo is None) != (b.tzinfo is None):
        return _compare_ordered(a.timestamp(), b.timestamp())
    return _compare_ordered(a, b)


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _to_float(value: Any) -> Optional[float]:
    if _is_number(value):
        return float(value)
    try:
        return float(str(value).strip().replace(",", "."))
    except ValueError:
        return None


def compare_generic(a: Any, b: Any, kind: Optional[ColumnKind] = None) -> int:
    """
    Compare two column values.

    Without a declared kind: numbers numerically, dates by instant,
    anything else as case-insensitive text. A declared NUMERIC or DATE
    kind also converts text values ("10", "05-03-2024") before comparing,
    falling back to text comparison when conversion fails.

    Missing values (None) compare equal to each other and sort after
    present values.
    """
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1

    if kind == ColumnKind.NUMERIC:
        num_a, num_b = _to_float(a), _to_float(b)
        if num_a is not None and num_b is not None:
            return _compare_ordered(num_a, num_b)
    elif kind == ColumnKind.DATE:
        date_a, date_b = parse_date(a), parse_date(b)
        if date_a is not None and date_b is not None:
            return _compare_instants(date_a, date_b)
    elif kind is None:
        if _is_number(a) and _is_number(b):
            return _compare_ordered(a, b)
        if isinstance(a, (date, datetime)) and isinstance(b, (date, datetime)):
            return _compare_instants(parse_date(a), parse_date(b))

    return _compare_text(str(a), str(b))


def _is_size_label(value: Any) -> bool:
    return isinstance(value, str) and SIZE_MARKER in value


def compare_values(
    a: Any,
    b: Any,
    kind: Optional[ColumnKind] = None,
    custom_comparator: Optional[Comparator] = None,
    force_size: bool = False,
) -> int:
    """
    Compare two values of one column in ascending order.

    Strategy, first match wins:
    1. Size labels: the column is declared SIZE_LABEL, force_size is set,
       or (undeclared column) both values contain "TAMANHO:"
    2. custom_comparator, when supplied
    3. compare_generic() for the declared kind

    Returns:
        Negative, zero or positive
    """
    if (
        kind == ColumnKind.SIZE_LABEL
        or force_size
        or (kind is None and _is_size_label(a) and _is_size_label(b))
    ):
        return compare_size_labels(
            "" if a is None else str(a),
            "" if b is None else str(b),
        )

    if custom_comparator is not None:
        return custom_comparator(a, b)

    return compare_generic(a, b, kind)


def get_sorted_items(
    state: SortState,
    items: Sequence[Any],
    column_kinds: Optional[Dict[str, ColumnKind]] = None,
    custom_comparator: Optional[Comparator] = None,
    force_size: bool = False,
) -> Sequence[Any]:
    """
    Sort table rows by the active sort configs.

    The first config whose comparison is non-zero decides the order of two
    rows; "desc" negates the comparison. Rows equal on every config keep
    their relative order (stable sort).

    Args:
        state: Active sort configs, highest priority first
        items: Rows (dicts or objects)
        column_kinds: Optional comparison strategy per column
        custom_comparator: Optional comparator used for all non-size columns
        force_size: Compare every column as size labels

    Returns:
        items itself when no config is active, otherwise a new sorted list
    """
    active = [c for c in state if c.direction is not None]
    if not active:
        return items

    kinds = column_kinds or {}

    def _compare_rows(row_a: Any, row_b: Any) -> int:
        for config in active:
            result = compare_values(
                get_field_value(row_a, config.key),
                get_field_value(row_b, config.key),
                kind=kinds.get(config.key),
                custom_comparator=custom_comparator,
                force_size=force_size,
            )
            if result:
                return -result if config.direction == SORT_DESC else result
        return 0

    return sorted(items, key=cmp_to_key(_compare_rows))


class TableSorter:
    """
    Sort controller owned by one table.

    Holds the active sort configs and applies them to rows.

    Usage:
        sorter = TableSorter(initial=[("numero", "desc")])
        sorter.request_sort("cliente", additive=True)   # shift-click
        rows = sorter.get_sorted_items(rows)
    """

    def __init__(
        self,
        initial: Sequence[Any] = (),
        column_kinds: Optional[Dict[str, ColumnKind]] = None,
        custom_comparator: Optional[Comparator] = None,
        force_size: bool = False,
    ):
        """
        Initialize sorter.

        Args:
            initial: Default configs, as SortConfig or (key, direction) pairs
            column_kinds: Optional comparison strategy per column
            custom_comparator: Comparator for non-size columns
            force_size: Compare every column as size labels

        Raises:
            ValidationError: If a config is invalid, or a column is declared
                CUSTOM without a custom_comparator
        """
        self.column_kinds = dict(column_kinds or {})
        self.custom_comparator = custom_comparator
        self.force_size = force_size

        custom_columns = [k for k, v in self.column_kinds.items() if v == ColumnKind.CUSTOM]
        if custom_columns and custom_comparator is None:
            raise ValidationError(
                "Custom columns require a custom_comparator",
                details={"columns": custom_columns},
            )

        self._initial = make_sort_state(initial)
        self._state = self._initial

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "TableSorter":
        """Create a sorter with the configured default sort column."""
        settings = settings or get_settings()
        return cls(
            initial=[(settings.default_sort_key, settings.default_sort_direction)],
            **kwargs,
        )

    @property
    def state(self) -> SortState:
        """Current sort state."""
        return self._state

    @property
    def sort_configs(self) -> List[SortConfig]:
        """Active sort configs, highest priority first."""
        return list(self._state)

    def request_sort(self, key: str, additive: bool = False) -> SortState:
        """Apply a header click; returns the new state."""
        self._state = request_sort(self._state, key, additive)
        return self._state

    def get_sorted_items(self, items: Sequence[Any]) -> Sequence[Any]:
        """Sort rows by the current state."""
        return get_sorted_items(
            self._state,
            items,
            column_kinds=self.column_kinds,
            custom_comparator=self.custom_comparator,
            force_size=self.force_size,
        )

    def direction_for(self, key: str) -> Optional[str]:
        """Direction of a column, or None if it is not sorted."""
        config = next((c for c in self._state if c.key == key), None)
        return config.direction if config else None

    def sort_index(self, key: str) -> int:
        """
        1-based priority of a column (shown as a badge in the header).

        Returns:
            Priority, or 0 if the column is not sorted
        """
        for index, config in enumerate(self._state, start=1):
            if config.key == key:
                return index
        return 0

    def reset(self) -> SortState:
        """Restore the initial sort state."""
        self._state = self._initial
        return self._state
