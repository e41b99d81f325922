"""
Operations layer for Confecção OP.

Business logic operations - pure functions over domain values.
No database access - returns data structures that can be saved separately.
"""

from .size_sort_ops import (
    compare_size_labels,
    sort_by_size,
    sort_size_labels,
    get_field_value,
)

from .sort_ops import (
    SortState,
    TableSorter,
    make_sort_state,
    next_direction,
    request_sort,
    get_sorted_items,
    compare_values,
    compare_generic,
)

from .order_ops import (
    create_order,
    edit_order,
    finalize_order,
    register_receipt,
    get_receipt_rows,
    filter_orders,
    build_sort_rows,
    sort_orders_by_start_date,
)

from .payment_ops import (
    build_payment_entry,
    add_payment,
    get_pending_payments,
    get_pending_entries_by_supplier,
    create_reconciliation,
    update_reconciliation_status,
)

from .yarn_ops import (
    get_order_totals,
    validate_totals,
    current_yield,
    launch_yarn_usage,
)

__all__ = [
    # Size Sort Operations
    "compare_size_labels",
    "sort_by_size",
    "sort_size_labels",
    "get_field_value",
    # Sort Operations
    "SortState",
    "TableSorter",
    "make_sort_state",
    "next_direction",
    "request_sort",
    "get_sorted_items",
    "compare_values",
    "compare_generic",
    # Order Operations
    "create_order",
    "edit_order",
    "finalize_order",
    "register_receipt",
    "get_receipt_rows",
    "filter_orders",
    "build_sort_rows",
    "sort_orders_by_start_date",
    # Payment Operations
    "build_payment_entry",
    "add_payment",
    "get_pending_payments",
    "get_pending_entries_by_supplier",
    "create_reconciliation",
    "update_reconciliation_status",
    # Yarn Usage Operations
    "get_order_totals",
    "validate_totals",
    "current_yield",
    "launch_yarn_usage",
]
