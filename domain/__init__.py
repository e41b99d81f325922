"""
Domain layer for Confecção OP.

This module contains core business entities, rules, and validators.
No dependencies on database, UI, or external frameworks.
"""

from .models import (
    SizeWeight,
    SortConfig,
    ColumnKind,
    Receipt,
    Grade,
    OrderItem,
    ProductionOrder,
    PaymentEntry,
    Payment,
    Reconciliation,
    YarnUsage,
)

from .exceptions import (
    ConfeccaoBaseException,
    ValidationError,
    ImportValidationError,
    NotFoundError,
    OrderStateError,
    ReconciliationError,
    YarnUsageError,
)

from .validators import (
    validate_order_number,
    validate_customer_name,
    validate_quantity,
    validate_date_string,
    validate_order_status,
    validate_reconciliation_status,
    validate_sort_key,
    validate_sort_direction,
    validate_file_path,
)

from .rules import (
    format_order_number,
    format_reconciliation_code,
    parse_date,
    can_receive_goods,
    status_after_receipt,
    calculate_total_paid,
    calculate_total_reconciled,
    totals_match,
    calculate_yield,
)

from .sizing import (
    split_product_and_size,
    detect_size_type,
    get_size_weight,
    locale_compare,
    locale_sort_key,
    product_group,
)

__all__ = [
    # Models
    "SizeWeight",
    "SortConfig",
    "ColumnKind",
    "Receipt",
    "Grade",
    "OrderItem",
    "ProductionOrder",
    "PaymentEntry",
    "Payment",
    "Reconciliation",
    "YarnUsage",
    # Exceptions
    "ConfeccaoBaseException",
    "ValidationError",
    "ImportValidationError",
    "NotFoundError",
    "OrderStateError",
    "ReconciliationError",
    "YarnUsageError",
    # Validators
    "validate_order_number",
    "validate_customer_name",
    "validate_quantity",
    "validate_date_string",
    "validate_order_status",
    "validate_reconciliation_status",
    "validate_sort_key",
    "validate_sort_direction",
    "validate_file_path",
    # Rules
    "format_order_number",
    "format_reconciliation_code",
    "parse_date",
    "can_receive_goods",
    "status_after_receipt",
    "calculate_total_paid",
    "calculate_total_reconciled",
    "totals_match",
    "calculate_yield",
    # Sizing
    "split_product_and_size",
    "detect_size_type",
    "get_size_weight",
    "locale_compare",
    "locale_sort_key",
    "product_group",
]
