"""
Business rules for Confecção OP.

These functions encode business logic and decision-making rules.
They are pure functions with no side effects.
"""

from datetime import date, datetime
from typing import List, Optional, Union

from config.constants import (
    DATE_INPUT_FORMATS,
    ORDER_NUMBER_WIDTH,
    RECEIVABLE_STATUSES,
    RECONCILIATION_CODE_PREFIX,
    RECONCILIATION_CODE_WIDTH,
    STATUS_IN_DELIVERY,
    STATUS_OPEN,
)
from .models import Payment, ProductionOrder


def format_order_number(sequence: int) -> str:
    """
    Format an order sequence number.

    Examples:
        1 -> "0001"
        12345 -> "12345"
    """
    return str(sequence).zfill(ORDER_NUMBER_WIDTH)


def format_reconciliation_code(counter: int) -> str:
    """
    Format a reconciliation code.

    Examples:
        1 -> "C00001"
    """
    return f"{RECONCILIATION_CODE_PREFIX}{str(counter).zfill(RECONCILIATION_CODE_WIDTH)}"


def parse_date(value: Union[str, date, datetime, None]) -> Optional[datetime]:
    """
    Parse a stored date value.

    Accepts datetime/date objects and strings in dd-MM-yyyy, yyyy-MM-dd
    or dd/MM/yyyy format.

    Returns:
        datetime, or None if the value cannot be parsed
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    text = str(value).strip()
    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def can_receive_goods(order: ProductionOrder) -> bool:
    """
    Check if an order accepts goods receipt.

    Rule: only open orders or orders already in delivery.
    """
    return order.status in RECEIVABLE_STATUSES


def status_after_receipt(status: str) -> str:
    """
    Status an order moves to after a goods receipt.

    Rule: the first receipt moves "Aberta" to "Em Entrega";
    other statuses are kept.
    """
    if status == STATUS_OPEN:
        return STATUS_IN_DELIVERY
    return status


def calculate_total_paid(payments: List[Payment]) -> dict:
    """
    Sum quantity and value of all payment entries.

    Quantity only counts entries that affect stock (produced pieces);
    value counts every entry.

    Returns:
        Dict with "quantity" and "value"
    """
    quantity = 0
    value = 0.0
    for payment in payments:
        for entry in payment.entries:
            if entry.affects_stock:
                quantity += entry.quantity
            value += entry.total

    return {"quantity": quantity, "value": round(value, 2)}


def calculate_total_reconciled(payments: List[Payment]) -> dict:
    """
    Sum quantity and value of reconciled payment entries.

    Returns:
        Dict with "quantity" and "value"
    """
    quantity = 0
    value = 0.0
    for payment in payments:
        for entry in payment.entries:
            if entry.is_reconciled:
                quantity += entry.quantity or 0
                value += entry.total

    return {"quantity": quantity, "value": round(value, 2)}


def totals_match(received: int, launched: int, reconciled: int) -> bool:
    """
    Check delivered, launched and reconciled totals before closing an order.

    Rule: all three must be positive and equal.
    """
    return (
        received > 0
        and launched > 0
        and reconciled > 0
        and received == launched == reconciled
    )


def calculate_yield(delivered: int, yarn_used: float) -> float:
    """
    Pieces delivered per unit of yarn used (rendimento).

    Returns:
        Yield ratio, or 0.0 when no yarn was used
    """
    if not yarn_used or yarn_used <= 0:
        return 0.0
    return delivered / yarn_used
