"""
Yarn Usage Operations for Confecção OP.

Yarn usage launch (lançamento de malha): records the yarn and rib used by
an order, computes its yield and closes the order.
Pure functions - no database access.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence, Tuple

from config.constants import DATE_FORMAT, ERROR_MESSAGES
from domain.exceptions import YarnUsageError, ValidationError
from domain.models import Payment, ProductionOrder, YarnUsage
from domain.rules import (
    calculate_total_paid,
    calculate_total_reconciled,
    calculate_yield,
    totals_match,
)
from domain.validators import validate_quantity
from operations.order_ops import finalize_order

logger = logging.getLogger(__name__)


def get_order_totals(order: ProductionOrder, payments: List[Payment]) -> dict:
    """
    Totals checked before closing an order.

    Returns:
        Dict with received (pieces delivered), launched (pieces paid for
        with stock-affecting entries) and reconciled
    """
    return {
        "received": order.total_received,
        "launched": calculate_total_paid(payments)["quantity"],
        "reconciled": calculate_total_reconciled(payments)["quantity"],
    }


def validate_totals(order: ProductionOrder, payments: List[Payment]) -> bool:
    """Check that delivered, launched and reconciled totals agree."""
    totals = get_order_totals(order, payments)
    return totals_match(totals["received"], totals["launched"], totals["reconciled"])


def current_yield(order: ProductionOrder, yarn_used: Optional[float]) -> Optional[float]:
    """
    Yield preview while the user types the yarn quantity.

    Returns:
        Pieces per unit of yarn, or None when no positive quantity yet
    """
    if not yarn_used or yarn_used <= 0:
        return None
    return calculate_yield(order.total_received, yarn_used)


def launch_yarn_usage(
    order: ProductionOrder,
    yarn_used: float,
    rib_used: float,
    payments: List[Payment],
    existing: Sequence[YarnUsage] = (),
    launched_on: Optional[date] = None,
) -> Tuple[YarnUsage, ProductionOrder]:
    """
    Launch yarn usage for an order and close it.

    Args:
        order: Order being closed
        yarn_used: Yarn (malha) used, > 0
        rib_used: Rib (ribana) used, > 0
        payments: The order's payments
        existing: Yarn usage launches already recorded
        launched_on: Launch date, default today

    Returns:
        (yarn usage record, finalized order)

    Raises:
        ValidationError: If a quantity is not positive
        YarnUsageError: If the order has no id, already has a launch, or the
            delivered/launched/reconciled totals do not agree
    """
    try:
        yarn_used = validate_quantity(yarn_used, allow_zero=False)
        rib_used = validate_quantity(rib_used, allow_zero=False)
    except ValidationError:
        logger.error(f"Invalid yarn quantities for order {order.number}")
        raise

    if not order.id:
        raise YarnUsageError(
            f"Order {order.number} has no id and cannot receive a yarn usage launch",
            details={"order": order.number},
        )

    if any(usage.order_id == order.id for usage in existing):
        raise YarnUsageError(
            f"Order {order.number} already has a yarn usage launch",
            details={"order_id": order.id},
        )

    totals = get_order_totals(order, payments)
    if not totals_match(totals["received"], totals["launched"], totals["reconciled"]):
        logger.warning(f"Totals mismatch for order {order.number}: {totals}")
        raise YarnUsageError(ERROR_MESSAGES["totals_mismatch"].format(**totals), details=totals)

    launched_on = launched_on or date.today()
    usage = YarnUsage(
        order_id=order.id,
        yarn_used=yarn_used,
        rib_used=rib_used,
        launched_at=launched_on.strftime(DATE_FORMAT),
        yield_ratio=calculate_yield(totals["received"], yarn_used),
    )

    closed = finalize_order(order, launched_on)
    logger.info(
        f"Yarn usage launched for order {order.number}: "
        f"{yarn_used} yarn, yield {usage.yield_ratio:.2f}"
    )
    return usage, closed
