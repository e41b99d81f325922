"""
Payment Operations for Confecção OP.

Supplier payment entries (lançamentos) and their reconciliation
(conciliação). Payments are kept per order: payments_by_order maps an
order id to its list of Payment.

Pure functions - no database access. Functions that change payments
return updated copies; callers persist them.
"""

import copy
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from domain.exceptions import ReconciliationError, ValidationError
from domain.models import Payment, PaymentEntry, Reconciliation
from domain.rules import format_reconciliation_code
from domain.validators import (
    validate_date_string,
    validate_quantity,
    validate_reconciliation_status,
)

logger = logging.getLogger(__name__)

PaymentsByOrder = Dict[str, List[Payment]]

RECONCILED_AT_FORMAT = "%d-%m-%Y %H:%M:%S"


def build_payment_entry(data: Dict[str, Any]) -> PaymentEntry:
    """
    Build a payment entry from its stored document shape.

    The total defaults to unit value x quantity.

    Raises:
        ValidationError: If the entry is invalid
    """
    unit_value = validate_quantity(data.get("valor"))
    quantity = int(validate_quantity(data.get("quantidade")))
    total = data.get("total")
    total = round(unit_value * quantity, 2) if total is None else validate_quantity(total)

    try:
        return PaymentEntry(
            supplier_id=data.get("fornecedorId", ""),
            service_id=data.get("servicoId", ""),
            unit_value=unit_value,
            quantity=quantity,
            total=total,
            date=data.get("data", ""),
            affects_stock=bool(data.get("afetaEstoque", False)),
        )
    except ValueError as e:
        raise ValidationError(f"Invalid payment entry: {e}", details={"entry": data})


def add_payment(
    payments: List[Payment],
    entries: List[Dict[str, Any]],
    payment_id: str,
) -> List[Payment]:
    """
    Add a payment with its entries to an order's payments.

    Args:
        payments: Existing payments of the order
        entries: Entry dicts (fornecedorId, servicoId, valor, quantidade,
            total, data, afetaEstoque)
        payment_id: Key for the new payment

    Returns:
        New list of payments

    Raises:
        ValidationError: If there are no entries or an entry is invalid
    """
    if not entries:
        raise ValidationError("Payment must have at least one entry")
    if any(p.id == payment_id for p in payments):
        raise ValidationError(
            f"Payment already exists: {payment_id}",
            details={"payment_id": payment_id},
        )

    payment = Payment(id=payment_id, entries=[build_payment_entry(e) for e in entries])
    logger.info(f"Added payment {payment_id} with {len(payment.entries)} entries")
    return list(payments) + [payment]


def get_pending_payments(payments: List[Payment]) -> List[Payment]:
    """Payments that still have unreconciled entries."""
    return [p for p in payments if p.has_pending_entries]


def get_pending_entries_by_supplier(
    payments_by_order: PaymentsByOrder,
    supplier_id: str,
) -> List[Dict[str, Any]]:
    """
    Unreconciled entries of one supplier across all orders.

    Returns:
        List of dicts with order_id, payment_id, entry_index and entry,
        ready to be selected for a reconciliation
    """
    pending = []
    for order_id, payments in payments_by_order.items():
        for payment in payments:
            for index, entry in enumerate(payment.entries):
                if entry.supplier_id == supplier_id and not entry.is_reconciled:
                    pending.append({
                        "order_id": order_id,
                        "payment_id": payment.id,
                        "entry_index": index,
                        "entry": entry,
                    })

    logger.debug(f"Found {len(pending)} pending entries for supplier {supplier_id}")
    return pending


def _find_entry(
    payments_by_order: PaymentsByOrder,
    order_id: str,
    payment_id: str,
    entry_index: int,
) -> PaymentEntry:
    location = {"order_id": order_id, "payment_id": payment_id, "entry_index": entry_index}

    payment = next(
        (p for p in payments_by_order.get(order_id, []) if p.id == payment_id),
        None,
    )
    if payment is None:
        raise ReconciliationError("Payment not found", details=location)
    if not 0 <= entry_index < len(payment.entries):
        raise ReconciliationError("Payment entry not found", details=location)
    return payment.entries[entry_index]


def create_reconciliation(
    payment_date: str,
    selections: List[Dict[str, Any]],
    supplier_id: str,
    payments_by_order: PaymentsByOrder,
    counter: int,
    now: Optional[datetime] = None,
) -> Tuple[Reconciliation, PaymentsByOrder, int]:
    """
    Reconcile selected payment entries of one supplier.

    Args:
        payment_date: Planned payment date (dd-MM-yyyy)
        selections: Dicts with order_id, payment_id and entry_index
        supplier_id: Supplier being paid
        payments_by_order: Current payments
        counter: Last reconciliation number handed out
        now: Reconciliation timestamp, default now

    Returns:
        (reconciliation, updated payments_by_order, next counter)

    Raises:
        ReconciliationError: If nothing is selected, or an entry does not
            exist, is selected twice, belongs to another supplier or is
            already reconciled
        ValidationError: If payment_date is invalid
    """
    if not selections:
        raise ReconciliationError("No payment entries selected")

    payment_date = validate_date_string(payment_date)
    updated = copy.deepcopy(payments_by_order)
    next_counter = counter + 1

    selected_entries = []
    references = []
    seen = set()
    for selection in selections:
        location = (selection["order_id"], selection["payment_id"], selection["entry_index"])
        if location in seen:
            raise ReconciliationError("Payment entry selected twice", details=dict(selection))
        seen.add(location)

        entry = _find_entry(
            updated,
            selection["order_id"],
            selection["payment_id"],
            selection["entry_index"],
        )
        if entry.supplier_id != supplier_id:
            raise ReconciliationError(
                f"Payment entry does not belong to supplier {supplier_id}",
                details=dict(selection, entry_supplier=entry.supplier_id),
            )
        if entry.is_reconciled:
            raise ReconciliationError(
                "Payment entry is already reconciled",
                details=dict(selection, code=entry.reconciliation.code),
            )

        selected_entries.append(entry)
        references.append({
            "order_id": selection["order_id"],
            "payment_id": selection["payment_id"],
            "entry_index": selection["entry_index"],
            "value": entry.total,
            "quantity": entry.quantity,
            "service_id": entry.service_id,
        })

    reconciliation = Reconciliation(
        code=format_reconciliation_code(next_counter),
        payment_date=payment_date,
        reconciled_at=(now or datetime.now()).strftime(RECONCILED_AT_FORMAT),
        supplier_id=supplier_id,
        total=round(sum(e.total for e in selected_entries), 2),
        entries=references,
    )

    for entry in selected_entries:
        entry.reconciliation = reconciliation

    logger.info(
        f"Created reconciliation {reconciliation.code} for supplier {supplier_id}: "
        f"{len(selected_entries)} entries, total {reconciliation.total:.2f}"
    )
    return reconciliation, updated, next_counter


def update_reconciliation_status(
    reconciliation: Reconciliation,
    payments_by_order: PaymentsByOrder,
    status: str,
    erp_payable_id: Optional[str] = None,
) -> Tuple[Reconciliation, PaymentsByOrder]:
    """
    Change a reconciliation's status on the record and all linked entries.

    Args:
        reconciliation: Reconciliation to update
        payments_by_order: Current payments
        status: New status (Pendente, Enviado, Pago, ...)
        erp_payable_id: Payable id assigned by the ERP, if any

    Returns:
        (updated reconciliation, updated payments_by_order)

    Raises:
        ValidationError: If status is unknown
        ReconciliationError: If a linked entry no longer exists
    """
    status = validate_reconciliation_status(status)

    updated_reconciliation = copy.deepcopy(reconciliation)
    updated_reconciliation.status = status
    if erp_payable_id:
        updated_reconciliation.erp_payable_id = erp_payable_id

    updated = copy.deepcopy(payments_by_order)
    for reference in reconciliation.entries:
        entry = _find_entry(
            updated,
            reference["order_id"],
            reference["payment_id"],
            reference["entry_index"],
        )
        entry.reconciliation = updated_reconciliation

    logger.info(f"Reconciliation {reconciliation.code} status -> {status}")
    return updated_reconciliation, updated
