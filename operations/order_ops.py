"""
Order Operations for Confecção OP.

Production order lifecycle: creation, editing, goods receipt and closing,
plus the listing helpers used by the order tables.
Pure functions - no database access. Callers persist the returned orders.
"""

import copy
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from config.constants import DATE_FORMAT, STATUS_FINISHED, STATUS_OPEN
from domain.exceptions import NotFoundError, OrderStateError, ValidationError
from domain.models import Grade, OrderItem, Payment, ProductionOrder, Receipt
from domain.rules import (
    calculate_total_paid,
    calculate_total_reconciled,
    can_receive_goods,
    format_order_number,
    parse_date,
    status_after_receipt,
)
from domain.validators import (
    validate_customer_name,
    validate_date_string,
    validate_order_status,
    validate_quantity,
)
from operations.size_sort_ops import sort_by_size

logger = logging.getLogger(__name__)


def _format_date(value) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime(DATE_FORMAT)
    return validate_date_string(value)


def _build_grades(grades: Dict[str, Dict[str, Any]]) -> Dict[str, Grade]:
    built = {}
    for grade_id, grade in grades.items():
        planned = validate_quantity(grade.get("quantidadePrevista", 0))
        try:
            built[grade_id] = Grade(
                name=grade.get("nome", ""),
                planned_quantity=int(planned),
                code=grade.get("codigo", ""),
                product_id=grade.get("produtoId", ""),
            )
        except ValueError as e:
            raise ValidationError(
                f"Invalid grade line: {e}",
                details={"grade_id": grade_id},
            )
    return built


def _build_order(data: Dict[str, Any], number: str, order_id: Optional[str]) -> ProductionOrder:
    item = data.get("item") or {}
    if not item.get("nome"):
        raise ValidationError("Order item cannot be empty")

    yarn = data.get("malha")
    rib = data.get("ribana")
    forecast = data.get("previsoes") or {}

    return ProductionOrder(
        id=order_id,
        number=number,
        customer=validate_customer_name(data.get("cliente", "")),
        start_date=_format_date(data.get("dataInicio")),
        delivery_date=_format_date(data.get("dataEntrega")),
        status=validate_order_status(data.get("status") or STATUS_OPEN),
        notes=data.get("observacao"),
        total_pieces=int(validate_quantity(data.get("totalCamisetas", 0))),
        item=OrderItem(name=item["nome"], product_id=item.get("produtoId", "")),
        yarn=OrderItem(name=yarn["nome"], product_id=yarn.get("produtoId", "")) if yarn else None,
        rib=OrderItem(name=rib["nome"], product_id=rib.get("produtoId", "")) if rib else None,
        yarn_forecast=str(forecast.get("malha", "")),
        rib_forecast=str(forecast.get("ribana", "")),
        grades=_build_grades(data.get("grades") or {}),
    )


def create_order(
    data: Dict[str, Any],
    last_sequence: int,
    order_id: Optional[str] = None,
) -> Tuple[ProductionOrder, int]:
    """
    Create a new production order.

    The order number is the next value of the sequence, zero-padded to
    four digits ("0001").

    Args:
        data: Order input with keys cliente, dataInicio, dataEntrega,
            status (default "Aberta"), observacao, totalCamisetas, item,
            malha, ribana, previsoes and grades
        last_sequence: Last number handed out (0 when none)
        order_id: Document key, if already allocated

    Returns:
        (order, next_sequence) - caller stores next_sequence

    Raises:
        ValidationError: If input is invalid

    Example:
        >>> order, seq = create_order(data, last_sequence=41)
        >>> order.number
        '0042'
    """
    next_sequence = last_sequence + 1
    number = format_order_number(next_sequence)

    try:
        order = _build_order(data, number, order_id)
    except ValidationError:
        logger.error(f"Invalid order input for number {number}")
        raise

    logger.info(
        f"Created order {order.number} for {order.customer} "
        f"({len(order.grades)} grade lines, {order.total_pieces} pieces)"
    )
    return order, next_sequence


def edit_order(existing: ProductionOrder, data: Dict[str, Any]) -> ProductionOrder:
    """
    Replace an order's data, keeping its number and id.

    Raises:
        ValidationError: If input is invalid
    """
    order = _build_order(data, existing.number, existing.id)
    logger.info(f"Edited order {order.number}")
    return order


def finalize_order(order: ProductionOrder, closed_on=None) -> ProductionOrder:
    """
    Close an order: status "Finalizado" and closing date set.

    Args:
        order: Order to close
        closed_on: Closing date (date/datetime or dd-MM-yyyy), default today

    Returns:
        New order instance; the input is not modified
    """
    closed = copy.deepcopy(order)
    closed.status = STATUS_FINISHED
    closed.closing_date = _format_date(closed_on or date.today())
    logger.info(f"Finalized order {closed.number} on {closed.closing_date}")
    return closed


def register_receipt(
    order: ProductionOrder,
    grade_id: str,
    quantity: int,
    received_on=None,
) -> ProductionOrder:
    """
    Register a goods receipt (recebimento) for one grade line.

    The first receipt of an open order moves it to "Em Entrega".

    Args:
        order: Order receiving goods
        grade_id: Grade line key
        quantity: Pieces received (> 0)
        received_on: Receipt date (date/datetime or dd-MM-yyyy), default today

    Returns:
        New order instance with the receipt appended

    Raises:
        OrderStateError: If the order does not accept receipts
        NotFoundError: If grade_id is not part of the order
        ValidationError: If quantity or date is invalid
    """
    if not can_receive_goods(order):
        raise OrderStateError(
            f"Order {order.number} does not accept goods receipt",
            details={"order": order.number, "status": order.status},
        )

    if grade_id not in order.grades:
        raise NotFoundError(
            f"Grade line not found: {grade_id}",
            details={"order": order.number, "grade_id": grade_id},
        )

    validated = int(validate_quantity(quantity, allow_zero=False))

    updated = copy.deepcopy(order)
    updated.grades[grade_id].receipts.append(
        Receipt(quantity=validated, date=_format_date(received_on or date.today()))
    )
    updated.status = status_after_receipt(updated.status)

    logger.info(
        f"Received {validated} pieces of '{updated.grades[grade_id].name}' "
        f"for order {updated.number}"
    )
    return updated


def get_receipt_rows(order: ProductionOrder) -> List[Dict[str, Any]]:
    """
    Rows for the goods receipt screen, in size order.

    Returns:
        List of dicts with ordemNumero, gradeId, nome, quantidadePrevista
        and quantidadeTotalRecebida
    """
    rows = [
        {
            "ordemNumero": order.number,
            "gradeId": grade_id,
            "nome": grade.name,
            "quantidadePrevista": grade.planned_quantity,
            "quantidadeTotalRecebida": grade.total_received,
        }
        for grade_id, grade in order.grades.items()
    ]
    return sort_by_size(rows, "nome")


def filter_orders(
    orders: Sequence[ProductionOrder],
    number: str = "",
    item: str = "",
    customer: str = "",
    start_date: str = "",
    status: str = "",
    allowed_statuses: Optional[Sequence[str]] = None,
) -> List[ProductionOrder]:
    """
    Filter orders for a listing.

    Text filters are case-insensitive substring matches; status must match
    exactly when given. allowed_statuses restricts the listing to those
    statuses (e.g. the yarn usage screen only lists "Em Entrega" and
    "Finalizado").
    """
    def _contains(value: str, term: str) -> bool:
        return term.lower() in (value or "").lower()

    result = [
        order
        for order in orders
        if _contains(order.number, number)
        and _contains(order.item.name, item)
        and _contains(order.customer, customer)
        and start_date in (order.start_date or "")
        and (not status or order.status == status)
        and (allowed_statuses is None or order.status in allowed_statuses)
    ]

    logger.debug(f"Filtered {len(result)} of {len(orders)} orders")
    return result


def build_sort_rows(
    orders: Sequence[ProductionOrder],
    payments_by_order: Optional[Dict[str, List[Payment]]] = None,
) -> List[Dict[str, Any]]:
    """
    Flatten orders into rows for the sortable order tables.

    Args:
        orders: Orders to list
        payments_by_order: Payments keyed by order id

    Returns:
        List of dicts with "order" (the ProductionOrder) and the columns
        ordem, item, dataCriacao, cliente, malhaPrevista,
        totalCamisetasPrevistas, totalCamisetasEntregue, totalLancamentos,
        totalConciliados and status
    """
    payments_by_order = payments_by_order or {}
    rows = []
    for order in orders:
        payments = payments_by_order.get(order.id, [])
        rows.append({
            "order": order,
            "ordem": order.number,
            "item": order.item.name,
            "dataCriacao": order.start_date,
            "cliente": order.customer,
            "malhaPrevista": order.yarn_forecast,
            "totalCamisetasPrevistas": order.total_pieces,
            "totalCamisetasEntregue": order.total_received,
            "totalLancamentos": calculate_total_paid(payments)["quantity"],
            "totalConciliados": calculate_total_reconciled(payments)["quantity"],
            "status": order.status,
        })
    return rows


def sort_orders_by_start_date(orders: Sequence[ProductionOrder]) -> List[ProductionOrder]:
    """
    Newest orders first, by start date.

    Orders with an unreadable start date go last.
    """
    def _key(order: ProductionOrder):
        parsed = parse_date(order.start_date)
        return (parsed is None, -(parsed.timestamp()) if parsed else 0.0)

    return sorted(orders, key=_key)
