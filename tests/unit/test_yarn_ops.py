"""
Unit tests for Yarn Usage Operations.

Tests cover the totals check, yield and closing an order.
"""

from datetime import date

import pytest

from domain.exceptions import ValidationError, YarnUsageError
from domain.models import YarnUsage
from operations.order_ops import create_order, register_receipt
from operations.payment_ops import add_payment, create_reconciliation
from operations.yarn_ops import (
    get_order_totals,
    validate_totals,
    current_yield,
    launch_yarn_usage,
)


@pytest.fixture
def delivered_order():
    """Order with 30 pieces delivered."""
    order, _ = create_order(
        {
            "cliente": "Malharia Sul",
            "dataInicio": "01-03-2024",
            "dataEntrega": "30-03-2024",
            "totalCamisetas": 30,
            "item": {"nome": "Camiseta"},
            "grades": {
                "g1": {"nome": "Camiseta;TAMANHO:P", "quantidadePrevista": 15},
                "g2": {"nome": "Camiseta;TAMANHO:M", "quantidadePrevista": 15},
            },
        },
        last_sequence=0,
        order_id="op-1",
    )
    order = register_receipt(order, "g1", 15, "10-03-2024")
    return register_receipt(order, "g2", 15, "11-03-2024")


def _payments(quantity, reconcile=True):
    payments = add_payment(
        [],
        [{"fornecedorId": "costura", "servicoId": "fechamento", "valor": 2.0,
          "quantidade": quantity, "afetaEstoque": True}],
        payment_id="p1",
    )
    if not reconcile:
        return payments
    _, updated, _ = create_reconciliation(
        "15-03-2024",
        [{"order_id": "op-1", "payment_id": "p1", "entry_index": 0}],
        "costura",
        {"op-1": payments},
        counter=0,
    )
    return updated["op-1"]


def test_get_order_totals(delivered_order):
    """Test delivered, launched and reconciled totals."""
    assert get_order_totals(delivered_order, _payments(30)) == {
        "received": 30,
        "launched": 30,
        "reconciled": 30,
    }
    assert validate_totals(delivered_order, _payments(30))
    assert not validate_totals(delivered_order, _payments(30, reconcile=False))


def test_current_yield(delivered_order):
    """Test yield preview."""
    assert current_yield(delivered_order, 12) == 2.5
    assert current_yield(delivered_order, 0) is None
    assert current_yield(delivered_order, None) is None


def test_launch_yarn_usage(delivered_order):
    """Test launching yarn usage closes the order."""
    usage, closed = launch_yarn_usage(
        delivered_order,
        yarn_used=12,
        rib_used=1.5,
        payments=_payments(30),
        launched_on=date(2024, 3, 31),
    )

    assert usage.order_id == "op-1"
    assert usage.yield_ratio == 2.5
    assert usage.launched_at == "31-03-2024"
    assert closed.status == "Finalizado"
    assert closed.closing_date == "31-03-2024"


def test_launch_yarn_usage_totals_mismatch(delivered_order):
    """Test totals must agree before closing."""
    with pytest.raises(YarnUsageError) as exc_info:
        launch_yarn_usage(delivered_order, 12, 1.5, _payments(25))

    assert "Entregue: 30" in str(exc_info.value)
    assert exc_info.value.details["launched"] == 25


def test_launch_yarn_usage_invalid_quantities(delivered_order):
    """Test yarn and rib must be positive."""
    with pytest.raises(ValidationError):
        launch_yarn_usage(delivered_order, 0, 1.5, _payments(30))

    with pytest.raises(ValidationError):
        launch_yarn_usage(delivered_order, 12, -1, _payments(30))


def test_launch_yarn_usage_only_once(delivered_order):
    """Test an order can only be launched once."""
    existing = [
        YarnUsage(order_id="op-1", yarn_used=12, rib_used=1.5, launched_at="31-03-2024", yield_ratio=2.5)
    ]
    with pytest.raises(YarnUsageError):
        launch_yarn_usage(delivered_order, 12, 1.5, _payments(30), existing=existing)


def test_launch_yarn_usage_requires_order_id(delivered_order):
    """Test orders without an id are rejected with a domain error."""
    delivered_order.id = None

    with pytest.raises(YarnUsageError) as exc_info:
        launch_yarn_usage(delivered_order, 12, 1.5, _payments(30))

    assert exc_info.value.details == {"order": "0001"}
