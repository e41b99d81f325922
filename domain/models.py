"""
Domain models for Confecção OP.

These dataclasses represent the core business entities.
They are framework-agnostic and have no dependencies on database or UI.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any

from config.constants import (
    ORDER_STATUSES,
    RECONCILIATION_PENDING,
    RECONCILIATION_STATUSES,
    SORT_DIRECTIONS,
    STATUS_OPEN,
)


@dataclass(frozen=True)
class SizeWeight:
    """
    Ordering key computed for a size label.

    weight is float("inf") for labels that could not be classified,
    which makes them sort after every known size.
    """

    weight: float
    original: str


@dataclass(frozen=True)
class SortConfig:
    """
    One active sort column in a table.

    direction is "asc", "desc" or None (inactive, dropped from the list).
    """

    key: str
    direction: Optional[str] = None

    def __post_init__(self):
        """Validate sort config."""
        if not self.key:
            raise ValueError("key cannot be empty")
        if self.direction is not None and self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"direction must be one of {SORT_DIRECTIONS} or None")


class ColumnKind(Enum):
    """How values of a table column are compared."""

    NUMERIC = "numeric"
    DATE = "date"
    STRING = "string"
    SIZE_LABEL = "size_label"
    CUSTOM = "custom"


@dataclass
class Receipt:
    """Goods receipt (recebimento) for one grade line."""

    quantity: int
    date: str  # dd-MM-yyyy

    def __post_init__(self):
        """Validate receipt."""
        if self.quantity <= 0:
            raise ValueError("quantity must be positive")


@dataclass
class Grade:
    """
    One line of an order's size grade.

    name is a size label, e.g. "Camiseta Básica;TAMANHO:GG".
    """

    name: str
    planned_quantity: int = 0
    code: str = ""
    product_id: str = ""
    receipts: List[Receipt] = field(default_factory=list)

    def __post_init__(self):
        """Validate grade data."""
        if not self.name:
            raise ValueError("name cannot be empty")
        if self.planned_quantity < 0:
            raise ValueError("planned_quantity cannot be negative")

    @property
    def total_received(self) -> int:
        """Sum of all receipts for this line."""
        return sum(r.quantity for r in self.receipts)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Grade":
        """Build from the stored document shape."""
        return cls(
            name=doc.get("nome", ""),
            planned_quantity=int(doc.get("quantidadePrevista") or 0),
            code=doc.get("codigo", ""),
            product_id=doc.get("produtoId", ""),
            receipts=[
                Receipt(quantity=int(r["quantidade"]), date=r.get("data", ""))
                for r in (doc.get("recebimentos") or [])
            ],
        )

    def to_document(self) -> Dict[str, Any]:
        """Convert to the stored document shape."""
        doc = {
            "codigo": self.code,
            "produtoId": self.product_id,
            "nome": self.name,
            "quantidadePrevista": self.planned_quantity,
        }
        if self.receipts:
            doc["recebimentos"] = [
                {"quantidade": r.quantity, "data": r.date} for r in self.receipts
            ]
        return doc


@dataclass
class OrderItem:
    """Product reference inside an order (item, malha or ribana)."""

    name: str
    product_id: str = ""


@dataclass
class ProductionOrder:
    """
    Production order (ordem de produção).

    Grades are keyed by grade id, as stored in the document database.
    """

    customer: str
    start_date: str  # dd-MM-yyyy
    delivery_date: str  # dd-MM-yyyy
    item: OrderItem
    number: str = ""
    status: str = STATUS_OPEN
    total_pieces: int = 0
    yarn: Optional[OrderItem] = None
    rib: Optional[OrderItem] = None
    yarn_forecast: str = ""
    rib_forecast: str = ""
    grades: Dict[str, Grade] = field(default_factory=dict)
    notes: Optional[str] = None
    closing_date: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        """Validate order data after initialization."""
        if not self.customer:
            raise ValueError("customer cannot be empty")
        if self.status not in ORDER_STATUSES:
            raise ValueError(f"status must be one of {ORDER_STATUSES}")
        if self.total_pieces < 0:
            raise ValueError("total_pieces cannot be negative")

    @property
    def total_received(self) -> int:
        """Pieces received across all grade lines."""
        return sum(g.total_received for g in self.grades.values())

    @property
    def total_planned(self) -> int:
        """Pieces planned across all grade lines."""
        return sum(g.planned_quantity for g in self.grades.values())

    @classmethod
    def from_document(cls, doc_id: str, doc: Dict[str, Any]) -> "ProductionOrder":
        """
        Build an order from its stored document.

        Args:
            doc_id: Document key
            doc: Dict with informacoesGerais, solicitacao and grades

        Returns:
            ProductionOrder instance
        """
        info = doc["informacoesGerais"]
        request = doc["solicitacao"]
        forecast = request.get("previsoes") or {}

        def _item(value: Optional[Dict[str, Any]]) -> Optional[OrderItem]:
            if not value:
                return None
            return OrderItem(name=value.get("nome", ""), product_id=value.get("produtoId", ""))

        return cls(
            id=doc_id,
            number=info.get("numero", ""),
            customer=info["cliente"],
            start_date=info.get("dataInicio", ""),
            delivery_date=info.get("dataEntrega", ""),
            closing_date=info.get("dataFechamento"),
            status=info.get("status", STATUS_OPEN),
            notes=info.get("observacao"),
            total_pieces=int(info.get("totalCamisetas") or 0),
            item=_item(request["item"]),
            yarn=_item(request.get("malha")),
            rib=_item(request.get("ribana")),
            yarn_forecast=str(forecast.get("malha", "")),
            rib_forecast=str(forecast.get("ribana", "")),
            grades={
                grade_id: Grade.from_document(grade)
                for grade_id, grade in (doc.get("grades") or {}).items()
            },
        )

    def to_document(self) -> Dict[str, Any]:
        """Convert to the stored document shape (without id)."""
        info = {
            "numero": self.number,
            "cliente": self.customer,
            "dataInicio": self.start_date,
            "dataEntrega": self.delivery_date,
            "status": self.status,
            "totalCamisetas": self.total_pieces,
        }
        if self.closing_date:
            info["dataFechamento"] = self.closing_date
        if self.notes:
            info["observacao"] = self.notes

        request = {
            "item": {"nome": self.item.name, "produtoId": self.item.product_id},
            "previsoes": {"malha": self.yarn_forecast, "ribana": self.rib_forecast},
        }
        if self.yarn:
            request["malha"] = {"nome": self.yarn.name, "produtoId": self.yarn.product_id}
        if self.rib:
            request["ribana"] = {"nome": self.rib.name, "produtoId": self.rib.product_id}

        return {
            "informacoesGerais": info,
            "solicitacao": request,
            "grades": {gid: g.to_document() for gid, g in self.grades.items()},
        }


@dataclass
class Reconciliation:
    """
    Payment reconciliation (conciliação) grouping entries of one supplier.

    entries holds references: order_id, payment_id, entry_index, value,
    quantity and service_id.
    """

    code: str
    payment_date: str
    reconciled_at: str
    supplier_id: str
    total: float = 0.0
    status: str = RECONCILIATION_PENDING
    erp_payable_id: Optional[str] = None
    entries: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        """Validate reconciliation."""
        if not self.code:
            raise ValueError("code cannot be empty")
        if not self.supplier_id:
            raise ValueError("supplier_id cannot be empty")
        if self.status not in RECONCILIATION_STATUSES:
            raise ValueError(f"status must be one of {RECONCILIATION_STATUSES}")


@dataclass
class PaymentEntry:
    """
    Service payment entry (lançamento) recorded against an order.

    Only entries with affects_stock count as produced pieces.
    """

    supplier_id: str
    service_id: str
    unit_value: float
    quantity: int
    total: float = 0.0
    date: str = ""
    affects_stock: bool = False
    reconciliation: Optional[Reconciliation] = None

    def __post_init__(self):
        """Validate payment entry."""
        if not self.supplier_id:
            raise ValueError("supplier_id cannot be empty")
        if not self.service_id:
            raise ValueError("service_id cannot be empty")
        if self.quantity < 0:
            raise ValueError("quantity cannot be negative")

    @property
    def is_reconciled(self) -> bool:
        """Check if entry belongs to a reconciliation."""
        return self.reconciliation is not None


@dataclass
class Payment:
    """Payment (pagamento) holding one or more entries."""

    id: str
    entries: List[PaymentEntry] = field(default_factory=list)

    @property
    def has_pending_entries(self) -> bool:
        """Check if any entry is not reconciled yet."""
        return any(not e.is_reconciled for e in self.entries)


@dataclass
class YarnUsage:
    """
    Yarn usage launch (lançamento de malha) closing an order.

    yield_ratio = pieces delivered per unit of yarn used.
    """

    order_id: str
    yarn_used: float
    rib_used: float
    launched_at: str
    yield_ratio: float
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate yarn usage."""
        if not self.order_id:
            raise ValueError("order_id cannot be empty")
        if self.yarn_used <= 0:
            raise ValueError("yarn_used must be positive")
