"""
Application constants for Confecção OP.

Centralized location for all application-wide constants.
"""

# ==================== Application Info ====================

APP_NAME = "Confecção OP - Ordens de Produção"
APP_VERSION = "1.0.0"
APP_ORGANIZATION = "Confecção"

# ==================== File Extensions ====================

EXCEL_EXTENSIONS = [".xlsx", ".xls"]

# ==================== Size Classification ====================

# Separator between product name and size token in grade names
# e.g. "Camiseta Básica;TAMANHO:GG"
SIZE_SEPARATOR = ";TAMANHO:"

# Marker used to detect size labels inside arbitrary column values
SIZE_MARKER = "TAMANHO:"

# Fixed weights for letter sizes (PP < P < M < G < GG < XGG ...)
LETTER_SIZE_WEIGHTS = {
    "PP": 1,
    "P": 2,
    "M": 3,
    "G": 4,
    "GG": 5,
    "XGG": 6,
    "XXGG": 7,
    "XXXGG": 8,
}

# Weight step per numeric suffix in combination sizes (G1, XG2, ...)
COMBINATION_SUFFIX_STEP = 0.01

# ==================== Sorting ====================

SORT_ASC = "asc"
SORT_DESC = "desc"
SORT_DIRECTIONS = [SORT_ASC, SORT_DESC]

DEFAULT_SORT_KEY = "ordem"
DEFAULT_SORT_DIRECTION = SORT_DESC

# ==================== Dates ====================

# Dates are stored as strings in the document database
DATE_FORMAT = "%d-%m-%Y"
DATE_INPUT_FORMATS = ["%d-%m-%Y", "%Y-%m-%d", "%d/%m/%Y"]

# ==================== Order Status ====================

STATUS_DRAFT = "Rascunho"
STATUS_OPEN = "Aberta"
STATUS_IN_DELIVERY = "Em Entrega"
STATUS_FINISHED = "Finalizado"

ORDER_STATUSES = [
    STATUS_DRAFT,
    STATUS_OPEN,
    STATUS_IN_DELIVERY,
    STATUS_FINISHED,
]

# Statuses that accept goods receipt
RECEIVABLE_STATUSES = [STATUS_OPEN, STATUS_IN_DELIVERY]

# Statuses listed on the yarn usage (lançamento de malha) screen
YARN_USAGE_STATUSES = [STATUS_IN_DELIVERY, STATUS_FINISHED]

ORDER_NUMBER_WIDTH = 4

# ==================== Reconciliation ====================

RECONCILIATION_PENDING = "Pendente"
RECONCILIATION_SENT = "Enviado"
RECONCILIATION_PAID = "Pago"
RECONCILIATION_PARTIALLY_PAID = "Parcialmente Pago"
RECONCILIATION_RETURNED = "Devolvido"
RECONCILIATION_CANCELLED = "Cancelado"

RECONCILIATION_STATUSES = [
    RECONCILIATION_PENDING,
    RECONCILIATION_SENT,
    RECONCILIATION_PAID,
    RECONCILIATION_PARTIALLY_PAID,
    RECONCILIATION_RETURNED,
    RECONCILIATION_CANCELLED,
]

RECONCILIATION_CODE_PREFIX = "C"
RECONCILIATION_CODE_WIDTH = 5

# ==================== Validation Limits ====================

MAX_ORDER_NUMBER_LENGTH = 20
MAX_CUSTOMER_LENGTH = 200
MAX_SORT_KEY_LENGTH = 100

# ==================== Excel Column Names ====================

# Grade sheet columns (flexible matching, lowercase)
GRADE_PRODUCT_VARIANTS = ["produto", "item", "nome", "product"]
GRADE_SIZE_VARIANTS = ["tamanho", "tam", "size"]
GRADE_QUANTITY_VARIANTS = ["quantidade", "qtd", "qtde", "quantity"]
GRADE_CODE_VARIANTS = ["codigo", "código", "sku", "code"]

# ==================== Error Messages ====================

ERROR_MESSAGES = {
    "file_not_found": "Arquivo não encontrado: {path}",
    "invalid_excel": "Arquivo Excel inválido: {path}",
    "validation_error": "Erro de validação: {error}",
    "import_error": "Falha na importação: {error}",
    "totals_mismatch": (
        "Os totais de camisetas entregues, lançadas e conciliadas devem ser iguais. "
        "Entregue: {received}, Lançado: {launched}, Conciliado: {reconciled}"
    ),
}
