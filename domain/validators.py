"""
Input validators for Confecção OP.

These validators ensure data integrity before it reaches the database.
All validators raise ValidationError on failure.
"""

import math
import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from config.constants import (
    DATE_FORMAT,
    MAX_CUSTOMER_LENGTH,
    MAX_ORDER_NUMBER_LENGTH,
    MAX_SORT_KEY_LENGTH,
    ORDER_STATUSES,
    RECONCILIATION_STATUSES,
    SORT_DIRECTIONS,
)
from .exceptions import ValidationError


def validate_order_number(order_number: str) -> str:
    """
    Validate order number format.

    Rules:
    - Not empty
    - Digits only (sequence numbers are zero-padded, e.g. "0042")

    Args:
        order_number: Order number to validate

    Returns:
        Cleaned order number (trimmed)

    Raises:
        ValidationError: If invalid
    """
    if not order_number:
        raise ValidationError("Order number cannot be empty")

    cleaned = str(order_number).strip()

    if len(cleaned) > MAX_ORDER_NUMBER_LENGTH:
        raise ValidationError(
            f"Order number too long: {len(cleaned)} characters (max {MAX_ORDER_NUMBER_LENGTH})",
            details={"order_number": cleaned},
        )

    if not re.match(r"^\d+$", cleaned):
        raise ValidationError(
            f"Order number must be numeric: '{cleaned}'",
            details={"order_number": cleaned},
        )

    return cleaned


def validate_customer_name(customer: str) -> str:
    """
    Validate customer name.

    Args:
        customer: Customer name to validate

    Returns:
        Cleaned customer name (trimmed)

    Raises:
        ValidationError: If invalid
    """
    if not customer or not customer.strip():
        raise ValidationError("Customer name cannot be empty")

    cleaned = customer.strip()

    if len(cleaned) > MAX_CUSTOMER_LENGTH:
        raise ValidationError(
            f"Customer name too long: {len(cleaned)} characters (max {MAX_CUSTOMER_LENGTH})",
            details={"customer": cleaned},
        )

    return cleaned


def validate_quantity(quantity, allow_zero: bool = True, allow_negative: bool = False) -> float:
    """
    Validate quantity value.

    Args:
        quantity: Quantity to validate (None/NaN will be converted to 0.0)
        allow_zero: If True, allow quantity = 0
        allow_negative: If True, allow negative quantities

    Returns:
        Validated quantity (guaranteed to be a valid float)

    Raises:
        ValidationError: If invalid
    """
    if quantity is None:
        quantity = 0.0

    try:
        quantity = float(quantity)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Quantity is not a number: {quantity!r}",
            details={"quantity": quantity},
        )

    if math.isnan(quantity):
        quantity = 0.0

    if not allow_negative and quantity < 0:
        raise ValidationError(
            f"Quantity cannot be negative: {quantity}",
            details={"quantity": quantity},
        )

    if not allow_zero and quantity == 0:
        raise ValidationError(
            "Quantity cannot be zero",
            details={"quantity": quantity},
        )

    return quantity


def validate_date_string(value: str, date_format: str = DATE_FORMAT) -> str:
    """
    Validate a stored date string (dd-MM-yyyy by default).

    Returns:
        Cleaned date string

    Raises:
        ValidationError: If empty or not in the expected format
    """
    if not value:
        raise ValidationError("Date cannot be empty")

    cleaned = str(value).strip()
    try:
        datetime.strptime(cleaned, date_format)
    except ValueError:
        raise ValidationError(
            f"Invalid date: '{cleaned}'",
            details={"date": cleaned, "format": date_format},
        )

    return cleaned


def validate_order_status(status: str) -> str:
    """
    Validate order status.

    Raises:
        ValidationError: If status is not a known order status
    """
    if status not in ORDER_STATUSES:
        raise ValidationError(
            f"Invalid order status: '{status}'",
            details={"status": status, "allowed": ORDER_STATUSES},
        )
    return status


def validate_reconciliation_status(status: str) -> str:
    """
    Validate reconciliation status.

    Raises:
        ValidationError: If status is not a known reconciliation status
    """
    if status not in RECONCILIATION_STATUSES:
        raise ValidationError(
            f"Invalid reconciliation status: '{status}'",
            details={"status": status, "allowed": RECONCILIATION_STATUSES},
        )
    return status


def validate_sort_key(key: str) -> str:
    """
    Validate a table sort key (column field name).

    Raises:
        ValidationError: If empty or too long
    """
    if not key or not str(key).strip():
        raise ValidationError("Sort key cannot be empty")

    cleaned = str(key).strip()
    if len(cleaned) > MAX_SORT_KEY_LENGTH:
        raise ValidationError(
            f"Sort key too long: {len(cleaned)} characters (max {MAX_SORT_KEY_LENGTH})",
            details={"key": cleaned},
        )
    return cleaned


def validate_sort_direction(direction: Optional[str]) -> Optional[str]:
    """
    Validate sort direction.

    Accepts "asc", "desc" (any case) or None.

    Raises:
        ValidationError: If direction is anything else
    """
    if direction is None:
        return None

    normalized = str(direction).strip().lower()
    if normalized not in SORT_DIRECTIONS:
        raise ValidationError(
            f"Invalid sort direction: '{direction}'",
            details={"direction": direction, "allowed": SORT_DIRECTIONS},
        )
    return normalized


def validate_file_path(
    file_path: Union[Path, str],
    must_exist: bool = True,
    allowed_extensions: Optional[list] = None,
) -> Path:
    """
    Validate file path.

    Args:
        file_path: File path to validate
        must_exist: If True, file must exist on disk
        allowed_extensions: List of allowed extensions (e.g., ['.xlsx'])

    Returns:
        Path object

    Raises:
        ValidationError: If invalid
    """
    if not file_path:
        raise ValidationError("File path cannot be empty")

    path = Path(file_path)

    if must_exist and not path.exists():
        raise ValidationError(
            f"File does not exist: {path}",
            details={"file_path": str(path)},
        )

    if allowed_extensions:
        if path.suffix.lower() not in [ext.lower() for ext in allowed_extensions]:
            raise ValidationError(
                f"Invalid file extension: {path.suffix}. Allowed: {allowed_extensions}",
                details={"file_path": str(path), "allowed": allowed_extensions},
            )

    return path
