"""Request payload checks shared by the services."""
import math
from typing import Any, Iterable, Mapping

USER_FIELDS = ("name", "email")
ORDER_FIELDS = ("product", "last_name", "first_name", "email", "phone", "address", "quantity")

USER_FIELDS_REQUIRED = "Name and email are required."
ORDER_FIELDS_REQUIRED = "All fields are required."
INVALID_QUANTITY = "Quantity must be a positive number."
# Largest value an INTEGER column holds
MAX_QUANTITY = 2 ** 63 - 1


class FieldValidationError(ValueError):
    """Payload rejected before touching the datastore."""

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason


def require_fields(payload: Mapping[str, Any], fields: Iterable[str], message: str) -> None:
    """Reject the payload if any of ``fields`` is absent or falsy."""
    if not all(payload.get(field) for field in fields):
        raise FieldValidationError(message, reason="missing_field")


def parse_quantity(value: Any) -> int:
    """
    Coerce an order quantity to a positive int.

    Accepts ints, integral floats and numeric strings ("3", " 3 ", "3.0") up
    to MAX_QUANTITY.
    Booleans, fractions, non-finite numbers and anything else are rejected.

    Raises:
        FieldValidationError: If the value is not a number >= 1
    """
    if isinstance(value, bool):
        raise FieldValidationError(INVALID_QUANTITY, reason="invalid_quantity")

    number: Any = value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise FieldValidationError(INVALID_QUANTITY, reason="invalid_quantity") from None

    if isinstance(number, float):
        if not math.isfinite(number) or not number.is_integer():
            raise FieldValidationError(INVALID_QUANTITY, reason="invalid_quantity")
        number = int(number)

    if not isinstance(number, int) or number < 1 or number > MAX_QUANTITY:
        raise FieldValidationError(INVALID_QUANTITY, reason="invalid_quantity")

    return number
