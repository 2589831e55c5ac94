"""Validation errors raised by the order calculator.

Every violated input constraint maps to one error class. All of them are
``ValueError`` subclasses carrying the offending field and a stable code.
"""

from __future__ import annotations

from typing import Any

# Config options are named in messages by their public (camelCase) names.
OPTION_LABELS = {
    "consumption_small": "consumptionSmall",
    "consumption_medium": "consumptionMedium",
    "consumption_large": "consumptionLarge",
    "max_dogs": "maxDogs",
    "over_order_percent": "overOrderPercent",
}


def label_for(field: str) -> str:
    return OPTION_LABELS.get(field, field)


class OrderValidationError(ValueError):
    """Base class for all order input errors.

    Attributes:
        field: Name of the offending parameter (``None`` for whole-input checks)
        code: Stable machine-readable error code
        message: Human-readable message
        details: Extra context (bounds, offending value)
    """

    code = "invalid"

    def __init__(self, field: str | None, message: str, details: dict[str, Any] | None = None) -> None:
        self.field = field
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "field": self.field,
                "message": self.message,
                "details": self.details,
            }
        }


class MissingValueError(OrderValidationError):
    code = "missing"

    def __init__(self, field: str) -> None:
        super().__init__(field, f"'{label_for(field)}' must be provided")


class NotAnIntegerError(OrderValidationError):
    code = "not_an_integer"

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(field, f"'{label_for(field)}' must be an integer", {"value": value})


class NotANumberError(OrderValidationError):
    code = "not_a_number"

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(field, f"'{label_for(field)}' must be a number", {"value": value})


class OutOfRangeError(OrderValidationError):
    code = "out_of_range"

    def __init__(self, field: str, value: Any, low: int | float, high: int | float) -> None:
        super().__init__(
            field,
            f"'{label_for(field)}' must be between {low} and {high}",
            {"value": value, "min": low, "max": high},
        )


class BelowMinimumError(OrderValidationError):
    code = "below_minimum"

    def __init__(self, field: str, value: Any, minimum: int | float, *, inclusive: bool = True) -> None:
        op = ">=" if inclusive else ">"
        super().__init__(
            field,
            f"'{label_for(field)}' must be {op} {minimum}",
            {"value": value, "min": minimum, "inclusive": inclusive},
        )


class CapacityExceededError(OrderValidationError):
    code = "capacity_exceeded"

    def __init__(self, total: int, max_dogs: int) -> None:
        super().__init__(
            None,
            f"Total # dogs exceeds max of {max_dogs}",
            {"total": total, "max_dogs": max_dogs},
        )


class UnknownOptionError(OrderValidationError):
    code = "unknown_option"

    def __init__(self, key: str) -> None:
        super().__init__(key, f"Unknown config option '{key}'")
