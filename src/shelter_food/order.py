"""Monthly dog-food reorder calculation.

Given the dogs currently in the shelter and the food left over, work out how
many pounds to order for next month:

    monthly_need = small * consumption_small
                 + medium * consumption_medium
                 + large * consumption_large
    deficit = monthly_need - leftover_lbs
    order = deficit * (100 + over_order_percent) / 100

No order is placed when the leftover covers the need. Orders are rounded to
the nearest tenth of a pound, halves away from zero.

Inputs are checked in a fixed order and the first violation is raised, so
the same bad input always yields the same error.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .consumption import SIZE_CLASSES, monthly_need
from .errors import (
    BelowMinimumError,
    CapacityExceededError,
    MissingValueError,
    NotAnIntegerError,
    NotANumberError,
    OutOfRangeError,
)
from .models import MIN_CONSUMPTION, DogCounts, OrderBreakdown, OrderConfig, resolve_config

ConfigInput = OrderConfig | Mapping[str, Any] | None

_TENTH = Decimal("0.1")


def round_tenth(value: float) -> float:
    """Round to one decimal place, halves away from zero.

    Goes through the shortest decimal repr of the float so the result does not
    depend on the platform's binary rounding.
    """
    return float(Decimal(repr(float(value))).quantize(_TENTH, rounding=ROUND_HALF_UP))


def _require(field: str, value: Any) -> None:
    if value is None:
        raise MissingValueError(field)


def _as_number(field: str, value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise NotANumberError(field, value)
    if not math.isfinite(value):
        raise NotANumberError(field, value)
    return value


def _as_int(field: str, value: Any) -> int:
    if isinstance(value, bool):
        raise NotAnIntegerError(field, value)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and math.isfinite(value) and float(value).is_integer():
        return int(value)
    raise NotAnIntegerError(field, value)


def _validate_count(field: str, value: Any, max_dogs: int) -> int:
    count = _as_int(field, value)
    if count < 0 or count > max_dogs:
        raise OutOfRangeError(field, count, 0, max_dogs)
    return count


def _validate(
    small_count: Any,
    medium_count: Any,
    large_count: Any,
    leftover_lbs: Any,
    config: ConfigInput,
) -> tuple[DogCounts, float, OrderConfig]:
    _require("small_count", small_count)
    _require("medium_count", medium_count)
    _require("large_count", large_count)
    _require("leftover_lbs", leftover_lbs)

    cfg = resolve_config(config)

    max_dogs = _as_int("max_dogs", cfg.max_dogs)
    if max_dogs <= 0:
        raise BelowMinimumError("max_dogs", max_dogs, 0, inclusive=False)

    counts = DogCounts(
        small=_validate_count("small_count", small_count, max_dogs),
        medium=_validate_count("medium_count", medium_count, max_dogs),
        large=_validate_count("large_count", large_count, max_dogs),
    )
    if counts.total > max_dogs:
        raise CapacityExceededError(counts.total, max_dogs)

    leftover = _as_number("leftover_lbs", leftover_lbs)
    if leftover < 0:
        raise BelowMinimumError("leftover_lbs", leftover, 0)

    for size in SIZE_CLASSES:
        field = f"consumption_{size}"
        rate = _as_number(field, cfg.consumption_for(size))
        if rate < MIN_CONSUMPTION[size]:
            raise BelowMinimumError(field, rate, MIN_CONSUMPTION[size])

    pct = _as_int("over_order_percent", cfg.over_order_percent)
    if pct < 0 or pct > 100:
        raise OutOfRangeError("over_order_percent", pct, 0, 100)

    return counts, leftover, cfg


def explain_order(
    small_count: Any = None,
    medium_count: Any = None,
    large_count: Any = None,
    leftover_lbs: Any = None,
    config: ConfigInput = None,
) -> OrderBreakdown:
    """Validate inputs and return every intermediate of the order formula.

    ``config`` is an ``OrderConfig`` or a mapping of overrides applied on top
    of the defaults. Raises an ``OrderValidationError`` subclass for the first
    invalid input.
    """
    counts, leftover, cfg = _validate(small_count, medium_count, large_count, leftover_lbs, config)

    need = monthly_need(counts, cfg)
    deficit = need - leftover
    pct = int(cfg.over_order_percent)
    if deficit <= 0:
        order = 0.0
    else:
        order = round_tenth(deficit * (100 + pct) / 100)

    return OrderBreakdown(
        monthly_need=need,
        leftover_lbs=leftover,
        deficit=deficit,
        over_order_percent=pct,
        order_lbs=order,
    )


def compute_order(
    small_count: Any = None,
    medium_count: Any = None,
    large_count: Any = None,
    leftover_lbs: Any = None,
    config: ConfigInput = None,
) -> float:
    """Pounds of food to order for next month, rounded to the nearest tenth."""
    return explain_order(small_count, medium_count, large_count, leftover_lbs, config).order_lbs
