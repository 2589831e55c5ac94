import math

import pytest

from shelter_food.errors import (
    BelowMinimumError,
    CapacityExceededError,
    MissingValueError,
    NotAnIntegerError,
    NotANumberError,
    OrderValidationError,
    OutOfRangeError,
    UnknownOptionError,
)
from shelter_food.models import OrderConfig
from shelter_food.order import compute_order, explain_order, round_tenth


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        ((5, 3, 7, 17), 363.6),
        ((7, 7, 7, 50), 444),
        ((0, 0, 0, 0), 0),
        ((0, 0, 0, 100), 0),
        ((1, 1, 1, 100), 0),
        ((10, 0, 0, 0), 120),
        ((0, 10, 0, 0), 240),
        ((0, 0, 10, 0), 360),
        ((30, 0, 0, 0), 360),
        ((0, 30, 0, 0), 720),
        ((0, 0, 30, 0), 1080),
        ((10, 10, 10, 0), 720),
        ((10, 10, 10, 100), 600),
    ],
)
def test_compute_order_defaults(args: tuple, expected: float) -> None:
    assert compute_order(*args) == expected


@pytest.mark.parametrize(
    ("config", "expected"),
    [
        ({"consumption_small": 15}, 780),
        ({"consumption_small": 15, "consumption_medium": 25, "consumption_large": 35}, 900),
        ({"over_order_percent": 25}, 750),
        ({"overOrderPercent": 25}, 750),
        (OrderConfig(over_order_percent=0), 600),
    ],
)
def test_compute_order_with_overrides(config, expected: float) -> None:
    assert compute_order(10, 10, 10, 0, config) == expected


def test_explain_order_breakdown() -> None:
    breakdown = explain_order(5, 3, 7, 17)
    assert breakdown.monthly_need == 320
    assert breakdown.leftover_lbs == 17
    assert breakdown.deficit == 303
    assert breakdown.over_order_percent == 20
    assert breakdown.order_lbs == 363.6


def test_explain_order_reports_negative_deficit_as_zero_order() -> None:
    breakdown = explain_order(1, 1, 1, 100)
    assert breakdown.deficit == -40
    assert breakdown.order_lbs == 0


def test_zero_is_not_missing() -> None:
    assert compute_order(0, 0, 0, 0) == 0


def test_integral_float_counts_are_accepted() -> None:
    assert compute_order(10.0, 0, 0, 0) == 120


def test_round_tenth_rounds_halves_away_from_zero() -> None:
    assert round_tenth(0.25) == 0.3
    assert round_tenth(0.35) == 0.4
    assert round_tenth(2.449) == 2.4
    assert compute_order(1, 0, 0, 9.75, {"over_order_percent": 0}) == 0.3


@pytest.mark.parametrize(
    ("args", "message"),
    [
        ((), "'small_count' must be provided"),
        ((5,), "'medium_count' must be provided"),
        ((5, 5), "'large_count' must be provided"),
        ((5, 5, 5), "'leftover_lbs' must be provided"),
        ((None, 5, 5, 0), "'small_count' must be provided"),
    ],
)
def test_missing_arguments(args: tuple, message: str) -> None:
    with pytest.raises(MissingValueError, match=message):
        compute_order(*args)


@pytest.mark.parametrize(
    ("args", "config", "error", "message"),
    [
        ((10, 10, 10, 0), {"max_dogs": 25}, CapacityExceededError, "Total # dogs exceeds max of 25"),
        ((10, 10, 11, 0), None, CapacityExceededError, "Total # dogs exceeds max of 30"),
        ((5, 5, 5, 0), {"max_dogs": -1}, BelowMinimumError, "'maxDogs' must be > 0"),
        ((5, 5, 5, 0), {"max_dogs": 0}, BelowMinimumError, "'maxDogs' must be > 0"),
        ((5, 5, 5, 0), {"maxDogs": 0}, BelowMinimumError, "'maxDogs' must be > 0"),
        ((5, 5, 5, 0), {"max_dogs": 30.5}, NotAnIntegerError, "'maxDogs' must be an integer"),
        ((10.5, 0, 0, 0), None, NotAnIntegerError, "'small_count' must be an integer"),
        ((0, 10.5, 0, 0), None, NotAnIntegerError, "'medium_count' must be an integer"),
        ((0, 0, 10.5, 0), None, NotAnIntegerError, "'large_count' must be an integer"),
        ((True, 0, 0, 0), None, NotAnIntegerError, "'small_count' must be an integer"),
        ((-1, 0, 0, 0), None, OutOfRangeError, "'small_count' must be between 0 and 30"),
        ((31, 0, 0, 0), None, OutOfRangeError, "'small_count' must be between 0 and 30"),
        ((0, -1, 0, 0), None, OutOfRangeError, "'medium_count' must be between 0 and 30"),
        ((0, 31, 0, 0), None, OutOfRangeError, "'medium_count' must be between 0 and 30"),
        ((0, 0, -1, 0), None, OutOfRangeError, "'large_count' must be between 0 and 30"),
        ((0, 0, 31, 0), None, OutOfRangeError, "'large_count' must be between 0 and 30"),
        ((10, 10, 10, -1), None, BelowMinimumError, "'leftover_lbs' must be >= 0"),
        ((10, 10, 10, "lots"), None, NotANumberError, "'leftover_lbs' must be a number"),
        ((10, 10, 10, math.nan), None, NotANumberError, "'leftover_lbs' must be a number"),
        ((10, 10, 10, 0), {"consumption_small": 4}, BelowMinimumError, "'consumptionSmall' must be >= 5"),
        ((10, 10, 10, 0), {"consumption_medium": 4}, BelowMinimumError, "'consumptionMedium' must be >= 10"),
        ((10, 10, 10, 0), {"consumption_large": 4}, BelowMinimumError, "'consumptionLarge' must be >= 15"),
        ((10, 10, 10, 0), {"over_order_percent": 1.5}, NotAnIntegerError, "'overOrderPercent' must be an integer"),
        ((10, 10, 10, 0), {"over_order_percent": -1}, OutOfRangeError, "'overOrderPercent' must be between 0 and 100"),
        ((10, 10, 10, 0), {"over_order_percent": 101}, OutOfRangeError, "'overOrderPercent' must be between 0 and 100"),
        ((10, 10, 10, 0), {"pct": 10}, UnknownOptionError, "Unknown config option 'pct'"),
    ],
)
def test_validation_errors(args: tuple, config, error: type, message: str) -> None:
    with pytest.raises(error) as exc_info:
        compute_order(*args, config)
    assert str(exc_info.value) == message


@pytest.mark.parametrize(
    ("args", "config", "field"),
    [
        ((None, 31, 0, 0), {"max_dogs": 0}, "small_count"),
        ((31, 0, 0, 0), {"max_dogs": 0}, "max_dogs"),
        ((0, 31, -1, 0), None, "medium_count"),
        ((20, 20, 0, -5), None, None),
        ((10, 10, 10, -1), {"consumption_small": 4}, "leftover_lbs"),
        ((10, 10, 10, 0), {"consumption_medium": 1, "consumption_large": 1}, "consumption_medium"),
        ((10, 10, 10, 0), {"consumption_large": 1, "over_order_percent": 500}, "consumption_large"),
    ],
)
def test_first_violation_wins(args: tuple, config, field: str | None) -> None:
    with pytest.raises(OrderValidationError) as exc_info:
        compute_order(*args, config)
    assert exc_info.value.field == field


def test_config_errors_keep_snake_case_field() -> None:
    with pytest.raises(BelowMinimumError) as exc_info:
        compute_order(5, 5, 5, 0, {"maxDogs": 0})
    assert str(exc_info.value) == "'maxDogs' must be > 0"
    assert exc_info.value.field == "max_dogs"


def test_compute_order_writes_nothing(capsys) -> None:
    compute_order(5, 3, 7, 17)
    with pytest.raises(CapacityExceededError):
        compute_order(10, 10, 11, 0)
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_errors_are_value_errors_with_payload() -> None:
    with pytest.raises(ValueError) as exc_info:
        compute_order(10, 10, 11, 0)
    payload = exc_info.value.to_dict()["error"]
    assert payload["code"] == "capacity_exceeded"
    assert payload["details"] == {"total": 31, "max_dogs": 30}


def test_result_is_non_negative_tenth() -> None:
    for leftover in (0, 0.3, 17, 99.95, 250, 1000):
        for pct in (0, 7, 33, 100):
            result = compute_order(3, 4, 5, leftover, {"consumption_small": 7.3, "over_order_percent": pct})
            assert result >= 0
            assert abs(result * 10 - round(result * 10)) < 1e-6


def test_no_order_when_leftover_covers_need_regardless_of_percent() -> None:
    for pct in (0, 20, 100):
        assert compute_order(2, 2, 2, 120, {"over_order_percent": pct}) == 0
        assert compute_order(2, 2, 2, 500, {"over_order_percent": pct}) == 0


@pytest.mark.parametrize("position", [0, 1, 2])
def test_monotonic_in_each_dog_count(position: int) -> None:
    previous = -1.0
    for n in range(0, 21):
        counts = [3, 3, 3]
        counts[position] = n
        result = compute_order(*counts, 75)
        assert result >= previous
        previous = result


def test_monotonic_in_over_order_percent() -> None:
    previous = -1.0
    for pct in range(0, 101):
        result = compute_order(4, 5, 6, 33.3, {"over_order_percent": pct})
        assert result >= previous
        previous = result


def test_overriding_one_rate_leaves_other_classes_alone() -> None:
    base = explain_order(0, 4, 6, 0, {"over_order_percent": 0}).monthly_need
    changed = explain_order(0, 4, 6, 0, {"consumption_small": 50, "over_order_percent": 0}).monthly_need
    assert base == changed

    small_only = explain_order(4, 0, 0, 0, {"consumption_small": 12, "over_order_percent": 0}).monthly_need
    mixed = explain_order(4, 4, 6, 0, {"consumption_small": 12, "over_order_percent": 0}).monthly_need
    assert mixed - small_only == base
