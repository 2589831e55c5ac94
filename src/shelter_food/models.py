from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Literal

from .errors import OPTION_LABELS, UnknownOptionError

SizeClass = Literal["small", "medium", "large"]

# camelCase spellings accepted for overrides coming from JSON payloads.
CONFIG_ALIASES = {label: field for field, label in OPTION_LABELS.items()}

# Pounds of food per dog per month.
# - small: toy and small breeds
# - medium: most mixed breeds
# - large: large and giant breeds
DEFAULT_CONSUMPTION: dict[SizeClass, float] = {
    "small": 10,
    "medium": 20,
    "large": 30,
}

# Lowest rate accepted as an override for each size class.
MIN_CONSUMPTION: dict[SizeClass, float] = {
    "small": 5,
    "medium": 10,
    "large": 15,
}


@dataclass(frozen=True)
class DogCounts:
    """Current shelter census by size class."""

    small: int
    medium: int
    large: int

    @property
    def total(self) -> int:
        return self.small + self.medium + self.large

    def for_size(self, size: SizeClass) -> int:
        return getattr(self, size)


@dataclass(frozen=True)
class OrderConfig:
    """Tunable parameters of the order formula.

    Values are not checked here; the calculator validates them in its fixed
    order so error reporting stays deterministic.
    """

    consumption_small: float = DEFAULT_CONSUMPTION["small"]
    consumption_medium: float = DEFAULT_CONSUMPTION["medium"]
    consumption_large: float = DEFAULT_CONSUMPTION["large"]
    max_dogs: int = 30
    over_order_percent: int = 20

    def consumption_for(self, size: SizeClass) -> float:
        return getattr(self, f"consumption_{size}")

    def with_overrides(self, overrides: Mapping[str, Any] | None) -> OrderConfig:
        """Return a copy with the given fields replaced.

        Keys may be field names or their camelCase aliases. ``None`` values are
        skipped so callers can pass optional settings straight through.
        """
        if not overrides:
            return self
        names = {f.name for f in fields(self)}
        changes: dict[str, Any] = {}
        for key, value in overrides.items():
            name = CONFIG_ALIASES.get(key, key)
            if name not in names:
                raise UnknownOptionError(key)
            if value is not None:
                changes[name] = value
        return replace(self, **changes)


def resolve_config(config: OrderConfig | Mapping[str, Any] | None) -> OrderConfig:
    if config is None:
        return OrderConfig()
    if isinstance(config, OrderConfig):
        return config
    return OrderConfig().with_overrides(config)


@dataclass(frozen=True)
class OrderBreakdown:
    monthly_need: float
    leftover_lbs: float
    deficit: float
    over_order_percent: int
    order_lbs: float

    def as_dict(self) -> dict[str, float | int]:
        return {
            "monthly_need": self.monthly_need,
            "leftover_lbs": self.leftover_lbs,
            "deficit": self.deficit,
            "over_order_percent": self.over_order_percent,
            "order_lbs": self.order_lbs,
        }
