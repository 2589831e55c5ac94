import os
from dataclasses import fields
from typing import Any

from .models import OrderConfig

ENV_PREFIX = "SHELTER_FOOD_"


def parse_number(raw: Any) -> Any:
    """Turn a text value into an int or float.

    Blank text means "not given" and becomes ``None``. Text that is not a
    number is returned unchanged so the calculator reports it.
    """
    if not isinstance(raw, str):
        return raw
    text = raw.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def env_var(field: str) -> str:
    return f"{ENV_PREFIX}{field.upper()}"


def env_overrides() -> dict[str, Any]:
    """Config overrides from ``SHELTER_FOOD_<FIELD>`` variables, unset ones as ``None``."""
    return {f.name: parse_number(os.environ.get(env_var(f.name))) for f in fields(OrderConfig)}
