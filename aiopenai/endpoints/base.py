from enum import Enum
from typing import Any, Union


def enum_value(value: Union[str, Enum]) -> str:
    """Wire value of an enum member or plain string."""
    return value.value if isinstance(value, Enum) else value


def compact(body: dict[str, Any]) -> dict[str, Any]:
    """Drop unset (None) fields so the API applies its own defaults."""
    return {key: value for key, value in body.items() if value is not None}
