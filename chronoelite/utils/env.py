"""Environment variable parsing for settings dataclasses."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")

TRUE_VALUES = {"True", "true", "1", "yes", "Y", "T"}


def get_env(key: str, default: T, type_hint: Any = None) -> Callable[[], T]:
    """Return a ``default_factory`` that reads ``key`` from the environment.

    Args:
        key: Environment variable name
        default: Value used when the variable is unset
        type_hint: Explicit type when ``default`` can't convey it (e.g. ``list[str]``)

    Returns:
        Zero-argument callable suitable for ``dataclasses.field(default_factory=...)``
    """

    def wrapped() -> T:
        return get_config_val(key=key, default=default, type_hint=type_hint)

    return wrapped


def get_config_val(key: str, default: T, type_hint: Any = None) -> T:
    """Parse an environment variable into the type of its default."""
    value = os.getenv(key)
    if value is None:
        return default
    if type(default) is bool or type_hint is bool:
        return value in TRUE_VALUES  # type: ignore[return-value]
    if type(default) is int or type_hint is int:
        return int(value)  # type: ignore[return-value]
    if type(default) is float or type_hint is float:
        return float(value)  # type: ignore[return-value]
    if isinstance(default, Path) or type_hint is Path:
        return Path(value)  # type: ignore[return-value]
    if isinstance(default, list) or type_hint == list[str]:
        if value.startswith("[") and value.endswith("]"):
            return json.loads(value)  # type: ignore[no-any-return]
        return [item.strip() for item in value.split(",") if item.strip()]  # type: ignore[return-value]
    return value  # type: ignore[return-value]
