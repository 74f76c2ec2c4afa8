"""Shared type aliases."""

from __future__ import annotations

from typing import TypeAlias

JsonValue: TypeAlias = dict[str, object] | list[object] | str | int | float | bool | None

__all__ = [
    "JsonValue",
]
