"""Shared reconciliation contract components.

This module holds only the stage interfaces and the small value types the
stages exchange; concrete resources plug in their own implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class TranslationError(ValueError):
    """Raised when declared state cannot be turned into a wire object locally."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class NotFoundPolicy(StrEnum):
    """What a read does when the remote object is gone."""

    FATAL = "fatal"
    FORGET = "forget"


class TranslateDeclaredState[D, W](Protocol):
    """Turn declared state into the wire object sent to the create call."""

    def __call__(self, declared: D, /) -> W: ...


@dataclass(frozen=True, kw_only=True)
class FieldMapping[R]:
    """Copy one remote value into one state field.

    ``mirrors_declared`` marks fields the user also declares; a differing remote
    value on such a field is reported as drift.
    """

    state_field: str
    extract: Callable[[R], object]
    mirrors_declared: bool = False
