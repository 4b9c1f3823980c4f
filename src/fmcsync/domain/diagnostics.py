"""Structured diagnostics and the result type threaded through reconciliation.

Every reconciliation step returns a ``Result``: either ``Ok`` carrying a value
(plus any non-fatal warnings gathered so far) or ``Err`` carrying a non-empty
diagnostic sequence with at least one error. Steps are chained with ``bind``,
which stops at the first ``Err`` so later steps never run after a fatal entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    severity: Severity
    summary: str
    detail: str = ""

    @classmethod
    def error(cls, summary: str, detail: str = "") -> Diagnostic:
        return cls(severity=Severity.ERROR, summary=summary, detail=detail)

    @classmethod
    def warning(cls, summary: str, detail: str = "") -> Diagnostic:
        return cls(severity=Severity.WARNING, summary=summary, detail=detail)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        text = f"{self.severity.value}: {self.summary}"
        return f"{text}: {self.detail}" if self.detail else text


type Diagnostics = tuple[Diagnostic, ...]


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(diagnostic.is_error for diagnostic in diagnostics)


@dataclass(frozen=True)
class Ok[T]:
    value: T
    warnings: Diagnostics = ()

    def __post_init__(self) -> None:
        if has_errors(self.warnings):
            raise ValueError("Ok result cannot carry error diagnostics")


@dataclass(frozen=True, slots=True)
class Err:
    diagnostics: Diagnostics

    def __post_init__(self) -> None:
        if not self.diagnostics:
            raise ValueError("Err result requires at least one diagnostic")
        if not has_errors(self.diagnostics):
            raise ValueError("Err result requires at least one error diagnostic")

    @classmethod
    def of(cls, summary: str, detail: str = "", *, warnings: Diagnostics = ()) -> Err:
        return cls(diagnostics=(*warnings, Diagnostic.error(summary, detail)))


type Result[T] = Ok[T] | Err


def bind[T, U](result: Result[T], func: Callable[[T], Result[U]]) -> Result[U]:
    """Feed the value of ``result`` into ``func``; short-circuit on ``Err``.

    Warnings collected by ``result`` are kept in front of whatever ``func``
    produces, so the final diagnostic sequence stays in execution order.
    """

    if isinstance(result, Err):
        return result
    following = func(result.value)
    if not result.warnings:
        return following
    if isinstance(following, Err):
        return Err(diagnostics=(*result.warnings, *following.diagnostics))
    return Ok(following.value, warnings=(*result.warnings, *following.warnings))


def collect(result: Result[object]) -> Diagnostics:
    """Return the diagnostic sequence a lifecycle caller sees for ``result``."""

    if isinstance(result, Err):
        return result.diagnostics
    return result.warnings
