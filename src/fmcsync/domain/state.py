"""Accessor over the persisted state of one managed resource."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)


class StateWriteError(ValueError):
    """Raised when a value cannot be stored in a state field."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class StateHandle[S: BaseModel]:
    """Typed state record plus the opaque remote identity.

    The record model is expected to validate on assignment; that validation is
    the only place a field write can fail. An empty identity means the remote
    object does not exist (never created, or deleted).
    """

    def __init__(self, record: S, *, identity: str = "") -> None:
        self._record = record
        self._identity = identity

    @property
    def record(self) -> S:
        return self._record

    @property
    def identity(self) -> str:
        return self._identity

    def set_identity(self, value: str) -> None:
        if not value:
            raise ValueError("Identity must be a non-empty string")
        self._identity = value

    def clear_identity(self) -> None:
        self._identity = ""

    def get(self, field: str) -> object:
        if field not in type(self._record).model_fields:
            raise KeyError(field)
        return getattr(self._record, field)

    def write(self, field: str, value: object) -> None:
        if field not in type(self._record).model_fields:
            raise StateWriteError(field, "unknown state field")
        try:
            setattr(self._record, field, value)
        except ValidationError as exc:
            reasons = "; ".join(error["msg"] for error in exc.errors())
            raise StateWriteError(field, reasons) from exc
        log.debug("State field %s written", field)

    def attributes(self) -> Mapping[str, object]:
        return self._record.model_dump(mode="json")
