"""Pydantic models describing the FMC REST API payloads."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class FmcObjectType(StrEnum):
    """Discriminator values FMC expects in the ``type`` key of each object."""

    ACCESS_POLICY = "AccessPolicy"
    ACCESS_POLICY_DEFAULT_ACTION = "AccessPolicyDefaultAction"
    INTRUSION_POLICY = "IntrusionPolicy"
    SYSLOG_ALERT = "SyslogAlert"


class FmcBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ObjectReference(FmcBaseModel):
    id: str
    type: str
    name: str | None = None


class DefaultActionPayload(FmcBaseModel):
    type: str = FmcObjectType.ACCESS_POLICY_DEFAULT_ACTION
    id: str | None = None
    action: str | None = None
    intrusion_policy: ObjectReference | None = Field(default=None, alias="intrusionPolicy")
    syslog_config: ObjectReference | None = Field(default=None, alias="syslogConfig")
    log_begin: bool | None = Field(default=None, alias="logBegin")
    log_end: bool | None = Field(default=None, alias="logEnd")
    send_events_to_fmc: bool | None = Field(default=None, alias="sendEventsToFMC")


class AccessPolicyPayload(FmcBaseModel):
    type: str = FmcObjectType.ACCESS_POLICY
    id: str | None = None
    name: str
    description: str | None = None
    default_action: DefaultActionPayload | None = Field(default=None, alias="defaultAction")


class ErrorMessage(FmcBaseModel):
    description: str | None = None
    code: str | None = None


class ErrorBody(FmcBaseModel):
    category: str | None = None
    severity: str | None = None
    messages: list[ErrorMessage] = Field(default_factory=list)


class FmcErrorResponse(FmcBaseModel):
    error: ErrorBody

    @property
    def message(self) -> str:
        descriptions = [m.description for m in self.error.messages if m.description]
        return "; ".join(descriptions)


class Paging(FmcBaseModel):
    offset: int = 0
    limit: int = 0
    count: int = 0
    pages: int = 0


class PagedReferences(FmcBaseModel):
    items: list[ObjectReference] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)
