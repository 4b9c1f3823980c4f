"""Declared and persisted state of an FMC access control policy.

Example declaration (TOML)::

    name = "Terraform Access Policy"
    default_action = "permit"
    default_action_base_intrusion_policy_id = "0050568A-4E02-1ed3-0000-004294969199"
    default_action_send_events_to_fmc = "true"
    default_action_log_end = "true"
    default_action_syslog_config_id = "0050568A-4E02-1ed3-0000-004294969201"

``block`` cannot be combined with a base intrusion policy; FMC rejects that pair.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final, Self

from pydantic import BaseModel, ConfigDict, field_validator


class DefaultAction(StrEnum):
    BLOCK = "BLOCK"
    TRUST = "TRUST"
    PERMIT = "PERMIT"
    NETWORK_DISCOVERY = "NETWORK_DISCOVERY"
    INHERIT_FROM_PARENT = "INHERIT_FROM_PARENT"


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class _AccessPolicyFields(BaseModel):
    name: str
    description: str | None = None
    default_action: DefaultAction | None = None
    default_action_base_intrusion_policy_id: str | None = None
    default_action_send_events_to_fmc: bool | None = None
    default_action_log_begin: bool | None = None
    default_action_log_end: bool | None = None
    default_action_syslog_config_id: str | None = None

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value

    @field_validator("default_action", mode="before")
    @classmethod
    def _canonical_action(cls, value: object) -> object:
        value = _blank_to_none(value)
        if isinstance(value, str):
            return value.upper()
        return value

    _normalize_optional = field_validator(
        "description",
        "default_action_base_intrusion_policy_id",
        "default_action_syslog_config_id",
        "default_action_send_events_to_fmc",
        "default_action_log_begin",
        "default_action_log_end",
        mode="before",
    )(_blank_to_none)


class AccessPolicyConfig(_AccessPolicyFields):
    """User-authored desired state. Every field forces replacement when changed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def replacement_fields(self, other: AccessPolicyConfig) -> tuple[str, ...]:
        """Return the fields whose change from ``self`` to ``other`` needs a recreate."""

        return tuple(
            field
            for field in IMMUTABLE_FIELDS
            if getattr(self, field) != getattr(other, field)
        )


IMMUTABLE_FIELDS: Final[tuple[str, ...]] = tuple(AccessPolicyConfig.model_fields)


class AccessPolicyState(_AccessPolicyFields):
    """Persisted state: declared fields plus values computed by FMC."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    type: str | None = None
    default_action_type: str | None = None

    @classmethod
    def from_config(cls, config: AccessPolicyConfig) -> Self:
        return cls.model_validate(config.model_dump())

    def declared(self) -> AccessPolicyConfig:
        return AccessPolicyConfig.model_validate(self.model_dump(include=set(IMMUTABLE_FIELDS)))
