"""Managed resource definitions."""

from __future__ import annotations

from .access_policy import (
    IMMUTABLE_FIELDS,
    AccessPolicyConfig,
    AccessPolicyState,
    DefaultAction,
)

__all__ = [
    "IMMUTABLE_FIELDS",
    "AccessPolicyConfig",
    "AccessPolicyState",
    "DefaultAction",
]
