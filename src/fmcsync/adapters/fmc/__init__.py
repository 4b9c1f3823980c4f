"""Public interface for the FMC adapter."""

from __future__ import annotations

from .client import AccessPolicyClient, FmcAPIError, FmcClient, FmcNotFoundError, FmcTimeoutError
from .lookup import ReferenceKind, ReferenceLookupError, lookup_reference
from .resource import ACCESS_POLICY_FIELDS, build_access_policy_engine
from .schema import AccessPolicyPayload, DefaultActionPayload, FmcObjectType, ObjectReference
from .translator import translate_access_policy

__all__ = [
    "ACCESS_POLICY_FIELDS",
    "AccessPolicyClient",
    "AccessPolicyPayload",
    "DefaultActionPayload",
    "FmcAPIError",
    "FmcClient",
    "FmcNotFoundError",
    "FmcObjectType",
    "FmcTimeoutError",
    "ObjectReference",
    "ReferenceKind",
    "ReferenceLookupError",
    "build_access_policy_engine",
    "lookup_reference",
    "translate_access_policy",
]
