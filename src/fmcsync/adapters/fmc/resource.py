"""Wire the access-policy resource into the reconciliation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from fmcsync.domain.reconciliation import (
    FieldMapping,
    NotFoundPolicy,
    ObservedStateSynchronizer,
    ReconciliationEngine,
    RemoteOperationExecutor,
)
from fmcsync.resources.access_policy import AccessPolicyConfig, AccessPolicyState

from .translator import translate_access_policy

if TYPE_CHECKING:
    from fmcsync.domain.ports.remote import RemoteClient
    from fmcsync.domain.state import StateHandle

    from .schema import AccessPolicyPayload

ACCESS_POLICY_LABEL: Final = "access policy"

type AccessPolicyEngine = ReconciliationEngine[
    AccessPolicyConfig, AccessPolicyPayload, AccessPolicyPayload
]
type AccessPolicyRemote = RemoteClient[AccessPolicyPayload, AccessPolicyPayload]


def _default_action_value(remote: AccessPolicyPayload) -> object:
    return remote.default_action.action if remote.default_action else None


def _default_action_type(remote: AccessPolicyPayload) -> object:
    return remote.default_action.type if remote.default_action else None


ACCESS_POLICY_FIELDS: Final[tuple[FieldMapping[AccessPolicyPayload], ...]] = (
    FieldMapping(state_field="name", extract=lambda r: r.name, mirrors_declared=True),
    FieldMapping(
        state_field="description", extract=lambda r: r.description, mirrors_declared=True
    ),
    FieldMapping(state_field="type", extract=lambda r: r.type),
    FieldMapping(
        state_field="default_action", extract=_default_action_value, mirrors_declared=True
    ),
    FieldMapping(state_field="default_action_type", extract=_default_action_type),
)


def _declared(handle: StateHandle[AccessPolicyState]) -> AccessPolicyConfig:
    return handle.record.declared()


def build_access_policy_engine(
    client: AccessPolicyRemote,
    *,
    not_found: NotFoundPolicy = NotFoundPolicy.FATAL,
) -> AccessPolicyEngine:
    return ReconciliationEngine(
        label=ACCESS_POLICY_LABEL,
        declared=_declared,
        translate=translate_access_policy,
        executor=RemoteOperationExecutor(client=client, label=ACCESS_POLICY_LABEL),
        synchronize=ObservedStateSynchronizer(
            mappings=ACCESS_POLICY_FIELDS, label=ACCESS_POLICY_LABEL
        ),
        not_found=not_found,
    )
