"""Translate declared access policies into FMC wire payloads."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from fmcsync.domain.reconciliation.contracts import TranslationError

from .schema import AccessPolicyPayload, DefaultActionPayload, FmcObjectType, ObjectReference

if TYPE_CHECKING:
    from fmcsync.resources.access_policy import AccessPolicyConfig

# FMC object identities are UUID shaped, e.g. 0050568A-4E02-1ed3-0000-004294969199.
_OBJECT_ID: Final = re.compile(
    r"^[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}$"
)


def _reference(field: str, identity: str | None, kind: FmcObjectType) -> ObjectReference | None:
    if identity is None:
        return None
    if not _OBJECT_ID.match(identity):
        raise TranslationError(field, f"{identity!r} is not an FMC object identity")
    return ObjectReference(id=identity, type=kind)


def translate_access_policy(config: AccessPolicyConfig) -> AccessPolicyPayload:
    """Build the create payload for ``config``."""

    default_action = DefaultActionPayload(
        action=config.default_action.upper() if config.default_action else None,
        intrusion_policy=_reference(
            "default_action_base_intrusion_policy_id",
            config.default_action_base_intrusion_policy_id,
            FmcObjectType.INTRUSION_POLICY,
        ),
        syslog_config=_reference(
            "default_action_syslog_config_id",
            config.default_action_syslog_config_id,
            FmcObjectType.SYSLOG_ALERT,
        ),
        log_begin=config.default_action_log_begin,
        log_end=config.default_action_log_end,
        send_events_to_fmc=config.default_action_send_events_to_fmc,
    )
    return AccessPolicyPayload(
        name=config.name,
        description=config.description,
        default_action=default_action,
    )
