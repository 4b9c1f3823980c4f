"""Resolve names of referenced FMC objects to their identities."""

from __future__ import annotations

from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .client import FmcAPIError

if TYPE_CHECKING:
    from .client import FmcClient

log = getLogger(__name__)


class ReferenceKind(StrEnum):
    INTRUSION_POLICY = "intrusion-policy"
    SYSLOG_ALERT = "syslog-alert"


_LIST_PATHS: dict[ReferenceKind, str] = {
    ReferenceKind.INTRUSION_POLICY: "policy/intrusionpolicies",
    ReferenceKind.SYSLOG_ALERT: "policy/syslogalerts",
}


class ReferenceLookupError(FmcAPIError):
    """Raised when a name matches no object, or more than one."""


def lookup_reference(client: FmcClient, kind: ReferenceKind, name: str) -> str:
    """Return the identity of the ``kind`` object called ``name``."""

    references = client.list_references(_LIST_PATHS[kind])
    matches = [reference for reference in references if reference.name == name]
    if not matches:
        raise ReferenceLookupError(f"No {kind} named {name!r}")
    if len(matches) > 1:
        ids = ", ".join(match.id for match in matches)
        raise ReferenceLookupError(f"Several {kind} objects named {name!r}: {ids}")
    log.debug("Resolved %s %r to %s", kind, name, matches[0].id)
    return matches[0].id
