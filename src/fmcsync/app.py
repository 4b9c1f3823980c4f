"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fmcsync.adapters.fmc import (
    AccessPolicyClient,
    FmcClient,
    ReferenceKind,
    build_access_policy_engine,
    lookup_reference,
)
from fmcsync.adapters.state_file import JsonStateStore, state_key
from fmcsync.config import get_reconcile_config, get_storage_config
from fmcsync.domain.context import ReconcileContext
from fmcsync.domain.diagnostics import Diagnostic, has_errors
from fmcsync.domain.state import StateHandle
from fmcsync.resources.access_policy import AccessPolicyState

if TYPE_CHECKING:
    from fmcsync.adapters.fmc.resource import AccessPolicyEngine, AccessPolicyRemote
    from fmcsync.config import ReconcileConfig
    from fmcsync.domain.diagnostics import Diagnostics
    from fmcsync.resources.access_policy import AccessPolicyConfig


log = getLogger(__name__)


def _engine(
    client: AccessPolicyRemote | None, reconcile: ReconcileConfig
) -> AccessPolicyEngine:
    effective_client = client or AccessPolicyClient(FmcClient())
    return build_access_policy_engine(effective_client, not_found=reconcile.not_found)


def _store(store: JsonStateStore | None) -> JsonStateStore:
    return store or JsonStateStore(get_storage_config().state_dir())


def _persist(store: JsonStateStore, key: str, handle: StateHandle[AccessPolicyState]) -> None:
    if handle.identity:
        store.save(key, handle)
    else:
        store.delete(key)


def create_access_policy(
    config: AccessPolicyConfig,
    *,
    client: AccessPolicyRemote | None = None,
    store: JsonStateStore | None = None,
    reconcile: ReconcileConfig | None = None,
) -> Diagnostics:
    """Create the declared access policy and record its state."""

    effective_reconcile = reconcile or get_reconcile_config()
    effective_store = _store(store)
    key = state_key(config.name)

    existing = effective_store.load(key, AccessPolicyState) if effective_store.exists(key) else None
    if existing is not None and existing.identity:
        changed = existing.record.declared().replacement_fields(config)
        if changed:
            return (
                Diagnostic.error(
                    "access policy requires replacement",
                    f"changed fields {', '.join(changed)} cannot be updated in place; "
                    f"delete {config.name!r} and create it again",
                ),
            )

    engine = _engine(client, effective_reconcile)
    ctx = ReconcileContext.with_timeout(effective_reconcile.timeout_seconds)
    if existing is not None and existing.identity:
        # Already created with the same declaration: refresh instead.
        handle = existing
        log.info("Access policy %r already exists, refreshing", config.name)
        diagnostics = engine.reconcile_read(ctx, handle)
    else:
        handle = StateHandle(AccessPolicyState.from_config(config))
        log.info("Creating access policy %r", config.name)
        diagnostics = engine.reconcile_create(ctx, handle)
    _persist(effective_store, key, handle)
    _log_outcome("create", config.name, diagnostics)
    return diagnostics


def read_access_policy(
    name: str,
    *,
    client: AccessPolicyRemote | None = None,
    store: JsonStateStore | None = None,
    reconcile: ReconcileConfig | None = None,
) -> tuple[StateHandle[AccessPolicyState] | None, Diagnostics]:
    """Refresh the stored state of ``name`` from FMC."""

    effective_reconcile = reconcile or get_reconcile_config()
    effective_store = _store(store)
    key = state_key(name)
    if not effective_store.exists(key):
        return None, (Diagnostic.error("unable to read access policy", f"no state for {name!r}"),)

    handle = effective_store.load(key, AccessPolicyState)
    engine = _engine(client, effective_reconcile)
    ctx = ReconcileContext.with_timeout(effective_reconcile.timeout_seconds)
    diagnostics = engine.reconcile_read(ctx, handle)
    _persist(effective_store, key, handle)
    _log_outcome("read", name, diagnostics)
    return handle, diagnostics


def delete_access_policy(
    name: str,
    *,
    client: AccessPolicyRemote | None = None,
    store: JsonStateStore | None = None,
    reconcile: ReconcileConfig | None = None,
) -> Diagnostics:
    """Delete ``name`` from FMC and drop its stored state."""

    effective_reconcile = reconcile or get_reconcile_config()
    effective_store = _store(store)
    key = state_key(name)
    if not effective_store.exists(key):
        return (Diagnostic.error("unable to delete access policy", f"no state for {name!r}"),)

    handle = effective_store.load(key, AccessPolicyState)
    engine = _engine(client, effective_reconcile)
    ctx = ReconcileContext.with_timeout(effective_reconcile.timeout_seconds)
    diagnostics = engine.reconcile_delete(ctx, handle)
    _persist(effective_store, key, handle)
    _log_outcome("delete", name, diagnostics)
    return diagnostics


def find_reference(kind: ReferenceKind, name: str, *, client: FmcClient | None = None) -> str:
    """Return the identity of a referenced FMC object by name."""

    return lookup_reference(client or FmcClient(), kind, name)


def _log_outcome(operation: str, name: str, diagnostics: Diagnostics) -> None:
    if has_errors(diagnostics):
        log.error("Access policy %s of %r failed", operation, name)
    else:
        log.info("Access policy %s of %r finished", operation, name)
