"""Orchestrator for one managed resource's create/read/delete lifecycle.

The engine composes stage interfaces but does not prescribe concrete adapters.
Each resource kind supplies its own translator, remote client and field
mapping table; the engine guarantees ordering:

- at most one mutating remote call (create or delete) per reconciliation call
- create is followed by a confirmatory read with the identity it returned
- an empty identity never reaches the remote system

There is deliberately no update operation: every declared field is
replace-only.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from fmcsync.domain.diagnostics import Diagnostic, Err, Ok, bind, collect

from .contracts import NotFoundPolicy, TranslationError
from .executor import Missing

if TYPE_CHECKING:
    from fmcsync.domain.context import ReconcileContext
    from fmcsync.domain.diagnostics import Diagnostics, Result
    from fmcsync.domain.ports.remote import RemoteResource
    from fmcsync.domain.state import StateHandle

    from .contracts import TranslateDeclaredState
    from .executor import RemoteOperationExecutor
    from .synchronize import ObservedStateSynchronizer

log = getLogger(__name__)


@dataclass
class ReconciliationEngine[D, W, R: RemoteResource]:
    """Reconcile declared state of one resource kind against the remote system."""

    label: str
    declared: Callable[[StateHandle], D]
    translate: TranslateDeclaredState[D, W]
    executor: RemoteOperationExecutor[W, R]
    synchronize: ObservedStateSynchronizer[R]
    not_found: NotFoundPolicy = NotFoundPolicy.FATAL

    def reconcile_create(self, ctx: ReconcileContext, handle: StateHandle) -> Diagnostics:
        if handle.identity:
            return (
                Diagnostic.error(
                    f"unable to create {self.label}",
                    f"{self.label} already exists with identity {handle.identity!r}; "
                    "delete it before creating it again",
                ),
            )

        def assign(identity: str) -> Result[None]:
            handle.set_identity(identity)
            return Ok(None)

        result = bind(self._translate(handle), lambda wire: self.executor.create(ctx, wire))
        result = bind(result, assign)
        if isinstance(result, Err):
            return result.diagnostics
        return self.reconcile_read(ctx, handle)

    def reconcile_read(self, ctx: ReconcileContext, handle: StateHandle) -> Diagnostics:
        identity = handle.identity
        fetched = self.executor.read(ctx, identity)
        if isinstance(fetched, Missing):
            return self._handle_missing(handle, fetched)
        return collect(bind(fetched, lambda remote: self.synchronize(remote, handle)))

    def reconcile_delete(self, ctx: ReconcileContext, handle: StateHandle) -> Diagnostics:
        deleted = self.executor.delete(ctx, handle.identity)
        if isinstance(deleted, Err):
            return deleted.diagnostics
        handle.clear_identity()
        return deleted.warnings

    def _translate(self, handle: StateHandle) -> Result[W]:
        try:
            return Ok(self.translate(self.declared(handle)))
        except TranslationError as exc:
            log.error("Invalid %s configuration: %s", self.label, exc)
            return Err.of(f"invalid {self.label} configuration", str(exc))

    def _handle_missing(self, handle: StateHandle, missing: Missing) -> Diagnostics:
        if self.not_found is NotFoundPolicy.FATAL:
            return missing.diagnostics
        log.warning("Forgetting %s %s: no longer present remotely", self.label, missing.identity)
        handle.clear_identity()
        return (
            Diagnostic.warning(
                f"{self.label} no longer exists",
                f"identity {missing.identity!r} was not found remotely and has been cleared",
            ),
        )
