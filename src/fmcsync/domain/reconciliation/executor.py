"""Single remote create/read/delete calls with errors turned into diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from fmcsync.domain.context import ReconcileCancelledError
from fmcsync.domain.diagnostics import Diagnostic, Err, Ok
from fmcsync.domain.ports.remote import RemoteError, RemoteNotFoundError, RemoteTimeoutError

if TYPE_CHECKING:
    from fmcsync.domain.context import ReconcileContext
    from fmcsync.domain.diagnostics import Result
    from fmcsync.domain.ports.remote import RemoteClient, RemoteResource

log = getLogger(__name__)

_OUTCOME_UNKNOWN = "the remote outcome is unknown; read the resource to confirm its state"


@dataclass(frozen=True, slots=True)
class Missing(Err):
    """Read failure caused by the remote object not existing."""

    identity: str = ""


@dataclass
class RemoteOperationExecutor[W, R: RemoteResource]:
    """Run exactly one remote operation per call.

    Nothing is retried here; transport-level retries belong to the client.
    """

    client: RemoteClient[W, R]
    label: str

    def create(self, ctx: ReconcileContext, wire: W) -> Result[str]:
        summary = f"unable to create {self.label}"
        try:
            ctx.raise_if_done()
        except ReconcileCancelledError as exc:
            return Err.of(summary, str(exc))

        log.info("Creating %s", self.label)
        try:
            remote = self.client.create(ctx, wire)
        except RemoteTimeoutError as exc:
            log.warning("Create of %s timed out: %s", self.label, exc)
            return Err.of(summary, f"{exc}; {_OUTCOME_UNKNOWN}")
        except RemoteError as exc:
            log.warning("Create of %s failed: %s", self.label, exc)
            return Err.of(summary, str(exc))

        if not remote.id:
            return Err.of(summary, "the remote system returned no identity")
        log.info("Created %s %s", self.label, remote.id)
        return Ok(remote.id)

    def read(self, ctx: ReconcileContext, identity: str) -> Result[R]:
        summary = f"unable to read {self.label}"
        if not identity:
            return Err.of(
                summary, f"{self.label} has no identity; it was never created or was deleted"
            )
        try:
            ctx.raise_if_done()
        except ReconcileCancelledError as exc:
            return Err.of(summary, str(exc))

        log.debug("Reading %s %s", self.label, identity)
        try:
            remote = self.client.get(ctx, identity)
        except RemoteNotFoundError as exc:
            log.warning("%s %s not found remotely: %s", self.label, identity, exc)
            return Missing(diagnostics=(Diagnostic.error(summary, str(exc)),), identity=identity)
        except RemoteError as exc:
            log.warning("Read of %s %s failed: %s", self.label, identity, exc)
            return Err.of(summary, str(exc))
        return Ok(remote)

    def delete(self, ctx: ReconcileContext, identity: str) -> Result[None]:
        summary = f"unable to delete {self.label}"
        if not identity:
            return Err.of(summary, f"{self.label} has no identity; nothing to delete")
        try:
            ctx.raise_if_done()
        except ReconcileCancelledError as exc:
            return Err.of(summary, str(exc))

        log.info("Deleting %s %s", self.label, identity)
        try:
            self.client.delete(ctx, identity)
        except RemoteTimeoutError as exc:
            log.warning("Delete of %s %s timed out: %s", self.label, identity, exc)
            return Err.of(summary, f"{exc}; {_OUTCOME_UNKNOWN}")
        except RemoteError as exc:
            log.warning("Delete of %s %s failed: %s", self.label, identity, exc)
            return Err.of(summary, str(exc))
        return Ok(None)
