"""Port for the remote system that owns managed objects."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fmcsync.domain.context import ReconcileContext


class RemoteError(RuntimeError):
    """Raised by remote clients for any failed transport or API call.

    ``str(error)`` is the literal detail reported back to the user.
    """


class RemoteNotFoundError(RemoteError):
    """Raised when the remote system has no object for the given identity."""


class RemoteTimeoutError(RemoteError):
    """Raised when a remote call did not answer in time.

    For mutating calls the server-side outcome is unknown.
    """


@runtime_checkable
class RemoteResource(Protocol):
    """Server-confirmed representation of a managed object."""

    @property
    def id(self) -> str | None: ...


class RemoteClient[W, R: RemoteResource](Protocol):
    """Create/read/delete access to one kind of remote object.

    Each call is one atomic remote transaction. ``create`` is not assumed to be
    idempotent.
    """

    def create(self, ctx: ReconcileContext, wire: W) -> R: ...

    def get(self, ctx: ReconcileContext, identity: str) -> R: ...

    def delete(self, ctx: ReconcileContext, identity: str) -> None: ...


__all__ = [
    "RemoteClient",
    "RemoteError",
    "RemoteNotFoundError",
    "RemoteResource",
    "RemoteTimeoutError",
]
