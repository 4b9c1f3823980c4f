"""Domain port definitions for adapters."""

from __future__ import annotations

from .remote import (
    RemoteClient,
    RemoteError,
    RemoteNotFoundError,
    RemoteResource,
    RemoteTimeoutError,
)

__all__ = [
    "RemoteClient",
    "RemoteError",
    "RemoteNotFoundError",
    "RemoteResource",
    "RemoteTimeoutError",
]
