"""Deadline and cancellation signal for one reconciliation call."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field


class ReconcileCancelledError(RuntimeError):
    """Raised when a reconciliation call is cancelled or runs past its deadline."""


@dataclass(slots=True)
class ReconcileContext:
    """Carries the deadline (monotonic seconds) and a cancellation event.

    A call that observes cancellation while a create or delete is in flight
    cannot know whether the server applied it; callers re-read to confirm.
    """

    deadline: float | None = None
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @classmethod
    def with_timeout(cls, seconds: float | None) -> ReconcileContext:
        if seconds is None:
            return cls()
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> float | None:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def raise_if_done(self) -> None:
        if self.cancelled:
            raise ReconcileCancelledError("reconciliation was cancelled")
        if self.expired:
            raise ReconcileCancelledError("reconciliation deadline exceeded")
