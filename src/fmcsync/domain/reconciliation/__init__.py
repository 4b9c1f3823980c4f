"""Reconciliation core mapping declared state onto a remote create/read/delete API.

Pipeline per call:
1) translate declared state into the wire object (create only)
2) execute exactly one mutating remote call, or a read
3) synchronize the observed remote object back into local state
"""

from __future__ import annotations

from .contracts import FieldMapping, NotFoundPolicy, TranslateDeclaredState, TranslationError
from .engine import ReconciliationEngine
from .executor import Missing, RemoteOperationExecutor
from .synchronize import ObservedStateSynchronizer

__all__ = [
    "FieldMapping",
    "Missing",
    "NotFoundPolicy",
    "ObservedStateSynchronizer",
    "ReconciliationEngine",
    "RemoteOperationExecutor",
    "TranslateDeclaredState",
    "TranslationError",
]
