"""Reconciliation behaviour settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from fmcsync.domain.reconciliation.contracts import NotFoundPolicy

from .env import env_float
from .errors import ConfigurationError

DEFAULT_RECONCILE_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    not_found: NotFoundPolicy = NotFoundPolicy.FATAL
    timeout_seconds: float | None = DEFAULT_RECONCILE_TIMEOUT_SECONDS


def get_reconcile_config() -> ReconcileConfig:
    raw_policy = os.getenv("FMCSYNC_NOT_FOUND_POLICY", "").strip().lower()
    try:
        policy = NotFoundPolicy(raw_policy) if raw_policy else NotFoundPolicy.FATAL
    except ValueError as exc:
        allowed = ", ".join(member.value for member in NotFoundPolicy)
        raise ConfigurationError(
            f"FMCSYNC_NOT_FOUND_POLICY must be one of {allowed}, got: {raw_policy!r}"
        ) from exc

    timeout = env_float("FMCSYNC_TIMEOUT_SECONDS")
    if timeout is not None and timeout <= 0:
        raise ConfigurationError("FMCSYNC_TIMEOUT_SECONDS must be positive")
    return ReconcileConfig(
        not_found=policy,
        timeout_seconds=timeout if timeout is not None else DEFAULT_RECONCILE_TIMEOUT_SECONDS,
    )
