from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from fmcsync.adapters.state_file import JsonStateStore
from fmcsync.domain.context import ReconcileContext
from fmcsync.domain.state import StateHandle
from fmcsync.resources.access_policy import AccessPolicyConfig, AccessPolicyState
from tests.support.fakes import INTRUSION_POLICY_ID, SYSLOG_ALERT_ID, FakeAccessPolicyClient

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "FMC_HOST",
        "FMC_DOMAIN_UUID",
        "FMC_ACCESS_TOKEN",
        "FMC_INSECURE",
        "FMCSYNC_NOT_FOUND_POLICY",
        "FMCSYNC_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FMCSYNC_DATA_DIR", str(tmp_path / "data"))


@pytest.fixture
def policy_config() -> AccessPolicyConfig:
    return AccessPolicyConfig(name="Terraform Access Policy", default_action="permit")


@pytest.fixture
def full_policy_config() -> AccessPolicyConfig:
    return AccessPolicyConfig.model_validate(
        {
            "name": "Terraform Access Policy",
            "description": "Managed by fmcsync",
            "default_action": "permit",
            "default_action_base_intrusion_policy_id": INTRUSION_POLICY_ID,
            "default_action_send_events_to_fmc": "true",
            "default_action_log_end": "true",
            "default_action_syslog_config_id": SYSLOG_ALERT_ID,
        }
    )


@pytest.fixture
def handle(policy_config: AccessPolicyConfig) -> StateHandle[AccessPolicyState]:
    return StateHandle(AccessPolicyState.from_config(policy_config))


@pytest.fixture
def ctx() -> ReconcileContext:
    return ReconcileContext()


@pytest.fixture
def fake_client() -> FakeAccessPolicyClient:
    return FakeAccessPolicyClient()


@pytest.fixture
def state_store(tmp_path: Path) -> JsonStateStore:
    return JsonStateStore(tmp_path / "state")
