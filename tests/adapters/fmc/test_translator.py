from __future__ import annotations

import pytest

from fmcsync.adapters.fmc import FmcObjectType, translate_access_policy
from fmcsync.domain.reconciliation import TranslationError
from fmcsync.resources.access_policy import AccessPolicyConfig
from tests.support.fakes import INTRUSION_POLICY_ID, SYSLOG_ALERT_ID


def test_translate_minimal_policy(policy_config: AccessPolicyConfig) -> None:
    payload = translate_access_policy(policy_config)

    assert payload.to_wire() == {
        "type": "AccessPolicy",
        "name": "Terraform Access Policy",
        "defaultAction": {"type": "AccessPolicyDefaultAction", "action": "PERMIT"},
    }


def test_translate_full_policy_injects_discriminators(
    full_policy_config: AccessPolicyConfig,
) -> None:
    wire = translate_access_policy(full_policy_config).to_wire()

    assert wire["description"] == "Managed by fmcsync"
    assert wire["defaultAction"] == {
        "type": FmcObjectType.ACCESS_POLICY_DEFAULT_ACTION.value,
        "action": "PERMIT",
        "intrusionPolicy": {"id": INTRUSION_POLICY_ID, "type": "IntrusionPolicy"},
        "syslogConfig": {"id": SYSLOG_ALERT_ID, "type": "SyslogAlert"},
        "logEnd": True,
        "sendEventsToFMC": True,
    }


def test_translate_is_pure(full_policy_config: AccessPolicyConfig) -> None:
    assert translate_access_policy(full_policy_config) == translate_access_policy(
        full_policy_config
    )


@pytest.mark.parametrize(
    "field",
    ["default_action_base_intrusion_policy_id", "default_action_syslog_config_id"],
)
def test_translate_rejects_malformed_references(field: str) -> None:
    config = AccessPolicyConfig.model_validate({"name": "Policy", field: "12345"})

    with pytest.raises(TranslationError) as excinfo:
        translate_access_policy(config)

    assert excinfo.value.field == field
