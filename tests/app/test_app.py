from __future__ import annotations

import json

from fmcsync.adapters.fmc import FmcAPIError, FmcNotFoundError
from fmcsync.adapters.state_file import JsonStateStore, state_key
from fmcsync.app import create_access_policy, delete_access_policy, read_access_policy
from fmcsync.config import ReconcileConfig
from fmcsync.domain.diagnostics import has_errors
from fmcsync.domain.reconciliation import NotFoundPolicy
from fmcsync.resources.access_policy import AccessPolicyConfig, AccessPolicyState
from tests.support.fakes import FakeAccessPolicyClient, remote_policy

KEY = state_key("Terraform Access Policy")


def test_create_persists_identity_and_observed_state(
    policy_config: AccessPolicyConfig,
    fake_client: FakeAccessPolicyClient,
    state_store: JsonStateStore,
) -> None:
    diagnostics = create_access_policy(policy_config, client=fake_client, store=state_store)

    assert diagnostics == ()
    document = json.loads(state_store.path_for(KEY).read_text())
    assert document["id"] == "abc123"
    assert document["attributes"]["type"] == "AccessPolicy"
    assert document["attributes"]["default_action"] == "PERMIT"


def test_failed_create_stores_nothing(
    policy_config: AccessPolicyConfig, state_store: JsonStateStore
) -> None:
    client = FakeAccessPolicyClient(create_error=FmcAPIError("rejected", status_code=400))

    diagnostics = create_access_policy(policy_config, client=client, store=state_store)

    assert has_errors(diagnostics)
    assert not state_store.exists(KEY)


def test_create_with_changed_declaration_requires_replacement(
    policy_config: AccessPolicyConfig,
    fake_client: FakeAccessPolicyClient,
    state_store: JsonStateStore,
) -> None:
    create_access_policy(policy_config, client=fake_client, store=state_store)
    changed = AccessPolicyConfig(name=policy_config.name, default_action="block")

    diagnostics = create_access_policy(changed, client=fake_client, store=state_store)

    assert [d.summary for d in diagnostics] == ["access policy requires replacement"]
    assert "default_action" in diagnostics[0].detail
    assert fake_client.count("create") == 1


def test_create_with_unchanged_declaration_refreshes(
    policy_config: AccessPolicyConfig,
    fake_client: FakeAccessPolicyClient,
    state_store: JsonStateStore,
) -> None:
    create_access_policy(policy_config, client=fake_client, store=state_store)

    diagnostics = create_access_policy(policy_config, client=fake_client, store=state_store)

    assert diagnostics == ()
    assert fake_client.count("create") == 1
    assert fake_client.count("get") == 2


def test_read_without_state_reports_error(fake_client: FakeAccessPolicyClient) -> None:
    handle, diagnostics = read_access_policy("Unknown", client=fake_client)

    assert handle is None
    assert has_errors(diagnostics)
    assert fake_client.calls == []


def test_read_refreshes_stored_state(
    policy_config: AccessPolicyConfig,
    fake_client: FakeAccessPolicyClient,
    state_store: JsonStateStore,
) -> None:
    create_access_policy(policy_config, client=fake_client, store=state_store)
    fake_client.fetched = remote_policy(description="edited in FMC")

    handle, diagnostics = read_access_policy(
        policy_config.name, client=fake_client, store=state_store
    )

    assert handle is not None
    assert not has_errors(diagnostics)
    stored = state_store.load(KEY, AccessPolicyState)
    assert stored.record.description == "edited in FMC"


def test_read_of_vanished_policy_can_forget_state(
    policy_config: AccessPolicyConfig,
    fake_client: FakeAccessPolicyClient,
    state_store: JsonStateStore,
) -> None:
    create_access_policy(policy_config, client=fake_client, store=state_store)
    fake_client.get_error = FmcNotFoundError("Object not found", status_code=404)

    _, diagnostics = read_access_policy(
        policy_config.name,
        client=fake_client,
        store=state_store,
        reconcile=ReconcileConfig(not_found=NotFoundPolicy.FORGET),
    )

    assert not has_errors(diagnostics)
    assert not state_store.exists(KEY)


def test_read_of_vanished_policy_keeps_state_by_default(
    policy_config: AccessPolicyConfig,
    fake_client: FakeAccessPolicyClient,
    state_store: JsonStateStore,
) -> None:
    create_access_policy(policy_config, client=fake_client, store=state_store)
    fake_client.get_error = FmcNotFoundError("Object not found", status_code=404)

    _, diagnostics = read_access_policy(policy_config.name, client=fake_client, store=state_store)

    assert has_errors(diagnostics)
    assert state_store.load(KEY, AccessPolicyState).identity == "abc123"


def test_delete_removes_state(
    policy_config: AccessPolicyConfig,
    fake_client: FakeAccessPolicyClient,
    state_store: JsonStateStore,
) -> None:
    create_access_policy(policy_config, client=fake_client, store=state_store)

    diagnostics = delete_access_policy(policy_config.name, client=fake_client, store=state_store)

    assert diagnostics == ()
    assert fake_client.calls[-1] == ("delete", "abc123")
    assert not state_store.exists(KEY)


def test_failed_delete_keeps_state(
    policy_config: AccessPolicyConfig,
    fake_client: FakeAccessPolicyClient,
    state_store: JsonStateStore,
) -> None:
    create_access_policy(policy_config, client=fake_client, store=state_store)
    fake_client.delete_error = FmcAPIError("Policy is assigned to devices", status_code=400)

    diagnostics = delete_access_policy(policy_config.name, client=fake_client, store=state_store)

    assert has_errors(diagnostics)
    assert state_store.exists(KEY)
