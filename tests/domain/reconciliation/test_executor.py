from __future__ import annotations

from typing import TYPE_CHECKING

from fmcsync.adapters.fmc import FmcAPIError, FmcNotFoundError, FmcTimeoutError
from fmcsync.domain.diagnostics import Err, Ok
from fmcsync.domain.reconciliation import Missing, RemoteOperationExecutor
from tests.support.fakes import FakeAccessPolicyClient, remote_policy

if TYPE_CHECKING:
    from fmcsync.domain.context import ReconcileContext


def test_create_returns_remote_identity(ctx: ReconcileContext) -> None:
    client = FakeAccessPolicyClient()
    executor = RemoteOperationExecutor(client=client, label="access policy")

    result = executor.create(ctx, remote_policy(identity=""))

    assert isinstance(result, Ok)
    assert result.value == "abc123"


def test_create_without_returned_identity_is_fatal(ctx: ReconcileContext) -> None:
    client = FakeAccessPolicyClient(created=remote_policy(identity=""))
    executor = RemoteOperationExecutor(client=client, label="access policy")

    result = executor.create(ctx, remote_policy(identity=""))

    assert isinstance(result, Err)
    assert "no identity" in result.diagnostics[0].detail


def test_create_timeout_reports_unknown_outcome(ctx: ReconcileContext) -> None:
    client = FakeAccessPolicyClient(create_error=FmcTimeoutError("FMC request timed out"))
    executor = RemoteOperationExecutor(client=client, label="access policy")

    result = executor.create(ctx, remote_policy(identity=""))

    assert isinstance(result, Err)
    assert "outcome is unknown" in result.diagnostics[0].detail


def test_read_marks_missing_objects(ctx: ReconcileContext) -> None:
    client = FakeAccessPolicyClient(get_error=FmcNotFoundError("gone", status_code=404))
    executor = RemoteOperationExecutor(client=client, label="access policy")

    result = executor.read(ctx, "abc123")

    assert isinstance(result, Missing)
    assert result.identity == "abc123"
    assert result.diagnostics[0].detail == "gone"


def test_read_other_errors_are_plain_failures(ctx: ReconcileContext) -> None:
    client = FakeAccessPolicyClient(get_error=FmcAPIError("HTTP 500", status_code=500))
    executor = RemoteOperationExecutor(client=client, label="access policy")

    result = executor.read(ctx, "abc123")

    assert isinstance(result, Err)
    assert not isinstance(result, Missing)


def test_delete_timeout_reports_unknown_outcome(ctx: ReconcileContext) -> None:
    client = FakeAccessPolicyClient(delete_error=FmcTimeoutError("FMC request timed out"))
    executor = RemoteOperationExecutor(client=client, label="access policy")

    result = executor.delete(ctx, "abc123")

    assert isinstance(result, Err)
    assert "read the resource to confirm" in result.diagnostics[0].detail
