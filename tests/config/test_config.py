from __future__ import annotations

import pytest

from fmcsync.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_fmc_config,
    get_reconcile_config,
    get_storage_config,
    require_env_var,
    require_env_vars,
)
from fmcsync.domain.reconciliation import NotFoundPolicy


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_fmc_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FMC_HOST", "fmc.example/")
    monkeypatch.setenv("FMC_DOMAIN_UUID", "e276abec-e0f2-11e3-8169-6d9ed49b625f")
    monkeypatch.setenv("FMC_ACCESS_TOKEN", "token-123")
    monkeypatch.setenv("FMC_INSECURE", "true")

    config = get_fmc_config()

    assert config.base_url == "https://fmc.example"
    assert config.resilience.verify_tls is False
    assert config.resilience.cache is None
    assert "POST" not in config.resilience.retry.allowed_methods
    assert config.lookup_resilience.cache is not None
    assert config.resilience.default_headers == {
        "X-auth-access-token": "token-123",
        "Accept": "application/json",
    }


def test_fmc_config_rejects_invalid_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FMC_HOST", "fmc.example")
    monkeypatch.setenv("FMC_DOMAIN_UUID", "domain")
    monkeypatch.setenv("FMC_ACCESS_TOKEN", "token")
    monkeypatch.setenv("FMC_INSECURE", "maybe")

    with pytest.raises(ConfigurationError, match="FMC_INSECURE"):
        get_fmc_config()


def test_reconcile_config_defaults_to_fatal_not_found() -> None:
    config = get_reconcile_config()

    assert config.not_found is NotFoundPolicy.FATAL
    assert config.timeout_seconds is not None


def test_reconcile_config_reads_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FMCSYNC_NOT_FOUND_POLICY", "Forget")
    monkeypatch.setenv("FMCSYNC_TIMEOUT_SECONDS", "15")

    config = get_reconcile_config()

    assert config.not_found is NotFoundPolicy.FORGET
    assert config.timeout_seconds == 15.0


@pytest.mark.parametrize(
    ("name", "value"),
    [("FMCSYNC_NOT_FOUND_POLICY", "ignore"), ("FMCSYNC_TIMEOUT_SECONDS", "-1")],
)
def test_reconcile_config_rejects_invalid_values(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError, match=name):
        get_reconcile_config()


def test_storage_config_uses_data_dir_override() -> None:
    storage = get_storage_config()

    state_dir = storage.state_dir()

    assert state_dir.is_dir()
    assert state_dir.parent.name == "data"
