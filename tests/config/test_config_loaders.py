from __future__ import annotations

import logging
from pathlib import Path

import pytest

from memberorders.config import (
    ConfigurationError,
    MissingConfigurationError,
    ReconcileConfig,
    get_database_config,
    get_flex_config,
    get_reconcile_config,
    get_storage_config,
    optional_positive_int,
    require_env_vars,
)
from memberorders.config.flex import DEFAULT_FLEX_AUTH_URL, DEFAULT_FLEX_INTEGRATION_BASE_URL
from memberorders.config.logging import resolve_log_level
from memberorders.domain.reconciliation.engine import DEFAULT_MAX_CONCURRENT_GROUPS
from memberorders.domain.reconciliation.finalize import DEFAULT_MAX_CONCURRENT_WRITES


def test_require_env_vars_strips_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


@pytest.mark.parametrize("raw", ["zero", "0", "-3"])
def test_optional_positive_int_rejects_bad_values(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    monkeypatch.setenv("EXAMPLE_LIMIT", raw)

    with pytest.raises(ConfigurationError) as exc:
        optional_positive_int("EXAMPLE_LIMIT", 5)

    assert "EXAMPLE_LIMIT" in str(exc.value)


def test_optional_positive_int_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_LIMIT", "")

    assert optional_positive_int("EXAMPLE_LIMIT", 5) == 5


def test_reconcile_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEMBERORDERS_MAX_CONCURRENT_GROUPS", "2")
    monkeypatch.delenv("MEMBERORDERS_MAX_CONCURRENT_WRITES", raising=False)

    assert get_reconcile_config() == ReconcileConfig(max_concurrent_groups=2)


def test_flex_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEX_INTEGRATION_CLIENT_ID", "client-id")
    monkeypatch.setenv("FLEX_INTEGRATION_CLIENT_SECRET", "client-secret")
    monkeypatch.delenv("FLEX_INTEGRATION_BASE_URL", raising=False)
    monkeypatch.delenv("FLEX_AUTH_URL", raising=False)

    config = get_flex_config()

    assert config.client_id == "client-id"
    assert config.auth_url == DEFAULT_FLEX_AUTH_URL
    assert config.resilience.base_url == DEFAULT_FLEX_INTEGRATION_BASE_URL
    assert config.resilience.ratelimit is not None


def test_flex_config_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FLEX_INTEGRATION_CLIENT_ID", raising=False)
    monkeypatch.setenv("FLEX_INTEGRATION_CLIENT_SECRET", "client-secret")

    with pytest.raises(MissingConfigurationError) as exc:
        get_flex_config()

    assert "FLEX_INTEGRATION_CLIENT_ID" in str(exc.value)


def test_database_config_prefers_explicit_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://db/memberorders")

    assert get_database_config().uri == "postgresql+psycopg://db/memberorders"


def test_database_config_defaults_to_sqlite_in_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("MEMBERORDERS_DATA_DIR", str(tmp_path / "data"))

    uri = get_database_config().uri

    assert uri == f"sqlite+pysqlite:///{(tmp_path / 'data').resolve() / 'memberorders.db'}"
    assert (tmp_path / "data").is_dir()
    assert get_storage_config().data_dir == tmp_path / "data"


def test_database_config_falls_back_to_xdg_data_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.delenv("MEMBERORDERS_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    uri = get_database_config().uri

    assert uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'memberorders' / 'memberorders.db'}"


def test_reconcile_config_defaults_match_engine_defaults() -> None:
    config = ReconcileConfig()

    assert config.max_concurrent_groups == DEFAULT_MAX_CONCURRENT_GROUPS
    assert config.max_concurrent_writes == DEFAULT_MAX_CONCURRENT_WRITES


@pytest.mark.parametrize(("raw", "expected"), [("debug", logging.DEBUG), ("", logging.INFO)])
def test_log_level_is_read_from_environment(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int
) -> None:
    monkeypatch.setenv("MEMBERORDERS_LOG_LEVEL", raw)

    assert resolve_log_level() == expected


def test_unknown_log_level_is_a_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEMBERORDERS_LOG_LEVEL", "verbose")

    with pytest.raises(ConfigurationError) as exc:
        resolve_log_level()

    assert "MEMBERORDERS_LOG_LEVEL" in str(exc.value)
    assert resolve_log_level("warning") == logging.WARNING
