from __future__ import annotations

import pytest

from pyniu._constants import APP_URL
from pyniu.config import DEFAULT_PORT, NiuConfig
from pyniu.exceptions import NiuConfigError

_NIU_ENV = (
    "NIU_ACCOUNT",
    "NIU_PASSWORD",
    "NIU_COUNTRY_CODE",
    "NIU_API_KEY",
    "NIU_PORT",
    "NIU_HOST",
    "NIU_LANGUAGE",
    "NIU_TIME_ZONE",
    "NIU_ACCOUNT_URL",
    "NIU_APP_URL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _NIU_ENV:
        monkeypatch.delenv(name, raising=False)


def test_from_env_reads_niu_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NIU_ACCOUNT", "rider@example.com")
    monkeypatch.setenv("NIU_PASSWORD", "secret")
    monkeypatch.setenv("NIU_COUNTRY_CODE", "49")
    monkeypatch.setenv("NIU_API_KEY", "shared-key")
    monkeypatch.setenv("NIU_PORT", "9090")
    monkeypatch.setenv("NIU_TIME_ZONE", "Europe/Berlin")

    config = NiuConfig.from_env()

    assert config.account == "rider@example.com"
    assert config.password == "secret"
    assert config.country_code == "49"
    assert config.api_key == "shared-key"
    assert config.port == 9090
    assert config.time_zone == "Europe/Berlin"
    assert config.app_url == APP_URL


def test_missing_credentials_become_empty() -> None:
    config = NiuConfig.from_env()
    assert (config.account, config.password, config.country_code) == ("", "", "")
    assert config.api_key == ""
    assert config.port == DEFAULT_PORT
    assert config.time_zone == "UTC"


def test_overrides_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NIU_ACCOUNT", "env@example.com")
    monkeypatch.setenv("NIU_PORT", "9090")

    config = NiuConfig.from_env(account="cli@example.com", port=7070)

    assert config.account == "cli@example.com"
    assert config.port == 7070


def test_invalid_port_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NIU_PORT", "eighty")
    with pytest.raises(NiuConfigError, match="NIU_PORT"):
        NiuConfig.from_env()


def test_invalid_port_ignored_when_overridden(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NIU_PORT", "eighty")
    assert NiuConfig.from_env(port=8081).port == 8081
