"""Unit tests for environment-based configuration."""

import pytest

from based_dropouts.config import (
    DEFAULT_CONTRACT_ADDRESS,
    ServerConfig,
    StatsConfig,
    address_validator,
    get_server_config,
    get_stats_config,
    url_validator,
)


def test_stats_defaults(monkeypatch):
    for key in ("TOKEN_CONTRACT_ADDRESS", "STATS_REFRESH_INTERVAL", "EXPLORER_API_KEY"):
        monkeypatch.delenv(key, raising=False)

    config = get_stats_config()

    assert config.contract_address == DEFAULT_CONTRACT_ADDRESS
    assert config.refresh_interval == 30.0
    assert config.holders_page_size == 100
    assert config.holders_max_pages == 5
    assert config.explorer_api_key is None


def test_stats_from_environment(monkeypatch):
    monkeypatch.setenv("TOKEN_CONTRACT_ADDRESS", "0x" + "AB" * 20)
    monkeypatch.setenv("STATS_REFRESH_INTERVAL", "5")
    monkeypatch.setenv("EXPLORER_API_URL", "https://api.example.org/api/")
    monkeypatch.setenv("EXPLORER_API_KEY", "secret")

    config = get_stats_config()

    assert config.contract_address == "0x" + "ab" * 20
    assert config.refresh_interval == 5.0
    assert config.explorer_api_url == "https://api.example.org/api"
    assert config.explorer_api_key == "secret"


def test_invalid_refresh_interval(monkeypatch):
    monkeypatch.setenv("STATS_REFRESH_INTERVAL", "0")

    with pytest.raises(ValueError, match="STATS_REFRESH_INTERVAL"):
        get_stats_config()


def test_server_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("SITE_ROOT", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ENVIRONMENT", "Production")

    config = get_server_config()

    assert config.port == 9090
    assert config.site_root == str(tmp_path)
    assert config.log_level == "DEBUG"
    assert config.environment == "production"
    assert config.base_url == "http://localhost:9090"


def test_server_default_port(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)

    assert get_server_config().port == 8081


@pytest.mark.parametrize("value", ["0x123", "1b7cb366859b1f09951e3267e9cf73988f9ef0be", "0x" + "zz" * 20])
def test_address_validator_rejects(value):
    with pytest.raises(ValueError):
        address_validator(value)


def test_url_validator_rejects():
    with pytest.raises(ValueError):
        url_validator("ftp://example.org")


def test_config_validation():
    with pytest.raises(ValueError):
        StatsConfig(holders_max_pages=0)
    with pytest.raises(ValueError):
        ServerConfig(log_level="VERBOSE")
