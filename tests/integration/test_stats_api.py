"""
Integration tests for the stats API endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from based_dropouts.app import create_application
from based_dropouts.config import DEFAULT_CONTRACT_ADDRESS, AppConfig, ServerConfig
from based_dropouts.display import PLACEHOLDER_TEXT
from based_dropouts.utils.errors import NetworkFailureError


@pytest.fixture
def app(stats_config, aggregator, tmp_path):
    """Application serving the mock-backed aggregator."""
    config = AppConfig(
        stats=stats_config,
        server=ServerConfig(site_root=str(tmp_path), environment="testing"),
    )
    return create_application(config, aggregator=aggregator)


@pytest.fixture
def client(app):
    """Test client without the lifespan, so no background refresh runs."""
    return TestClient(app)


def test_stats_before_first_refresh(client):
    response = client.get("/api/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["data"]["price"] == PLACEHOLDER_TEXT
    assert data["data"]["market-cap"] == PLACEHOLDER_TEXT


def test_refresh_then_read_stats(client):
    response = client.post("/api/stats/refresh")

    assert response.status_code == 200
    assert response.json()["message"] == "Stats refreshed"

    data = client.get("/api/stats").json()["data"]
    assert data["price"] == "$0.0005"
    assert data["holders"] == "37"
    assert data["market-cap"] == "$500.0K"
    assert data["volume"] == "$40.0K"
    assert data["last-updated"].endswith("(Real Data)")
    assert data["is_fallback"] is False


def test_refresh_with_failing_sources(client, mock_explorer, mock_dexscreener, mock_coingecko):
    mock_explorer.get_token_holders.side_effect = NetworkFailureError("timeout")
    mock_explorer.get_token_transfers.side_effect = NetworkFailureError("timeout")
    mock_dexscreener.get_token_price.side_effect = NetworkFailureError("timeout")
    mock_coingecko.get_token_price.side_effect = NetworkFailureError("timeout")

    data = client.post("/api/stats/refresh").json()["data"]

    assert data["price"] == "$0.0002"
    assert data["holders"] == "150"
    assert data["market-cap"] == "$200.0K"
    assert data["volume"] == "$15.0K"
    assert data["last-updated"].endswith("(Partially Real)")


def test_contract_address(client):
    response = client.get("/api/contract")

    assert response.status_code == 200
    assert response.json()["data"] == {"contract_address": DEFAULT_CONTRACT_ADDRESS}


def test_stats_unavailable_without_aggregator(app, client):
    app.state.aggregator = None

    response = client.get("/api/stats")

    assert response.status_code == 503


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "healthy"
    assert data["environment"] == "testing"
    assert data["aggregator"] == {"running": False, "cycles": 0, "skipped_cycles": 0}
    assert "x-request-id" in response.headers


def test_lifespan_starts_and_closes_aggregator(app, mock_explorer):
    with TestClient(app) as client:
        data = client.get("/health").json()["data"]
        assert data["aggregator"]["running"] is True

    mock_explorer.close.assert_awaited_once()
