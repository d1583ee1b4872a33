"""Common test fixtures for Based Dropouts tests.

This module provides fixtures that can be reused across different test modules.
"""

import random
from unittest.mock import AsyncMock

import pytest

from based_dropouts.clients.explorer_client import ExplorerClient
from based_dropouts.clients.price_client import CoinGeckoClient, DexScreenerClient
from based_dropouts.config import DEFAULT_CONTRACT_ADDRESS, StatsConfig
from based_dropouts.services.stats_aggregator import StatsAggregator

# Fixed "now" for the 24h volume window
NOW = 1_700_000_000

# 10^8 tokens with 18 decimals
HUNDRED_MILLION_TOKENS = str(10 ** 26)


def make_holders(count, start=0):
    """Holder list records as returned by the explorer."""
    return [
        {
            "TokenHolderAddress": f"0x{index:040x}",
            "TokenHolderQuantity": "1000000000000000000",
        }
        for index in range(start, start + count)
    ]


def make_transfer(age_seconds, value=HUNDRED_MILLION_TOKENS):
    """Transfer record as returned by the explorer's tokentx action."""
    return {
        "timeStamp": str(NOW - age_seconds),
        "value": value,
        "hash": f"0x{age_seconds:064x}",
    }


@pytest.fixture
def stats_config():
    """Stats configuration without the page delay."""
    return StatsConfig(
        contract_address=DEFAULT_CONTRACT_ADDRESS,
        holders_page_delay=0.0,
    )


@pytest.fixture
def sample_holders():
    """A single short page of holders."""
    return make_holders(37)


@pytest.fixture
def sample_transfers():
    """Two transfers inside the 24h window and one outside it."""
    return [
        make_transfer(60),
        make_transfer(3600),
        make_transfer(25 * 3600),
    ]


@pytest.fixture
def mock_explorer(sample_holders, sample_transfers):
    """Create a mock explorer client."""
    explorer = AsyncMock(spec=ExplorerClient)
    explorer.source = "explorer"
    explorer.get_token_holders.return_value = sample_holders
    explorer.get_token_transfers.return_value = sample_transfers
    return explorer


@pytest.fixture
def mock_dexscreener():
    """Create a mock primary price source."""
    client = AsyncMock(spec=DexScreenerClient)
    client.source = "dexscreener"
    client.get_token_price.return_value = 0.0005
    return client


@pytest.fixture
def mock_coingecko():
    """Create a mock secondary price source."""
    client = AsyncMock(spec=CoinGeckoClient)
    client.source = "coingecko"
    client.get_token_price.return_value = 0.0003
    return client


@pytest.fixture
def aggregator(stats_config, mock_explorer, mock_dexscreener, mock_coingecko):
    """Create a StatsAggregator wired to mock sources."""
    return StatsAggregator(
        config=stats_config,
        explorer=mock_explorer,
        price_sources=[mock_dexscreener, mock_coingecko],
        rng=random.Random(42),
        clock=lambda: NOW,
    )
