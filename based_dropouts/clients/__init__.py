"""API clients for the token stats sources."""

from based_dropouts.clients.base_client import BaseApiClient
from based_dropouts.clients.explorer_client import ExplorerClient
from based_dropouts.clients.price_client import BasePriceClient, CoinGeckoClient, DexScreenerClient

__all__ = [
    "BaseApiClient",
    "BasePriceClient",
    "CoinGeckoClient",
    "DexScreenerClient",
    "ExplorerClient",
]
