"""Token price clients.

Each client returns a positive USD price for a contract address or raises
one of the stats errors. The aggregator tries them in order.
"""

from typing import Any

from based_dropouts.clients.base_client import BaseApiClient
from based_dropouts.logging_config import get_logger
from based_dropouts.utils.errors import EmptyResultError, MalformedResponseError

# Get logger
logger = get_logger(__name__)


def _to_price(raw: Any, source: str) -> float:
    try:
        price = float(raw)
    except (TypeError, ValueError):
        raise MalformedResponseError(f"{source} price is not a number: {raw!r}",
                                     details={"source": source})
    if not price > 0:
        raise EmptyResultError(f"{source} has no positive price", details={"source": source})
    return price


class BasePriceClient(BaseApiClient):
    """Base class for price sources."""

    async def get_token_price(self, contract_address: str) -> float:
        """Get the token price in USD.

        Raises:
            NetworkFailureError: If the source is unreachable
            MalformedResponseError: If the response has an unexpected shape
            EmptyResultError: If the source has no positive price for the token
        """
        raise NotImplementedError


class DexScreenerClient(BasePriceClient):
    """Price from the most relevant DexScreener pair of the token."""

    source = "dexscreener"

    async def get_token_price(self, contract_address: str) -> float:
        payload = await self._get_json(
            f"{self.config.dexscreener_api_url}/dex/tokens/{contract_address}"
        )
        if not isinstance(payload, dict):
            raise MalformedResponseError("DexScreener response is not an object",
                                         details={"source": self.source})

        pairs = payload.get("pairs")
        if not pairs:
            raise EmptyResultError("DexScreener lists no pairs for the token",
                                   details={"source": self.source})
        if not isinstance(pairs, list) or not isinstance(pairs[0], dict):
            raise MalformedResponseError("DexScreener pairs have an unexpected shape",
                                         details={"source": self.source})

        pair = pairs[0]
        logger.debug(f"DexScreener lists {len(pairs)} pairs, using {pair.get('pairAddress', 'unknown')}")
        return _to_price(pair.get("priceUsd") or pair.get("priceNative"), self.source)


class CoinGeckoClient(BasePriceClient):
    """Price from CoinGecko's token price endpoint for the configured platform."""

    source = "coingecko"

    async def get_token_price(self, contract_address: str) -> float:
        payload = await self._get_json(
            f"{self.config.coingecko_api_url}/simple/token_price/{self.config.coingecko_platform}",
            params={"contract_addresses": contract_address, "vs_currencies": "usd"},
        )
        if not isinstance(payload, dict):
            raise MalformedResponseError("CoinGecko response is not an object",
                                         details={"source": self.source})

        # CoinGecko keys the result by lower-cased contract address
        entry = payload.get(contract_address.lower())
        if not entry:
            raise EmptyResultError("CoinGecko has no price for the token",
                                   details={"source": self.source})
        if not isinstance(entry, dict):
            raise MalformedResponseError("CoinGecko price entry has an unexpected shape",
                                         details={"source": self.source})

        return _to_price(entry.get("usd"), self.source)
