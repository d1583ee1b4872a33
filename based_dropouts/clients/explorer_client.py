"""Block explorer client.

Talks to a BaseScan-compatible API for the token holder list and the
token transfer history.
"""

from typing import Any, Dict, List

from based_dropouts.clients.base_client import BaseApiClient
from based_dropouts.logging_config import get_logger
from based_dropouts.utils.errors import EmptyResultError, MalformedResponseError

# Get logger
logger = get_logger(__name__)

# Envelope status for a successful explorer call
STATUS_OK = "1"


class ExplorerClient(BaseApiClient):
    """Client for the block explorer's token endpoints."""

    source = "explorer"

    async def _call(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Call the explorer and unwrap its status/result envelope.

        Raises:
            EmptyResultError: If the envelope status is not ``"1"``
            MalformedResponseError: If the envelope or its result has an unexpected shape
        """
        if self.config.explorer_api_key:
            params = {**params, "apikey": self.config.explorer_api_key}

        payload = await self._get_json(self.config.explorer_api_url, params=params)

        if not isinstance(payload, dict):
            raise MalformedResponseError(
                "Explorer response is not an object",
                details={"source": self.source, "action": params.get("action")},
            )

        if payload.get("status") != STATUS_OK:
            raise EmptyResultError(
                f"Explorer returned no data: {payload.get('message', 'unknown')}",
                details={"source": self.source, "action": params.get("action")},
            )

        result = payload.get("result")
        if not isinstance(result, list):
            raise MalformedResponseError(
                "Explorer result is not a list",
                details={"source": self.source, "action": params.get("action")},
            )

        return result

    async def get_token_holders(
        self,
        contract_address: str,
        page: int = 1,
        offset: int = 100,
    ) -> List[Dict[str, Any]]:
        """Get one page of the token holder list.

        Args:
            contract_address: Token contract address
            page: 1-based page number
            offset: Records per page

        Returns:
            Holder records of the page
        """
        logger.debug(f"Fetching holders page {page} for {contract_address}")
        return await self._call({
            "module": "token",
            "action": "tokenholderlist",
            "contractaddress": contract_address,
            "page": page,
            "offset": offset,
        })

    async def get_token_transfers(
        self,
        contract_address: str,
        page: int = 1,
        offset: int = 100,
        sort: str = "desc",
    ) -> List[Dict[str, Any]]:
        """Get token transfer transactions, most recent first by default.

        Args:
            contract_address: Token contract address
            page: 1-based page number
            offset: Transactions per page
            sort: ``"desc"`` or ``"asc"`` by block

        Returns:
            Transfer records with ``timeStamp`` and raw ``value`` fields
        """
        logger.debug(f"Fetching {offset} {sort} transfers for {contract_address}")
        return await self._call({
            "module": "account",
            "action": "tokentx",
            "contractaddress": contract_address,
            "page": page,
            "offset": offset,
            "sort": sort,
        })
