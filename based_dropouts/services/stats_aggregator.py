"""Token stats aggregation service.

Fetches the holder count, price and 24h volume of the token concurrently,
substitutes fallback values for any source that is unavailable and writes
the formatted result into the display slots.
"""

import asyncio
import random
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from based_dropouts.clients.explorer_client import ExplorerClient
from based_dropouts.clients.price_client import BasePriceClient, CoinGeckoClient, DexScreenerClient
from based_dropouts.config import StatsConfig, get_stats_config
from based_dropouts.display import StatsDisplay
from based_dropouts.logging_config import get_logger
from based_dropouts.models.stats import DisplaySnapshot, HoldersResult, PriceResult, VolumeResult
from based_dropouts.services.base_service import BaseService
from based_dropouts.utils.errors import (
    EmptyResultError,
    MalformedResponseError,
    NetworkFailureError,
    StatsError,
)

logger = get_logger(__name__)

SECONDS_PER_HOUR = 3600


def estimate_synthetic_volume(
    price: float,
    rng: Optional[random.Random] = None,
    floor: float = 1000.0,
) -> float:
    """Synthetic 24h volume placeholder derived from a price.

    This is not observed volume: it is 1-6% of the price scaled to a
    million tokens, never below ``floor``.

    Args:
        price: Token price in USD
        rng: Random source, the ``random`` module when omitted
        floor: Minimum returned volume

    Returns:
        Estimated volume in USD
    """
    factor = 0.01 + (rng or random).random() * 0.05
    return max(floor, price * 1_000_000 * factor)


class StatsAggregator(BaseService):
    """Service refreshing the live token stats.

    Usage:
        aggregator = StatsAggregator(config, explorer, [dexscreener, coingecko])
        await aggregator.start()  # refreshes now, then every refresh_interval
        # ... later ...
        await aggregator.stop()

        # Or run one cycle manually:
        snapshot = await aggregator.refresh()
    """

    def __init__(
        self,
        config: StatsConfig,
        explorer: ExplorerClient,
        price_sources: Sequence[BasePriceClient],
        display: Optional[StatsDisplay] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the aggregator.

        Args:
            config: Stats configuration
            explorer: Client for the holder list and transfer history
            price_sources: Price clients in order of preference
            display: Output slots to render into
            rng: Random source for the synthetic volume estimate
            clock: Wall-clock in epoch seconds, used for the 24h window
        """
        super().__init__(logger=logger)
        self.config = config
        self.explorer = explorer
        self.price_sources = list(price_sources)
        self.display = display or StatsDisplay()
        self.rng = rng
        self.clock = clock

        self._cycle_lock = asyncio.Lock()
        self._running = False
        self._task: Optional[asyncio.Task] = None
        self._cycles = 0
        self._skipped_cycles = 0

    async def start(self) -> None:
        """Start the background refresh loop."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._refresh_loop())

        self.log_with_context(
            "info",
            "Stats aggregator started",
            contract=self.config.contract_address,
            refresh_interval=self.config.refresh_interval,
        )

    async def stop(self) -> None:
        """Stop the background refresh loop, cancelling any cycle in flight."""
        if not self._running:
            return

        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        self.log_with_context(
            "info",
            "Stats aggregator stopped",
            cycles=self._cycles,
            skipped_cycles=self._skipped_cycles,
        )

    async def aclose(self) -> None:
        """Stop the loop and close the API clients."""
        await self.stop()
        await self.explorer.close()
        for source in self.price_sources:
            await source.close()

    async def _refresh_loop(self) -> None:
        """Run a cycle immediately, then at a fixed rate."""
        while self._running:
            started = time.monotonic()
            await self.refresh()
            elapsed = time.monotonic() - started
            await asyncio.sleep(max(0.0, self.config.refresh_interval - elapsed))

    async def refresh(self) -> Optional[DisplaySnapshot]:
        """Run one refresh cycle unless another one is in flight.

        Returns:
            The rendered snapshot, or None if the cycle was skipped
        """
        if self._cycle_lock.locked():
            self._skipped_cycles += 1
            self.logger.info("Stats refresh already in flight, skipping this cycle")
            return None

        async with self._cycle_lock:
            snapshot = await self.fetch_token_stats()
            self._cycles += 1
            return snapshot

    async def fetch_token_stats(self) -> DisplaySnapshot:
        """Fetch holders, price and 24h volume concurrently and render them.

        Returns:
            The rendered snapshot; the fallback snapshot if anything escaped
            the individual fetches
        """
        address = self.config.contract_address

        try:
            async with self.log_timing("Token stats refresh"):
                holders, price, volume = await asyncio.gather(
                    self.fetch_holders_count(address),
                    self.fetch_token_price(address),
                    self.fetch_24h_volume(address),
                )
                snapshot = self.display.render(price, holders, volume)
        except Exception as e:
            self.logger.error(f"Error fetching token stats: {str(e)}", exc_info=True)
            return self.display.show_fallback()

        self.log_with_context(
            "info",
            "Stats updated successfully",
            price=price.price,
            holders=holders.holders,
            market_cap=price.market_cap,
            volume=volume.volume,
            transactions=volume.transaction_count,
            is_real=holders.is_real,
        )
        return snapshot

    async def fetch_holders_count(self, address: str) -> HoldersResult:
        """Count holders over the explorer's paginated holder list.

        At most ``holders_max_pages`` pages of ``holders_page_size`` records
        are fetched, so the count saturates at their product.

        Args:
            address: Token contract address

        Returns:
            Holder count, or the fallback estimate if the explorer fails
        """
        return await self.execute_with_fallback(
            self._count_holders(address),
            fallback_value=HoldersResult(holders=self.config.fallback_holders, is_real=False),
            error_message=f"Explorer holder list unavailable for {address}, using estimate",
            exceptions=(StatsError,),
        )

    async def _count_holders(self, address: str) -> HoldersResult:
        page_size = self.config.holders_page_size
        holders: List[Dict[str, Any]] = []
        pages = 0

        for page in range(1, self.config.holders_max_pages + 1):
            if page > 1:
                # Rate limit
                await asyncio.sleep(self.config.holders_page_delay)

            try:
                records = await self.explorer.get_token_holders(address, page=page, offset=page_size)
            except EmptyResultError as e:
                self.logger.debug(f"Holder list ended at page {page}: {e.message}")
                break
            except MalformedResponseError as e:
                if page == 1:
                    raise
                # Keep the pages already counted
                self.logger.warning(f"Unusable holder page {page}, stopping: {e.message}")
                break

            if records:
                holders.extend(records)
                pages = page
            if len(records) < page_size:
                break

        return HoldersResult(
            holders=max(len(holders), 1),
            is_real=len(holders) > 0,
            total_pages=pages,
        )

    async def fetch_token_price(self, address: str) -> PriceResult:
        """Get the token price, market cap and a synthetic volume estimate.

        Price sources are tried in order; the fallback price is used when
        none has a price. If every source is unreachable the whole result is
        the fallback with the fixed fallback volume.

        Args:
            address: Token contract address

        Returns:
            Price result, ``is_real`` only when a source produced the price
        """
        fallback_price = self.config.fallback_price
        return await self.execute_with_fallback(
            self._price_token(address),
            fallback_value=PriceResult(
                price=fallback_price,
                market_cap=fallback_price * self.config.total_supply,
                volume=self.config.fallback_volume,
                is_real=False,
            ),
            error_message=f"Price lookup failed for {address}, using fallback price",
            exceptions=(StatsError,),
        )

    async def _price_token(self, address: str) -> PriceResult:
        price, source = await self._price_from_sources(address)
        if price is None:
            price = self.config.fallback_price

        return PriceResult(
            price=price,
            market_cap=price * self.config.total_supply,
            volume=estimate_synthetic_volume(price, self.rng, floor=self.config.min_synthetic_volume),
            is_real=source is not None,
            source=source,
        )

    async def _price_from_sources(self, address: str) -> Tuple[Optional[float], Optional[str]]:
        """First positive price from the price sources.

        Raises:
            NetworkFailureError: If every source was unreachable
        """
        failures: List[str] = []

        for client in self.price_sources:
            try:
                return await client.get_token_price(address), client.source
            except NetworkFailureError as e:
                failures.append(client.source)
                self.logger.warning(f"{client.source} unreachable: {e.message}")
            except (MalformedResponseError, EmptyResultError) as e:
                self.logger.info(f"{client.source} has no price: {e.message}")

        if self.price_sources and len(failures) == len(self.price_sources):
            raise NetworkFailureError("No price source reachable", details={"sources": failures})

        return None, None

    async def fetch_24h_volume(self, address: str) -> VolumeResult:
        """Sum the USD value of transfers in the last 24 hours.

        Only the most recent ``transfers_window_size`` transfers are looked
        at, valued at the fixed estimated price.

        Args:
            address: Token contract address

        Returns:
            Volume result, or the fallback volume if the explorer fails
        """
        return await self.execute_with_fallback(
            self._sum_recent_volume(address),
            fallback_value=VolumeResult(
                volume=self.config.fallback_volume,
                transaction_count=0,
                is_real=False,
            ),
            error_message=f"Transfer history unavailable for {address}, using estimate",
            exceptions=(StatsError,),
        )

    async def _sum_recent_volume(self, address: str) -> VolumeResult:
        transfers = await self.explorer.get_token_transfers(
            address,
            page=1,
            offset=self.config.transfers_window_size,
            sort="desc",
        )

        cutoff = self.clock() - self.config.volume_window_hours * SECONDS_PER_HOUR
        unit = 10 ** self.config.token_decimals
        transaction_count = 0
        token_volume = 0.0

        for tx in transfers:
            try:
                timestamp = int(tx["timeStamp"])
                value = int(tx["value"])
            except (KeyError, TypeError, ValueError) as e:
                raise MalformedResponseError(
                    f"Transfer record has an unexpected shape: {str(e)}",
                    details={"source": self.explorer.source},
                ) from e

            if timestamp >= cutoff:
                transaction_count += 1
                token_volume += value / unit

        return VolumeResult(
            volume=max(self.config.min_volume_usd, token_volume * self.config.estimated_price),
            transaction_count=transaction_count,
            is_real=transaction_count > 0,
        )

    @property
    def last_snapshot(self) -> DisplaySnapshot:
        """Current text of the display slots."""
        return self.display.snapshot()

    @property
    def stats(self) -> dict:
        """Get aggregator statistics."""
        return {
            "running": self._running,
            "cycles": self._cycles,
            "skipped_cycles": self._skipped_cycles,
        }


def create_stats_aggregator(config: Optional[StatsConfig] = None) -> StatsAggregator:
    """Build an aggregator wired to the explorer, DexScreener and CoinGecko.

    Args:
        config: Stats configuration. Defaults to environment-based config.

    Returns:
        A stopped aggregator
    """
    config = config or get_stats_config()
    return StatsAggregator(
        config=config,
        explorer=ExplorerClient(config),
        price_sources=[DexScreenerClient(config), CoinGeckoClient(config)],
    )
