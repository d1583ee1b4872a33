"""Output slots for the live token stats.

The page reads five elements by id. ``StatsDisplay`` holds their current
text; every refresh cycle overwrites it and nothing is kept across cycles.
"""

from datetime import datetime
from typing import Dict, Optional

from based_dropouts.models.stats import (
    HOLDERS_SLOT,
    LAST_UPDATED_SLOT,
    MARKET_CAP_SLOT,
    PRICE_SLOT,
    SLOT_IDS,
    VOLUME_SLOT,
    DisplaySnapshot,
    HoldersResult,
    PriceResult,
    VolumeResult,
)
from based_dropouts.utils.formatting import (
    format_holders,
    format_large_number,
    format_price,
    format_time,
)

PLACEHOLDER_TEXT = "Loading..."
FALLBACK_HOLDERS_TEXT = "500+"
FALLBACK_STATUS_TEXT = "Unable to fetch live data"

REAL_DATA_LABEL = "Real Data"
PARTIAL_DATA_LABEL = "Partially Real"


class StatsDisplay:
    """Current text of the price, holders, market-cap, volume and last-updated slots."""

    def __init__(self):
        self._slots: Dict[str, str] = {slot: PLACEHOLDER_TEXT for slot in SLOT_IDS}
        self._is_fallback = False
        self._rendered_at: Optional[datetime] = None

    def render(
        self,
        price: PriceResult,
        holders: HoldersResult,
        volume: VolumeResult,
    ) -> DisplaySnapshot:
        """Write one cycle's results into the slots.

        Args:
            price: Price and market cap
            holders: Holder count
            volume: Observed 24h volume

        Returns:
            Snapshot of the slots after the write
        """
        status = REAL_DATA_LABEL if holders.is_real and volume.is_real else PARTIAL_DATA_LABEL

        self._slots[PRICE_SLOT] = format_price(price.price)
        self._slots[HOLDERS_SLOT] = format_holders(holders.holders)
        self._slots[MARKET_CAP_SLOT] = f"${format_large_number(price.market_cap)}"
        self._slots[VOLUME_SLOT] = f"${format_large_number(volume.volume)}"
        self._slots[LAST_UPDATED_SLOT] = f"{format_time(holders.last_updated)} ({status})"
        self._is_fallback = False
        self._rendered_at = datetime.now()
        return self.snapshot()

    def show_fallback(self) -> DisplaySnapshot:
        """Replace holders and status with static placeholder text.

        The other slots keep whatever the last successful render wrote.
        """
        self._slots[HOLDERS_SLOT] = FALLBACK_HOLDERS_TEXT
        self._slots[LAST_UPDATED_SLOT] = FALLBACK_STATUS_TEXT
        self._is_fallback = True
        self._rendered_at = datetime.now()
        return self.snapshot()

    def get(self, slot: str) -> str:
        """Text of a single slot by element id."""
        return self._slots[slot]

    def snapshot(self) -> DisplaySnapshot:
        """Copy of the current slot text."""
        return DisplaySnapshot(
            **self._slots,
            is_fallback=self._is_fallback,
            rendered_at=self._rendered_at or datetime.now(),
        )
