"""
Token stats data models.

This module defines Pydantic models for the results of the three stats
sources and for the rendered display snapshot.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Element ids of the five output slots on the page
PRICE_SLOT = "price"
HOLDERS_SLOT = "holders"
MARKET_CAP_SLOT = "market-cap"
VOLUME_SLOT = "volume"
LAST_UPDATED_SLOT = "last-updated"

SLOT_IDS = (PRICE_SLOT, HOLDERS_SLOT, MARKET_CAP_SLOT, VOLUME_SLOT, LAST_UPDATED_SLOT)


class HoldersResult(BaseModel):
    """
    Holder count aggregated over the explorer's paginated holder list.
    """
    holders: int = Field(..., ge=1, description="Number of holder records fetched, floored at 1")
    is_real: bool = Field(..., description="Whether the count came from a live API call")
    last_updated: datetime = Field(default_factory=datetime.now)
    total_pages: int = Field(0, ge=0, description="Pages that returned holder records")


class PriceResult(BaseModel):
    """
    Token price with the market cap derived from it.

    ``volume`` is a synthetic estimate, not observed trading volume.
    """
    price: float = Field(..., ge=0)
    market_cap: float
    volume: float
    is_real: bool
    source: Optional[str] = Field(None, description="Price source that produced a live price")
    last_updated: datetime = Field(default_factory=datetime.now)


class VolumeResult(BaseModel):
    """
    24h USD volume computed from the most recent transfer transactions.
    """
    volume: float = Field(..., ge=0)
    transaction_count: int = Field(0, ge=0)
    is_real: bool


class DisplaySnapshot(BaseModel):
    """
    Rendered text of the five output slots.

    Serialize with ``by_alias=True`` to key the slots by element id.
    """
    model_config = ConfigDict(populate_by_name=True)

    price: str
    holders: str
    market_cap: str = Field(..., alias=MARKET_CAP_SLOT)
    volume: str
    last_updated: str = Field(..., alias=LAST_UPDATED_SLOT)
    is_fallback: bool = False
    rendered_at: datetime = Field(default_factory=datetime.now)

    @property
    def slots(self) -> Dict[str, str]:
        """Slot text keyed by element id."""
        return {
            PRICE_SLOT: self.price,
            HOLDERS_SLOT: self.holders,
            MARKET_CAP_SLOT: self.market_cap,
            VOLUME_SLOT: self.volume,
            LAST_UPDATED_SLOT: self.last_updated,
        }
