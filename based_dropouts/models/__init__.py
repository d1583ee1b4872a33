"""Data models for the Based Dropouts site."""

from based_dropouts.models.stats import (
    SLOT_IDS,
    DisplaySnapshot,
    HoldersResult,
    PriceResult,
    VolumeResult,
)

__all__ = [
    "SLOT_IDS",
    "DisplaySnapshot",
    "HoldersResult",
    "PriceResult",
    "VolumeResult",
]
