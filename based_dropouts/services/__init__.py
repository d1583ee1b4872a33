"""Services for the Based Dropouts site."""

from based_dropouts.services.static_files import StaticFileServer
from based_dropouts.services.stats_aggregator import (
    StatsAggregator,
    create_stats_aggregator,
    estimate_synthetic_volume,
)

__all__ = [
    "StaticFileServer",
    "StatsAggregator",
    "create_stats_aggregator",
    "estimate_synthetic_volume",
]
