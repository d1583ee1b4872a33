"""Based Dropouts token site.

This package serves the Based Dropouts Crew marketing page and keeps its
live token stats (holders, price, market cap, 24h volume) refreshed from
public blockchain-data APIs.
"""

__version__ = "0.1.0"
__author__ = "Based Dropouts Crew"
__email__ = "dev@baseddropouts.xyz"
