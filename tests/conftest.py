"""Test configuration for pytest.

This module imports fixtures that should be available to all tests.
"""

# Import fixtures
from tests.fixtures.common import (  # noqa
    stats_config,
    sample_holders,
    sample_transfers,
    mock_explorer,
    mock_dexscreener,
    mock_coingecko,
    aggregator,
)
