"""
Root-level conftest for pytest configuration
"""
import logging

from based_dropouts.config import get_server_config, get_stats_config


def pytest_configure(config):
    """Configure pytest"""
    # Set log format for pytest
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def pytest_runtest_setup(item):
    """Drop cached environment config so each test sees its own environment."""
    get_stats_config.cache_clear()
    get_server_config.cache_clear()
