"""Configuration module for the Based Dropouts site."""

# Standard library imports
import os
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, Optional

# Third-party library imports
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_CONTRACT_ADDRESS = "0x1b7cb366859b1f09951e3267e9cf73988f9ef0be"

EVM_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def get_env_var(key: str, default: Any = None,
                validator: Optional[Callable[[str], Any]] = None) -> Any:
    """Get and validate environment variable.

    Args:
        key: Environment variable name
        default: Default value if not present
        validator: Optional validation function

    Returns:
        The environment variable value or default

    Raises:
        ValueError: If the value fails validation
    """
    value = os.environ.get(key)

    if value is None:
        return default

    if validator:
        try:
            return validator(value)
        except Exception as e:
            raise ValueError(f"Invalid value for environment variable '{key}': {str(e)}")

    return value


def bool_validator(value: str) -> bool:
    """Convert string to boolean."""
    return value.lower() in ("true", "1", "yes", "y", "on")


def int_validator(value: str) -> int:
    """Validate and convert string to integer.

    Raises:
        ValueError: If not a valid integer
    """
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid integer")


def positive_float_validator(value: str) -> float:
    """Validate and convert string to a positive float.

    Raises:
        ValueError: If not a number or not greater than zero
    """
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid number")
    if number <= 0:
        raise ValueError(f"'{value}' must be greater than zero")
    return number


def url_validator(value: str) -> str:
    """Validate URL format.

    Raises:
        ValueError: If not a valid URL format
    """
    url_pattern = re.compile(
        r'^(https?):\/\/'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+(?:[A-Z]{2,6}\.?|[A-Z0-9-]{2,}\.?)|'  # domain
        r'localhost|'  # localhost
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # or IPv4
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)

    if not url_pattern.match(value):
        raise ValueError(f"'{value}' is not a valid URL")
    return value.rstrip("/")


def address_validator(value: str) -> str:
    """Validate an EVM contract address.

    Returns:
        The address in lower case

    Raises:
        ValueError: If not a 0x-prefixed 40 hex digit address
    """
    if not EVM_ADDRESS_PATTERN.match(value):
        raise ValueError(f"'{value}' is not a valid contract address")
    return value.lower()


def log_level_validator(value: str) -> str:
    """Validate log level.

    Raises:
        ValueError: If not a valid log level
    """
    valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    upper_value = value.upper()
    if upper_value not in valid_levels:
        raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
    return upper_value


def environment_validator(value: str) -> str:
    """Validate environment name.

    Raises:
        ValueError: If not a valid environment name
    """
    valid_environments = ("development", "testing", "staging", "production")
    if value.lower() not in valid_environments:
        raise ValueError(f"Environment must be one of: {', '.join(valid_environments)}")
    return value.lower()


@dataclass
class StatsConfig:
    """Configuration for the token stats pipeline."""

    contract_address: str = DEFAULT_CONTRACT_ADDRESS
    refresh_interval: float = 30.0  # seconds
    request_timeout: float = 10.0  # seconds

    # Data sources
    explorer_api_url: str = "https://api.basescan.org/api"
    explorer_api_key: Optional[str] = None
    dexscreener_api_url: str = "https://api.dexscreener.com/latest"
    coingecko_api_url: str = "https://api.coingecko.com/api/v3"
    coingecko_platform: str = "base"

    # Holder pagination
    holders_page_size: int = 100
    holders_max_pages: int = 5
    holders_page_delay: float = 0.3  # seconds between page requests

    # 24h volume window
    transfers_window_size: int = 100
    volume_window_hours: int = 24
    token_decimals: int = 18

    # Pricing assumptions
    fallback_price: float = 0.0002
    estimated_price: float = 0.0002
    total_supply: int = 1_000_000_000

    # Fallback values
    fallback_holders: int = 150
    fallback_volume: float = 15000.0
    min_volume_usd: float = 100.0
    min_synthetic_volume: float = 1000.0

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.holders_page_size <= 0 or self.holders_max_pages <= 0:
            raise ValueError("Holder pagination needs a positive page size and page cap")
        if self.refresh_interval <= 0:
            raise ValueError(f"Invalid refresh_interval: {self.refresh_interval}")


@lru_cache()
def get_stats_config() -> StatsConfig:
    """Get stats configuration from environment variables.

    Raises:
        ValueError: If environment variables fail validation
    """
    return StatsConfig(
        contract_address=get_env_var("TOKEN_CONTRACT_ADDRESS", DEFAULT_CONTRACT_ADDRESS,
                                     validator=address_validator),
        refresh_interval=get_env_var("STATS_REFRESH_INTERVAL", 30.0,
                                     validator=positive_float_validator),
        request_timeout=get_env_var("STATS_REQUEST_TIMEOUT", 10.0,
                                    validator=positive_float_validator),
        explorer_api_url=get_env_var("EXPLORER_API_URL", "https://api.basescan.org/api",
                                     validator=url_validator),
        explorer_api_key=get_env_var("EXPLORER_API_KEY"),
        dexscreener_api_url=get_env_var("DEXSCREENER_API_URL", "https://api.dexscreener.com/latest",
                                        validator=url_validator),
        coingecko_api_url=get_env_var("COINGECKO_API_URL", "https://api.coingecko.com/api/v3",
                                      validator=url_validator),
        coingecko_platform=get_env_var("COINGECKO_PLATFORM", "base"),
    )


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = 8081
    site_root: str = field(default_factory=os.getcwd)
    index_document: str = "index.html"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def base_url(self) -> str:
        """URL the site is reachable at on this machine."""
        return f"http://localhost:{self.port}"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.environment not in ("development", "testing", "staging", "production"):
            raise ValueError(f"Invalid environment: {self.environment}")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log_level: {self.log_level}")


@lru_cache()
def get_server_config() -> ServerConfig:
    """Get server configuration from environment variables.

    Raises:
        ValueError: If environment variables fail validation
    """
    return ServerConfig(
        host=get_env_var("HOST", "0.0.0.0"),
        port=get_env_var("PORT", 8081, validator=int_validator),
        site_root=get_env_var("SITE_ROOT", os.getcwd()),
        index_document=get_env_var("INDEX_DOCUMENT", "index.html"),
        debug=get_env_var("DEBUG", False, validator=bool_validator),
        environment=get_env_var("ENVIRONMENT", "development", validator=environment_validator),
        log_level=get_env_var("LOG_LEVEL", "INFO", validator=log_level_validator),
    )


@dataclass
class AppConfig:
    """Comprehensive application configuration."""

    stats: StatsConfig = field(default_factory=get_stats_config)
    server: ServerConfig = field(default_factory=get_server_config)


def get_app_config() -> AppConfig:
    """Get the comprehensive application configuration."""
    return AppConfig()
