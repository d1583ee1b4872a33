"""HTTP server runner for the Based Dropouts site."""

import errno
import sys
from typing import Optional

import uvicorn

from based_dropouts.app import create_application
from based_dropouts.config import AppConfig, get_app_config
from based_dropouts.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def run_server(port: Optional[int] = None, host: Optional[str] = None) -> None:
    """Run the site server.

    Args:
        port: Port to listen on. Defaults to environment setting or 8081.
        host: Host to bind to. Defaults to environment setting or "0.0.0.0".
    """
    config: AppConfig = get_app_config()

    # Override with CLI options if provided
    if port:
        config.server.port = port
    if host:
        config.server.host = host

    configure_logging(config.server.log_level)
    app = create_application(config)

    logger.info(f"Server running at {config.server.base_url}")
    logger.info(f"Serving files from {config.server.site_root}")

    try:
        uvicorn.run(
            app,
            host=config.server.host,
            port=config.server.port,
            log_level=config.server.log_level.lower(),
        )
    except OSError as e:
        if e.errno == errno.EADDRINUSE:
            logger.error(f"Port {config.server.port} is already in use")
            sys.exit(1)
        raise
