"""
FastAPI application for the Based Dropouts site.

This module builds the application, wires the stats aggregator and the
static file server into it and manages the refresh loop lifecycle.
"""

import datetime
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from based_dropouts import __version__
from based_dropouts.config import AppConfig, get_app_config
from based_dropouts.logging_config import RequestIdMiddleware, configure_logging
from based_dropouts.models.api_models import ApiResponse
from based_dropouts.routes import site, stats
from based_dropouts.services.static_files import StaticFileServer
from based_dropouts.services.stats_aggregator import StatsAggregator, create_stats_aggregator

logger = logging.getLogger(__name__)

# API Documentation tags
tags_metadata = [
    {
        "name": "stats",
        "description": "Live token statistics: price, holders, market cap and 24h volume",
    },
    {
        "name": "system",
        "description": "System-level operations for monitoring",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Args:
        app: The FastAPI application instance
    """
    config: AppConfig = app.state.config
    configure_logging(config.server.log_level)

    aggregator: StatsAggregator = app.state.aggregator
    await aggregator.start()

    logger.info("Application initialized successfully")

    yield  # Application is running here

    logger.info("Application shutting down...")

    await aggregator.aclose()

    logger.info("Shutdown complete")


def create_application(
    config: Optional[AppConfig] = None,
    aggregator: Optional[StatsAggregator] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration. Defaults to environment-based config.
        aggregator: Stats aggregator to serve. Built from ``config`` when omitted.

    Returns:
        The configured FastAPI application
    """
    config = config or get_app_config()

    app = FastAPI(
        title="Based Dropouts",
        description="Landing page and live token stats for the Based Dropouts token on Base.",
        version=__version__,
        openapi_tags=tags_metadata,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        debug=config.server.debug,
    )

    app.state.config = config
    app.state.aggregator = aggregator or create_stats_aggregator(config.stats)
    app.state.file_server = StaticFileServer(
        root=config.server.site_root,
        index_document=config.server.index_document,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestIdMiddleware)

    @app.get("/health", response_model=ApiResponse[Dict[str, Any]], tags=["system"])
    async def health_check():
        """
        Check the health of the service.

        Returns the service status, version and refresh loop counters.
        """
        return ApiResponse(
            success=True,
            data={
                "status": "healthy",
                "version": __version__,
                "timestamp": datetime.datetime.now().isoformat(),
                "environment": config.server.environment,
                "aggregator": app.state.aggregator.stats,
            }
        )

    app.include_router(stats.router)
    # Catch-all, must stay last
    app.include_router(site.router)

    return app
