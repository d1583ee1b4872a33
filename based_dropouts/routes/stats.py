"""
Token stats API routes.

Expose the rendered output slots so the page can read them by element id.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status

from based_dropouts.models.api_models import ApiResponse
from based_dropouts.services.stats_aggregator import StatsAggregator

router = APIRouter(prefix="/api", tags=["stats"])


def get_aggregator(request: Request) -> StatsAggregator:
    """Aggregator attached to the running application."""
    aggregator = getattr(request.app.state, "aggregator", None)
    if aggregator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Stats aggregator is not configured",
        )
    return aggregator


@router.get("/stats", response_model=ApiResponse[Dict[str, Any]])
async def get_stats(aggregator: StatsAggregator = Depends(get_aggregator)):
    """
    Current text of the price, holders, market-cap, volume and last-updated slots.
    """
    snapshot = aggregator.last_snapshot
    return ApiResponse(data=snapshot.model_dump(mode="json", by_alias=True))


@router.post("/stats/refresh", response_model=ApiResponse[Dict[str, Any]])
async def refresh_stats(aggregator: StatsAggregator = Depends(get_aggregator)):
    """
    Run one refresh cycle now.

    Nothing is fetched if a cycle is already in flight; the current slots
    are returned instead.
    """
    snapshot = await aggregator.refresh()
    if snapshot is None:
        return ApiResponse(
            data=aggregator.last_snapshot.model_dump(mode="json", by_alias=True),
            message="Refresh already in flight",
        )

    return ApiResponse(
        data=snapshot.model_dump(mode="json", by_alias=True),
        message="Stats refreshed",
    )


@router.get("/contract", response_model=ApiResponse[Dict[str, str]])
async def get_contract(aggregator: StatsAggregator = Depends(get_aggregator)):
    """
    Token contract address, as copied by the page's copy button.
    """
    return ApiResponse(data={"contract_address": aggregator.config.contract_address})
