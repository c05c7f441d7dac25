"""JSON API routes for ECO lookups and the move index cache."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from ...exceptions import (
    CodeNotFoundError,
    PrefixMismatchError,
    UpstreamUnavailableError,
)
from ...models.eco import CacheStats, MoveRecord, NextMove
from ...services.move_index_cache import MoveIndexCache
from ...services.resolver import MoveResolver
from ..dependencies import get_move_cache, get_resolver

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["api"])


@router.get("/openings/{code}", response_model=MoveRecord)
async def get_opening(code: str, resolver: MoveResolver = Depends(get_resolver)) -> MoveRecord:
    """Get the opening name and canonical moves for an ECO code."""
    try:
        return await resolver.get_record(code)
    except CodeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/openings/{code}/next", response_model=NextMove)
async def get_next_move(
    code: str,
    moves: str = Query(default="", description="Space-delimited moves already played"),
    resolver: MoveResolver = Depends(get_resolver),
) -> NextMove:
    """Get the next move of an opening after the given moves.

    ``next_move`` is null when the moves already complete the line.
    """
    try:
        return await resolver.get_next_move(code, moves)
    except (CodeNotFoundError, PrefixMismatchError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/cache/stats", response_model=CacheStats)
async def get_cache_stats(cache: MoveIndexCache = Depends(get_move_cache)) -> CacheStats:
    """Get move index cache statistics."""
    return cache.stats


@router.post("/cache/invalidate")
async def invalidate_cache(cache: MoveIndexCache = Depends(get_move_cache)) -> dict:
    """Drop the cached move index so the next lookup refetches the table."""
    dropped = cache.invalidate()
    logger.info(f"Cache invalidation requested (dropped={dropped})")
    return {"invalidated": dropped}
