"""Plain-text ECO lookup routes.

    GET /                     raw upstream ECO document
    GET /{code}               "<b>name</b><br>moves"
    GET /{code}/{move}/...    next move after the given moves
"""

import html
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from ...exceptions import (
    CodeNotFoundError,
    FetchFailedError,
    PrefixMismatchError,
    UpstreamUnavailableError,
)
from ...services.eco_fetcher import EcoTableFetcher
from ...services.resolver import MoveResolver
from ..dependencies import get_fetcher, get_resolver

logger = logging.getLogger(__name__)
router = APIRouter(tags=["openings"])


def split_eco_path(eco_path: str) -> tuple[str, Optional[str]]:
    """Split 'C50/e4/e5' into ('C50', 'e4 e5').

    The move prefix is None when the path holds only a code.
    """
    segments = [s for s in eco_path.split("/") if s]
    if len(segments) < 2:
        return (segments[0] if segments else ""), None
    return segments[0], " ".join(segments[1:])


@router.get("/", response_class=Response)
async def list_all_data(fetcher: EcoTableFetcher = Depends(get_fetcher)) -> Response:
    """Return the upstream ECO document verbatim. Bypasses the cache."""
    try:
        content = await fetcher.fetch()
    except FetchFailedError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return HTMLResponse(content=content)


@router.get("/{eco_path:path}", response_class=PlainTextResponse)
async def lookup(eco_path: str, resolver: MoveResolver = Depends(get_resolver)) -> Response:
    """Look up an ECO record, or the next move when moves follow the code."""
    code, move_prefix = split_eco_path(eco_path)

    try:
        if move_prefix is None:
            record = await resolver.get_record(code)
            return HTMLResponse(
                f"<b>{html.escape(record.name, quote=False)}</b><br>{html.escape(record.moves, quote=False)}"
            )

        result = await resolver.get_next_move(code, move_prefix)
    except (CodeNotFoundError, PrefixMismatchError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UpstreamUnavailableError as e:
        logger.error(f"Lookup of {eco_path!r} failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    if not result.has_next_move:
        return PlainTextResponse(f"No next moves available for the code {result.code}")
    return PlainTextResponse(result.next_move)
