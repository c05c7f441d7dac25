"""FastAPI dependencies exposing the services built by create_app()."""

from fastapi import Request

from ..services.eco_fetcher import EcoTableFetcher
from ..services.move_index_cache import MoveIndexCache
from ..services.resolver import MoveResolver


def get_fetcher(request: Request) -> EcoTableFetcher:
    return request.app.state.fetcher


def get_move_cache(request: Request) -> MoveIndexCache:
    return request.app.state.move_cache


def get_resolver(request: Request) -> MoveResolver:
    return request.app.state.resolver
