"""Lookup of ECO records and next moves against the cached move index."""

import logging

from ..exceptions import (
    CacheError,
    CodeNotFoundError,
    PrefixMismatchError,
    UpstreamUnavailableError,
)
from ..models.eco import MoveIndex, MoveRecord, NextMove
from .move_index_cache import MoveIndexCache

logger = logging.getLogger(__name__)


def normalize_code(code: str) -> str:
    """Strip the path separators a code picks up from a URL segment."""
    return code.strip("/")


def next_move_after(moves: str, move_prefix: str) -> str | None:
    """Return the move following ``move_prefix`` in ``moves``.

    The prefix must match ``moves`` character for character; it is
    removed by slicing, and the first whitespace-delimited token of what
    remains is the next move.

    Returns:
        The next move, or None when nothing follows the prefix.

    Raises:
        ValueError: If ``moves`` does not start with ``move_prefix``.
    """
    if not moves.startswith(move_prefix):
        raise ValueError(f"{move_prefix!r} is not a prefix of {moves!r}")
    remainder = moves[len(move_prefix):].lstrip(" ")
    tokens = remainder.split()
    return tokens[0] if tokens else None


class MoveResolver:
    """Answers record and next-move queries for ECO codes."""

    def __init__(self, cache: MoveIndexCache):
        self._cache = cache

    async def _snapshot(self) -> MoveIndex:
        try:
            return await self._cache.get()
        except CacheError as e:
            raise UpstreamUnavailableError(e) from e

    async def get_record(self, code: str) -> MoveRecord:
        """Get the name and canonical moves for an ECO code.

        Raises:
            CodeNotFoundError: If the code is not in the index.
            UpstreamUnavailableError: If the index could not be loaded.
        """
        code = normalize_code(code)
        index = await self._snapshot()
        record = index.get(code)
        if record is None:
            logger.info(f"Unknown ECO code requested: {code!r}")
            raise CodeNotFoundError(code)
        return record

    async def get_next_move(self, code: str, move_prefix: str) -> NextMove:
        """Get the move that follows ``move_prefix`` in the code's line.

        Args:
            code: ECO code, possibly wrapped in path separators.
            move_prefix: Space-delimited moves already played.

        Returns:
            NextMove whose ``next_move`` is None when the line is complete.

        Raises:
            CodeNotFoundError: If the code is not in the index.
            PrefixMismatchError: If the canonical line does not start with the prefix.
            UpstreamUnavailableError: If the index could not be loaded.
        """
        record = await self.get_record(code)
        try:
            next_move = next_move_after(record.moves, move_prefix)
        except ValueError as e:
            raise PrefixMismatchError(record.code, move_prefix) from e
        return NextMove(code=record.code, move_prefix=move_prefix, next_move=next_move)
