"""Pydantic models for ECO opening data."""

from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class MoveRecord(BaseModel):
    """Canonical data for one ECO code."""
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=1, description="ECO code, e.g. 'C50'")
    name: str = Field(..., description="Opening name")
    moves: str = Field(default="", description="Canonical move sequence, space-delimited")


# Immutable code -> record mapping produced by one parse of the ECO table
MoveIndex = Mapping[str, MoveRecord]


class NextMove(BaseModel):
    """Result of a next-move query.

    ``next_move`` is None when the prefix already covers the whole
    canonical line.
    """
    code: str
    move_prefix: str
    next_move: Optional[str] = None

    @property
    def has_next_move(self) -> bool:
        return self.next_move is not None


class CacheStats(BaseModel):
    """Move index cache statistics."""
    hits: int
    misses: int
    refreshes: int
    failed_refreshes: int
    populated: bool
    size: int
    age_seconds: Optional[float] = None
    ttl_seconds: float
