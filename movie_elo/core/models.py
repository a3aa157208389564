from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


DEFAULT_RATING = 1000.0
DEFAULT_K_FACTOR = 32.0


class Outcome(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    TIE = "tie"

    @property
    def score(self) -> float:
        """Result from the left item's perspective."""
        if self is Outcome.LEFT:
            return 1.0
        if self is Outcome.RIGHT:
            return 0.0
        return 0.5


class MovieRecord(BaseModel):
    """One imported row before it becomes a rated item; values are kept raw."""

    title: str | None = None
    rating: Any = None
    comparison_count: Any = None


class MovieItem(BaseModel):
    id: int
    title: str
    rating: float = DEFAULT_RATING
    comparison_count: int = Field(default=0, ge=0)


class HistoryEntry(BaseModel):
    left_id: int
    right_id: int
    left_rating_before: float
    right_rating_before: float
    result: float

    @field_validator("result")
    @classmethod
    def validate_result(cls, value: float) -> float:
        if value not in {0.0, 0.5, 1.0}:
            raise ValueError("result must be one of 0, 0.5, 1")
        return value


class ExportRow(BaseModel):
    title: str
    rating: int
    comparison_count: int


class ImportRequest(BaseModel):
    csv_text: str
    title_column: str | None = Field(default=None, description="Header holding the movie title")
    rating_column: str | None = Field(default=None, description="Header holding an existing rating")


class VoteRequest(BaseModel):
    result: Outcome
    k_factor: float | None = Field(default=None, description="Falls back to the configured default when unset")


class StoreStateResponse(BaseModel):
    items: list[MovieItem]
    matchup: list[MovieItem] | None = None
    can_undo: bool
    can_compare: bool
    history_size: int
    k_factor: float


class VoteResponse(BaseModel):
    entry: HistoryEntry
    state: StoreStateResponse


class UndoResponse(BaseModel):
    entry: HistoryEntry | None = None
    state: StoreStateResponse


class ImportResponse(BaseModel):
    imported: int
    state: StoreStateResponse
