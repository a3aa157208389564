from __future__ import annotations

import logging
import math
import random
from collections.abc import Iterable, Mapping
from typing import Any

from movie_elo.core.models import (
    DEFAULT_K_FACTOR,
    DEFAULT_RATING,
    ExportRow,
    HistoryEntry,
    MovieItem,
    MovieRecord,
    Outcome,
)


logger = logging.getLogger(__name__)

VALID_RESULTS = (0.0, 0.5, 1.0)


class NoActiveMatchupError(RuntimeError):
    """Raised when a comparison is committed while no pair is on screen."""


def expected_score(rating_a: float, rating_b: float) -> float:
    return 1.0 / (1.0 + 10.0 ** ((rating_b - rating_a) / 400.0))


def display_rating(rating: float) -> int:
    """Round half up, matching how the browser table shows ratings."""
    return math.floor(rating + 0.5)


def _coerce_rating(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return DEFAULT_RATING
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return DEFAULT_RATING
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return DEFAULT_RATING
    if not math.isfinite(rating):
        return DEFAULT_RATING
    return rating


def _coerce_count(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0
    try:
        count = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(count) or count < 0 or not count.is_integer():
        return 0
    return int(count)


def _coerce_k_factor(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return DEFAULT_K_FACTOR
    try:
        k_factor = float(value)
    except (TypeError, ValueError):
        return DEFAULT_K_FACTOR
    if not math.isfinite(k_factor) or k_factor <= 0:
        return DEFAULT_K_FACTOR
    return k_factor


def _coerce_result(result: Outcome | float | str) -> float:
    if isinstance(result, Outcome):
        return result.score
    if isinstance(result, str):
        return Outcome(result.strip().lower()).score
    value = float(result)
    if value not in VALID_RESULTS:
        raise ValueError(f"Invalid result {result!r}. Expected one of: 1 (left), 0 (right), 0.5 (tie).")
    return value


class RatingStore:
    """Rated movies, the comparison history and the pair currently on screen.

    Every mutation of ratings and comparison counts goes through this object.
    Callers read state through the query methods and never edit the returned
    items directly.
    """

    def __init__(self, rng: random.Random | None = None):
        self._items: list[MovieItem] = []
        self._history: list[HistoryEntry] = []
        self._matchup: tuple[MovieItem, MovieItem] | None = None
        self._rng = rng

    expected_score = staticmethod(expected_score)

    @property
    def items(self) -> list[MovieItem]:
        return list(self._items)

    @property
    def history(self) -> list[HistoryEntry]:
        return list(self._history)

    @property
    def current_matchup(self) -> tuple[MovieItem, MovieItem] | None:
        return self._matchup

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def can_compare(self) -> bool:
        return len(self._items) >= 2

    def ranked_items(self) -> list[MovieItem]:
        return sorted(self._items, key=lambda item: item.rating, reverse=True)

    def export_rows(self) -> list[ExportRow]:
        return [
            ExportRow(
                title=item.title,
                rating=display_rating(item.rating),
                comparison_count=item.comparison_count,
            )
            for item in self._items
        ]

    def get_item(self, item_id: int) -> MovieItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def load(self, records: Iterable[MovieRecord | Mapping[str, Any]]) -> list[MovieItem]:
        items: list[MovieItem] = []
        dropped = 0
        for record in records:
            if not isinstance(record, MovieRecord):
                record = MovieRecord(**dict(record))
            title = (record.title or "").strip()
            if not title:
                dropped += 1
                continue
            items.append(
                MovieItem(
                    id=len(items),
                    title=title,
                    rating=_coerce_rating(record.rating),
                    comparison_count=_coerce_count(record.comparison_count),
                )
            )

        self._items = items
        self._history = []
        self._matchup = None
        logger.info("Loaded %d movies (%d rows without a title dropped)", len(items), dropped)
        if not self.can_compare:
            logger.warning("Fewer than two movies loaded; comparisons are disabled")
        return self.items

    def apply_result(
        self,
        item_a: MovieItem,
        item_b: MovieItem,
        result: Outcome | float | str,
        k_factor: Any = DEFAULT_K_FACTOR,
    ) -> None:
        if item_a is item_b or item_a.id == item_b.id:
            raise ValueError("A movie cannot be compared against itself")
        score_a = _coerce_result(result)
        k = _coerce_k_factor(k_factor)

        ra = item_a.rating
        rb = item_b.rating
        ea = expected_score(ra, rb)
        eb = expected_score(rb, ra)
        new_ra = ra + k * (score_a - ea)
        new_rb = rb + k * ((1.0 - score_a) - eb)

        item_a.rating, item_b.rating = new_ra, new_rb
        item_a.comparison_count, item_b.comparison_count = (
            item_a.comparison_count + 1,
            item_b.comparison_count + 1,
        )

    def select_next_matchup(self) -> tuple[MovieItem, MovieItem] | None:
        if len(self._items) < 2:
            return None

        min_count = min(item.comparison_count for item in self._items)
        candidates = [item for item in self._items if item.comparison_count == min_count]
        if len(candidates) < 2:
            # Only one movie sits at the minimum; fall back to list order.
            return self._items[0], self._items[1]

        best_diff = math.inf
        best_pairs: list[tuple[MovieItem, MovieItem]] = []
        for i, left in enumerate(candidates):
            for right in candidates[i + 1 :]:
                diff = abs(left.rating - right.rating)
                if diff < best_diff:
                    best_diff = diff
                    best_pairs = [(left, right)]
                elif diff == best_diff:
                    best_pairs.append((left, right))

        if self._rng is not None and len(best_pairs) > 1:
            return self._rng.choice(best_pairs)
        return best_pairs[0]

    def next_matchup(self) -> tuple[MovieItem, MovieItem] | None:
        self._matchup = self.select_next_matchup()
        return self._matchup

    def commit_comparison(self, result: Outcome | float | str, k_factor: Any = DEFAULT_K_FACTOR) -> HistoryEntry:
        if self._matchup is None:
            raise NoActiveMatchupError("No active matchup. Load at least two movies and start comparing first.")

        left, right = self._matchup
        score = _coerce_result(result)
        entry = HistoryEntry(
            left_id=left.id,
            right_id=right.id,
            left_rating_before=left.rating,
            right_rating_before=right.rating,
            result=score,
        )
        self.apply_result(left, right, score, k_factor)
        self._history.append(entry)
        logger.debug(
            "Committed %r vs %r result=%s -> %.2f / %.2f",
            left.title,
            right.title,
            score,
            left.rating,
            right.rating,
        )
        self.next_matchup()
        return entry

    def skip(self) -> tuple[MovieItem, MovieItem] | None:
        return self.next_matchup()

    def undo(self) -> HistoryEntry | None:
        if not self._history:
            return None

        entry = self._history.pop()
        left = self.get_item(entry.left_id)
        right = self.get_item(entry.right_id)
        if left is None or right is None:
            logger.warning("Undo entry references unknown movies %d/%d", entry.left_id, entry.right_id)
            return entry

        left.rating, right.rating = entry.left_rating_before, entry.right_rating_before
        left.comparison_count = max(0, left.comparison_count - 1)
        right.comparison_count = max(0, right.comparison_count - 1)
        logger.debug("Undid %r vs %r", left.title, right.title)
        return entry

    def reset_all(self) -> None:
        for item in self._items:
            item.rating = DEFAULT_RATING
            item.comparison_count = 0
        self._history = []
        self._matchup = None
        logger.info("Reset %d movies to %.0f", len(self._items), DEFAULT_RATING)
