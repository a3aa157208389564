from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from datetime import date

from movie_elo.core.models import ExportRow, MovieRecord


PLAYED_COLUMN = "played"


class CsvImportError(ValueError):
    """Raised when an uploaded CSV lacks the configured title column."""


def parse_movies_csv(text: str, title_column: str = "title", rating_column: str = "elo") -> list[MovieRecord]:
    title_column = (title_column or "").strip() or "title"
    rating_column = (rating_column or "").strip() or "elo"

    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    columns = [name for name in (reader.fieldnames or []) if name is not None]
    if title_column not in columns:
        found = ", ".join(columns) if columns else "no columns"
        raise CsvImportError(f'Couldn\'t find a "{title_column}" column. Found: {found}')

    has_rating = rating_column in columns
    has_played = PLAYED_COLUMN in columns
    records: list[MovieRecord] = []
    for row in reader:
        records.append(
            MovieRecord(
                title=row.get(title_column),
                rating=row.get(rating_column) if has_rating else None,
                comparison_count=row.get(PLAYED_COLUMN) if has_played else None,
            )
        )
    return records


def export_movies_csv(rows: Iterable[ExportRow], rating_column: str = "elo") -> str:
    rating_column = (rating_column or "").strip() or "elo"
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    writer.writerow(["title", rating_column, PLAYED_COLUMN])
    for row in rows:
        writer.writerow([row.title, row.rating, row.comparison_count])
    return buffer.getvalue()


def export_filename(today: date | None = None) -> str:
    today = today or date.today()
    return f"movies_elo_{today.isoformat()}.csv"
