import csv
import io
from datetime import date

import pytest

from movie_elo.core.csv_io import CsvImportError, export_filename, export_movies_csv, parse_movies_csv
from movie_elo.core.models import ExportRow
from movie_elo.runtime.rating_store import RatingStore


def test_parse_reads_titles_ratings_and_played() -> None:
    text = "title,elo,played\nAlien,1100,3\nHeat,,\n\nRan,abc,1\n"

    records = parse_movies_csv(text)

    assert [record.title for record in records] == ["Alien", "Heat", "Ran"]
    assert [record.rating for record in records] == ["1100", "", "abc"]
    assert [record.comparison_count for record in records] == ["3", "", "1"]


def test_parse_without_rating_column_leaves_ratings_unset() -> None:
    records = parse_movies_csv("title,year\nAlien,1979\n")

    assert records[0].rating is None
    assert records[0].comparison_count is None


def test_parse_supports_custom_column_mapping_and_bom() -> None:
    text = "\ufeffName,Score\nAlien,1234\n"

    records = parse_movies_csv(text, title_column="Name", rating_column="Score")

    assert records[0].title == "Alien"
    assert records[0].rating == "1234"


def test_parse_missing_title_column_lists_found_columns() -> None:
    with pytest.raises(CsvImportError) as exc_info:
        parse_movies_csv("name,elo\nAlien,1000\n")

    assert 'Couldn\'t find a "title" column' in str(exc_info.value)
    assert "name, elo" in str(exc_info.value)


def test_parse_empty_text_fails() -> None:
    with pytest.raises(CsvImportError):
        parse_movies_csv("")


def test_export_rounds_ratings_and_uses_rating_column() -> None:
    text = export_movies_csv(
        [ExportRow(title="Alien, Director's Cut", rating=1016, comparison_count=1)],
        rating_column="score",
    )

    rows = list(csv.DictReader(io.StringIO(text)))
    assert rows == [{"title": "Alien, Director's Cut", "score": "1016", "played": "1"}]


def test_export_then_import_round_trip_keeps_counts() -> None:
    store = RatingStore()
    store.load(parse_movies_csv("title\nAlien\nHeat\nRan\n"))
    store.next_matchup()
    store.commit_comparison(1, 32)

    exported = export_movies_csv(store.export_rows())
    reloaded = RatingStore()
    reloaded.load(parse_movies_csv(exported))

    assert [(item.title, item.rating, item.comparison_count) for item in reloaded.items] == [
        (item.title, float(round(item.rating)), item.comparison_count) for item in store.items
    ]


def test_export_filename_is_dated() -> None:
    assert export_filename(date(2026, 10, 19)) == "movies_elo_2026-10-19.csv"
