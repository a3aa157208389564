import random

import pytest

from movie_elo.core.models import HistoryEntry, MovieRecord, Outcome
from movie_elo.runtime.rating_store import NoActiveMatchupError, RatingStore, display_rating, expected_score


def _store(*ratings: float, counts: list[int] | None = None) -> RatingStore:
    store = RatingStore()
    counts = counts or [0] * len(ratings)
    store.load(
        {"title": f"Movie {index}", "rating": rating, "comparison_count": count}
        for index, (rating, count) in enumerate(zip(ratings, counts))
    )
    return store


@pytest.mark.parametrize("ra,rb", [(1000, 1000), (1200, 800), (1500.5, 1499.25), (0, 2400)])
def test_expected_scores_sum_to_one(ra: float, rb: float) -> None:
    assert expected_score(ra, rb) + expected_score(rb, ra) == pytest.approx(1.0)
    assert 0.0 < expected_score(ra, rb) < 1.0


def test_expected_score_favours_higher_rating() -> None:
    assert expected_score(1000, 1000) == pytest.approx(0.5)
    assert expected_score(1400, 1000) == pytest.approx(1 / 1.1)
    assert RatingStore.expected_score(1000, 1400) == pytest.approx(1 / 11)


def test_load_defaults_ratings_and_assigns_sequential_ids() -> None:
    store = RatingStore()
    items = store.load([{"title": "A"}, {"title": "B", "rating": "900"}])

    assert [item.id for item in items] == [0, 1]
    assert [item.rating for item in items] == [1000.0, 900.0]
    assert [item.comparison_count for item in items] == [0, 0]


def test_load_drops_untitled_rows_and_sanitises_values() -> None:
    store = RatingStore()
    items = store.load(
        [
            MovieRecord(title="", rating="1200"),
            MovieRecord(title="  Alien  ", rating="abc", comparison_count="3"),
            MovieRecord(title=None, rating="1100"),
            MovieRecord(title="Heat", rating="", comparison_count="-2"),
            MovieRecord(title="Ran", rating="nan", comparison_count="1.5"),
            MovieRecord(title="Up", rating=1234.5, comparison_count=4),
        ]
    )

    assert [item.title for item in items] == ["Alien", "Heat", "Ran", "Up"]
    assert [item.id for item in items] == [0, 1, 2, 3]
    assert [item.rating for item in items] == [1000.0, 1000.0, 1000.0, 1234.5]
    assert [item.comparison_count for item in items] == [3, 0, 0, 4]


def test_load_clears_history_and_matchup() -> None:
    store = _store(1000, 1000)
    store.next_matchup()
    store.commit_comparison(1)
    assert store.can_undo

    store.load([{"title": "X"}, {"title": "Y"}])

    assert store.history == []
    assert store.current_matchup is None
    assert not store.can_undo


def test_apply_result_matches_standard_elo() -> None:
    store = _store(1000, 1000)
    a, b = store.items

    store.apply_result(a, b, 1, 32)

    assert a.rating == pytest.approx(1016.0)
    assert b.rating == pytest.approx(984.0)
    assert a.comparison_count == 1
    assert b.comparison_count == 1


def test_apply_result_tie_between_unequal_ratings_moves_towards_each_other() -> None:
    store = _store(1200, 1000)
    a, b = store.items
    ea = expected_score(1200, 1000)

    store.apply_result(a, b, 0.5, 20)

    assert a.rating == pytest.approx(1200 + 20 * (0.5 - ea))
    assert b.rating == pytest.approx(1000 + 20 * (0.5 - (1 - ea)))
    assert a.rating < 1200
    assert b.rating > 1000


@pytest.mark.parametrize("k_factor", [0, -5, None, "abc", float("nan"), True])
def test_invalid_k_factor_falls_back_to_32(k_factor: object) -> None:
    store = _store(1000, 1000)
    a, b = store.items

    store.apply_result(a, b, 0, k_factor)

    assert a.rating == pytest.approx(984.0)
    assert b.rating == pytest.approx(1016.0)


def test_apply_result_rejects_invalid_result_and_self_match() -> None:
    store = _store(1000, 1000)
    a, b = store.items

    with pytest.raises(ValueError):
        store.apply_result(a, b, 0.7, 32)
    with pytest.raises(ValueError):
        store.apply_result(a, a, 1, 32)
    assert a.rating == 1000.0
    assert a.comparison_count == 0


def test_select_next_matchup_prefers_least_compared_items() -> None:
    store = _store(1000, 1500, 1010, 1020, counts=[1, 0, 1, 0])

    pair = store.select_next_matchup()

    assert pair is not None
    assert {item.id for item in pair} == {1, 3}


def test_select_next_matchup_picks_closest_ratings() -> None:
    store = _store(1200, 1000, 1050)

    left, right = store.select_next_matchup()

    assert (left.rating, right.rating) == (1000.0, 1050.0)


def test_select_next_matchup_breaks_ties_by_list_order() -> None:
    store = _store(1000, 1100, 1200)

    left, right = store.select_next_matchup()

    assert (left.id, right.id) == (0, 1)


def test_select_next_matchup_uses_injected_random_source_for_ties() -> None:
    picks = set()
    for seed in range(20):
        store = RatingStore(rng=random.Random(seed))
        store.load({"title": str(i), "rating": 1000 + 100 * i} for i in range(4))
        left, right = store.select_next_matchup()
        assert right.rating - left.rating == 100
        picks.add(left.id)
    assert len(picks) > 1


def test_select_next_matchup_falls_back_to_first_two_items() -> None:
    store = _store(1000, 1300, 1001, counts=[2, 0, 1])

    left, right = store.select_next_matchup()

    assert (left.id, right.id) == (0, 1)


def test_select_next_matchup_does_not_mutate_state() -> None:
    store = _store(1000, 1050)

    store.select_next_matchup()

    assert store.current_matchup is None
    assert [item.comparison_count for item in store.items] == [0, 0]


def test_commit_then_undo_restores_ratings_and_counts() -> None:
    store = _store(1000, 1000)
    store.next_matchup()

    entry = store.commit_comparison(Outcome.LEFT, 32)

    assert entry == HistoryEntry(
        left_id=0, right_id=1, left_rating_before=1000.0, right_rating_before=1000.0, result=1.0
    )
    a, b = store.items
    assert a.rating == pytest.approx(1016.0)
    assert b.rating == pytest.approx(984.0)
    assert (a.comparison_count, b.comparison_count) == (1, 1)
    assert store.current_matchup is not None

    undone = store.undo()

    assert undone == entry
    assert (a.rating, b.rating) == (1000.0, 1000.0)
    assert (a.comparison_count, b.comparison_count) == (0, 0)
    assert not store.can_undo


def test_undo_is_exact_after_several_commits() -> None:
    store = _store(1000, 1234.5678, 987.654, 1111.1111)
    snapshot = [(item.rating, item.comparison_count) for item in store.items]
    store.next_matchup()
    for result in (1, 0.5, 0, 1, "tie", "right"):
        store.commit_comparison(result, 40)

    while store.can_undo:
        store.undo()

    assert [(item.rating, item.comparison_count) for item in store.items] == snapshot


def test_undo_keeps_current_matchup() -> None:
    store = _store(1000, 1000, 1000)
    store.next_matchup()
    store.commit_comparison(1)
    matchup_after_commit = store.current_matchup

    store.undo()

    assert store.current_matchup == matchup_after_commit


def test_undo_on_empty_history_is_noop() -> None:
    store = _store(1000, 1000)

    assert store.undo() is None
    assert [item.rating for item in store.items] == [1000.0, 1000.0]


def test_undo_clamps_comparison_count_at_zero() -> None:
    store = _store(1000, 1000)
    store.next_matchup()
    store.commit_comparison(1)
    for item in store.items:
        item.comparison_count = 0

    store.undo()

    assert [item.comparison_count for item in store.items] == [0, 0]


def test_single_item_disables_comparisons() -> None:
    store = _store(1000)

    assert not store.can_compare
    assert store.select_next_matchup() is None
    assert store.next_matchup() is None
    with pytest.raises(NoActiveMatchupError):
        store.commit_comparison(1)


def test_commit_without_started_matchup_fails() -> None:
    store = _store(1000, 1000)

    with pytest.raises(NoActiveMatchupError):
        store.commit_comparison(0.5)


def test_skip_never_mutates_items_or_history() -> None:
    store = _store(1000, 1100, 1200, counts=[0, 0, 3])
    before = [item.model_dump() for item in store.items]

    for _ in range(10):
        store.skip()

    assert [item.model_dump() for item in store.items] == before
    assert store.history == []
    assert store.current_matchup is not None


def test_reset_all_restores_defaults() -> None:
    store = _store(1400, 900, counts=[5, 2])
    store.next_matchup()
    store.commit_comparison(1)

    store.reset_all()

    assert [(item.rating, item.comparison_count) for item in store.items] == [(1000.0, 0), (1000.0, 0)]
    assert not store.can_undo
    assert store.current_matchup is None


def test_ranked_items_and_export_rows() -> None:
    store = _store(1000.4, 1200.6, 999.5, counts=[1, 2, 3])

    assert [item.id for item in store.ranked_items()] == [1, 0, 2]
    assert [item.id for item in store.items] == [0, 1, 2]
    assert [(row.title, row.rating, row.comparison_count) for row in store.export_rows()] == [
        ("Movie 0", 1000, 1),
        ("Movie 1", 1201, 2),
        ("Movie 2", 1000, 3),
    ]


def test_export_rows_round_half_ratings_up() -> None:
    store = _store(1000, 1000)
    store.next_matchup()
    store.commit_comparison(1, 1)

    assert [item.rating for item in store.items] == [1000.5, 999.5]
    assert [row.rating for row in store.export_rows()] == [1001, 1000]


def test_display_rating_rounds_half_up() -> None:
    assert display_rating(1000.5) == 1001
    assert display_rating(999.5) == 1000
    assert display_rating(1000.49) == 1000
    assert display_rating(-0.5) == 0
