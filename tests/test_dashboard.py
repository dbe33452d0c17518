import pytest

from conftest import make_movie
from movieShelf.catalog.analytics.dashboard import TopMovie, catalog_stats, top_reviewed
from movieShelf.catalog.errors import AggregationFailure


def test_catalog_stats(movie_repo, review_repo, seeded, local_tz):
    local_tz("UTC0")
    movies = movie_repo.fetch_all()
    stats = catalog_stats(movies, review_repo)
    assert stats.total_movies == 3
    assert stats.total_reviews == 4
    assert stats.watched_movies == 2
    assert stats.favorite_movies == 1
    # Oldboy is ahead of Amelie in collection order (newest first)
    assert stats.top_rated_movies == (TopMovie("Oldboy", 2), TopMovie("Amelie", 2))
    assert [r.text for r in stats.recent_reviews] == [
        "Lovely score.", "The hallway scene!", "Brutal.", "Charming.",
    ]
    assert stats.recent_reviews[0].movie_title == "Amelie"
    assert stats.recent_reviews[0].date == "Oct 1, 2020"


def test_recent_review_for_missing_movie_gets_placeholder(movie_repo, review_repo, seeded):
    movies = [m for m in movie_repo.fetch_all() if m.title != "Amelie"]
    stats = catalog_stats(movies, review_repo)
    assert stats.recent_reviews[0].movie_title == "Unknown"


def test_recent_limited_to_five(movie_repo, review_repo, seeded):
    movies = movie_repo.fetch_all()
    for i in range(4):
        review_repo.add(seeded["oldboy"]["id"], f"Rewatch {i}")
    stats = catalog_stats(movies, review_repo)
    assert len(stats.recent_reviews) == 5
    assert stats.recent_reviews[0].text == "Rewatch 3"
    assert stats.top_rated_movies[0] == TopMovie("Oldboy", 6)


def test_any_failure_fails_whole_dashboard(movie_repo, review_repo, client, seeded):
    movies = movie_repo.fetch_all()
    client.fail.add(("select", "reviews"))
    with pytest.raises(AggregationFailure):
        catalog_stats(movies, review_repo)


def test_top_reviewed_ranking():
    movies = [make_movie(str(i), f"M{i}") for i in range(7)]
    counts = list(zip(movies, [3, 0, 5, 3, 1, 2, 4]))
    top = top_reviewed(counts)
    assert [t.title for t in top] == ["M2", "M6", "M0", "M3", "M5"]
    assert top[0].label == "5 reviews"
    assert top_reviewed([(movies[1], 0)]) == []
