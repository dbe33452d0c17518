import threading

import pytest

from movieShelf.catalog.analytics.enrichment import (
    EnrichmentTracker, ReviewMeta, count_reviews, enrich_movie, enrich_movies,
)
from movieShelf.catalog.errors import AggregationFailure


@pytest.fixture
def movies(movie_repo, seeded):
    return movie_repo.fetch_all()


def test_counts_and_snippets(movies, review_repo, seeded):
    batch = enrich_movies(movies, review_repo, generation=3)
    assert batch.generation == 3
    assert batch.for_movie(seeded["oldboy"]["id"]) == ReviewMeta(2, "The hallway scene!")
    assert batch.for_movie(seeded["amelie"]["id"]) == ReviewMeta(2, "Lovely score.")
    assert batch.for_movie(seeded["heat"]["id"]) == ReviewMeta(0, None)
    assert batch.failures == {}


def test_zero_reviews_never_fetch_snippet(movies, review_repo, client, seeded):
    client.reset()
    enrich_movie(seeded["heat"]["id"], review_repo)
    assert len(client.named("count", "reviews")) == 1
    assert client.named("select") == []


def test_one_count_per_movie_and_snippets_only_when_reviewed(movies, review_repo, client):
    client.reset()
    enrich_movies(movies, review_repo, max_workers=4)
    assert len(client.named("count", "reviews")) == 3
    assert len(client.named("select", "reviews")) == 2


def test_failures_degrade_to_zero(movies, review_repo, client, seeded):
    client.fail.add("count")
    batch = enrich_movies(movies, review_repo)
    meta = batch.for_movie(seeded["oldboy"]["id"])
    assert meta.review_count == 0 and meta.review_snippet is None
    assert set(batch.failures) == {m.id for m in movies}


def test_snippet_failure_degrades_that_movie(movies, review_repo, client, seeded):
    client.fail.add(("select", "reviews"))
    batch = enrich_movies(movies, review_repo)
    assert batch.for_movie(seeded["heat"]["id"]) == ReviewMeta(0, None)
    assert batch.for_movie(seeded["amelie"]["id"]).error
    assert seeded["heat"]["id"] not in batch.failures


def test_empty_movie_set(review_repo):
    batch = enrich_movies([], review_repo, generation=1)
    assert batch.meta == {}
    assert batch.for_movie("anything") == ReviewMeta()


def test_count_reviews_keeps_order_and_raises(movies, review_repo, client):
    assert [n for _, n in count_reviews(movies, review_repo)] == [0, 2, 2]
    client.fail.add("count")
    with pytest.raises(AggregationFailure):
        count_reviews(movies, review_repo)


def test_labels():
    assert ReviewMeta(1).label == "1 review"
    assert ReviewMeta(4).label == "4 reviews"


def test_tracker_marks_older_generations_stale():
    tracker = EnrichmentTracker()
    first = tracker.begin()
    second = tracker.begin()
    assert second == first + 1 == tracker.current
    assert not tracker.is_current(first)
    assert tracker.is_current(second)


def test_tracker_is_thread_safe():
    tracker = EnrichmentTracker()
    threads = [threading.Thread(target=lambda: [tracker.begin() for _ in range(100)]) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert tracker.current == 400
