"""
analytics.enrichment
~~~~~~~~~~~~~~~~~~~~
Review count + latest-review snippet for every loaded movie.

One count query per movie, run on a thread pool. The snippet query only
runs for movies whose count is non-zero.
"""

from __future__ import annotations
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from movieShelf.catalog.core.models import Movie
from movieShelf.catalog.core.review_repo import ReviewRepo
from movieShelf.catalog.errors import AggregationFailure
from movieShelf.settings import ENRICH_MAX_WORKERS
from movieShelf.utils import log_debug, plural


@dataclass(frozen=True, slots=True)
class ReviewMeta:
    review_count: int = 0
    review_snippet: Optional[str] = None
    error: Optional[str] = None          # set when the queries for this movie failed

    @property
    def label(self) -> str:
        return plural(self.review_count, "review")


@dataclass(slots=True)
class EnrichmentBatch:
    generation: int
    meta: Dict[str, ReviewMeta] = field(default_factory=dict)

    def for_movie(self, movie_id: str) -> ReviewMeta:
        return self.meta.get(movie_id, ReviewMeta())

    @property
    def failures(self) -> Dict[str, str]:
        return {mid: m.error for mid, m in self.meta.items() if m.error}


def enrich_movie(movie_id: str, reviews: ReviewRepo) -> ReviewMeta:
    """Count + snippet for one movie; raises `AggregationFailure`."""
    count = reviews.count_for_movie(movie_id)
    if count == 0:
        return ReviewMeta(0)
    latest = reviews.latest_for_movie(movie_id)
    return ReviewMeta(count, latest.text if latest else None)


def _enrich_or_empty(movie_id: str, reviews: ReviewRepo) -> ReviewMeta:
    try:
        return enrich_movie(movie_id, reviews)
    except AggregationFailure as e:
        log_debug(f"enrich {movie_id}: {e}")
        return ReviewMeta(error=str(e))


def _unique_ids(movies: Iterable[Movie]) -> List[str]:
    return list(dict.fromkeys(m.id for m in movies))


def enrich_movies(
    movies: Iterable[Movie],
    reviews: ReviewRepo,
    generation: int = 0,
    max_workers: int = ENRICH_MAX_WORKERS,
) -> EnrichmentBatch:
    """Return review metadata for every movie; failures degrade to zero."""
    ids = _unique_ids(movies)
    if not ids:
        return EnrichmentBatch(generation)
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(ids)))) as pool:
        results = list(pool.map(lambda mid: _enrich_or_empty(mid, reviews), ids))
    return EnrichmentBatch(generation, dict(zip(ids, results)))


def count_reviews(
    movies: Iterable[Movie],
    reviews: ReviewRepo,
    max_workers: int = ENRICH_MAX_WORKERS,
) -> List[Tuple[Movie, int]]:
    """(movie, review count) in collection order; any failure propagates."""
    movies = list(movies)
    if not movies:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(movies)))) as pool:
        counts = list(pool.map(lambda m: reviews.count_for_movie(m.id), movies))
    return list(zip(movies, counts))


class EnrichmentTracker:
    """Generation counter so late batches for an old movie set get dropped."""

    def __init__(self) -> None:
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def current(self) -> int:
        return self._generation

    def begin(self) -> int:
        """Start a new batch; every earlier generation becomes stale."""
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation
