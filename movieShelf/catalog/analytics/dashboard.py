# catalog_stats() for the admin dashboard
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from movieShelf.catalog.analytics.enrichment import count_reviews
from movieShelf.catalog.core.models import Movie
from movieShelf.catalog.core.review_repo import ReviewRepo
from movieShelf.settings import (
    ENRICH_MAX_WORKERS, RECENT_REVIEWS_LIMIT, TOP_RATED_LIMIT, UNKNOWN_MOVIE_TITLE,
)
from movieShelf.utils import plural


@dataclass(frozen=True, slots=True)
class TopMovie:
    title: str
    review_count: int

    @property
    def label(self) -> str:
        return plural(self.review_count, "review")


@dataclass(frozen=True, slots=True)
class RecentReview:
    movie_title: str
    text: str
    date: str
    spoiler: bool = False


@dataclass(frozen=True, slots=True)
class CatalogStats:
    total_movies: int = 0
    total_reviews: int = 0
    watched_movies: int = 0
    favorite_movies: int = 0
    top_rated_movies: Tuple[TopMovie, ...] = ()
    recent_reviews: Tuple[RecentReview, ...] = ()


def top_reviewed(counts: Sequence[Tuple[Movie, int]], limit: int = TOP_RATED_LIMIT) -> List[TopMovie]:
    """Movies with at least one review, most reviewed first.

    Equal counts keep collection order (stable sort).
    """
    ranked = sorted((pair for pair in counts if pair[1] > 0), key=lambda pair: -pair[1])
    return [TopMovie(m.title, n) for m, n in ranked[:limit]]


def catalog_stats(
    movies: Iterable[Movie],
    reviews: ReviewRepo,
    top_n: int = TOP_RATED_LIMIT,
    recent_n: int = RECENT_REVIEWS_LIMIT,
    max_workers: int = ENRICH_MAX_WORKERS,
) -> CatalogStats:
    """Compute every dashboard figure.

    Raises `AggregationFailure` if any query fails; no partial stats are
    returned.
    """
    movies = list(movies)
    total_reviews = reviews.count_all()
    top = top_reviewed(count_reviews(movies, reviews, max_workers), top_n)

    titles = {m.id: m.title for m in movies}
    recent = tuple(
        RecentReview(
            movie_title=titles.get(r.movie_id, UNKNOWN_MOVIE_TITLE),
            text=r.text,
            date=r.date_label,
            spoiler=r.spoiler,
        )
        for r in reviews.recent(recent_n)
    )

    return CatalogStats(
        total_movies=len(movies),
        total_reviews=total_reviews,
        watched_movies=sum(1 for m in movies if m.watched),
        favorite_movies=sum(1 for m in movies if m.favorite),
        top_rated_movies=tuple(top),
        recent_reviews=recent,
    )
