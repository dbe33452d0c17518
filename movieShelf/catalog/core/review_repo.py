"""catalog.core.review_repo
Reviews: per-movie lists (cached), submission, and the read-only counts
used by the aggregation layer.
"""

from __future__ import annotations
from typing import Dict, List, Optional

from movieShelf.catalog.core.models import Review
from movieShelf.catalog.core.movie_repo import MovieRepo
from movieShelf.catalog.errors import (
    AggregationFailure, FetchFailure, MutationFailure, StoreError, ValidationFailure,
)
from movieShelf.utils import log_debug


class ReviewRepo:
    """Review queries for one query client.

    *movies* is used to check the parent movie before a review is sent.
    """

    def __init__(self, client, movies: MovieRepo) -> None:
        self._client = client
        self._movies = movies
        self._cache: Dict[str, List[Review]] = {}

    # ───────────────────────────── lists ──────────────────────────────
    def fetch_for_movie(self, movie_id: str) -> List[Review]:
        """Reviews of *movie_id*, newest first; replaces the cached list."""
        try:
            rows = self._client.select("reviews", eq={"movie_id": movie_id})
        except StoreError as e:
            log_debug(f"fetch reviews for {movie_id} failed: {e}")
            raise FetchFailure("Failed to fetch reviews") from e
        self._cache[movie_id] = [Review.from_row(r) for r in rows]
        return list(self._cache[movie_id])

    def cached(self, movie_id: str) -> List[Review]:
        return list(self._cache.get(movie_id, ()))

    def add(self, movie_id: str, text: str, spoiler: bool = False) -> Review:
        """Submit a review; validated before the store is contacted.

        Raises
        ------
        ValidationFailure
            Unknown movie, movie not marked watched, or blank text.
        MutationFailure
            The insert failed; the cached list is unchanged.
        """
        movie = self._movies.by_id(movie_id)
        if movie is None:
            raise ValidationFailure(f"Unknown movie {movie_id}", field="movie_id")
        if not movie.watched:
            raise ValidationFailure("Mark this movie as watched to write a review", field="watched")
        text = (text or "").strip()
        if not text:
            raise ValidationFailure("Review text is required", field="text")

        try:
            row = self._client.insert(
                "reviews", {"movie_id": movie_id, "text": text, "spoiler": bool(spoiler)}
            )
        except StoreError as e:
            log_debug(f"add review for {movie_id} failed: {e}")
            raise MutationFailure("Failed to submit review") from e

        review = Review.from_row(row)
        self._cache[movie_id] = [review, *self._cache.get(movie_id, ())]
        return review

    # ─────────────────────── aggregation queries ──────────────────────
    def count_for_movie(self, movie_id: str) -> int:
        return self._aggregate(f"count reviews for {movie_id}",
                               self._client.count, "reviews", eq={"movie_id": movie_id})

    def latest_for_movie(self, movie_id: str) -> Optional[Review]:
        """Most recently created review of *movie_id*, if any."""
        rows = self._aggregate(f"latest review for {movie_id}",
                               self._client.select, "reviews", eq={"movie_id": movie_id}, limit=1)
        return Review.from_row(rows[0]) if rows else None

    def count_all(self) -> int:
        return self._aggregate("count reviews", self._client.count, "reviews")

    def recent(self, limit: int) -> List[Review]:
        """The *limit* newest reviews across every movie."""
        rows = self._aggregate("recent reviews", self._client.select, "reviews", limit=limit)
        return [Review.from_row(r) for r in rows]

    @staticmethod
    def _aggregate(what: str, fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except StoreError as e:
            log_debug(f"{what} failed: {e}")
            raise AggregationFailure(f"Failed to {what}") from e
