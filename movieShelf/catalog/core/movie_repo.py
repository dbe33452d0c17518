"""catalog.core.movie_repo
Movie collection: remote reads/writes plus the locally cached copy.

The cache is only ever replaced, never edited in place, and only after the
store has confirmed the write.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, List, Mapping, Optional, Sequence

from movieShelf.catalog.core.models import Movie, validate_movie_fields
from movieShelf.catalog.errors import FetchFailure, MutationFailure, StoreError, ValidationFailure
from movieShelf.utils import log_debug

_FLAGS = ("watched", "favorite")


def with_flag(movies: Sequence[Movie], movie_id: str, flag: str, value: bool) -> List[Movie]:
    """Return a new list where *movie_id* has *flag* set to *value*."""
    if flag not in _FLAGS:
        raise ValueError(f"Illegal movie flag: {flag}")
    return [replace(m, **{flag: value}) if m.id == movie_id else m for m in movies]


class MovieRepo:
    """CRUD helpers for Movie objects over a query client."""

    def __init__(self, client) -> None:
        self._client = client
        self._movies: List[Movie] = []

    @property
    def movies(self) -> tuple[Movie, ...]:
        """Snapshot of the cached collection (newest first)."""
        return tuple(self._movies)

    def by_id(self, movie_id: str) -> Optional[Movie]:
        """Return the cached Movie for *movie_id* or **None**."""
        return next((m for m in self._movies if m.id == movie_id), None)

    # ───────────────────────────── reads ──────────────────────────────
    def fetch_all(self) -> List[Movie]:
        """Reload the whole collection ordered by created_at, newest first."""
        try:
            rows = self._client.select("movies", order_by="created_at", descending=True)
        except StoreError as e:
            log_debug(f"fetch movies failed: {e}")
            raise FetchFailure("Failed to fetch movies") from e
        self._movies = [Movie.from_row(r) for r in rows]
        return list(self._movies)

    # ───────────────────────────── flags ──────────────────────────────
    def set_watched(self, movie_id: str, watched: bool) -> None:
        self._set_flag(movie_id, "watched", watched)

    def set_favorite(self, movie_id: str, favorite: bool) -> None:
        self._set_flag(movie_id, "favorite", favorite)

    def toggle_watched(self, movie_id: str) -> bool:
        """Flip *watched* on a cached movie; returns the new value."""
        new = not self._require(movie_id).watched
        self.set_watched(movie_id, new)
        return new

    def toggle_favorite(self, movie_id: str) -> bool:
        new = not self._require(movie_id).favorite
        self.set_favorite(movie_id, new)
        return new

    def _require(self, movie_id: str) -> Movie:
        movie = self.by_id(movie_id)
        if movie is None:
            raise MutationFailure(f"Movie {movie_id} is not loaded")
        return movie

    def _set_flag(self, movie_id: str, flag: str, value: bool) -> None:
        self._write("update", movie_id, {flag: bool(value)})
        self._movies = with_flag(self._movies, movie_id, flag, bool(value))

    # ───────────────────────────── admin ──────────────────────────────
    def create(self, fields: Mapping[str, Any]) -> Movie:
        """Insert a new movie (unwatched, not favorite) and return it.

        The cache is left alone; callers re-fetch.
        """
        data = validate_movie_fields(fields)
        try:
            row = self._client.insert("movies", {**data, "watched": False, "favorite": False})
        except StoreError as e:
            log_debug(f"create movie '{data['title']}' failed: {e}")
            raise MutationFailure("Failed to save movie") from e
        return Movie.from_row(row)

    def update(self, movie_id: str, fields: Mapping[str, Any]) -> None:
        """Edit metadata columns; *fields* may be a subset of the form."""
        data = validate_movie_fields(fields, partial=True)
        if not data:
            raise ValidationFailure("Nothing to update")
        self._write("update", movie_id, data)

    def delete(self, movie_id: str) -> None:
        """Delete a movie; its reviews are removed by the store's cascade."""
        self._write("delete", movie_id)

    def _write(self, op: str, movie_id: str, fields: Optional[dict] = None) -> None:
        try:
            if op == "update":
                touched = self._client.update("movies", movie_id, fields or {})
            else:
                touched = self._client.delete("movies", movie_id)
        except StoreError as e:
            log_debug(f"{op} movie {movie_id} failed: {e}")
            raise MutationFailure(f"Failed to {op} movie") from e
        if not touched:
            raise MutationFailure(f"No movie with id {movie_id}")
