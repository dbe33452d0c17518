"""
movieShelf
~~~~~~~~~~

Top-level package for the Movie Shelf catalog.

Exports:
  - Domain types and repositories: Movie, Review, MovieRepo, ReviewRepo
  - View projection: project, ViewState, FilterBy, SortBy
  - Aggregation: enrich_movies, catalog_stats
  - open_client() for the configured data store

The Qt controller lives in ``movieShelf.gui`` and is imported separately.
"""

from movieShelf.catalog import (
    Movie,
    Review,
    MovieRepo,
    ReviewRepo,
    project,
    ViewState,
    FilterBy,
    SortBy,
    enrich_movies,
    catalog_stats,
    open_client,
)

__all__ = [
    "Movie",
    "Review",
    "MovieRepo",
    "ReviewRepo",
    "project",
    "ViewState",
    "FilterBy",
    "SortBy",
    "enrich_movies",
    "catalog_stats",
    "open_client",
]
