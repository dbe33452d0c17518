"""
catalog
~~~~~~~
Top-level package that bundles:

* core      – dataclasses + repositories
* clients   – SQLite / PostgREST query clients
* analytics – view projection, enrichment, dashboard stats
"""

# ── core objects ──────────────────────────────────────────────────────────
from movieShelf.catalog.core import Movie, Review, MovieRepo, ReviewRepo, validate_movie_fields
from movieShelf.catalog.errors import (
    CatalogError, FetchFailure, MutationFailure, AggregationFailure,
    ValidationFailure, StoreError,
)

# ── store clients ─────────────────────────────────────────────────────────
from movieShelf.catalog.clients import SqliteClient, RestClient, open_client

# ── analytics convenience ─────────────────────────────────────────────────
from movieShelf.catalog.analytics import (
    FilterBy, SortBy, ViewState, project, empty_message,
    enrich_movies, EnrichmentTracker, catalog_stats,
)

__all__ = [
    "Movie", "Review", "MovieRepo", "ReviewRepo", "validate_movie_fields",
    "CatalogError", "FetchFailure", "MutationFailure", "AggregationFailure",
    "ValidationFailure", "StoreError",
    "SqliteClient", "RestClient", "open_client",
    "FilterBy", "SortBy", "ViewState", "project", "empty_message",
    "enrich_movies", "EnrichmentTracker", "catalog_stats",
]
