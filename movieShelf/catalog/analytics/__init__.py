"""
catalog.analytics
~~~~~~~~~~~~~~~~~
Pure view projection plus the review aggregation helpers.
"""

from .view       import FilterBy, SortBy, ViewState, project, matches, empty_message
from .enrichment import (
    ReviewMeta,
    EnrichmentBatch,
    EnrichmentTracker,
    enrich_movie,
    enrich_movies,
    count_reviews,
)
from .dashboard  import CatalogStats, TopMovie, RecentReview, catalog_stats, top_reviewed

__all__ = [
    "FilterBy", "SortBy", "ViewState", "project", "matches", "empty_message",
    "ReviewMeta", "EnrichmentBatch", "EnrichmentTracker",
    "enrich_movie", "enrich_movies", "count_reviews",
    "CatalogStats", "TopMovie", "RecentReview", "catalog_stats", "top_reviewed",
]
