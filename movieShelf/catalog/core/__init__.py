"""
catalog.core
~~~~~~~~~~~~
Domain layer – frozen dataclasses & repositories.
"""

from .models      import Movie, Review, validate_movie_fields
from .movie_repo  import MovieRepo, with_flag
from .review_repo import ReviewRepo

__all__ = ["Movie", "Review", "validate_movie_fields", "MovieRepo", "with_flag", "ReviewRepo"]
