"""
analytics.view
~~~~~~~~~~~~~~
Search / filter / sort over a movie collection.

Public function
---------------
project(movies, query, filter_by, sort_by) -> list[Movie]
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Iterable, List

from movieShelf.catalog.core.models import Movie


class FilterBy(str, Enum):
    ALL       = "all"
    WATCHED   = "watched"
    UNWATCHED = "unwatched"
    FAVORITES = "favorites"


class SortBy(str, Enum):
    YEAR_DESC = "year-desc"
    YEAR_ASC  = "year-asc"
    FAVORITES = "favorites"
    WATCHED   = "watched"


_FILTERS: Dict[FilterBy, Callable[[Movie], bool]] = {
    FilterBy.ALL:       lambda m: True,
    FilterBy.WATCHED:   lambda m: m.watched,
    FilterBy.UNWATCHED: lambda m: not m.watched,
    FilterBy.FAVORITES: lambda m: m.favorite,
}

# sort keys; False sorts before True, so flags are negated to put them first
_SORT_KEYS: Dict[SortBy, Callable[[Movie], tuple]] = {
    SortBy.YEAR_DESC: lambda m: (-m.year,),
    SortBy.YEAR_ASC:  lambda m: (m.year,),
    SortBy.FAVORITES: lambda m: (not m.favorite, -m.year),
    SortBy.WATCHED:   lambda m: (not m.watched, -m.year),
}


def matches(movie: Movie, query: str) -> bool:
    """Case-insensitive substring match on title, genres, language, country."""
    q = query.lower()
    return (
        q in movie.title.lower()
        or any(q in g.lower() for g in movie.genres)
        or q in movie.language.lower()
        or q in movie.country.lower()
    )


def project(
    movies: Iterable[Movie],
    query: str = "",
    filter_by: FilterBy | str = FilterBy.ALL,
    sort_by: SortBy | str = SortBy.YEAR_DESC,
) -> List[Movie]:
    """Return the movies to display, in display order.

    Search runs first, then the filter narrows further, then a stable sort
    orders what is left. *movies* is not modified.

    Raises
    ------
    ValueError
        Unknown filter or sort selector.
    """
    keep = _FILTERS[FilterBy(filter_by)]
    key  = _SORT_KEYS[SortBy(sort_by)]
    picked = [m for m in movies if (not query or matches(m, query)) and keep(m)]
    return sorted(picked, key=key)


@dataclass(frozen=True, slots=True)
class ViewState:
    """Current search text and selectors of the browsing view."""
    query: str = ""
    filter_by: FilterBy = FilterBy.ALL
    sort_by: SortBy = SortBy.YEAR_DESC

    def __post_init__(self) -> None:
        object.__setattr__(self, "filter_by", FilterBy(self.filter_by))
        object.__setattr__(self, "sort_by", SortBy(self.sort_by))

    @property
    def is_narrowed(self) -> bool:
        return bool(self.query) or self.filter_by is not FilterBy.ALL

    def apply(self, movies: Iterable[Movie]) -> List[Movie]:
        return project(movies, self.query, self.filter_by, self.sort_by)

    def with_query(self, query: str) -> ViewState:
        return replace(self, query=query)

    def with_filter(self, filter_by: FilterBy | str) -> ViewState:
        return replace(self, filter_by=FilterBy(filter_by))

    def with_sort(self, sort_by: SortBy | str) -> ViewState:
        return replace(self, sort_by=SortBy(sort_by))


def empty_message(state: ViewState) -> str:
    """Placeholder text for an empty result."""
    if state.is_narrowed:
        return "No movies found matching your criteria"
    return "No movies available"
