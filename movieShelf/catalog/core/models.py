# Movie / Review dataclasses + admin form validation
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping

from movieShelf.catalog.errors import ValidationFailure
from movieShelf.settings import MOVIE_FORM_FIELDS
from movieShelf.utils import human_date, parse_timestamp, split_csv


@dataclass(frozen=True, slots=True)
class Movie:
    id: str
    title: str
    year: int
    poster: str = ""
    genres: tuple[str, ...] = ()
    director: str = ""
    cast_members: tuple[str, ...] = ()
    country: str = ""
    language: str = ""
    synopsis: str = ""
    watched: bool = False
    favorite: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Movie:
        """Build a Movie from a store row (missing optional columns allowed)."""
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            year=int(row.get("year") or 0),
            poster=row.get("poster") or "",
            genres=tuple(row.get("genres") or ()),
            director=row.get("director") or "",
            cast_members=tuple(row.get("cast_members") or ()),
            country=row.get("country") or "",
            language=row.get("language") or "",
            synopsis=row.get("synopsis") or "",
            watched=bool(row.get("watched")),
            favorite=bool(row.get("favorite")),
            created_at=parse_timestamp(row.get("created_at")),
        )


@dataclass(frozen=True, slots=True)
class Review:
    id: str
    movie_id: str
    text: str
    spoiler: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Review:
        return cls(
            id=str(row["id"]),
            movie_id=str(row["movie_id"]),
            text=row.get("text") or "",
            spoiler=bool(row.get("spoiler")),
            created_at=parse_timestamp(row.get("created_at")),
        )

    @property
    def date_label(self) -> str:
        return human_date(self.created_at)


_LIST_FIELDS = {"genres", "cast_members"}


def validate_movie_fields(data: Mapping[str, Any], partial: bool = False) -> Dict[str, Any]:
    """Clean admin form input into a dict ready for insert / update.

    Parameters
    ----------
    data
        Raw form values. ``genres`` and ``cast_members`` may be lists or
        comma-separated strings.
    partial
        Validate only the keys present (edit of a subset of columns).

    Raises
    ------
    ValidationFailure
        Unknown key, missing or empty required value, non-numeric year.
    """
    unknown = set(data) - set(MOVIE_FORM_FIELDS)
    if unknown:
        raise ValidationFailure(
            f"Unknown movie fields: {', '.join(sorted(unknown))}",
            field=sorted(unknown)[0],
        )

    names = [f for f in MOVIE_FORM_FIELDS if f in data] if partial else list(MOVIE_FORM_FIELDS)
    clean: Dict[str, Any] = {}
    for name in names:
        raw = data.get(name)
        if name == "year":
            try:
                clean[name] = int(str(raw).strip())
            except (TypeError, ValueError):
                raise ValidationFailure("Year must be a whole number", field=name) from None
        elif name in _LIST_FIELDS:
            items = split_csv(raw)
            if not items:
                raise ValidationFailure(f"{name.replace('_', ' ').capitalize()} is required", field=name)
            clean[name] = items
        else:
            text = "" if raw is None else str(raw).strip()
            if not text:
                raise ValidationFailure(f"{name.capitalize()} is required", field=name)
            clean[name] = text
    return clean
