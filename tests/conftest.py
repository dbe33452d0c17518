import os
import time
from datetime import datetime, timedelta, timezone

import pytest

from movieShelf import utils
from movieShelf.catalog.clients.sqlite_client import SqliteClient
from movieShelf.catalog.core.models import Movie
from movieShelf.catalog.core.movie_repo import MovieRepo
from movieShelf.catalog.core.review_repo import ReviewRepo
from movieShelf.catalog.errors import StoreError
from movieShelf.catalog.movie_shelf_db import ShelfDB

T0 = datetime(2020, 10, 1, 12, 0, tzinfo=timezone.utc)


def ts(minutes: int) -> str:
    """ISO timestamp *minutes* after T0."""
    return (T0 + timedelta(minutes=minutes)).isoformat(timespec="microseconds")


def make_movie(movie_id, title="Movie", year=2000, **kw) -> Movie:
    return Movie(id=movie_id, title=title, year=year, **kw)


class RecordingClient:
    """Wraps a real client, logs every call and can fail chosen methods.

    ``fail`` holds method names, or ``(method, table)`` pairs, that raise
    `StoreError` instead of reaching the store.
    """

    def __init__(self, inner):
        self.inner = inner
        self.calls = []
        self.fail = set()

    def _call(self, method, table, *args, **kwargs):
        self.calls.append((method, table, args, kwargs))
        if method in self.fail or (method, table) in self.fail:
            raise StoreError(f"injected {method} failure")
        return getattr(self.inner, method)(table, *args, **kwargs)

    def select(self, table, **kw):
        return self._call("select", table, **kw)

    def count(self, table, **kw):
        return self._call("count", table, **kw)

    def insert(self, table, row):
        return self._call("insert", table, row)

    def update(self, table, row_id, fields):
        return self._call("update", table, row_id, fields)

    def delete(self, table, row_id):
        return self._call("delete", table, row_id)

    def named(self, method, table=None):
        return [c for c in self.calls if c[0] == method and (table is None or c[1] == table)]

    def reset(self):
        self.calls.clear()


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path, monkeypatch):
    monkeypatch.setattr(utils, "LOG_PATH", tmp_path / "debug.log")


@pytest.fixture
def db(tmp_path):
    shelf = ShelfDB(tmp_path / "shelf.sqlite")
    yield shelf
    shelf.close()


@pytest.fixture
def sqlite_client(db):
    return SqliteClient(db)


@pytest.fixture
def client(sqlite_client):
    return RecordingClient(sqlite_client)


@pytest.fixture
def movie_repo(client):
    return MovieRepo(client)


@pytest.fixture
def review_repo(client, movie_repo):
    return ReviewRepo(client, movie_repo)


def movie_row(title, year, minutes, **kw):
    row = {
        "title": title,
        "year": year,
        "poster": f"https://img.example/{title.lower().replace(' ', '-')}.jpg",
        "genres": ["Drama"],
        "director": "Someone",
        "cast_members": ["A. Actor"],
        "country": "France",
        "language": "French",
        "synopsis": f"{title} synopsis",
        "watched": False,
        "favorite": False,
        "created_at": ts(minutes),
    }
    row.update(kw)
    return row


@pytest.fixture
def seeded(sqlite_client):
    """Three movies and four reviews written straight into the store."""
    amelie = sqlite_client.insert("movies", movie_row("Amelie", 2001, 0, watched=True, favorite=True,
                                                      genres=["Comedy", "Romance"]))
    oldboy = sqlite_client.insert("movies", movie_row("Oldboy", 2003, 1, watched=True,
                                                      country="South Korea", language="Korean",
                                                      genres=["Thriller", "Drama"]))
    heat = sqlite_client.insert("movies", movie_row("Heat", 1995, 2, country="USA", language="English",
                                                    genres=["Crime"]))
    for i, (movie, text) in enumerate([
        (amelie, "Charming."),
        (oldboy, "Brutal."),
        (oldboy, "The hallway scene!"),
        (amelie, "Lovely score."),
    ]):
        sqlite_client.insert("reviews", {"movie_id": movie["id"], "text": text,
                                         "spoiler": False, "created_at": ts(10 + i)})
    return {"amelie": amelie, "oldboy": oldboy, "heat": heat}


@pytest.fixture
def local_tz():
    """Switch the process timezone (POSIX TZ string) for one test."""
    saved = os.environ.get("TZ")

    def use(name):
        os.environ["TZ"] = name
        time.tzset()

    yield use
    if saved is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = saved
    time.tzset()
