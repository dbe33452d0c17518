"""
catalog.clients
~~~~~~~~~~~~~~~
Query clients for the data store. Both expose the same methods
(select / count / insert / update / delete) and raise `StoreError`.
"""

from movieShelf.catalog.clients.sqlite_client import SqliteClient
from movieShelf.catalog.clients.rest_client   import RestClient
from movieShelf.settings import STORE_BACKEND


def open_client(backend: str = STORE_BACKEND):
    """Return the client configured by ``MOVIE_SHELF_STORE`` (sqlite | rest)."""
    if backend == "sqlite":
        return SqliteClient()
    if backend == "rest":
        return RestClient()
    raise ValueError(f"Unknown store backend: {backend}")


__all__ = ["SqliteClient", "RestClient", "open_client"]
