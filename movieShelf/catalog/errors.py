"""catalog.errors
Failure types surfaced to the views.

Clients raise `StoreError`; repositories translate it into one of the
`CatalogError` subclasses depending on which operation failed.
"""

from __future__ import annotations


class StoreError(Exception):
    """A query against the data store failed (I/O, HTTP, SQL)."""


class CatalogError(Exception):
    """Base for every failure the views are expected to report."""


class FetchFailure(CatalogError):
    """The movie collection (or a review list) could not be loaded."""


class MutationFailure(CatalogError):
    """A remote write was rejected; cached state was left untouched."""


class AggregationFailure(CatalogError):
    """A count / snippet / statistics query failed."""


class ValidationFailure(CatalogError, ValueError):
    """Input rejected before any remote call was attempted."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
