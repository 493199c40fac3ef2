"""Exception hierarchy for the ingestion pipeline.

Only :class:`ListingError` and :class:`SinkError` are expected to reach the
caller of a run.  Per-document failures are absorbed by the loader.
"""

from __future__ import annotations


class IngestionError(Exception):
    """Base class for every error raised by this package."""


class ObjectStoreError(IngestionError):
    """The object-store client failed to list or fetch."""


class ObjectNotFoundError(ObjectStoreError):
    """The requested key does not exist in the bucket."""


class ListingError(IngestionError):
    """A listing page could not be retrieved; the load is aborted."""


class BodyFetchError(IngestionError):
    """The primary text body of a document could not be fetched."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Could not fetch body of {key!r}: {reason}")
        self.key = key
        self.reason = reason


class SinkError(IngestionError):
    """A batch write to the vector index failed."""
