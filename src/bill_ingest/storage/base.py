"""Abstract base class for object-store backends.

Adding a new backend (GCS, Azure Blob, a local directory …) only requires
subclassing :class:`ObjectStore` and implementing the two abstract
methods.  Bucket / container and region are fixed at construction time;
callers only ever pass keys and prefixes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ObjectRef(BaseModel):
    """A single listed object inside the configured bucket.

    Attributes
    ----------
    key:
        Full object key (path string) relative to the bucket root.
    size:
        Object size in bytes, when the store reports it.
    last_modified:
        Last-modified timestamp, when the store reports it.
    etag:
        Entity tag, when the store reports it.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    size: int | None = None
    last_modified: datetime | None = None
    etag: str | None = None


class ListPage(BaseModel):
    """One page of a listing, plus the token for the next page (if any)."""

    entries: list[ObjectRef] = Field(default_factory=list)
    next_token: str | None = None


class ObjectStore(ABC):
    """Backend-agnostic object-store interface.

    Parameters
    ----------
    bucket:
        Name of the bucket / container every call is scoped to.
    """

    def __init__(self, bucket: str) -> None:
        self.bucket = bucket

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def list_page(self, prefix: str, continuation_token: str | None = None) -> ListPage:
        """Return one page of objects whose keys start with *prefix*.

        ``ListPage.next_token`` is ``None`` on the last page.

        Raises
        ------
        ObjectStoreError
            When the page cannot be retrieved.
        """
        ...

    @abstractmethod
    def get_object(self, key: str) -> bytes:
        """Return the full body of *key*.

        Raises
        ------
        ObjectNotFoundError
            When *key* does not exist.
        ObjectStoreError
            For any other retrieval failure.
        """
        ...

    # -- helpers --------------------------------------------------------------

    def get_text(self, key: str, encoding: str = "utf-8") -> str:
        """Fetch *key* and decode it as text."""
        return self.get_object(key).decode(encoding)
