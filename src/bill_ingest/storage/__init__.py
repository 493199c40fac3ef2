"""
Storage — object-store access behind a small, swappable interface.

Public surface
--------------
- :class:`ObjectStore` — abstract backend (subclass for GCS, fakes, etc.).
- :class:`S3ObjectStore` — default S3 backend.
- :class:`ObjectRef`, :class:`ListPage` — listing models.
"""

from bill_ingest.storage.base import ListPage, ObjectRef, ObjectStore

__all__ = [
    "ListPage",
    "ObjectRef",
    "ObjectStore",
    "S3ObjectStore",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import S3ObjectStore to avoid pulling in boto3 at import time."""
    if name == "S3ObjectStore":
        from bill_ingest.storage.s3 import S3ObjectStore

        return S3ObjectStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
