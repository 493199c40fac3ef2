"""Resolve a listed bill text object into an enriched ``Document``.

For every text document the resolver reads two sibling ``data.json``
files (the version record next to the text and the bill record two
levels up) and merges them into the document metadata.  The two
metadata reads run concurrently on a small thread pool.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import TypeVar

from langchain_core.documents import Document
from pydantic import ValidationError

from bill_ingest.config import settings
from bill_ingest.errors import BodyFetchError, ObjectStoreError
from bill_ingest.ingestion.keys import bill_metadata_key, parse_bill_key, version_metadata_key
from bill_ingest.ingestion.models import BillMetadata, BillVersionMetadata, enriched_metadata
from bill_ingest.storage.base import ObjectRef, ObjectStore

logger = logging.getLogger(__name__)

# Thread pool for the blocking metadata reads
_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="bill-metadata")

_M = TypeVar("_M", BillMetadata, BillVersionMetadata)


class DocumentResolver:
    """Fetch a bill text object and its metadata and merge them.

    Parameters
    ----------
    store:
        Object store holding the text and ``data.json`` files.
    url_keys:
        Preferred keys of the version ``urls`` mapping, used to pick
        ``bill_version_url``.
    executor:
        Executor running the two metadata reads.  Defaults to a shared
        two-worker pool.
    """

    def __init__(
        self,
        store: ObjectStore,
        *,
        url_keys: Sequence[str] | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._store = store
        self._url_keys = list(url_keys) if url_keys is not None else list(settings.version_url_keys)
        self._executor = executor or _executor

    def resolve(self, ref: ObjectRef) -> Document:
        """Return the enriched document for *ref*.

        Raises
        ------
        BodyFetchError
            When the text body itself cannot be fetched or decoded.
            Missing or malformed metadata never raises.
        """
        key = ref.key
        try:
            content = self._store.get_text(key)
        except (ObjectStoreError, UnicodeDecodeError) as exc:
            raise BodyFetchError(key, str(exc)) from exc

        version_future = self._executor.submit(
            self._fetch_metadata, version_metadata_key(key), BillVersionMetadata
        )
        bill_future = self._executor.submit(
            self._fetch_metadata, bill_metadata_key(key), BillMetadata
        )
        version = version_future.result()
        bill = bill_future.result()

        metadata = enriched_metadata(
            key,
            bill,
            version,
            components=parse_bill_key(key),
            url_keys=self._url_keys,
        )
        return Document(page_content=content, metadata=metadata)

    def _fetch_metadata(self, key: str, model: type[_M]) -> _M:
        """Read and validate one ``data.json``; fall back to an empty record."""
        try:
            raw = self._store.get_text(key)
            return model.model_validate(json.loads(raw))
        except (ObjectStoreError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Using empty %s for %s: %s", model.__name__, key, exc)
            return model()
