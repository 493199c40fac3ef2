"""Recursive bill text loader built on LangChain's ``BaseLoader``."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from langchain_core.document_loaders import BaseLoader
from langchain_core.documents import Document
from pydantic import BaseModel

from bill_ingest.config import settings
from bill_ingest.errors import BodyFetchError
from bill_ingest.ingestion.keys import parse_bill_key
from bill_ingest.ingestion.lister import iter_objects
from bill_ingest.ingestion.resolver import DocumentResolver
from bill_ingest.storage.base import ObjectRef, ObjectStore

logger = logging.getLogger(__name__)

ObjectPredicate = Callable[[ObjectRef], bool]


def is_bill_text(ref: ObjectRef) -> bool:
    """Default predicate: *ref* is a bill text version document."""
    return parse_bill_key(ref.key) is not None


class LoadStats(BaseModel):
    """Counters for a single :meth:`BillTextLoader.lazy_load` run."""

    listed: int = 0
    loaded: int = 0
    skipped: int = 0


class BillTextLoader(BaseLoader):
    """Load enriched bill text documents found under an S3 prefix.

    Objects are visited in listing order.  Each object accepted by
    *predicate* is resolved into a ``Document``; objects whose text body
    cannot be fetched are skipped.  Loading stops as soon as
    *max_results* documents have been produced, without requesting any
    further listing pages.

    Parameters
    ----------
    prefix:
        Key prefix to walk, e.g. ``"raw/congress/data/118/bills/hr/"``.
    store:
        Object store to list and read from.
    predicate:
        Pure function deciding which listed objects to resolve.  Evaluated
        before any fetch.
    max_results:
        Upper bound on the number of documents produced.
    resolver:
        Custom resolver; defaults to a :class:`DocumentResolver` over
        *store*.
    """

    def __init__(
        self,
        prefix: str,
        *,
        store: ObjectStore,
        predicate: ObjectPredicate = is_bill_text,
        max_results: int = settings.max_documents,
        resolver: DocumentResolver | None = None,
    ) -> None:
        if max_results < 0:
            raise ValueError(f"max_results must be >= 0, got {max_results}")
        self.prefix = prefix
        self.predicate = predicate
        self.max_results = max_results
        self._store = store
        self._resolver = resolver or DocumentResolver(store)
        self.stats = LoadStats()

    def lazy_load(self) -> Iterator[Document]:
        self.stats = LoadStats()
        if self.max_results == 0:
            return

        for ref in iter_objects(self._store, self.prefix):
            self.stats.listed += 1
            if not self.predicate(ref):
                continue

            try:
                document = self._resolver.resolve(ref)
            except BodyFetchError as exc:
                self.stats.skipped += 1
                logger.warning("Skipping %s: %s", ref.key, exc.reason)
                continue

            self.stats.loaded += 1
            yield document

            if self.stats.loaded >= self.max_results:
                logger.info("Reached max_results=%d under %r", self.max_results, self.prefix)
                return

        logger.info(
            "Loaded %d documents under %r (%d skipped, %d listed)",
            self.stats.loaded, self.prefix, self.stats.skipped, self.stats.listed,
        )
