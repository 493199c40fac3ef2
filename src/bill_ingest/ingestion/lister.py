"""Paginated listing over an :class:`~bill_ingest.storage.base.ObjectStore`."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from bill_ingest.errors import ListingError, ObjectStoreError
from bill_ingest.storage.base import ListPage, ObjectRef, ObjectStore

logger = logging.getLogger(__name__)


def iter_pages(store: ObjectStore, prefix: str) -> Iterator[ListPage]:
    """Yield listing pages under *prefix*, following continuation tokens.

    Pages are requested lazily: a consumer that stops iterating never
    triggers the next request.

    Raises
    ------
    ListingError
        When a page cannot be retrieved, or the store hands back a token
        it already returned.
    """
    token: str | None = None
    seen_tokens: set[str] = set()
    page_no = 0

    while True:
        try:
            page = store.list_page(prefix, token)
        except ObjectStoreError as exc:
            raise ListingError(
                f"Listing {prefix!r} failed on page {page_no + 1}: {exc}"
            ) from exc

        page_no += 1
        logger.debug("Page %d under %r: %d entries", page_no, prefix, len(page.entries))
        yield page

        token = page.next_token
        if not token:
            return
        if token in seen_tokens:
            raise ListingError(f"Listing {prefix!r} repeated continuation token {token!r}")
        seen_tokens.add(token)


def iter_objects(store: ObjectStore, prefix: str) -> Iterator[ObjectRef]:
    """Flatten :func:`iter_pages` into a single sequence, in page order."""
    for page in iter_pages(store, prefix):
        yield from page.entries
