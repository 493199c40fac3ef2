"""Ingestion runner — load → chunk → index, one prefix at a time.

Usage::

    python -m bill_ingest.ingestion.pipeline                  # configured prefixes
    python -m bill_ingest.ingestion.pipeline raw/congress/data/118/bills/hr \\
        --namespace congress-118 --max-documents 100
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from bill_ingest.config import settings
from bill_ingest.indexing.base import IndexSink
from bill_ingest.ingestion.chunker import chunk_documents
from bill_ingest.ingestion.loader import BillTextLoader, ObjectPredicate, is_bill_text
from bill_ingest.storage.base import ObjectStore

logger = logging.getLogger(__name__)


class IngestionReport(BaseModel):
    """Outcome of ingesting one prefix."""

    prefix: str
    namespace: str
    documents_loaded: int = 0
    documents_skipped: int = 0
    chunks_indexed: int = 0


def ingest_prefix(
    prefix: str,
    *,
    store: ObjectStore,
    sink: IndexSink,
    namespace: str = settings.index_namespace,
    max_documents: int = settings.max_documents,
    chunk_size: int = settings.chunk_size,
    chunk_overlap: int = settings.chunk_overlap,
    predicate: ObjectPredicate = is_bill_text,
) -> IngestionReport:
    """Load every bill text under *prefix*, chunk it, and write it to *sink*.

    ``ListingError`` and ``SinkError`` propagate; documents whose body
    cannot be read are counted as skipped.
    """
    loader = BillTextLoader(
        prefix,
        store=store,
        predicate=predicate,
        max_results=max_documents,
    )
    documents = loader.load()
    logger.info("Found %d documents under %r", len(documents), prefix)

    chunks = chunk_documents(documents, chunk_size=chunk_size, chunk_overlap=chunk_overlap)
    logger.info("Split into %d chunks, writing to namespace '%s'", len(chunks), namespace)

    indexed = sink.write(chunks, namespace) if chunks else 0

    return IngestionReport(
        prefix=prefix,
        namespace=namespace,
        documents_loaded=loader.stats.loaded,
        documents_skipped=loader.stats.skipped,
        chunks_indexed=indexed,
    )


def run_ingestion(
    prefixes: Iterable[str],
    *,
    store: ObjectStore,
    sink: IndexSink,
    namespace: str = settings.index_namespace,
    max_documents: int = settings.max_documents,
    chunk_size: int = settings.chunk_size,
    chunk_overlap: int = settings.chunk_overlap,
    predicate: ObjectPredicate = is_bill_text,
) -> list[IngestionReport]:
    """Run :func:`ingest_prefix` for each prefix in turn.

    Each prefix gets its own ``max_documents`` budget.  The first hard
    failure stops the run.
    """
    reports: list[IngestionReport] = []
    for prefix in prefixes:
        report = ingest_prefix(
            prefix,
            store=store,
            sink=sink,
            namespace=namespace,
            max_documents=max_documents,
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            predicate=predicate,
        )
        logger.info(
            "Ingestion complete for %s: %d loaded, %d skipped, %d chunks",
            prefix, report.documents_loaded, report.documents_skipped, report.chunks_indexed,
        )
        reports.append(report)
    return reports


# ──────────────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    import argparse

    from bill_ingest.indexing.chroma_sink import ChromaIndexSink
    from bill_ingest.storage.s3 import S3ObjectStore

    parser = argparse.ArgumentParser(description="Ingest bill text from S3 into the vector index")
    parser.add_argument("prefixes", nargs="*", help="Key prefixes (default: configured bill prefixes)")
    parser.add_argument("--namespace", default=settings.index_namespace)
    parser.add_argument("--max-documents", type=int, default=settings.max_documents)
    parser.add_argument("--chunk-size", type=int, default=settings.chunk_size)
    parser.add_argument("--chunk-overlap", type=int, default=settings.chunk_overlap)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    reports = run_ingestion(
        args.prefixes or settings.bill_prefixes,
        store=S3ObjectStore(),
        sink=ChromaIndexSink(),
        namespace=args.namespace,
        max_documents=args.max_documents,
        chunk_size=args.chunk_size,
        chunk_overlap=args.chunk_overlap,
    )
    loaded = sum(r.documents_loaded for r in reports)
    skipped = sum(r.documents_skipped for r in reports)
    logger.info("Done: %d documents ingested, %d skipped", loaded, skipped)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
