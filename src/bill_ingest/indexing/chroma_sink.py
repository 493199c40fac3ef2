"""Chroma implementation of the index-sink abstraction."""

from __future__ import annotations

import hashlib
import logging
from collections import defaultdict
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import chromadb
from langchain_community.vectorstores import Chroma
from langchain_huggingface import HuggingFaceEmbeddings

from bill_ingest.config import settings
from bill_ingest.errors import SinkError
from bill_ingest.indexing.base import IndexSink

if TYPE_CHECKING:
    from langchain_core.documents import Document

logger = logging.getLogger(__name__)


def get_embedding_function(model_name: str = settings.embedding_model) -> HuggingFaceEmbeddings:
    """Return the configured sentence-transformer embedding function."""
    return HuggingFaceEmbeddings(model_name=model_name)


def chunk_ids(documents: Sequence[Document]) -> list[str]:
    """Deterministic ids: hash of the ``source`` key plus the chunk's ordinal.

    Re-indexing the same source overwrites its chunks instead of
    duplicating them.
    """
    ordinals: defaultdict[str, int] = defaultdict(int)
    ids: list[str] = []
    for doc in documents:
        source = str(doc.metadata.get("source", ""))
        digest = hashlib.sha256(source.encode()).hexdigest()[:16]
        ids.append(f"{digest}_{ordinals[source]}")
        ordinals[source] += 1
    return ids


class ChromaIndexSink(IndexSink):
    """Chroma-backed sink; each namespace is a Chroma collection.

    Parameters
    ----------
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    embedding:
        Embedding function; defaults to the configured HuggingFace model.
    batch_size:
        Maximum records per upsert call.
    client:
        Pre-built Chroma client (tests, embedded mode).
    """

    def __init__(
        self,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        embedding: Any = None,
        batch_size: int = settings.upsert_batch_size,
        client: Any = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
        self._embedding = embedding if embedding is not None else get_embedding_function()
        self._batch_size = batch_size

    def _vectorstore(self, namespace: str) -> Chroma:
        return Chroma(
            client=self._client,
            collection_name=namespace,
            embedding_function=self._embedding,
            collection_metadata={"hnsw:space": "cosine"},
        )

    # -- IndexSink overrides --------------------------------------------------

    def write(self, documents: Sequence[Document], namespace: str) -> int:
        if not documents:
            return 0

        vectorstore = self._vectorstore(namespace)
        ids = chunk_ids(documents)

        written = 0
        batches = 0
        for start in range(0, len(documents), self._batch_size):
            end = start + self._batch_size
            try:
                vectorstore.add_documents(list(documents[start:end]), ids=ids[start:end])
            except Exception as exc:
                raise SinkError(
                    f"Batch {batches + 1} ({start}-{min(end, len(documents))}) "
                    f"to namespace {namespace!r} failed: {exc}"
                ) from exc
            batches += 1
            written += len(documents[start:end])
            logger.info("  upserted batch %d (%d-%d)", batches, start, min(end, len(documents)))

        logger.info("Indexed %d chunks → namespace '%s' (%d batches)", written, namespace, batches)
        return written

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
