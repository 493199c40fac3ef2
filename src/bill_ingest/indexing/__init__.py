"""
Indexing — embedding and writing chunks into a vector index.

Public surface
--------------
- :class:`IndexSink` — abstract backend (subclass for Pinecone, etc.).
- :class:`ChromaIndexSink` — default Chroma backend.
"""

from bill_ingest.indexing.base import IndexSink

__all__ = [
    "ChromaIndexSink",
    "IndexSink",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaIndexSink to avoid pulling in chromadb at import time."""
    if name == "ChromaIndexSink":
        from bill_ingest.indexing.chroma_sink import ChromaIndexSink

        return ChromaIndexSink
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
