"""Abstract base class for vector-index sinks.

Adding a new backend (Pinecone, Weaviate, Qdrant …) only requires
subclassing :class:`IndexSink` and implementing :meth:`IndexSink.write`
and :meth:`IndexSink.health_check`.  The ingestion runner is
backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from langchain_core.documents import Document


class IndexSink(ABC):
    """Destination for chunked documents, partitioned by namespace."""

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def write(self, documents: Sequence[Document], namespace: str) -> int:
        """Embed and store *documents* under *namespace*, in order.

        Returns
        -------
        int
            Number of records written.

        Raises
        ------
        SinkError
            When any batch fails.  There is no per-record status.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...
