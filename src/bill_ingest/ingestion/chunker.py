"""Text chunking strategies."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from langchain_text_splitters import RecursiveCharacterTextSplitter, TextSplitter

from bill_ingest.config import settings

if TYPE_CHECKING:
    from langchain_core.documents import Document


class CharacterWindowSplitter(TextSplitter):
    """Cut text into fixed-size character windows.

    Consecutive windows share ``chunk_overlap`` characters, so a text of
    length ``L > chunk_size`` yields ``ceil((L - overlap) / (size - overlap))``
    windows and a shorter non-empty text yields exactly one.  An empty
    text yields no windows, so an empty document adds nothing to the index.
    """

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("strip_whitespace", False)
        super().__init__(**kwargs)

    def split_text(self, text: str) -> list[str]:
        if not text:
            return []
        step = self._chunk_size - self._chunk_overlap
        last_start = max(len(text) - self._chunk_overlap, 1)
        return [text[start:start + self._chunk_size] for start in range(0, last_start, step)]


def _build_splitter(
    chunk_size: int,
    chunk_overlap: int,
    separators: Sequence[str] | None,
) -> TextSplitter:
    if chunk_overlap >= chunk_size:
        raise ValueError(
            f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
        )
    if separators:
        return RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
            separators=list(separators),
        )
    return CharacterWindowSplitter(chunk_size=chunk_size, chunk_overlap=chunk_overlap)


def chunk_documents(
    documents: list[Document],
    chunk_size: int = settings.chunk_size,
    chunk_overlap: int = settings.chunk_overlap,
    separators: Sequence[str] | None = None,
) -> list[Document]:
    """Split *documents* into overlapping chunks for embedding.

    Parameters
    ----------
    documents:
        Enriched documents produced by a loader.
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of characters shared by consecutive chunks.
    separators:
        When given, split on these boundaries first (recursive strategy).
        By default text is cut into fixed character windows with
        :class:`CharacterWindowSplitter`.

    Returns
    -------
    list[Document]
        Chunks in document order, each carrying a copy of its parent's
        metadata.
    """
    splitter = _build_splitter(chunk_size, chunk_overlap, separators)
    return splitter.split_documents(documents)
