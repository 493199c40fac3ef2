"""KFP v2 component — Chunk bill documents and write them to the index.

Step 2 of the bill ingestion pipeline.  Reads the JSON-Lines Dataset
produced by ``load_bill_documents``, cuts each document into overlapping
character windows, and upserts the windows into a Chroma collection
named after the target namespace.

Chunk ids are derived from the source key and the chunk ordinal, so
re-runs overwrite instead of duplicating.

Local testing
-------------
    from pipelines.components.index_chunks import index_bill_chunks
    index_bill_chunks.python_func(
        raw_documents=_FakeArtifact("/tmp/bills.jsonl"),
        metrics=_FakeArtifact("/tmp/metrics"),
        chroma_host="localhost",
        chroma_port=8000,
        namespace="congress-118",
    )
"""

from kfp import dsl

from pipelines import BASE_IMAGE


@dsl.component(base_image=BASE_IMAGE)
def index_bill_chunks(
    raw_documents: dsl.Input[dsl.Dataset],
    metrics: dsl.Output[dsl.Metrics],
    chroma_host: str,
    chroma_port: int,
    namespace: str,
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
    upsert_batch_size: int = 500,
) -> str:
    """Chunk loaded bill documents and index them under *namespace*.

    Parameters
    ----------
    raw_documents:
        Input Dataset — JSON-Lines with ``text`` and ``metadata`` keys.
    metrics:
        Output Metrics artifact with indexing statistics.
    chroma_host / chroma_port:
        Vector-store connection details.
    namespace:
        Target namespace (Chroma collection).
    chunk_size / chunk_overlap:
        Window size and overlap, in characters.
    upsert_batch_size:
        Max records per upsert call.

    Returns
    -------
    str
        Summary, e.g. ``"Indexed 256 chunks from 42 documents → 'congress-118'"``.
    """
    import json
    import logging

    from langchain_core.documents import Document

    from bill_ingest.indexing.chroma_sink import ChromaIndexSink
    from bill_ingest.ingestion.chunker import chunk_documents

    logging.basicConfig(level=logging.INFO)
    log = logging.getLogger("index_bill_chunks")

    # ── read loaded documents ─────────────────────────────────────
    documents: list[Document] = []
    with open(raw_documents.path) as fh:
        for lineno, line in enumerate(fh, 1):
            line = line.strip()
            if not line:
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError as exc:
                log.warning("Skipping malformed line %d: %s", lineno, exc)
                continue
            if "text" not in obj:
                log.warning("Skipping line %d: missing 'text' key", lineno)
                continue
            documents.append(
                Document(page_content=obj["text"], metadata=obj.get("metadata") or {})
            )

    log.info("Read %d documents from input artifact", len(documents))

    chunks = chunk_documents(documents, chunk_size=chunk_size, chunk_overlap=chunk_overlap)

    indexed = 0
    if chunks:
        sink = ChromaIndexSink(host=chroma_host, port=chroma_port, batch_size=upsert_batch_size)
        indexed = sink.write(chunks, namespace)

    # KFP Metrics
    metrics.log_metric("documents_read", len(documents))
    metrics.log_metric("chunks_indexed", indexed)

    msg = f"Indexed {indexed} chunks from {len(documents)} documents → '{namespace}'"
    log.info(msg)
    return msg
