"""KFP v2 component — Load enriched bill text documents from S3.

Step 1 of the bill ingestion pipeline.  Walks each key prefix, resolves
every bill text version together with its bill- and version-level
``data.json`` metadata, and emits a JSON-Lines Dataset artifact.

Structured output contract (one JSON object per line)::

    {
      "text":     "<bill text version body>",
      "metadata": {
        "source": "<object key>",
        "congress": "118",
        "bill_id": "hr1-118",
        "bill_version": "ih",
        ...
      }
    }

Local testing
-------------
    from pipelines.components.load_bills import load_bill_documents
    load_bill_documents.python_func(
        prefixes='["raw/congress/data/118/bills/hr/"]',
        raw_documents=_FakeArtifact("/tmp/bills.jsonl"),
        metrics=_FakeArtifact("/tmp/metrics"),
        max_documents=10,
    )
"""

from kfp import dsl

from pipelines import BASE_IMAGE


@dsl.component(base_image=BASE_IMAGE)
def load_bill_documents(
    prefixes: str,
    raw_documents: dsl.Output[dsl.Dataset],
    metrics: dsl.Output[dsl.Metrics],
    bucket: str = "democrasee-storage",
    region: str = "us-east-1",
    max_documents: int = 20000,
) -> str:
    """Load bill text documents under each prefix and emit JSON-Lines.

    Parameters
    ----------
    prefixes:
        JSON-encoded **list** of key prefixes, processed in order.
    raw_documents:
        Output Dataset — one JSON object per line (see module docstring).
    metrics:
        Output Metrics artifact with load statistics.
    bucket / region:
        S3 location of the bill corpus.
    max_documents:
        Per-prefix cap on the number of documents loaded.

    Returns
    -------
    str
        Human-readable summary.
    """
    import json
    import logging
    from pathlib import Path

    from bill_ingest.ingestion.loader import BillTextLoader
    from bill_ingest.storage.s3 import S3ObjectStore

    logging.basicConfig(level=logging.INFO)
    log = logging.getLogger("load_bill_documents")

    prefix_list = json.loads(prefixes) if isinstance(prefixes, str) else prefixes
    if not isinstance(prefix_list, list) or not prefix_list:
        raise ValueError(
            f"'prefixes' must be a non-empty JSON list, got: {prefixes!r}"
        )

    store = S3ObjectStore(bucket, region=region)

    out_path = Path(raw_documents.path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    loaded = 0
    skipped = 0
    total_chars = 0
    with open(out_path, "w") as fh:
        for prefix in prefix_list:
            loader = BillTextLoader(prefix, store=store, max_results=max_documents)
            for doc in loader.lazy_load():
                fh.write(json.dumps(
                    {"text": doc.page_content, "metadata": doc.metadata},
                    ensure_ascii=False,
                ) + "\n")
                total_chars += len(doc.page_content)
            loaded += loader.stats.loaded
            skipped += loader.stats.skipped
            log.info("✓ %s: %d loaded, %d skipped",
                     prefix, loader.stats.loaded, loader.stats.skipped)

    # artifact metadata
    raw_documents.metadata["num_documents"] = loaded
    raw_documents.metadata["num_prefixes"] = len(prefix_list)
    raw_documents.metadata["total_chars"] = total_chars

    # KFP Metrics
    metrics.log_metric("documents_loaded", loaded)
    metrics.log_metric("documents_skipped", skipped)
    metrics.log_metric("total_chars", total_chars)

    msg = f"Loaded {loaded} documents ({skipped} skipped) from {len(prefix_list)} prefixes"
    log.info(msg)
    return msg
