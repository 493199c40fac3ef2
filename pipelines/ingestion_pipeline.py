"""KFP v2 pipeline — Bill text ingestion workflow.

Two stages connected by a KFP Dataset artifact:

    load (S3 → enriched documents) → index (chunk → embed → upsert)

Build the component image
-------------------------
    docker build -t bill-ingest:latest .
    export BILL_INGEST_IMAGE=<registry>/bill-ingest:latest   # when pushed

Compile
-------
    python -m pipelines.ingestion_pipeline --compile
"""

from kfp import compiler, dsl

from pipelines.components.index_chunks import index_bill_chunks
from pipelines.components.load_bills import load_bill_documents


# ──────────────────────────────────────────────────────────────────────
# Pipeline definition
# ──────────────────────────────────────────────────────────────────────


@dsl.pipeline(
    name="bill-ingestion-pipeline",
    description=(
        "Load congressional bill text versions with their bill and version "
        "metadata from S3, then chunk and index them in a vector namespace."
    ),
)
def bill_ingestion_pipeline(
    # ── Source ──────────────────────────────────────────────────────
    prefixes: str = '["raw/congress/data/118/bills/hr/", "raw/congress/data/118/bills/s/"]',
    bucket: str = "democrasee-storage",
    region: str = "us-east-1",
    max_documents: int = 20000,
    # ── Chunking ───────────────────────────────────────────────────
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
    # ── Vector DB ──────────────────────────────────────────────────
    chroma_host: str = "chroma.kubeflow.svc.cluster.local",
    chroma_port: int = 8000,
    namespace: str = "congress-118",
    upsert_batch_size: int = 500,
) -> None:
    """Two-step ingestion: load → index.

    Parameters
    ----------
    prefixes:
        JSON list of key prefixes, processed in order.
    bucket / region:
        S3 location of the bill corpus.
    max_documents:
        Per-prefix cap on loaded documents.
    chunk_size / chunk_overlap:
        Window size and overlap, in characters.
    chroma_host / chroma_port / namespace:
        Index connection details and target namespace.
    upsert_batch_size:
        Max records per upsert call.
    """
    load_task = load_bill_documents(
        prefixes=prefixes,
        bucket=bucket,
        region=region,
        max_documents=max_documents,
    )

    index_bill_chunks(
        raw_documents=load_task.outputs["raw_documents"],
        chroma_host=chroma_host,
        chroma_port=chroma_port,
        namespace=namespace,
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        upsert_batch_size=upsert_batch_size,
    )


# ──────────────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────────────


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Bill ingestion pipeline")
    parser.add_argument(
        "--compile",
        action="store_true",
        help="Compile pipeline to YAML",
    )
    parser.add_argument(
        "--output",
        default="pipelines/compiled/bill_ingestion_pipeline.yaml",
        help="Output path for compiled YAML",
    )
    args = parser.parse_args()

    if args.compile:
        compiler.Compiler().compile(bill_ingestion_pipeline, args.output)
        print(f"Pipeline compiled → {args.output}")
