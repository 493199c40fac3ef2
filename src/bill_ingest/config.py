"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Object store
    aws_region: str = "us-east-1"
    s3_bucket: str = "democrasee-storage"
    s3_endpoint_url: str = Field(
        default="",
        description=(
            "Endpoint for an S3-compatible store (MinIO, LocalStack, ...). "
            "Leave empty to use AWS S3."
        ),
    )

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    index_namespace: str = Field(default="congress-118", description="Default index namespace")
    upsert_batch_size: int = 500

    # Embedding
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"

    # Loading & chunking
    max_documents: int = 20000
    chunk_size: int = 1000
    chunk_overlap: int = 200
    version_url_keys: list[str] = Field(
        default=["unknown", "html", "xml", "pdf"],
        description="Keys of a text version's ``urls`` mapping, in order of preference",
    )
    bill_prefixes: list[str] = [
        "raw/congress/data/118/bills/hconres/",
        "raw/congress/data/118/bills/hjres/",
        "raw/congress/data/118/bills/hr/",
        "raw/congress/data/118/bills/hres/",
        "raw/congress/data/118/bills/s/",
        "raw/congress/data/118/bills/sconres/",
        "raw/congress/data/118/bills/sjres/",
        "raw/congress/data/118/bills/sres/",
    ]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
