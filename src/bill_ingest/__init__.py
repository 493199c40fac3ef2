"""
bill_ingest — congressional bill text ingestion for semantic search.

Walks an S3 bucket of bill text versions, stitches each text document
together with its bill- and version-level ``data.json`` metadata, chunks
the result, and writes the chunks into a vector index namespace.
"""

__version__ = "0.1.0"
