"""
Ingestion — discovering, enriching, chunking, and indexing bill text.

This module walks an object-store prefix, resolves each bill text
document together with its bill- and version-level metadata, splits the
result into overlapping windows, and hands the windows to an index sink.
"""
