"""KFP v2 components — each file exports one @dsl.component."""

from pipelines.components.index_chunks import index_bill_chunks
from pipelines.components.load_bills import load_bill_documents

__all__ = [
    "index_bill_chunks",
    "load_bill_documents",
]
