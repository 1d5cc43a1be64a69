"""Recipe ingestion with nutrition enrichment and an ingredient reverse index."""

__version__ = "0.1.0"
