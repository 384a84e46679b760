"""Logger dashboard: hand-written and auto-generated logs shipped to an HTTP ingestion endpoint."""

__version__ = "0.1.0"
