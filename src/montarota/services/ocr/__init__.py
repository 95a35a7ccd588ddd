"""Receipt-slip ingestion helpers."""

from .parser import extract_fields, ingest

__all__ = ["extract_fields", "ingest"]
