"""Bundled JSON Schemas for record schema documents, one directory per format version.

Kept as data only so that the document format stays independent of the engine.
"""

DOCUMENT_SCHEMA_FILE = "record_schema.json"
