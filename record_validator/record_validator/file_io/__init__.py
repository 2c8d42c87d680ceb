"""File-backed diagnostics: mapping field paths back to positions in record files."""

from .source_location import SourceLocation, format_source, lookup_nearest_source, lookup_source

__all__ = [
    "SourceLocation",
    "format_source",
    "lookup_nearest_source",
    "lookup_source",
]
