"""Positions of record fields inside the YAML/JSON file they were loaded from."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

SourceMap = Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based

    def position(self) -> str:
        if self.file_path is None:
            return ""
        if self.line is None:
            return str(self.file_path)
        if self.column is None:
            return f"{self.file_path}:{self.line}"
        return f"{self.file_path}:{self.line}:{self.column}"


def lookup_source(source_map: Optional[SourceMap], yaml_path: Optional[str]) -> SourceLocation:
    entry = (source_map or {}).get(yaml_path) if yaml_path is not None else None
    if not entry:
        return SourceLocation(yaml_path=yaml_path)
    return SourceLocation(yaml_path=yaml_path, line=entry.get("line"), column=entry.get("column"))


def lookup_nearest_source(source_map: Optional[SourceMap], yaml_path: str) -> SourceLocation:
    """Like :func:`lookup_source`, falling back to the closest existing ancestor.

    A missing field has no node of its own, so the enclosing record's position
    is reported under the field's own path.
    """
    candidate = yaml_path
    loc = lookup_source(source_map, candidate)
    while loc.line is None and candidate:
        candidate = candidate.rsplit("/", 1)[0]
        loc = lookup_source(source_map, candidate)
    return SourceLocation(yaml_path=yaml_path, line=loc.line, column=loc.column)


def format_source(loc: Optional[SourceLocation]) -> str:
    """Render ``" (file:line:col at /yaml/path)"``, or ``""`` when nothing is known."""
    if loc is None:
        return ""
    parts = [part for part in (loc.position(), f"at {loc.yaml_path}" if loc.yaml_path else "") if part]
    return f" ({' '.join(parts)})" if parts else ""
