# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Record access helpers: field paths, absent values and file descriptors."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple, Union


FieldPath = str

_BRACKET_RE = re.compile(r"\[(\d+)\]")


class _Missing:
    """Marker for a path that does not exist in the record."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class FileDescriptor:
    """In-memory description of an uploaded file.

    Only the declared metadata is inspected by rules; contents are never read.
    """

    name: str
    type: str
    size: Optional[int] = None


def split_path(path: FieldPath) -> Tuple[str, ...]:
    """Split ``a.b[0].c`` or ``a.b.0.c`` into ``("a", "b", "0", "c")``."""
    if not path:
        return ()
    normalized = _BRACKET_RE.sub(r".\1", path)
    return tuple(token for token in normalized.split(".") if token)


def join_path(base: Optional[FieldPath], token: Union[str, int]) -> FieldPath:
    if not base:
        return str(token)
    return f"{base}.{token}"


def get_path(record: Any, path: FieldPath) -> Any:
    """Return the value at *path*, or ``MISSING`` when any segment is absent."""
    current = record
    for token in split_path(path):
        if isinstance(current, Mapping):
            if token not in current:
                return MISSING
            current = current[token]
        elif is_sequence(current):
            if not token.isdigit():
                return MISSING
            idx = int(token)
            if idx >= len(current):
                return MISSING
            current = current[idx]
        else:
            return MISSING
    return current


def to_json_pointer(path: FieldPath, prefix: str = "") -> str:
    """Convert a field path to the JSON-pointer form used by YAML source maps."""
    pointer = prefix
    for token in split_path(path):
        pointer += "/" + token.replace("~", "~0").replace("/", "~1")
    return pointer


def is_absent(value: Any) -> bool:
    return value is MISSING or value is None


def is_empty(value: Any) -> bool:
    """Absent, empty string or empty sequence."""
    if is_absent(value):
        return True
    if isinstance(value, str):
        return value == ""
    if is_sequence(value):
        return len(value) == 0
    return False


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_file(value: Any) -> bool:
    if isinstance(value, FileDescriptor):
        return True
    return isinstance(value, Mapping) and isinstance(value.get("type"), str)


def file_mime_type(value: Any) -> Optional[str]:
    if isinstance(value, FileDescriptor):
        return value.type
    if isinstance(value, Mapping):
        mime = value.get("type")
        return mime if isinstance(mime, str) else None
    return None


def values_equal(left: Any, right: Any) -> bool:
    """Equality that keeps booleans apart from numbers (``True != 1``)."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    try:
        return bool(left == right)
    except Exception:
        return False


def contains_value(allowed: Sequence[Any], value: Any) -> bool:
    return any(values_equal(value, candidate) for candidate in allowed)

