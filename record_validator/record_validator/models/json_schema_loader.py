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

"""JSON Schema loader for record schema documents."""

import json
import logging
from pathlib import Path
from typing import Dict, List

from ..exceptions import FormatVersionError, SchemaLoadError
from ..schema import DOCUMENT_SCHEMA_FILE
from ..utils.format_version import SemanticVersion, parse_format_version

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent.parent / "schema"

# Schema cache to avoid reloading files
_SCHEMA_CACHE: Dict[str, dict] = {}


def get_schema_path(version: str) -> Path:
    """Path of the bundled document schema for *version* (e.g. ``0.1.0``)."""
    return SCHEMA_DIR / version / DOCUMENT_SCHEMA_FILE


def available_versions() -> List[SemanticVersion]:
    versions = []
    for version_dir in SCHEMA_DIR.iterdir():
        if not version_dir.is_dir() or not (version_dir / DOCUMENT_SCHEMA_FILE).exists():
            continue
        try:
            versions.append(parse_format_version(version_dir.name))
        except FormatVersionError:
            continue
    return sorted(versions)


def resolve_schema_version(version: str) -> str:
    """Pick the bundled schema to check a document of *version* against.

    Resolution rules:
    - Major version must match exactly
    - If the exact version exists, use it
    - Otherwise prefer the largest patch of the same minor, then the closest
      larger minor, then the largest available version of that major

    Returns the original string when nothing matches; loading then fails.
    """
    try:
        wanted = parse_format_version(version)
    except FormatVersionError:
        return version

    if get_schema_path(str(wanted)).exists():
        return str(wanted)

    candidates = [v for v in available_versions() if v.major == wanted.major]
    if not candidates:
        return version

    same_minor = [v for v in candidates if v.minor == wanted.minor]
    if same_minor:
        return str(max(same_minor))

    larger_minor = [v for v in candidates if v.minor > wanted.minor]
    if larger_minor:
        closest = min(v.minor for v in larger_minor)
        return str(max(v for v in larger_minor if v.minor == closest))

    return str(max(candidates))


def load_schema(version: str) -> dict:
    """Load the JSON Schema used to check documents of format *version*.

    Raises:
        SchemaLoadError: If no bundled schema matches or the file is invalid JSON
    """
    resolved = resolve_schema_version(version)

    if resolved in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[resolved]

    schema_path = get_schema_path(resolved)
    if not schema_path.exists():
        raise SchemaLoadError(
            f"Document schema not found for format version {version} "
            f"(resolved to {resolved}): {schema_path}"
        )

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in schema file {schema_path}: {e.msg}") from e

    if resolved != version:
        logger.debug(f"Document format {version} checked against bundled schema {resolved}")
    _SCHEMA_CACHE[resolved] = schema
    return schema


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
