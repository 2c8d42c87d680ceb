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

"""``record_schema_format`` handling for YAML schema documents.

A document declares the format it was written for, e.g.
``record_schema_format: 0.1.0``. Only the major version must agree with
:data:`record_validator.SCHEMA_FORMAT_VERSION`; a newer minor loads with a
warning because unknown rule kinds are then rejected by the document check.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from .. import SCHEMA_FORMAT_VERSION
from ..exceptions import FormatVersionError

FORMAT_FIELD = "record_schema_format"

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True, order=True)
class SemanticVersion:
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, raw: Any) -> "SemanticVersion":
        if not isinstance(raw, str):
            raise FormatVersionError(f"{FORMAT_FIELD} must be a string such as '0.1.0', got {raw!r}")
        match = _VERSION_RE.match(raw.strip())
        if match is None:
            raise FormatVersionError(f"{FORMAT_FIELD} '{raw}' is not of the form MAJOR.MINOR.PATCH")
        return cls(*(int(part) for part in match.groups()))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_format_version(raw: Any) -> SemanticVersion:
    """Parse ``MAJOR.MINOR.PATCH`` with an optional leading ``v``.

    Raises:
        FormatVersionError: If *raw* is not a version string.
    """
    return SemanticVersion.parse(raw)


def get_supported_format_version() -> SemanticVersion:
    return SemanticVersion.parse(SCHEMA_FORMAT_VERSION)


@dataclass(frozen=True)
class VersionCheckResult:
    compatible: bool
    message: str
    file_version: Optional[SemanticVersion] = None
    supported_version: Optional[SemanticVersion] = None
    minor_newer: bool = False
    missing: bool = False


def check_format_version(raw_version: Any) -> VersionCheckResult:
    """Compare a document's declared format with the supported one.

    Never raises; the caller decides whether an incompatible or missing
    version stops loading.
    """
    supported = get_supported_format_version()

    if raw_version is None:
        return VersionCheckResult(
            compatible=True,
            missing=True,
            supported_version=supported,
            message=f"Missing '{FORMAT_FIELD}' field, assuming {supported}",
        )

    try:
        declared = SemanticVersion.parse(raw_version)
    except FormatVersionError as exc:
        return VersionCheckResult(compatible=False, message=str(exc), supported_version=supported)

    if declared.major != supported.major:
        message = f"Incompatible {FORMAT_FIELD} {declared}: only {supported.major}.x documents are supported"
        return VersionCheckResult(False, message, declared, supported)

    if declared.minor > supported.minor:
        message = (
            f"{FORMAT_FIELD} {declared} has a newer minor version than the supported {supported}; "
            "rules added since then will be rejected"
        )
        return VersionCheckResult(True, message, declared, supported, minor_newer=True)

    return VersionCheckResult(True, f"{FORMAT_FIELD} {declared} is supported", declared, supported)
