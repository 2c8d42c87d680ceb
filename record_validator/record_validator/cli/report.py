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

"""Per-file report of record validation failures."""

from pathlib import Path
from typing import Any, Dict, List, Optional


class RecordReport:
    """Container for validation results of a single record file."""

    def __init__(self, file_path: Path):
        self.file_path = file_path
        self.records = 0
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []

    @staticmethod
    def _entry(
        message: str,
        line: Optional[int],
        column: Optional[int],
        field_path: Optional[str],
        kind: Optional[str],
    ) -> Dict[str, Any]:
        entry: Dict[str, Any] = {'message': message}
        if line is not None:
            entry['line'] = line
        if column is not None:
            entry['column'] = column
        if field_path is not None:
            entry['field_path'] = field_path
        if kind is not None:
            entry['kind'] = kind
        return entry

    def add_error(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        field_path: Optional[str] = None,
        kind: Optional[str] = None,
    ):
        self.errors.append(self._entry(message, line, column, field_path, kind))

    def add_warning(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        field_path: Optional[str] = None,
        kind: Optional[str] = None,
    ):
        self.warnings.append(self._entry(message, line, column, field_path, kind))

    @property
    def ok(self) -> bool:
        return not self.errors
