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

"""Validate record files against a schema document."""

import logging
from pathlib import Path
from typing import List, Optional

from ..engine.validator import Validator, default_validator
from ..exceptions import RecordLoadError
from ..file_io.source_location import SourceLocation, format_source, lookup_nearest_source
from ..models.record import to_json_pointer
from ..models.specs import SchemaDefinition
from ..parsers.yaml_parser import YamlParser, yaml_parser
from .report import RecordReport

__all__ = ['validate_files', 'RecordReport']

logger = logging.getLogger(__name__)


def validate_files(
    file_paths: List[Path],
    schema: SchemaDefinition,
    validator: Optional[Validator] = None,
    parser: Optional[YamlParser] = None,
) -> List[RecordReport]:
    """Validate every record stored in *file_paths*.

    A file holds either one record (a mapping) or a list of records.

    Returns:
        List of RecordReport objects, one per file
    """
    validator = validator or default_validator
    parser = parser or yaml_parser
    reports = []

    for file_path in file_paths:
        report = RecordReport(file_path)
        reports.append(report)

        try:
            data, source_map = parser.load_with_source(file_path)
        except RecordLoadError as e:
            report.add_error(f"Failed to load record file: {e}")
            continue

        if isinstance(data, list):
            records = [(f"/{idx}", item) for idx, item in enumerate(data)]
            if not records:
                report.add_warning("File contains an empty list of records")
        else:
            records = [("", data)]

        for pointer_prefix, record in records:
            report.records += 1
            result = validator.validate(record, schema)
            for issue in result.issues:
                loc = lookup_nearest_source(source_map, to_json_pointer(issue.path, pointer_prefix))
                src = SourceLocation(file_path=file_path, yaml_path=loc.yaml_path, line=loc.line, column=loc.column)
                report.add_error(
                    f"{issue.message}{format_source(src)}",
                    line=loc.line,
                    column=loc.column,
                    field_path=issue.path,
                    kind=issue.kind.value,
                )

        logger.debug(f"{file_path}: {report.records} records, {len(report.errors)} errors")

    return reports
