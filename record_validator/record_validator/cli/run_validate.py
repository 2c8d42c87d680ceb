#!/usr/bin/env python3
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

"""CLI entry point for validating record files against a schema document."""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from ..config import validator_config
from ..exceptions import RecordValidatorError
from ..models.specs import SchemaDefinition
from ..parsers.schema_parser import load_schema_document
from . import validate_files
from .report import RecordReport

RECORD_EXTENSIONS = ('.yaml', '.yml', '.json')


def find_record_files(paths: List[str]) -> List[Path]:
    """Expand files and directories into a sorted list of record files."""
    found = set()
    for path_str in paths:
        path = Path(path_str)
        if path.is_dir():
            found.update(p for ext in RECORD_EXTENSIONS for p in path.rglob(f'*{ext}'))
        elif path.is_file() and path.suffix in RECORD_EXTENSIONS:
            found.add(path)
        elif path.is_file():
            print(f"Warning: Not a YAML/JSON record file, skipped: {path}", file=sys.stderr)
        elif path.exists():
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)
        else:
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
    return sorted(found)


def _print_json(reports: List[RecordReport], schema: SchemaDefinition) -> None:
    summary = {
        'schema': schema.name,
        'files': len(reports),
        'records': sum(r.records for r in reports),
        'errors': sum(len(r.errors) for r in reports),
        'results': [
            {'file': str(r.file_path), 'records': r.records, 'errors': r.errors, 'warnings': r.warnings}
            for r in reports
        ],
    }
    print(json.dumps(summary, indent=2))


def _print_github_actions(reports: List[RecordReport]) -> None:
    for report in reports:
        for level, entries in (('error', report.errors), ('warning', report.warnings)):
            for entry in entries:
                print(f"::{level} file={report.file_path},line={entry.get('line', 1)}::{entry['message']}")


def _print_human(reports: List[RecordReport]) -> None:
    for report in reports:
        if report.ok and not report.warnings:
            continue
        print(f"\n{report.file_path}:")
        for label, entries in (('ERROR', report.errors), ('WARNING', report.warnings)):
            for entry in entries:
                line_info = f":{entry['line']}" if 'line' in entry else ""
                print(f"  {label}{line_info}: {entry['message']}")


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description='Validate YAML/JSON records against a record schema document',
        epilog=(
            'YAML reads unquoted digits as numbers. Quote values checked by a string pattern,\n'
            'e.g. mobileNumber: "9876543210", or they fail as a type mismatch.'
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--schema', required=True, help='Path to the YAML schema document')
    parser.add_argument('paths', nargs='+', help='Record files or directories to validate')
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    args = parser.parse_args(argv)
    validator_config.set_logging()

    try:
        schema = load_schema_document(args.schema)
    except RecordValidatorError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    schema_path = Path(args.schema).resolve()
    record_files = [p for p in find_record_files(args.paths) if p.resolve() != schema_path]
    if not record_files:
        print("No record files found.", file=sys.stderr)
        sys.exit(1)

    reports = validate_files(record_files, schema)

    if args.format == 'json':
        _print_json(reports, schema)
    elif args.format == 'github-actions':
        _print_github_actions(reports)
    else:
        _print_human(reports)

    if any(not r.ok for r in reports):
        sys.exit(1)
    if args.format == 'human':
        print(f"All {sum(r.records for r in reports)} records are valid.")
    sys.exit(0)


if __name__ == '__main__':
    main()
