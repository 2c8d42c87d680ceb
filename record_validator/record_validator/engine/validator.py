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

"""Full-record validation pass."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

from ..models.record import FieldPath, get_path, join_path, split_path
from ..models.result import FieldIssue, ValidationResult
from ..models.rules import ErrorKind
from ..models.specs import INHERIT, ArrayFieldSpec, ConditionalSpec, FieldEntry, SchemaDefinition
from ..resolvers.conditional_resolver import ConditionalResolver
from .array_validator import ArrayValidator
from .chain import run_chain

logger = logging.getLogger(__name__)


class Validator:
    """Validates records against a :class:`SchemaDefinition`.

    The validator holds no per-call state; one instance may serve any number of
    schemas and records, including concurrently.
    """

    def __init__(self, resolver: Optional[ConditionalResolver] = None):
        self.resolver = resolver or ConditionalResolver()
        self.array_validator = ArrayValidator(self._collect)

    def validate(self, record: Any, schema: SchemaDefinition) -> ValidationResult:
        """Validate *record* and return a result; record content never raises."""
        _check_schema(schema)
        result = ValidationResult.from_issues(self._collect(record, schema, ""))
        logger.debug(
            f"Validated record against schema '{schema.name or '<anonymous>'}': "
            f"{len(schema)} fields, {len(result.issues)} errors"
        )
        return result

    def validate_at(self, record: Any, schema: SchemaDefinition, path: FieldPath) -> ValidationResult:
        """Validate only the field at *path* (which may point inside an array item)."""
        _check_schema(schema)
        if not isinstance(record, Mapping):
            return ValidationResult.from_issues([_not_a_mapping("")])

        tokens = split_path(path)
        issues: List[FieldIssue] = []
        for field_path, entry in schema.fields.items():
            owner = split_path(field_path)
            if tokens[: len(owner)] != owner and owner[: len(tokens)] != tokens:
                continue
            issues.extend(
                issue
                for issue in self._validate_entry(entry, record, "")
                if _is_within(split_path(issue.path), tokens)
            )
        return ValidationResult.from_issues(issues)

    def validate_many(self, records: Iterable[Any], schema: SchemaDefinition) -> List[ValidationResult]:
        results = [self.validate(record, schema) for record in records]
        failed = sum(1 for r in results if not r.ok)
        logger.info(f"Validated {len(results)} records: {len(results) - failed} passed, {failed} failed")
        return results

    def _collect(self, record: Any, schema: SchemaDefinition, prefix: FieldPath) -> List[FieldIssue]:
        if not isinstance(record, Mapping):
            return [_not_a_mapping(prefix)]

        issues: List[FieldIssue] = []
        for field_path, entry in schema.fields.items():
            try:
                issues.extend(self._validate_entry(entry, record, prefix))
            except Exception as exc:
                logger.exception(f"Unexpected error validating field '{join_path(prefix, field_path)}'")
                issues.append(
                    FieldIssue(
                        path=join_path(prefix, field_path),
                        message=f"Internal validation error: {exc}",
                        kind=ErrorKind.TYPE_MISMATCH,
                    )
                )
        return issues

    def _validate_entry(self, entry: FieldEntry, record: Mapping[str, Any], prefix: FieldPath) -> List[FieldIssue]:
        if isinstance(entry, ConditionalSpec):
            resolved = self.resolver.resolve(entry, record)
            if resolved is INHERIT:
                return []
            entry = resolved

        value = get_path(record, entry.path)
        path = join_path(prefix, entry.path)

        if isinstance(entry, ArrayFieldSpec):
            return self.array_validator.validate(entry, value, record, path)

        issue = run_chain(entry.chain, value, record, path)
        return [issue] if issue is not None else []


def _check_schema(schema: Any) -> None:
    if not isinstance(schema, SchemaDefinition):
        raise TypeError(f"schema must be a SchemaDefinition, got {type(schema).__name__}")


def _not_a_mapping(path: FieldPath) -> FieldIssue:
    label = path or "record"
    return FieldIssue(path=path, message=f"{label} must be a `mapping` type", kind=ErrorKind.TYPE_MISMATCH)


def _is_within(issue_tokens, target_tokens) -> bool:
    return tuple(issue_tokens[: len(target_tokens)]) == tuple(target_tokens)


default_validator = Validator()


def validate(record: Any, schema: SchemaDefinition) -> ValidationResult:
    return default_validator.validate(record, schema)
