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

"""Validation of sequence fields against an item schema."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Sequence, Union

from ..models.record import FieldPath, is_absent, is_sequence, join_path
from ..models.result import FieldIssue
from ..models.rules import ErrorKind, format_message
from ..models.specs import ArrayFieldSpec, FieldSpec, SchemaDefinition
from .chain import run_chain

logger = logging.getLogger(__name__)

RecordCollector = Callable[[Any, SchemaDefinition, FieldPath], List[FieldIssue]]


class ArrayValidator:
    """Applies an :class:`ArrayFieldSpec` to a sequence value.

    The aggregate length checks and the per-item checks run independently, so a
    too-short array still reports every failing item.
    """

    def __init__(self, collect_record: RecordCollector):
        self._collect_record = collect_record

    def validate(
        self,
        spec: ArrayFieldSpec,
        value: Any,
        record: Mapping[str, Any],
        path: FieldPath,
    ) -> List[FieldIssue]:
        if is_absent(value):
            if spec.required_rule is not None:
                return [self._required_issue(spec, path)]
            return []

        if not is_sequence(value):
            message = spec.type_message or "${path} must be a `sequence` type"
            return [FieldIssue(path=path, message=format_message(message, path), kind=ErrorKind.TYPE_MISMATCH)]

        if not value and spec.required_rule is not None:
            return [self._required_issue(spec, path)]

        issues: List[FieldIssue] = []
        if len(value) < spec.min_items:
            issues.append(self._too_few_issue(spec, path))
        elif spec.max_items is not None and len(value) > spec.max_items:
            message = spec.max_items_message or f"${{path}} field must have less than or equal to {spec.max_items} items"
            issues.append(FieldIssue(path=path, message=format_message(message, path), kind=ErrorKind.OUT_OF_RANGE))

        for item_issues in self.validate_items(value, spec.item_schema, record, path).values():
            issues.extend(item_issues)
        return issues

    def validate_items(
        self,
        sequence: Sequence[Any],
        item_schema: Union[FieldSpec, SchemaDefinition],
        record: Mapping[str, Any],
        path: FieldPath,
    ) -> Dict[int, List[FieldIssue]]:
        """Validate every element and return the issues of failing indices only."""
        per_index: Dict[int, List[FieldIssue]] = {}
        for idx, item in enumerate(sequence):
            item_path = join_path(path, idx)
            if isinstance(item_schema, SchemaDefinition):
                item_issues = self._collect_record(item, item_schema, item_path)
            else:
                # Scalar items see the enclosing record as their context.
                issue = run_chain(item_schema.chain, item, record, item_path)
                item_issues = [issue] if issue is not None else []
            if item_issues:
                per_index[idx] = item_issues
        if per_index:
            logger.debug(f"Array '{path}': {len(per_index)} of {len(sequence)} items failed")
        return per_index

    @staticmethod
    def _required_issue(spec: ArrayFieldSpec, path: FieldPath) -> FieldIssue:
        return FieldIssue(
            path=path,
            message=format_message(spec.required_rule.message, path),
            kind=ErrorKind.MISSING_REQUIRED,
        )

    @staticmethod
    def _too_few_issue(spec: ArrayFieldSpec, path: FieldPath) -> FieldIssue:
        message = spec.min_items_message or f"${{path}} field must have at least {spec.min_items} items"
        return FieldIssue(path=path, message=format_message(message, path), kind=ErrorKind.TOO_FEW_ITEMS)
