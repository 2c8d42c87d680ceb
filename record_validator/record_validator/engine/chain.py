from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..models.record import FieldPath
from ..models.result import FieldIssue
from ..models.rules import Rule


def run_chain(
    chain: Sequence[Rule],
    value: Any,
    record: Mapping[str, Any],
    path: FieldPath,
) -> Optional[FieldIssue]:
    """Evaluate *chain* left to right and return the first failure, if any."""
    for rule in chain:
        failure = rule.apply(value, record)
        if failure is not None:
            failure = failure.for_path(path)
            return FieldIssue(path=path, message=failure.message, kind=failure.kind)
    return None
