from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .record import FieldPath
from .rules import ErrorKind


@dataclass(frozen=True)
class FieldIssue:
    path: FieldPath
    message: str
    kind: ErrorKind


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation pass.

    ``issues`` keeps schema order and holds at most one issue per path.
    """

    issues: Tuple[FieldIssue, ...] = ()

    @classmethod
    def from_issues(cls, issues: Iterable[FieldIssue]) -> "ValidationResult":
        seen = set()
        unique: List[FieldIssue] = []
        for issue in issues:
            if issue.path in seen:
                continue
            seen.add(issue.path)
            unique.append(issue)
        return cls(issues=tuple(unique))

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def errors(self) -> Dict[FieldPath, str]:
        return {issue.path: issue.message for issue in self.issues}

    @property
    def kinds(self) -> Dict[FieldPath, ErrorKind]:
        return {issue.path: issue.kind for issue in self.issues}

    def error_for(self, path: FieldPath) -> Optional[str]:
        for issue in self.issues:
            if issue.path == path:
                return issue.message
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": [
                {"path": issue.path, "message": issue.message, "kind": issue.kind.value}
                for issue in self.issues
            ],
        }
