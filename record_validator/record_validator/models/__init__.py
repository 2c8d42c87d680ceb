"""Schema and result model.

Nothing here imports the engine; schemas can be built, shared and inspected
without running any validation.
"""

from .record import MISSING, FileDescriptor, get_path, join_path, split_path
from .result import FieldIssue, ValidationResult
from .rules import ErrorKind, Rule, RuleFailure
from .specs import INHERIT, ArrayFieldSpec, ConditionalSpec, FieldSpec, SchemaDefinition

__all__ = [
    "MISSING",
    "INHERIT",
    "ArrayFieldSpec",
    "ConditionalSpec",
    "ErrorKind",
    "FieldIssue",
    "FieldSpec",
    "FileDescriptor",
    "Rule",
    "RuleFailure",
    "SchemaDefinition",
    "ValidationResult",
    "get_path",
    "join_path",
    "split_path",
]
