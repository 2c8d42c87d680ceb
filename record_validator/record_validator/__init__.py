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

"""Conditional record validation.

Validates records (plain mappings) against immutable schema definitions whose
rule chains may depend on the values of sibling fields.
"""

# Document format version understood by this library; must be set before the
# submodules below are imported.
SCHEMA_FORMAT_VERSION = "0.1.0"

from .exceptions import (  # noqa: E402
    FormatVersionError,
    RecordLoadError,
    RecordValidatorError,
    SchemaDefinitionError,
    SchemaLoadError,
)
from .models import (  # noqa: E402
    INHERIT,
    MISSING,
    ArrayFieldSpec,
    ConditionalSpec,
    ErrorKind,
    FieldIssue,
    FieldSpec,
    FileDescriptor,
    Rule,
    SchemaDefinition,
    ValidationResult,
)
from .resolvers import ConditionalResolver  # noqa: E402
from .engine import Validator, validate  # noqa: E402
from .parsers import load_schema_document, parse_schema_document  # noqa: E402

__all__ = [
    "SCHEMA_FORMAT_VERSION",
    "INHERIT",
    "MISSING",
    "ArrayFieldSpec",
    "ConditionalResolver",
    "ConditionalSpec",
    "ErrorKind",
    "FieldIssue",
    "FieldSpec",
    "FileDescriptor",
    "FormatVersionError",
    "RecordLoadError",
    "RecordValidatorError",
    "Rule",
    "SchemaDefinition",
    "SchemaDefinitionError",
    "SchemaLoadError",
    "ValidationResult",
    "Validator",
    "load_schema_document",
    "parse_schema_document",
    "validate",
]
