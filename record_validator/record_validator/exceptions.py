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

"""Custom exceptions for the record validator.

Validation failures of record content are never raised; they are collected
into a ValidationResult. These exceptions cover schema construction and
file loading only.
"""


class RecordValidatorError(Exception):
    """Base exception for record-validator related errors."""
    pass


class SchemaDefinitionError(RecordValidatorError):
    """Exception raised when a schema definition is malformed."""
    pass


class SchemaLoadError(RecordValidatorError):
    """Exception raised when a schema document cannot be loaded."""
    pass


class FormatVersionError(SchemaLoadError):
    """Exception raised when a schema document's format version is incompatible."""
    pass


class RecordLoadError(RecordValidatorError):
    """Exception raised when a record file cannot be read or parsed."""
    pass
