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

"""Atomic constraint units.

A :class:`Rule` wraps a pure check ``(value, record) -> bool`` together with the
message and error kind reported when the check fails. Messages may contain the
``${path}`` placeholder, substituted with the field path at reporting time.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Pattern, Sequence, Tuple, Union
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email

from ..exceptions import SchemaDefinitionError
from .record import (
    contains_value,
    file_mime_type,
    is_absent,
    is_empty,
    is_file,
    is_number,
    is_sequence,
)

logger = logging.getLogger(__name__)

PATH_PLACEHOLDER = "${path}"

Check = Callable[[Any, Mapping[str, Any]], bool]


class ErrorKind(str, Enum):
    """Kinds of validation failure reported in a ValidationResult."""

    MISSING_REQUIRED = "MissingRequired"
    TYPE_MISMATCH = "TypeMismatch"
    FORMAT_INVALID = "FormatInvalid"
    OUT_OF_RANGE = "OutOfRange"
    TOO_FEW_ITEMS = "TooFewItems"
    NOT_ACCEPTED = "NotAccepted"


@dataclass(frozen=True)
class RuleFailure:
    message: str
    kind: ErrorKind

    def for_path(self, path: str) -> "RuleFailure":
        return RuleFailure(message=format_message(self.message, path), kind=self.kind)


def format_message(message: str, path: str) -> str:
    return message.replace(PATH_PLACEHOLDER, path or "value")


@dataclass(frozen=True)
class Rule:
    name: str
    check: Check
    message: str
    kind: ErrorKind
    skip_absent: bool = True

    @property
    def is_required(self) -> bool:
        return self.name == REQUIRED

    def apply(self, value: Any, record: Mapping[str, Any]) -> Optional[RuleFailure]:
        """Return ``None`` on pass, a :class:`RuleFailure` otherwise."""
        if self.skip_absent and is_absent(value):
            return None
        try:
            passed = self.check(value, record)
        except Exception as exc:
            # A raising check counts as a failed check; it never escapes validation.
            logger.warning(f"Rule '{self.name}' raised {exc!r}; reporting as failed")
            passed = False
        if passed:
            return None
        return RuleFailure(message=self.message, kind=self.kind)


# -------------------------
# Standard rule kinds
# -------------------------

REQUIRED = "required"

_TYPE_CHECKS: Dict[str, Callable[[Any], bool]] = {
    "string": lambda v: isinstance(v, str),
    "number": is_number,
    "integer": lambda v: is_number(v) and (isinstance(v, int) or v.is_integer()),
    "boolean": lambda v: isinstance(v, bool),
    "sequence": is_sequence,
    "mapping": lambda v: isinstance(v, Mapping),
    "file": lambda v: is_file(v) or (is_sequence(v) and len(v) > 0 and all(is_file(f) for f in v)),
    "mixed": lambda v: True,
}

VALUE_KINDS: Tuple[str, ...] = tuple(_TYPE_CHECKS)

_URL_SCHEMES = ("http", "https", "ftp")


def required(message: Optional[str] = None) -> Rule:
    return Rule(
        name=REQUIRED,
        check=lambda value, record: not is_empty(value),
        message=message or "${path} is a required field",
        kind=ErrorKind.MISSING_REQUIRED,
        skip_absent=False,
    )


def type_match(kind: str, message: Optional[str] = None) -> Rule:
    if kind not in _TYPE_CHECKS:
        raise SchemaDefinitionError(f"Unknown value kind '{kind}'. Valid kinds: {list(VALUE_KINDS)}")
    type_check = _TYPE_CHECKS[kind]
    return Rule(
        name=f"type:{kind}",
        check=lambda value, record: type_check(value),
        message=message or f"${{path}} must be a `{kind}` type",
        kind=ErrorKind.TYPE_MISMATCH,
    )


def pattern(
    regex: Union[str, Pattern[str]],
    message: Optional[str] = None,
    *,
    exclude_empty: bool = False,
) -> Rule:
    """String must fully match *regex*.

    ``\\d`` and ``\\w`` match ASCII only, so ``^\\d{10}$`` means exactly ten
    ASCII digits. With ``exclude_empty`` an empty string passes.
    """
    if isinstance(regex, str):
        try:
            compiled = re.compile(regex, re.ASCII)
        except re.error as exc:
            raise SchemaDefinitionError(f"Invalid pattern '{regex}': {exc}") from exc
    else:
        compiled = regex

    def _check(value: Any, record: Mapping[str, Any]) -> bool:
        if not isinstance(value, str):
            return False
        if exclude_empty and value == "":
            return True
        return compiled.fullmatch(value) is not None

    return Rule(
        name="pattern",
        check=_check,
        message=message or f'${{path}} must match the following: "{compiled.pattern}"',
        kind=ErrorKind.FORMAT_INVALID,
    )


def email(message: Optional[str] = None) -> Rule:
    def _check(value: Any, record: Mapping[str, Any]) -> bool:
        if not isinstance(value, str):
            return False
        if value == "":
            return True
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True

    return Rule(
        name="email",
        check=_check,
        message=message or "${path} must be a valid email",
        kind=ErrorKind.FORMAT_INVALID,
    )


def url(message: Optional[str] = None) -> Rule:
    def _check(value: Any, record: Mapping[str, Any]) -> bool:
        if not isinstance(value, str):
            return False
        if value == "":
            return True
        if any(ch.isspace() for ch in value):
            return False
        parsed = urlparse(value)
        return parsed.scheme in _URL_SCHEMES and bool(parsed.netloc) and "." in parsed.netloc

    return Rule(
        name="url",
        check=_check,
        message=message or "${path} must be a valid URL",
        kind=ErrorKind.FORMAT_INVALID,
    )


def value_range(
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    message: Optional[str] = None,
) -> Rule:
    """Numeric bound, inclusive on both ends. Either bound may be omitted."""
    if minimum is None and maximum is None:
        raise SchemaDefinitionError("value_range requires at least one of minimum/maximum")
    if minimum is not None and maximum is not None and minimum > maximum:
        raise SchemaDefinitionError(f"value_range minimum {minimum} is greater than maximum {maximum}")

    def _check(value: Any, record: Mapping[str, Any]) -> bool:
        if not is_number(value):
            return False
        if minimum is not None and value < minimum:
            return False
        if maximum is not None and value > maximum:
            return False
        return True

    if message is None:
        if minimum is not None and maximum is not None:
            message = f"${{path}} must be between {minimum} and {maximum}"
        elif minimum is not None:
            message = f"${{path}} must be greater than or equal to {minimum}"
        else:
            message = f"${{path}} must be less than or equal to {maximum}"

    return Rule(name="range", check=_check, message=message, kind=ErrorKind.OUT_OF_RANGE)


def _length_bound(limit: int, label: str) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise SchemaDefinitionError(f"{label} must be a non-negative integer, got: {limit!r}")


def max_length(limit: int, message: Optional[str] = None) -> Rule:
    _length_bound(limit, "max_length")
    return Rule(
        name="max_length",
        check=lambda value, record: (isinstance(value, str) or is_sequence(value)) and len(value) <= limit,
        message=message or f"${{path}} must be at most {limit} characters",
        kind=ErrorKind.OUT_OF_RANGE,
    )


def min_length(limit: int, message: Optional[str] = None) -> Rule:
    _length_bound(limit, "min_length")
    return Rule(
        name="min_length",
        check=lambda value, record: (isinstance(value, str) or is_sequence(value)) and len(value) >= limit,
        message=message or f"${{path}} must be at least {limit} characters",
        kind=ErrorKind.OUT_OF_RANGE,
    )


def one_of(allowed: Iterable[Any], message: Optional[str] = None) -> Rule:
    values = tuple(allowed)
    if not values:
        raise SchemaDefinitionError("one_of requires at least one allowed value")
    return Rule(
        name="one_of",
        check=lambda value, record: contains_value(values, value),
        message=message or "${path} must be one of the following values: " + ", ".join(repr(v) for v in values),
        kind=ErrorKind.NOT_ACCEPTED,
    )


def predicate(
    fn: Callable[[Any, Mapping[str, Any]], bool],
    message: str,
    *,
    name: str = "predicate",
    kind: ErrorKind = ErrorKind.FORMAT_INVALID,
    skip_absent: bool = True,
) -> Rule:
    if not callable(fn):
        raise SchemaDefinitionError(f"predicate '{name}' requires a callable, got: {fn!r}")
    return Rule(
        name=name,
        check=lambda value, record: bool(fn(value, record)),
        message=message,
        kind=kind,
        skip_absent=skip_absent,
    )


def mime_type(allowed: Sequence[str], message: Optional[str] = None) -> Rule:
    """Declared MIME type of a file (or of every file in a file list) must be whitelisted."""
    accepted = frozenset(allowed)
    if not accepted:
        raise SchemaDefinitionError("mime_type requires at least one accepted type")

    def _accepted(value: Any, record: Mapping[str, Any]) -> bool:
        files = value if is_sequence(value) else [value]
        if not files:
            return False
        return all(file_mime_type(f) in accepted for f in files)

    return predicate(
        _accepted,
        message or "${path} must be one of the accepted file types: " + ", ".join(sorted(accepted)),
        name="mime_type",
    )
