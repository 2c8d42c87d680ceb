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

r"""Fluent authoring surface for schema definitions.

Builders are immutable: every chained call returns a new builder, so partially
configured builders can be shared and extended safely::

    schema = object_schema({
        "mobileNumber": string().matches(r"^\d{10}$", "Invalid mobile number").required("Mobile number is required"),
        "cvType": string().required("CV Type is required"),
        "websiteLink": when("cvType", {"online": string().url("Invalid website link").required("Website Link is required")}),
    })
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import SchemaDefinitionError
from ..models import rules as r
from ..models.record import FieldPath
from ..models.rules import ErrorKind, Rule
from ..models.specs import (
    INHERIT,
    ArrayFieldSpec,
    ConditionalSpec,
    FieldEntry,
    FieldSpec,
    SchemaDefinition,
    _Inherit,
)


@dataclass(frozen=True)
class FieldBuilder:
    """Base builder: an ordered rule chain plus a value kind."""

    kind: str = "mixed"
    rules: Tuple[Rule, ...] = ()
    type_message: Optional[str] = None

    def _with(self, rule: Rule):
        return replace(self, rules=self.rules + (rule,))

    def type_error(self, message: str):
        return replace(self, type_message=message)

    def required(self, message: Optional[str] = None):
        return self._with(r.required(message))

    def one_of(self, allowed: Iterable[Any], message: Optional[str] = None):
        return self._with(r.one_of(allowed, message))

    def test(
        self,
        fn: Callable[[Any, Mapping[str, Any]], bool],
        message: str,
        *,
        name: str = "test",
        kind: ErrorKind = ErrorKind.FORMAT_INVALID,
    ):
        return self._with(r.predicate(fn, message, name=name, kind=kind))

    def build(self, path: FieldPath = "") -> FieldSpec:
        chain = self.rules
        if self.kind != "mixed":
            chain = (r.type_match(self.kind, self.type_message),) + chain
        return FieldSpec(path=path, chain=chain)


@dataclass(frozen=True)
class StringField(FieldBuilder):
    kind: str = "string"

    def matches(self, regex: str, message: Optional[str] = None, *, exclude_empty: bool = False):
        return self._with(r.pattern(regex, message, exclude_empty=exclude_empty))

    def email(self, message: Optional[str] = None):
        return self._with(r.email(message))

    def url(self, message: Optional[str] = None):
        return self._with(r.url(message))

    def min(self, limit: int, message: Optional[str] = None):
        return self._with(r.min_length(limit, message))

    def max(self, limit: int, message: Optional[str] = None):
        return self._with(r.max_length(limit, message))


@dataclass(frozen=True)
class NumberField(FieldBuilder):
    kind: str = "number"

    def min(self, minimum: float, message: Optional[str] = None):
        return self._with(r.value_range(minimum=minimum, message=message))

    def max(self, maximum: float, message: Optional[str] = None):
        return self._with(r.value_range(maximum=maximum, message=message))

    def range(self, minimum: float, maximum: float, message: Optional[str] = None):
        return self._with(r.value_range(minimum, maximum, message))


@dataclass(frozen=True)
class BooleanField(FieldBuilder):
    kind: str = "boolean"


@dataclass(frozen=True)
class FileField(FieldBuilder):
    kind: str = "file"

    def mime_types(self, allowed: Sequence[str], message: Optional[str] = None):
        return self._with(r.mime_type(allowed, message))


@dataclass(frozen=True)
class ArrayField:
    """Builder for :class:`ArrayFieldSpec`."""

    item: Optional[Union[FieldBuilder, SchemaDefinition]] = None
    min_items: int = 0
    min_message: Optional[str] = None
    max_items: Optional[int] = None
    max_message: Optional[str] = None
    required_rule: Optional[Rule] = None
    type_message: Optional[str] = None

    def of(self, item: Union[FieldBuilder, SchemaDefinition, Mapping[str, Any]]):
        if isinstance(item, Mapping):
            item = object_schema(item)
        if not isinstance(item, (FieldBuilder, SchemaDefinition)):
            raise SchemaDefinitionError(f"Array items must be a field builder or schema, got {item!r}")
        return replace(self, item=item)

    def min(self, limit: int, message: Optional[str] = None):
        return replace(self, min_items=limit, min_message=message)

    def max(self, limit: int, message: Optional[str] = None):
        return replace(self, max_items=limit, max_message=message)

    def required(self, message: Optional[str] = None):
        return replace(self, required_rule=r.required(message))

    def type_error(self, message: str):
        return replace(self, type_message=message)

    def build(self, path: FieldPath = "") -> ArrayFieldSpec:
        item = self.item if self.item is not None else FieldBuilder()
        item_schema = item.build() if isinstance(item, FieldBuilder) else item
        return ArrayFieldSpec(
            path=path,
            item_schema=item_schema,
            min_items=self.min_items,
            min_items_message=self.min_message,
            max_items=self.max_items,
            max_items_message=self.max_message,
            required_rule=self.required_rule,
            type_message=self.type_message,
        )


Buildable = Union[FieldBuilder, ArrayField]
BranchInput = Union[Buildable, FieldSpec, ArrayFieldSpec, _Inherit, None]


@dataclass(frozen=True)
class ConditionalField:
    """Builder for :class:`ConditionalSpec`."""

    discriminator: FieldPath
    branches: Tuple[Tuple[Any, BranchInput], ...] = ()
    otherwise: BranchInput = INHERIT

    def build(self, path: FieldPath) -> ConditionalSpec:
        return ConditionalSpec(
            path=path,
            discriminator_path=self.discriminator,
            branches=tuple((key, _build_branch(branch, path)) for key, branch in self.branches),
            otherwise=_build_branch(self.otherwise, path),
        )


def _build_branch(branch: BranchInput, path: FieldPath):
    if branch is None or branch is INHERIT:
        return INHERIT
    if isinstance(branch, (FieldBuilder, ArrayField)):
        return branch.build(path)
    return branch


def string() -> StringField:
    return StringField()


def number() -> NumberField:
    return NumberField()


def integer() -> NumberField:
    return NumberField(kind="integer")


def boolean() -> BooleanField:
    return BooleanField()


def file() -> FileField:
    return FileField()


def mixed() -> FieldBuilder:
    return FieldBuilder()


def array(item: Optional[Union[FieldBuilder, SchemaDefinition, Mapping[str, Any]]] = None) -> ArrayField:
    builder = ArrayField()
    return builder.of(item) if item is not None else builder


def when(
    discriminator: FieldPath,
    branches: Mapping[Any, BranchInput],
    otherwise: BranchInput = INHERIT,
) -> ConditionalField:
    """Select the field's spec from the current value of *discriminator*.

    A ``None`` branch or ``otherwise`` means the field is left unvalidated.
    """
    return ConditionalField(discriminator=discriminator, branches=tuple(branches.items()), otherwise=otherwise)


def object_schema(fields: Mapping[FieldPath, Any], name: Optional[str] = None) -> SchemaDefinition:
    """Build a :class:`SchemaDefinition` from builders or already-built specs, keeping order."""
    specs = []
    for path, entry in fields.items():
        specs.append(_build_entry(path, entry))
    return SchemaDefinition.from_specs(specs, name=name)


def _build_entry(path: FieldPath, entry: Any) -> FieldEntry:
    if isinstance(entry, (FieldBuilder, ArrayField, ConditionalField)):
        return entry.build(path)
    if isinstance(entry, (FieldSpec, ArrayFieldSpec)):
        return entry if entry.path == path else entry.with_path(path)
    if isinstance(entry, ConditionalSpec):
        return entry
    raise SchemaDefinitionError(f"Field '{path}': cannot build a spec from {entry!r}")
