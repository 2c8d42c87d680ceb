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

"""Schema model: field specs, array specs, conditional specs and schema definitions.

All spec types are frozen dataclasses. A :class:`SchemaDefinition` is built once
and shared read-only across any number of validate calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple, Union

from ..exceptions import SchemaDefinitionError
from .record import FieldPath, split_path, values_equal
from .rules import Rule


class _Inherit:
    """Branch marker: leave the dependent field unvalidated."""

    _instance: Optional["_Inherit"] = None

    def __new__(cls) -> "_Inherit":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INHERIT"


INHERIT = _Inherit()


@dataclass(frozen=True)
class FieldSpec:
    """Ordered rule chain for one field path.

    The ``required`` rule, wherever it was declared, is moved to the front of
    the chain so that an absent value short-circuits before any format rule.
    Path is ignored when the spec is used as an array item schema.
    """

    path: FieldPath
    chain: Tuple[Rule, ...] = ()

    def __post_init__(self) -> None:
        rules = tuple(self.chain)
        for rule in rules:
            if not isinstance(rule, Rule):
                raise SchemaDefinitionError(f"Field '{self.path}': chain entries must be Rule, got {rule!r}")
        required_rules = [r for r in rules if r.is_required]
        if len(required_rules) > 1:
            raise SchemaDefinitionError(f"Field '{self.path}': 'required' declared more than once")
        others = tuple(r for r in rules if not r.is_required)
        object.__setattr__(self, "chain", tuple(required_rules) + others)

    @property
    def required(self) -> bool:
        return bool(self.chain) and self.chain[0].is_required

    def with_path(self, path: FieldPath) -> "FieldSpec":
        return FieldSpec(path=path, chain=self.chain)


@dataclass(frozen=True)
class ArrayFieldSpec:
    """Sequence field whose every element satisfies ``item_schema``."""

    path: FieldPath
    item_schema: Union[FieldSpec, "SchemaDefinition"]
    min_items: int = 0
    min_items_message: Optional[str] = None
    max_items: Optional[int] = None
    max_items_message: Optional[str] = None
    required_rule: Optional[Rule] = None
    type_message: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.item_schema, (FieldSpec, SchemaDefinition)):
            raise SchemaDefinitionError(
                f"Array field '{self.path}': item_schema must be a FieldSpec or SchemaDefinition"
            )
        if isinstance(self.min_items, bool) or not isinstance(self.min_items, int) or self.min_items < 0:
            raise SchemaDefinitionError(f"Array field '{self.path}': min_items must be a non-negative integer")
        if self.max_items is not None and self.max_items < self.min_items:
            raise SchemaDefinitionError(f"Array field '{self.path}': max_items is smaller than min_items")
        if self.required_rule is not None and not self.required_rule.is_required:
            raise SchemaDefinitionError(f"Array field '{self.path}': required_rule must be a 'required' rule")

    @property
    def required(self) -> bool:
        return self.required_rule is not None

    def with_path(self, path: FieldPath) -> "ArrayFieldSpec":
        return ArrayFieldSpec(
            path=path,
            item_schema=self.item_schema,
            min_items=self.min_items,
            min_items_message=self.min_items_message,
            max_items=self.max_items,
            max_items_message=self.max_items_message,
            required_rule=self.required_rule,
            type_message=self.type_message,
        )


BranchSpec = Union[FieldSpec, ArrayFieldSpec, "_Inherit"]


@dataclass(frozen=True)
class ConditionalSpec:
    """Spec selected per call from the current value of ``discriminator_path``.

    ``branches`` is a tuple of ``(discriminator value, spec)`` pairs compared
    with ``==`` equality. When no branch matches, ``otherwise`` applies; its
    default ``INHERIT`` leaves the field unvalidated.
    """

    path: FieldPath
    discriminator_path: FieldPath
    branches: Tuple[Tuple[Any, BranchSpec], ...] = ()
    otherwise: BranchSpec = INHERIT

    def __post_init__(self) -> None:
        if not split_path(self.discriminator_path):
            raise SchemaDefinitionError(f"Conditional field '{self.path}': discriminator path is empty")
        if self.discriminator_path == self.path:
            raise SchemaDefinitionError(f"Conditional field '{self.path}': a field cannot discriminate itself")
        branches = self.branches.items() if isinstance(self.branches, Mapping) else self.branches
        normalized = []
        seen = []
        for key, spec in branches:
            if any(values_equal(key, other) for other in seen):
                raise SchemaDefinitionError(
                    f"Conditional field '{self.path}': duplicate branch for discriminator value {key!r}"
                )
            seen.append(key)
            normalized.append((key, self._check_branch(spec)))
        object.__setattr__(self, "branches", tuple(normalized))
        object.__setattr__(self, "otherwise", self._check_branch(self.otherwise))

    def _check_branch(self, spec: Any) -> BranchSpec:
        if spec is INHERIT:
            return spec
        if not isinstance(spec, (FieldSpec, ArrayFieldSpec)):
            raise SchemaDefinitionError(
                f"Conditional field '{self.path}': branch must be FieldSpec, ArrayFieldSpec or INHERIT, got {spec!r}"
            )
        if spec.path != self.path:
            return spec.with_path(self.path)
        return spec


FieldEntry = Union[FieldSpec, ArrayFieldSpec, ConditionalSpec]


@dataclass(frozen=True)
class SchemaDefinition:
    """Ordered, immutable mapping from field path to spec."""

    fields: Mapping[FieldPath, FieldEntry] = field(default_factory=dict)
    name: Optional[str] = None

    def __post_init__(self) -> None:
        entries = {}
        for path, spec in dict(self.fields).items():
            if not isinstance(path, str) or not split_path(path):
                raise SchemaDefinitionError(f"Field path must be a non-empty string, got: {path!r}")
            if not isinstance(spec, (FieldSpec, ArrayFieldSpec, ConditionalSpec)):
                raise SchemaDefinitionError(f"Field '{path}': unsupported spec {spec!r}")
            if spec.path != path:
                raise SchemaDefinitionError(f"Field '{path}': spec declares mismatching path '{spec.path}'")
            entries[path] = spec
        object.__setattr__(self, "fields", MappingProxyType(entries))

    @classmethod
    def from_specs(cls, specs: Iterable[FieldEntry], name: Optional[str] = None) -> "SchemaDefinition":
        entries = {}
        for spec in specs:
            if spec.path in entries:
                raise SchemaDefinitionError(f"Duplicate field path '{spec.path}' in schema")
            entries[spec.path] = spec
        return cls(fields=entries, name=name)

    def __iter__(self) -> Iterator[FieldPath]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, path: object) -> bool:
        return path in self.fields

    def get(self, path: FieldPath) -> Optional[FieldEntry]:
        return self.fields.get(path)

    def paths(self) -> Tuple[FieldPath, ...]:
        return tuple(self.fields)

    def extend(self, *specs: FieldEntry) -> "SchemaDefinition":
        """Return a new schema with *specs* added or replacing same-path entries."""
        entries = dict(self.fields)
        for spec in specs:
            entries[spec.path] = spec
        return SchemaDefinition(fields=entries, name=self.name)

    def __hash__(self) -> int:
        return hash((self.name, tuple(self.fields.items())))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaDefinition):
            return NotImplemented
        return self.name == other.name and tuple(self.fields.items()) == tuple(other.fields.items())
