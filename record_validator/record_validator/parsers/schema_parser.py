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

"""Compile declarative YAML schema documents into :class:`SchemaDefinition` values.

A document is first checked against the bundled JSON Schema for its
``record_schema_format`` version, then compiled field by field.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import jsonschema

from ..config import validator_config
from ..exceptions import FormatVersionError, RecordLoadError, SchemaDefinitionError, SchemaLoadError
from ..models import rules as r
from ..models.json_schema_loader import load_schema
from ..models.record import FieldPath
from ..models.rules import Rule
from ..models.specs import INHERIT, ArrayFieldSpec, ConditionalSpec, FieldEntry, FieldSpec, SchemaDefinition
from ..utils.format_version import FORMAT_FIELD, check_format_version
from .yaml_parser import YamlParser, yaml_parser

logger = logging.getLogger(__name__)

_NUMERIC_KINDS = ("number", "integer")
_LENGTH_KINDS = ("string", "sequence")


def load_schema_document(file_path: Union[str, Path], parser: Optional[YamlParser] = None) -> SchemaDefinition:
    """Load and compile a YAML schema document.

    Raises:
        SchemaLoadError: If the file cannot be read, parsed or fails the document schema
        FormatVersionError: If the declared format version is incompatible
        SchemaDefinitionError: If a field declaration cannot be compiled
    """
    parser = parser or yaml_parser
    try:
        data = parser.load(file_path)
    except RecordLoadError as exc:
        raise SchemaLoadError(str(exc)) from exc
    schema = parse_schema_document(data, origin=str(file_path))
    logger.info(f"Loaded schema '{schema.name}' with {len(schema)} fields from {file_path}")
    return schema


def parse_schema_document(data: Any, origin: str = "<document>") -> SchemaDefinition:
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Schema document root must be a mapping/object: {origin}")

    raw_version = data.get(FORMAT_FIELD)
    ver_result = check_format_version(raw_version)
    if not ver_result.compatible:
        raise FormatVersionError(f"{ver_result.message} ({origin})")
    if ver_result.missing or ver_result.minor_newer:
        logger.warning(f"{ver_result.message} ({origin})")

    format_version = raw_version or validator_config.default_format_version
    _check_document(data, load_schema(format_version), origin)

    return SchemaDefinition(fields=_compile_fields(data["fields"]), name=data["name"])


def _check_document(data: Dict[str, Any], json_schema: dict, origin: str) -> None:
    validator = jsonschema.Draft7Validator(json_schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if not errors:
        return
    lines = []
    for error in errors:
        location = "/" + "/".join(str(p) for p in error.absolute_path)
        lines.append(f"  - {location}: {error.message}")
    raise SchemaLoadError(f"Schema document validation failed for {origin}:\n" + "\n".join(lines))


def _compile_fields(fields: Mapping[str, Any]) -> Dict[FieldPath, FieldEntry]:
    return {path: _compile_entry(path, entry) for path, entry in fields.items()}


def _compile_entry(path: FieldPath, entry: Mapping[str, Any]) -> FieldEntry:
    if "when" in entry:
        when = entry["when"]
        return ConditionalSpec(
            path=path,
            discriminator_path=when["field"],
            branches=tuple((key, _compile_branch(path, branch)) for key, branch in when["is"].items()),
            otherwise=_compile_branch(path, when.get("otherwise")),
        )
    if entry["type"] == "array":
        return _compile_array(path, entry)
    return _compile_scalar(path, entry)


def _compile_branch(path: FieldPath, branch: Optional[Mapping[str, Any]]):
    if branch is None:
        return INHERIT
    if branch["type"] == "array":
        return _compile_array(path, branch)
    return _compile_scalar(path, branch)


def _compile_scalar(path: FieldPath, entry: Mapping[str, Any]) -> FieldSpec:
    kind = entry["type"]
    chain: List[Rule] = []
    if kind != "mixed":
        chain.append(r.type_match(kind, entry.get("type_message")))
    for rule_entry in entry.get("rules", []):
        (rule_name, args), = rule_entry.items()
        chain.append(_compile_rule(path, kind, rule_name, args))
    return FieldSpec(path=path, chain=tuple(chain))


def _compile_array(path: FieldPath, entry: Mapping[str, Any]) -> ArrayFieldSpec:
    items = entry.get("items")
    if items is None:
        item_schema: Union[FieldSpec, SchemaDefinition] = FieldSpec(path="")
    elif "fields" in items:
        item_schema = SchemaDefinition(fields=_compile_fields(items["fields"]))
    else:
        item_schema = _compile_scalar("", items)

    min_items = entry.get("min_items") or {}
    max_items = entry.get("max_items") or {}
    return ArrayFieldSpec(
        path=path,
        item_schema=item_schema,
        min_items=min_items.get("value", 0),
        min_items_message=min_items.get("message"),
        max_items=max_items.get("value"),
        max_items_message=max_items.get("message"),
        required_rule=r.required(entry["required"]) if "required" in entry else None,
        type_message=entry.get("type_message"),
    )


def _compile_rule(path: FieldPath, kind: str, name: str, args: Any) -> Rule:
    if name == "required":
        return r.required(args)
    if name == "email":
        return r.email(args)
    if name == "url":
        return r.url(args)
    if name == "pattern":
        return r.pattern(args["regex"], args.get("message"), exclude_empty=args.get("exclude_empty", False))
    if name in ("min", "max"):
        return _compile_bound(path, kind, name, args)
    if name == "range":
        return r.value_range(args.get("min"), args.get("max"), args.get("message"))
    if name == "min_length":
        return r.min_length(args["value"], args.get("message"))
    if name == "max_length":
        return r.max_length(args["value"], args.get("message"))
    if name == "one_of":
        return r.one_of(args["values"], args.get("message"))
    if name == "mime_type":
        return r.mime_type(args["allowed"], args.get("message"))
    raise SchemaDefinitionError(f"Field '{path}': unknown rule '{name}'")


def _compile_bound(path: FieldPath, kind: str, name: str, args: Mapping[str, Any]) -> Rule:
    """``min``/``max`` bound the value for numbers and the length for strings and sequences."""
    value = args["value"]
    message = args.get("message")
    if kind in _NUMERIC_KINDS:
        if name == "min":
            return r.value_range(minimum=value, message=message)
        return r.value_range(maximum=value, message=message)
    if kind in _LENGTH_KINDS:
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if name == "min":
            return r.min_length(value, message)
        return r.max_length(value, message)
    raise SchemaDefinitionError(f"Field '{path}': rule '{name}' is not supported for '{kind}' fields")
