from .schema_builder import (
    ArrayField,
    BooleanField,
    ConditionalField,
    FieldBuilder,
    FileField,
    NumberField,
    StringField,
    array,
    boolean,
    file,
    integer,
    mixed,
    number,
    object_schema,
    string,
    when,
)

__all__ = [
    "ArrayField",
    "BooleanField",
    "ConditionalField",
    "FieldBuilder",
    "FileField",
    "NumberField",
    "StringField",
    "array",
    "boolean",
    "file",
    "integer",
    "mixed",
    "number",
    "object_schema",
    "string",
    "when",
]
