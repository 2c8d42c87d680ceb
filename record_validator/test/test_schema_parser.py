import logging
import textwrap

import pytest

from record_validator.exceptions import FormatVersionError, SchemaDefinitionError, SchemaLoadError
from record_validator.engine import validate
from record_validator.forms import APPLICATION_FORM_SCHEMA_PATH
from record_validator.models.rules import ErrorKind
from record_validator.models.specs import ArrayFieldSpec, ConditionalSpec, SchemaDefinition
from record_validator.parsers import load_schema_document, parse_schema_document
from record_validator.parsers.yaml_parser import YamlParser


def _document(fields, version="0.1.0", name="sample"):
    data = {"name": name, "fields": fields}
    if version is not None:
        data["record_schema_format"] = version
    return data


@pytest.fixture
def yaml_form():
    return load_schema_document(APPLICATION_FORM_SCHEMA_PATH, parser=YamlParser(cache_enabled=False))


def test_bundled_yaml_form_compiles(yaml_form, application_schema):
    assert isinstance(yaml_form, SchemaDefinition)
    assert yaml_form.name == "application_form"
    assert yaml_form.paths() == application_schema.paths()
    assert isinstance(yaml_form.get("projects"), ArrayFieldSpec)
    assert isinstance(yaml_form.get("websiteLink"), ConditionalSpec)


@pytest.mark.parametrize(
    "changes",
    [
        {},
        {"mobileNumber": ""},
        {"mobileNumber": "12345"},
        {"websiteLink": ""},
        {"cvType": "offline", "websiteLink": None},
        {"projects": []},
        {"projects": [{"projectName": "", "projectDescription": "x"}]},
        {"experience": 11},
        {"experience": True},
        {"agreeTerms": False},
        {"aboutMe": "y" * 300},
        {"skills": "python"},
        {"email": "nope"},
    ],
)
def test_yaml_form_matches_builder_form(yaml_form, application_schema, valid_application, changes):
    valid_application.update(changes)
    assert validate(valid_application, yaml_form) == validate(valid_application, application_schema)


def test_yaml_form_checks_file_type(yaml_form, valid_application, pdf_file, png_file):
    valid_application.update({"cvType": "offline", "file": pdf_file})
    assert validate(valid_application, yaml_form).ok
    valid_application["file"] = {"name": "cv.png", "type": "image/png"}
    result = validate(valid_application, yaml_form)
    assert result.errors == {"file": "Invalid file format"}
    assert result.kinds["file"] is ErrorKind.FORMAT_INVALID


def test_min_max_bound_length_for_strings():
    schema = parse_schema_document(
        _document({"code": {"type": "string", "rules": [{"min": {"value": 2}}, {"max": {"value": 3}}]}})
    )
    assert validate({"code": "ab"}, schema).ok
    assert validate({"code": "a"}, schema).kinds == {"code": ErrorKind.OUT_OF_RANGE}
    assert validate({"code": "abcd"}, schema).kinds == {"code": ErrorKind.OUT_OF_RANGE}


def test_min_on_boolean_is_rejected():
    with pytest.raises(SchemaDefinitionError):
        parse_schema_document(_document({"flag": {"type": "boolean", "rules": [{"min": {"value": 1}}]}}))


def test_range_rule():
    schema = parse_schema_document(
        _document({"score": {"type": "integer", "rules": [{"range": {"min": 1, "max": 5, "message": "1 to 5"}}]}})
    )
    assert validate({"score": 6}, schema).errors == {"score": "1 to 5"}


def test_conditional_otherwise():
    schema = parse_schema_document(
        _document(
            {
                "mode": {"type": "string"},
                "detail": {
                    "when": {
                        "field": "mode",
                        "is": {"none": None},
                        "otherwise": {"type": "string", "rules": [{"required": "Detail is required"}]},
                    }
                },
            }
        )
    )
    assert validate({"mode": "none"}, schema).ok
    assert validate({"mode": "full"}, schema).errors == {"detail": "Detail is required"}


def test_missing_version_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="record_validator"):
        schema = parse_schema_document(_document({"a": {"type": "string"}}, version=None))
    assert "a" in schema
    assert "Missing 'record_schema_format'" in caplog.text


def test_newer_minor_version_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="record_validator"):
        parse_schema_document(_document({"a": {"type": "string"}}, version="0.9.0"))
    assert "newer minor version" in caplog.text


@pytest.mark.parametrize("version", ["1.0.0", "latest", "0.1"])
def test_incompatible_version(version):
    with pytest.raises(FormatVersionError):
        parse_schema_document(_document({"a": {"type": "string"}}, version=version))


@pytest.mark.parametrize(
    "document",
    [
        ["not", "a", "mapping"],
        {"name": "no fields"},
        {"name": "empty", "fields": {}},
        {"name": "bad type", "fields": {"a": {"type": "text"}}},
        {"name": "bad rule", "fields": {"a": {"type": "string", "rules": [{"shout": None}]}}},
        {"name": "two keys", "fields": {"a": {"type": "string", "rules": [{"required": None, "email": None}]}}},
        {"name": "bad when", "fields": {"a": {"when": {"field": "b"}}}},
        {"name": "extra", "fields": {"a": {"type": "string"}}, "owner": "me"},
    ],
)
def test_invalid_documents(document):
    with pytest.raises(SchemaLoadError):
        parse_schema_document(document)


def test_document_errors_name_the_location():
    with pytest.raises(SchemaLoadError) as excinfo:
        parse_schema_document(_document({"a": {"type": "text"}}), origin="form.yaml")
    assert "form.yaml" in str(excinfo.value)
    assert "/fields/a" in str(excinfo.value)


def test_invalid_regex_is_a_definition_error():
    with pytest.raises(SchemaDefinitionError):
        parse_schema_document(_document({"a": {"type": "string", "rules": [{"pattern": {"regex": "("}}]}}))


def test_load_missing_file(tmp_path):
    with pytest.raises(SchemaLoadError):
        load_schema_document(tmp_path / "missing.yaml")


def test_load_unparseable_file(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("fields: [unclosed\n", encoding="utf-8")
    with pytest.raises(SchemaLoadError):
        load_schema_document(path, parser=YamlParser(cache_enabled=False))


def test_load_from_file(tmp_path):
    path = tmp_path / "contact.yaml"
    path.write_text(
        textwrap.dedent(
            """\
            record_schema_format: 0.1.0
            name: contact
            fields:
              phone:
                type: string
                rules:
                  - pattern:
                      regex: '^\\d{10}$'
                      message: Invalid phone
              tags:
                type: array
                max_items:
                  value: 2
                items:
                  type: string
            """
        ),
        encoding="utf-8",
    )
    schema = load_schema_document(path, parser=YamlParser(cache_enabled=False))
    assert schema.name == "contact"
    assert validate({"phone": "123"}, schema).errors == {"phone": "Invalid phone"}
    assert validate({"tags": ["a", "b", "c"]}, schema).kinds == {"tags": ErrorKind.OUT_OF_RANGE}
