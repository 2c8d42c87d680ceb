import copy

import pytest

from record_validator.builder import array, object_schema, string, when
from record_validator.engine import Validator, validate
from record_validator.models.rules import ErrorKind


def test_valid_application_passes(application_schema, valid_application):
    result = validate(valid_application, application_schema)
    assert result.ok, result.errors
    assert result.errors == {}


def test_required_reported_before_format(application_schema, valid_application):
    valid_application["mobileNumber"] = ""
    result = validate(valid_application, application_schema)
    assert result.errors == {"mobileNumber": "Mobile number is required"}
    assert result.kinds["mobileNumber"] is ErrorKind.MISSING_REQUIRED


@pytest.mark.parametrize("number, ok", [("12345", False), ("1234567890", True), ("12345678901", False)])
def test_mobile_number_pattern_is_exact(application_schema, valid_application, number, ok):
    valid_application["mobileNumber"] = number
    result = validate(valid_application, application_schema)
    if ok:
        assert "mobileNumber" not in result.errors
    else:
        assert result.errors["mobileNumber"] == "Invalid mobile number"
        assert result.kinds["mobileNumber"] is ErrorKind.FORMAT_INVALID


@pytest.mark.parametrize("file_value", [None, "garbage", {"type": "image/png"}])
def test_online_mode_requires_link_and_ignores_file(application_schema, valid_application, file_value):
    valid_application.update({"cvType": "online", "websiteLink": "", "file": file_value})
    result = validate(valid_application, application_schema)
    assert result.errors["websiteLink"] == "Website Link is required"
    assert "file" not in result.errors


def test_online_mode_rejects_malformed_link(application_schema, valid_application):
    valid_application["websiteLink"] = "not a link"
    assert validate(valid_application, application_schema).errors == {"websiteLink": "Invalid website link"}


def test_offline_mode_checks_file_type(application_schema, valid_application, pdf_file, png_file):
    valid_application.pop("websiteLink")
    valid_application["cvType"] = "offline"

    valid_application["file"] = pdf_file
    assert validate(valid_application, application_schema).ok

    valid_application["file"] = png_file
    result = validate(valid_application, application_schema)
    assert result.errors == {"file": "Invalid file format"}
    assert result.kinds["file"] is ErrorKind.FORMAT_INVALID

    del valid_application["file"]
    assert validate(valid_application, application_schema).errors == {"file": "File is required"}


def test_offline_mode_ignores_website_link(application_schema, valid_application, pdf_file):
    valid_application.update({"cvType": "offline", "file": pdf_file, "websiteLink": "???"})
    assert validate(valid_application, application_schema).ok


def test_unknown_cv_type_skips_dependent_fields(application_schema, valid_application):
    valid_application.update({"cvType": "paper", "websiteLink": "", "file": "anything"})
    assert validate(valid_application, application_schema).ok


def test_empty_projects_only_reports_length(application_schema, valid_application):
    valid_application["projects"] = []
    result = validate(valid_application, application_schema)
    assert result.errors == {"projects": "At least one project is required"}
    assert result.kinds["projects"] is ErrorKind.TOO_FEW_ITEMS


def test_project_item_errors_are_index_qualified(application_schema, valid_application):
    valid_application["projects"] = [{"projectName": "", "projectDescription": "x"}]
    result = validate(valid_application, application_schema)
    assert result.errors == {"projects.0.projectName": "Project Name is required"}
    assert result.kinds["projects.0.projectName"] is ErrorKind.MISSING_REQUIRED


@pytest.mark.parametrize("experience, ok", [(0, True), (10, True), (11, False), (-1, False)])
def test_experience_bounds(application_schema, valid_application, experience, ok):
    valid_application["experience"] = experience
    result = validate(valid_application, application_schema)
    if ok:
        assert "experience" not in result.errors
    else:
        assert result.kinds["experience"] is ErrorKind.OUT_OF_RANGE


def test_experience_type_mismatch(application_schema, valid_application):
    valid_application["experience"] = "five"
    result = validate(valid_application, application_schema)
    assert result.errors == {"experience": "experience must be a `number` type"}
    assert result.kinds["experience"] is ErrorKind.TYPE_MISMATCH


def test_terms_must_be_accepted(application_schema, valid_application):
    valid_application["agreeTerms"] = False
    result = validate(valid_application, application_schema)
    assert result.errors == {"agreeTerms": "You must agree to the terms and conditions"}
    assert result.kinds["agreeTerms"] is ErrorKind.NOT_ACCEPTED


def test_about_me_length(application_schema, valid_application):
    valid_application["aboutMe"] = "x" * 251
    result = validate(valid_application, application_schema)
    assert result.errors == {"aboutMe": "Description should be at most 250 characters"}


def test_errors_follow_schema_order(application_schema):
    result = validate({}, application_schema)
    paths = list(result.errors)
    assert paths[:4] == ["firstName", "lastName", "dob", "email"]
    assert paths.index("cvType") < paths.index("mobileNumber") < paths.index("skills")
    assert "projects" not in result.errors
    assert "websiteLink" not in result.errors
    assert "agreeTerms" not in result.errors


def test_validation_is_idempotent_and_pure(application_schema, valid_application):
    valid_application["projects"].append({"projectName": "", "projectDescription": ""})
    valid_application["mobileNumber"] = "123"
    snapshot = copy.deepcopy(valid_application)

    first = validate(valid_application, application_schema)
    second = validate(valid_application, application_schema)

    assert first == second
    assert first.to_dict() == second.to_dict()
    assert valid_application == snapshot


@pytest.mark.parametrize("record", [None, "firstName=Asha", ["a", "b"], 42])
def test_non_mapping_record_is_a_type_mismatch(application_schema, record):
    result = validate(record, application_schema)
    assert not result.ok
    assert list(result.kinds.items()) == [("", ErrorKind.TYPE_MISMATCH)]


def test_schema_argument_must_be_a_schema(valid_application):
    with pytest.raises(TypeError):
        validate(valid_application, {"firstName": string()})


def test_dotted_paths_reach_nested_records():
    schema = object_schema(
        {
            "address.city": string().required("City is required"),
            "address.pin": string().matches(r"^\d{6}$", "Invalid pin code"),
        }
    )
    result = validate({"address": {"pin": "12"}}, schema)
    assert result.errors == {"address.city": "City is required", "address.pin": "Invalid pin code"}


def test_default_message_uses_field_path():
    schema = object_schema({"nickname": string().required()})
    assert validate({}, schema).errors == {"nickname": "nickname is a required field"}


def test_validate_at_limits_result_to_one_field(application_schema, valid_application):
    valid_application.update({"firstName": "", "projects": [{"projectName": "", "projectDescription": ""}]})

    assert Validator().validate_at(valid_application, application_schema, "firstName").errors == {
        "firstName": "First Name is required"
    }
    project = Validator().validate_at(valid_application, application_schema, "projects.0.projectDescription")
    assert project.errors == {"projects.0.projectDescription": "Project Description is required"}
    assert Validator().validate_at(valid_application, application_schema, "unknownField").ok


def test_validate_at_resolves_conditionals(application_schema, valid_application):
    valid_application["websiteLink"] = ""
    result = Validator().validate_at(valid_application, application_schema, "websiteLink")
    assert result.errors == {"websiteLink": "Website Link is required"}


def test_validate_many(application_schema, valid_application):
    invalid = dict(valid_application, email="nope")
    results = Validator().validate_many([valid_application, invalid], application_schema)
    assert [r.ok for r in results] == [True, False]
    assert results[1].errors == {"email": "Invalid email"}


def test_conditional_inside_array_items_uses_item_record():
    schema = object_schema(
        {
            "kind": string(),
            "contacts": array(
                {
                    "kind": string().one_of(["phone", "email"]).required(),
                    "value": when(
                        "kind",
                        {
                            "phone": string().matches(r"^\d{10}$", "Invalid phone"),
                            "email": string().email("Invalid email"),
                        },
                    ),
                }
            ),
        }
    )
    record = {
        "kind": "phone",
        "contacts": [
            {"kind": "email", "value": "someone@example.com"},
            {"kind": "phone", "value": "555"},
        ],
    }
    assert validate(record, schema).errors == {"contacts.1.value": "Invalid phone"}


def test_result_serialization(application_schema, valid_application):
    valid_application["experience"] = 11
    result = validate(valid_application, application_schema)
    assert result.error_for("experience") == "experience must be less than or equal to 10"
    assert result.error_for("firstName") is None
    assert result.to_dict() == {
        "ok": False,
        "errors": [
            {
                "path": "experience",
                "message": "experience must be less than or equal to 10",
                "kind": "OutOfRange",
            }
        ],
    }


def test_missing_projects_are_not_too_few(application_schema, valid_application):
    del valid_application["projects"]
    assert validate(valid_application, application_schema).ok


def test_validate_at_parent_path_covers_nested_fields():
    schema = object_schema(
        {
            "address.city": string().required("City is required"),
            "address.pin": string().matches(r"^\d{6}$", "Invalid pin code"),
            "phone": string().required("Phone is required"),
        }
    )
    record = {"address": {"pin": "12"}}
    result = Validator().validate_at(record, schema, "address")
    assert result.errors == {"address.city": "City is required", "address.pin": "Invalid pin code"}
    assert validate(record, schema).errors == dict(result.errors, phone="Phone is required")
