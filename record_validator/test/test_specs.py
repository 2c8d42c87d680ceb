import pytest

from record_validator.exceptions import SchemaDefinitionError
from record_validator.models import rules as r
from record_validator.models.specs import (
    INHERIT,
    ArrayFieldSpec,
    ConditionalSpec,
    FieldSpec,
    SchemaDefinition,
)


def test_required_rule_moves_to_front_of_chain():
    spec = FieldSpec(
        path="mobileNumber",
        chain=(r.pattern(r"^\d{10}$", "Invalid mobile number"), r.required("Mobile number is required")),
    )
    assert spec.required
    assert [rule.name for rule in spec.chain] == ["required", "pattern"]


def test_chain_order_is_otherwise_preserved():
    spec = FieldSpec(path="aboutMe", chain=(r.type_match("string"), r.max_length(250), r.min_length(1)))
    assert [rule.name for rule in spec.chain] == ["type:string", "max_length", "min_length"]
    assert not spec.required


def test_duplicate_required_is_rejected():
    with pytest.raises(SchemaDefinitionError):
        FieldSpec(path="a", chain=(r.required(), r.required()))


def test_chain_entries_must_be_rules():
    with pytest.raises(SchemaDefinitionError):
        FieldSpec(path="a", chain=("required",))


def test_schema_definition_is_ordered_and_read_only():
    schema = SchemaDefinition.from_specs([FieldSpec("b"), FieldSpec("a"), FieldSpec("c")])
    assert schema.paths() == ("b", "a", "c")
    assert "a" in schema
    with pytest.raises(TypeError):
        schema.fields["d"] = FieldSpec("d")


def test_schema_definition_rejects_mismatched_and_duplicate_paths():
    with pytest.raises(SchemaDefinitionError):
        SchemaDefinition(fields={"a": FieldSpec("b")})
    with pytest.raises(SchemaDefinitionError):
        SchemaDefinition.from_specs([FieldSpec("a"), FieldSpec("a")])
    with pytest.raises(SchemaDefinitionError):
        SchemaDefinition(fields={"": FieldSpec("")})


def test_schema_extend_returns_new_schema():
    base = SchemaDefinition.from_specs([FieldSpec("a")], name="base")
    extended = base.extend(FieldSpec("b", chain=(r.required(),)))
    assert base.paths() == ("a",)
    assert extended.paths() == ("a", "b")
    assert extended.name == "base"


def test_schema_equality_is_order_sensitive():
    a, b = FieldSpec("a"), FieldSpec("b")
    assert SchemaDefinition.from_specs([a, b]) == SchemaDefinition.from_specs([a, b])
    assert SchemaDefinition.from_specs([a, b]) != SchemaDefinition.from_specs([b, a])


def test_conditional_branches_take_the_field_path():
    spec = ConditionalSpec(
        path="websiteLink",
        discriminator_path="cvType",
        branches={"online": FieldSpec("", chain=(r.required(),)), "draft": INHERIT},
    )
    online = dict(spec.branches)["online"]
    assert online.path == "websiteLink"
    assert dict(spec.branches)["draft"] is INHERIT
    assert spec.otherwise is INHERIT


def test_conditional_rejects_bad_declarations():
    with pytest.raises(SchemaDefinitionError):
        ConditionalSpec(path="a", discriminator_path="a")
    with pytest.raises(SchemaDefinitionError):
        ConditionalSpec(path="a", discriminator_path="")
    with pytest.raises(SchemaDefinitionError):
        ConditionalSpec(path="a", discriminator_path="mode", branches=(("x", "not a spec"),))
    with pytest.raises(SchemaDefinitionError):
        ConditionalSpec(
            path="a",
            discriminator_path="mode",
            branches=(("x", FieldSpec("a")), ("x", FieldSpec("a"))),
        )


def test_array_spec_validates_bounds():
    with pytest.raises(SchemaDefinitionError):
        ArrayFieldSpec(path="projects", item_schema=FieldSpec(""), min_items=-1)
    with pytest.raises(SchemaDefinitionError):
        ArrayFieldSpec(path="projects", item_schema=FieldSpec(""), min_items=3, max_items=1)
    with pytest.raises(SchemaDefinitionError):
        ArrayFieldSpec(path="projects", item_schema="projectName")
    with pytest.raises(SchemaDefinitionError):
        ArrayFieldSpec(path="projects", item_schema=FieldSpec(""), required_rule=r.max_length(1))
