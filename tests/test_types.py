"""Tests for the type-key vocabulary and per-target type tables."""

from openapi_alors.codegen.core.models import SchemaObject
from openapi_alors.codegen.core.types import UNRESOLVED, TypeKey, TypeTable, build_type_table


def test_lookup_is_closed() -> None:
    assert TypeKey.lookup("string") is TypeKey.STRING
    assert TypeKey.lookup("ARRAY") is TypeKey.ARRAY
    assert TypeKey.lookup(TypeKey.MAP) is TypeKey.MAP
    assert TypeKey.lookup("decimal") is None
    assert TypeKey.lookup(None) is None


def test_rust_primitives_and_formats(rust_target) -> None:
    assert rust_target.resolve_type("integer") == "u64"
    assert rust_target.resolve_type("integer", "int32") == "i32"
    assert rust_target.resolve_type("number") == "f64"
    assert rust_target.resolve_type("number", "float") == "f32"
    assert rust_target.resolve_type("string") == "String"
    assert rust_target.resolve_type("string", "binary") == "Vec<u8>"
    assert rust_target.resolve_type("string", "uuid") == "String"
    assert rust_target.resolve_type("boolean") == "bool"


def test_rust_containers(rust_target) -> None:
    assert rust_target.resolve_type(TypeKey.NULL) == "()"
    assert rust_target.resolve_type(TypeKey.MAP) == "std::collections::HashMap"
    assert rust_target.resolve_type(TypeKey.SET) == "std::collections::HashSet"
    assert rust_target.resolve_type(TypeKey.ARRAY) == "Vec"


def test_unknown_key_is_unresolved(rust_target) -> None:
    assert rust_target.resolve_type("decimal") == UNRESOLVED
    assert rust_target.resolve_type(None) == UNRESOLVED


def test_untyped_target_resolves_nothing(js_target) -> None:
    assert js_target.types.is_empty()
    for key in TypeKey:
        assert js_target.resolve_type(key) == UNRESOLVED
    assert js_target.render_type(SchemaObject(type="array", items=SchemaObject(type="string"))) == ""


def test_render_composes_containers(rust_target) -> None:
    pets = SchemaObject(type="array", items=SchemaObject(ref="Pet"))
    tags = SchemaObject(type="array", unique_items=True, items=SchemaObject(type="string"))
    counts = SchemaObject(type="object", additional_properties=SchemaObject(type="integer"))

    assert rust_target.render_type(pets) == "Vec<Pet>"
    assert rust_target.render_type(tags) == "std::collections::HashSet<String>"
    assert rust_target.render_type(counts) == "std::collections::HashMap<String, u64>"


def test_render_named_object_uses_type_name(rust_target) -> None:
    assert rust_target.render_type(SchemaObject(name="pet owner", type="object")) == "PetOwner"


def test_render_is_unresolved_when_any_part_is(rust_target) -> None:
    untyped_items = SchemaObject(type="array", items=SchemaObject())
    assert rust_target.render_type(untyped_items) == UNRESOLVED
    assert rust_target.render_type(None) == UNRESOLVED


def test_field_type_falls_back_and_wraps_optional(rust_target) -> None:
    assert rust_target.field_type(SchemaObject(type="string")) == "String"
    assert rust_target.field_type(SchemaObject(type="string"), required=False) == "Option<String>"
    assert rust_target.field_type(SchemaObject(type="string", nullable=True)) == "Option<String>"
    assert rust_target.field_type(SchemaObject()) == "serde_json::Value"


def test_optional_passes_empty_type_through(rust_target, js_target) -> None:
    assert rust_target.optional("") == ""
    assert rust_target.optional("u64") == "Option<u64>"
    assert js_target.optional("number") == "number"


def test_hashability(rust_target, js_target) -> None:
    assert rust_target.is_hashable("String")
    assert not js_target.is_hashable("string")


def test_custom_table_and_generic_syntax() -> None:
    table = build_type_table(
        {"string": {None: "str"}},
        {"array": "list"},
        generic=lambda container, *args: f"{container}[{', '.join(args)}]",
    )
    schema = SchemaObject(type="array", items=SchemaObject(type="string"))
    assert table.render(schema, str.title) == "list[str]"
    assert table.resolve("map") == UNRESOLVED
    assert TypeTable().is_empty()
