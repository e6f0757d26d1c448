"""Tests for target construction, doc comments and rendering."""

import json
from dataclasses import replace
from pathlib import Path

import pytest

from openapi_alors.codegen.core.config import TargetConfig
from openapi_alors.codegen.core.models import (
    FieldContext,
    GenerateArguments,
    ModelContext,
    Operation,
)
from openapi_alors.codegen.core.target import GenerationResult, TargetError, generate_code
from openapi_alors.codegen.core.templates import create_template_engine
from openapi_alors.codegen.languages.ecmascript import create_ecmascript_target
from openapi_alors.codegen.languages.rust import create_rust_target, doc_comment
from openapi_alors.codegen.languages.rust.naming import create_rust_policy
from openapi_alors.visitor import build_generate_arguments


def test_doc_comments(rust_target, js_target) -> None:
    assert js_target.model_doc("A pet") == "// A pet"
    assert js_target.field_doc(None) == ""
    assert rust_target.model_doc("A pet\nwith a name") == "/// A pet\n    /// with a name"
    assert rust_target.field_doc("Tag\nline") == "/// Tag\n        /// line"
    assert rust_target.model_doc("") == "/// "


def test_doc_comment_passes_content_verbatim() -> None:
    assert doc_comment("<b>*/ & </b>", 0) == "/// <b>*/ & </b>"


def test_comments_can_be_disabled() -> None:
    target = create_rust_target({"add_comments": False})
    assert target.model_doc("A pet") == ""
    assert target.config.emit_debug_dump is True


def test_http_method_rendering(rust_target, js_target) -> None:
    assert js_target.http_method("get") == "GET"
    assert rust_target.http_method("get") == "get"


def test_operation_id_fallbacks(js_target) -> None:
    assert js_target.operation_id(Operation("get", "/pets", operation_id="list_pets")) == "listPets"
    assert js_target.operation_id(Operation("get", "/pets", summary="List all pets")) == "listAllPets"
    assert js_target.operation_id(Operation("get", "/pets/{id}")) == "getPetsId"


def test_output_names(rust_target, js_target) -> None:
    assert rust_target.output_name == "generated.rs"
    assert js_target.output_name == "Generated.js"
    custom = create_ecmascript_target(TargetConfig(output_file="client.js"))
    assert custom.output_name == "client.js"


def test_rust_emits_source_and_debug_dump(rust_target, petstore) -> None:
    args, _ = build_generate_arguments(petstore, rust_target)
    files = rust_target.generate(args)

    assert set(files) == {"generated.rs", "generated.json"}
    dump = json.loads(files["generated.json"])
    assert dump["title"] == "Petstore"
    assert [op["name"] for op in dump["operations"]] == [
        "list_pets",
        "create_pet",
        "show_pet_by_id",
        "upload_pet_photo",
    ]


def test_rust_source(rust_target, petstore) -> None:
    args, _ = build_generate_arguments(petstore, rust_target)
    source = rust_target.generate(args)["generated.rs"]

    assert "//! Petstore 1.0.0" in source
    assert "    /// A pet\n" in source
    assert "    pub struct Pet {" in source
    assert "        pub id: i64," in source
    assert "        pub tag: Option<String>," in source
    assert '#[serde(rename = "type", default, skip_serializing_if = "Option::is_none")]' in source
    assert "        pub type_: Option<String>," in source
    assert "pub tags: Option<std::collections::HashSet<String>>," in source
    assert "pub attributes: Option<std::collections::HashMap<String, String>>," in source
    assert "pub fn production_server_url(region: &str) -> String {" in source
    assert "pub fn default1_url() -> String {" in source
    assert "pub async fn list_pets(&self, limit: Option<i32>) -> Result<Vec<Pet>, Error> {" in source
    assert "pub async fn show_pet_by_id(&self, pet_id: String) -> Result<Pet, Error> {" in source
    assert "        Ok(serde_json::from_str(&__res.text().await?)?)" in source
    assert "-> Result<reqwest::Response, Error> {\n        let __url = format!(\"{}pets\", self.base_url);" in source
    assert "pub async fn create_pet(&self, body: Pet)" in source
    assert 'format!("{}pets/{pet_id}", self.base_url)' in source
    assert "reqwest::Method::PUT" in source
    assert "pub struct UploadPetPhotoParams {" in source
    assert "    pub pet_id: String," in source
    assert "    pub verbose: Option<bool>," in source
    assert "    pub body: UploadPetPhotoBody," in source
    assert "(&self, UploadPetPhotoParams { pet_id, verbose, body }: UploadPetPhotoParams)" in source
    assert '        __form = __form.text("name", body.name.to_string());' in source


def test_ecmascript_source(js_target, petstore) -> None:
    args, _ = build_generate_arguments(petstore, js_target)
    files = js_target.generate(args)

    assert list(files) == ["Generated.js"]
    source = files["Generated.js"]
    assert "// Petstore 1.0.0" in source
    assert "  productionServer: ({ region }) => `https://${region}.petstore.example/v1/`," in source
    assert "  default1: () => `http://localhost:8080/`," in source
    assert "// A pet\nexport class Pet {" in source
    assert "  // Free-form tag\n  tag;" in source
    assert "  async listPets(limit) {" in source
    assert "  async createPet(body) {" in source
    assert "  async uploadPetPhoto({ petId, verbose, body }) {" in source
    assert "const __url = new URL(`pets/${petId}`, this.baseUrl);" in source
    assert 'const __reqBody = { method: "PUT" };' in source
    assert '    if (body.nickname != null) __formData.append("nickname", body.nickname)' in source
    assert '    __reqBody.headers = { "Content-Type": "application/json" }' in source
    assert "    return Pet.fromJSON(__json);" in source
    assert "    if (!__res.ok) throw new Error(" in source
    assert "    return this.fetch(__url, __reqBody);" in source
    assert '    value.type = json["type"];' in source
    assert '      "type": this.type,' in source


def test_no_state_between_generations(js_target, petstore) -> None:
    args, _ = build_generate_arguments(petstore, js_target)
    assert js_target.generate(args) == js_target.generate(args)


def test_generate_code_wraps_result(rust_target) -> None:
    args = GenerateArguments(
        title="Empty",
        models=[ModelContext(name="Thing", original_name="thing", doc="",
                             fields=[FieldContext("id", "id", "u64", "", True)])],
    )
    result = generate_code(rust_target, args, warnings=["careful"])

    assert result.success
    assert "pub struct Thing {" in result.code
    assert result.warnings == ["careful"]
    assert result.metadata["language"] == "rust"
    assert result.metadata["model_count"] == 1
    assert result.metadata["files"] == ["generated.json", "generated.rs"]
    assert result.metadata["types_resolved"] is True


def test_generate_code_turns_failures_into_results(js_target) -> None:
    engine = create_template_engine()
    engine.add_template("broken.j2", "{{ args.missing }}")
    broken = replace(js_target, templates=engine, template_name="broken.j2")
    result = generate_code(broken, GenerateArguments())

    assert not result.success
    assert "Code generation failed" in result.error_message
    assert result.exception is not None
    assert result.code == ""


def test_error_result() -> None:
    result = GenerationResult.error("boom")
    assert not result.success
    assert result.files == {}


def test_missing_reserved_words_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(TargetError):
        create_rust_policy(tmp_path / "nope.txt")


ZOO = {
    "openapi": "3.0.3",
    "info": {"title": "Zoo", "version": "2"},
    "paths": {
        "/animals/{id}": {
            "get": {
                "operationId": "getAnimal",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}}
                ],
                "responses": {
                    "200": {
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Animal"}}
                        }
                    }
                },
            }
        }
    },
    "components": {
        "schemas": {
            "Status": {
                "type": "string",
                "description": "Stay status",
                "enum": ["in stock", "sold-out", ""],
            },
            "Cat": {
                "type": "object",
                "properties": {
                    'say "meow"': {"type": "string"},
                    "status": {"$ref": "#/components/schemas/Status"},
                },
            },
            "Dog": {"type": "object", "properties": {"bark": {"type": "boolean"}}},
            "Animal": {
                "oneOf": [
                    {"$ref": "#/components/schemas/Cat"},
                    {"$ref": "#/components/schemas/Dog"},
                    {"type": "string"},
                ]
            },
        }
    },
}


def test_rust_enums_and_unions(rust_target) -> None:
    args, _ = build_generate_arguments(ZOO, rust_target)
    source = rust_target.generate(args)["generated.rs"]

    assert "    /// Stay status\n    #[derive(Debug, Clone, Copy, PartialEq, Eq, Hash, Serialize, Deserialize)]" in source
    assert '    pub enum Status {\n        #[serde(rename = "in stock")]\n        InStock,' in source
    assert '        #[serde(rename = "sold-out")]\n        SoldOut,' in source
    assert '        #[serde(rename = "")]\n        Empty,' in source
    assert "    #[serde(untagged)]\n    pub enum Animal {" in source
    assert "        Cat(Cat),\n        Dog(Dog),\n        Variant2(String),\n    }" in source
    assert '#[serde(rename = "say \\"meow\\"", default, skip_serializing_if = "Option::is_none")]' in source
    assert "        pub status: Option<Status>," in source
    assert "pub async fn get_animal(&self, id: String) -> Result<Animal, Error> {" in source


def test_ecmascript_enums_and_unions(js_target) -> None:
    args, _ = build_generate_arguments(ZOO, js_target)
    source = js_target.generate(args)["Generated.js"]

    assert "// Stay status\nexport const Status = Object.freeze({" in source
    assert '  InStock: "in stock",\n  SoldOut: "sold-out",\n  Empty: "",\n});' in source
    assert "/** @typedef {Cat|Dog|*} Animal */" in source
    assert '    value.sayMeow = json["say \\"meow\\""];' in source
    assert '      "say \\"meow\\"": this.sayMeow,' in source
    assert "    return __json;" in source


def test_indent_size_drives_rendering(petstore) -> None:
    target = create_rust_target({"indent_size": 2})
    args, _ = build_generate_arguments(petstore, target)
    source = target.generate(args)["generated.rs"]

    assert "  /// A pet\n  #[derive(Debug, Clone, Serialize, Deserialize)]" in source
    assert "  pub struct Pet {\n" in source
    assert "    pub id: i64," in source
    assert "  pub async fn list_pets(" in source
    assert "    let mut __query" in source
    assert target.model_doc("A\nB") == "/// A\n  /// B"
    assert target.field_doc("A\nB") == "/// A\n    /// B"


def test_generate_code_counts_enums_and_unions(rust_target) -> None:
    args, _ = build_generate_arguments(ZOO, rust_target)
    result = generate_code(rust_target, args)

    assert result.metadata["model_count"] == 2
    assert result.metadata["enum_count"] == 1
    assert result.metadata["union_count"] == 1
