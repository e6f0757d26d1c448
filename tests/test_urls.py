"""Tests for server URL and route path templating."""

from openapi_alors.codegen.core.models import Replacement, ServerObject, ServerVariable


def test_render_url_interpolates_and_appends_slash(js_target, rust_target) -> None:
    assert js_target.render_url("https://{region}.example.com/{base_path}") == (
        "https://${region}.example.com/${basePath}/"
    )
    assert rust_target.render_url("https://{region}.example.com/{basePath}") == (
        "https://{region}.example.com/{base_path}/"
    )


def test_render_url_keeps_existing_trailing_slash(js_target) -> None:
    assert js_target.render_url("https://api.example.com/") == "https://api.example.com/"
    assert js_target.render_url("/") == "/"


def test_render_path_strips_leading_slash_only(js_target, rust_target) -> None:
    assert js_target.render_path("/pets/{petId}") == "pets/${petId}"
    assert rust_target.render_path("/pets/{petId}/photos/") == "pets/{pet_id}/photos/"
    assert not js_target.render_path("/").startswith("/")


def test_reserved_placeholder_is_renamed(rust_target) -> None:
    assert rust_target.render_path("/items/{type}") == "items/{type_}"


def test_resolve_servers_empty(js_target, rust_target) -> None:
    assert js_target.resolve_servers([]) == []
    assert rust_target.resolve_servers([]) == []


def test_resolve_servers_descriptors(rust_target) -> None:
    servers = [
        ServerObject(
            url="https://{region}.example.com/v1",
            description="Production API",
            variables={"region": ServerVariable(default="eu")},
        ),
        ServerObject(url="http://localhost:8080"),
    ]
    production, local = rust_target.resolve_servers(servers)

    assert production.url == "https://{region}.example.com/v1/"
    assert production.description == "production_api"
    assert production.variables == ["region"]
    assert production.replacements == [Replacement(key="{region}", value="region")]

    assert local.url == "http://localhost:8080/"
    assert local.description == "default1"
    assert local.variables == []


def test_missing_description_falls_back_to_index(js_target) -> None:
    servers = [ServerObject(url="/a"), ServerObject(url="/b", description="???")]
    assert [s.description for s in js_target.resolve_servers(servers)] == ["default0", "default1"]


def test_replacement_values_are_cased(js_target) -> None:
    server = ServerObject(
        url="https://{tenant_id}.example.com", variables={"tenant_id": ServerVariable()}
    )
    (resolved,) = js_target.resolve_servers([server])
    assert resolved.variables == ["tenantId"]
    assert resolved.replacements == [Replacement(key="{tenant_id}", value="tenantId")]


def test_non_ascii_description_is_kept(js_target) -> None:
    servers = [ServerObject(url="/eu", description="Serveur européen")]
    assert js_target.resolve_servers(servers)[0].description == "serveurEuropéen"
