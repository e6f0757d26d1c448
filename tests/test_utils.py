"""Tests for OpenAPI document loading."""

import json

import pytest
import yaml

from openapi_alors.utils import DocumentLoadError, load_document, parse_document


def test_load_json_file(tmp_path, petstore) -> None:
    path = tmp_path / "petstore.json"
    path.write_text(json.dumps(petstore), encoding="utf-8")

    source, document = load_document(file_path=path)
    assert source == str(path)
    assert document == petstore


@pytest.mark.parametrize("suffix", [".yaml", ".yml", ".txt"])
def test_load_yaml_file(tmp_path, petstore, suffix: str) -> None:
    path = tmp_path / f"petstore{suffix}"
    path.write_text(yaml.safe_dump(petstore, sort_keys=False), encoding="utf-8")

    _, document = load_document(file_path=path)
    assert document["info"]["title"] == "Petstore"
    assert list(document["paths"]) == ["/pets", "/pets/{petId}"]


def test_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_document(file_path=tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    ("text", "json_format"),
    [("{broken", True), ("key: [unclosed", False), ("- just\n- a list\n", False)],
)
def test_parse_errors(text: str, json_format: bool) -> None:
    with pytest.raises(DocumentLoadError):
        parse_document(text, json_format)


def test_invalid_json_file_names_the_file(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(DocumentLoadError, match="bad.json"):
        load_document(file_path=path)


def test_source_arguments_are_exclusive(tmp_path) -> None:
    with pytest.raises(DocumentLoadError, match="Either"):
        load_document()
    with pytest.raises(DocumentLoadError, match="Cannot specify both"):
        load_document(file_path=tmp_path / "a.json", url="https://example.com/a.json")


def test_invalid_url_is_rejected_without_request() -> None:
    with pytest.raises(DocumentLoadError, match="Invalid URL"):
        load_document(url="not-a-url")


def test_url_loading(monkeypatch, petstore) -> None:
    class FakeResponse:
        headers = {"content-type": "application/yaml"}
        text = yaml.safe_dump(petstore)

        def raise_for_status(self):
            return None

    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse()

    monkeypatch.setattr("openapi_alors.utils.requests.get", fake_get)
    source, document = load_document(url="https://example.com/openapi.yaml", timeout=5)

    assert source == "https://example.com/openapi.yaml"
    assert document["openapi"] == "3.0.3"
    assert calls == [("https://example.com/openapi.yaml", 5)]
