"""Shared fixtures: the two shipped targets and a sample OpenAPI document."""

import copy
from typing import Any

import pytest

from openapi_alors.codegen.languages.ecmascript import create_ecmascript_target
from openapi_alors.codegen.languages.rust import create_rust_target

PETSTORE: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "servers": [
        {
            "url": "https://{region}.petstore.example/v1",
            "description": "Production server",
            "variables": {"region": {"default": "eu", "enum": ["eu", "us"]}},
        },
        {"url": "http://localhost:8080/"},
    ],
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "summary": "List all pets",
                "parameters": [
                    {
                        "name": "limit",
                        "in": "query",
                        "schema": {"type": "integer", "format": "int32"},
                    }
                ],
                "responses": {
                    "200": {
                        "description": "A list of pets",
                        "content": {
                            "application/json": {
                                "schema": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}
                            }
                        },
                    },
                    "default": {"description": "Unexpected error"},
                },
            },
            "post": {
                "operationId": "createPet",
                "description": "Create a pet",
                "requestBody": {
                    "content": {
                        "application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}
                    }
                },
            },
        },
        "/pets/{petId}": {
            "parameters": [
                {"name": "petId", "in": "path", "required": True, "schema": {"type": "string"}}
            ],
            "get": {
                "operationId": "showPetById",
                "responses": {"200": {"$ref": "#/components/responses/PetResponse"}},
            },
            "put": {
                "summary": "Upload pet photo",
                "parameters": [{"$ref": "#/components/parameters/Verbose"}],
                "requestBody": {
                    "content": {
                        "multipart/form-data": {
                            "schema": {
                                "type": "object",
                                "required": ["name"],
                                "properties": {
                                    "name": {"type": "string"},
                                    "nickname": {"type": "string"},
                                },
                            }
                        }
                    }
                },
            },
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "description": "A pet",
                "required": ["id", "name"],
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string"},
                    "tag": {"type": "string", "description": "Free-form tag"},
                    "type": {"type": "string"},
                    "tags": {"type": "array", "items": {"type": "string"}, "uniqueItems": True},
                    "attributes": {
                        "type": "object",
                        "additionalProperties": {"type": "string"},
                    },
                },
            }
        },
        "responses": {
            "PetResponse": {
                "description": "A single pet",
                "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}},
            }
        },
        "parameters": {
            "Verbose": {"name": "verbose", "in": "query", "schema": {"type": "boolean"}}
        },
    },
}


@pytest.fixture
def rust_target():
    return create_rust_target()


@pytest.fixture
def js_target():
    return create_ecmascript_target()


@pytest.fixture
def petstore() -> dict[str, Any]:
    return copy.deepcopy(PETSTORE)
