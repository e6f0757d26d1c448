"""
Rust type table.

Maps the shared type keys to Rust types. Integers default to ``u64``
and numbers to ``f64``; OpenAPI formats narrow them.
"""

from ...core.types import TypeTable, build_type_table

RUST_PRIMITIVES = {
    "string": {
        None: "String",
        "binary": "Vec<u8>",
    },
    "integer": {
        None: "u64",
        "int32": "i32",
        "int64": "i64",
    },
    "number": {
        None: "f64",
        "float": "f32",
        "double": "f64",
    },
    "boolean": {
        None: "bool",
    },
}

RUST_CONTAINERS = {
    "null": "()",
    "map": "std::collections::HashMap",
    "set": "std::collections::HashSet",
    "array": "Vec",
}

RUST_MAP_KEY = "String"


def create_rust_type_table() -> TypeTable:
    return build_type_table(RUST_PRIMITIVES, RUST_CONTAINERS, map_key=RUST_MAP_KEY)
