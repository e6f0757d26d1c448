"""
Rust target.

Generates serde models and an async reqwest client from an OpenAPI
document.
"""

from .naming import create_rust_policy, doc_comment, string_literal
from .target import RUST_REQUEST_SYNTAX, RUST_URL_SYNTAX, create_rust_target
from .types import create_rust_type_table

__all__ = [
    "RUST_REQUEST_SYNTAX",
    "RUST_URL_SYNTAX",
    "create_rust_policy",
    "create_rust_target",
    "create_rust_type_table",
    "doc_comment",
    "string_literal",
]
