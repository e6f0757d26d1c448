"""OpenAPI client generator for ECMAScript and Rust."""

__version__ = "0.1.0"
