"""
Language-specific targets.

Each subpackage exposes a ``create_<language>_target`` factory.
"""

from .ecmascript import create_ecmascript_target
from .rust import create_rust_target

__all__ = ["create_ecmascript_target", "create_rust_target"]
