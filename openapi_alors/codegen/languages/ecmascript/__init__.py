"""
ECMAScript target.

Generates a ``fetch`` based client class from an OpenAPI document.
"""

from .naming import create_ecmascript_policy, line_comment
from .target import ECMASCRIPT_REQUEST_SYNTAX, ECMASCRIPT_URL_SYNTAX, create_ecmascript_target

__all__ = [
    "ECMASCRIPT_REQUEST_SYNTAX",
    "ECMASCRIPT_URL_SYNTAX",
    "create_ecmascript_policy",
    "create_ecmascript_target",
    "line_comment",
]
