"""
Rust-specific naming utilities.

Handles Rust keywords and prelude names, Rust's doc comment style and
string literals.
"""

from pathlib import Path

from ...core.naming import IdentifierPolicy, NamingCase, create_policy, load_reserved_words
from ...core.target import TargetError

RESERVED_WORDS_FILE = Path(__file__).parent / "reserved-words.txt"


def create_rust_policy(reserved_words_file: Path = RESERVED_WORDS_FILE) -> IdentifierPolicy:
    """
    Create an identifier policy configured for Rust.

    Types are PascalCase, variables and fields snake_case.

    Raises:
        TargetError: If the reserved word list cannot be read
    """
    try:
        reserved = load_reserved_words(reserved_words_file)
    except OSError as e:
        raise TargetError(f"Cannot load Rust reserved words from {reserved_words_file}: {e}") from e
    return create_policy(NamingCase.SNAKE_CASE, reserved)


def doc_comment(content: str, indent: int) -> str:
    """
    Render a ``///`` doc comment.

    The first line is not indented; the template places it. Continuation
    lines are indented by ``indent`` spaces.
    """
    prefix = " " * indent
    lines = content.strip().split("\n")
    return "/// " + f"\n{prefix}/// ".join(lines)


_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}


def string_literal(value: str) -> str:
    """Quote a string as a Rust string literal."""
    chars = []
    for char in value:
        if char in _ESCAPES:
            chars.append(_ESCAPES[char])
        elif not char.isprintable():
            chars.append(f"\\u{{{ord(char):x}}}")
        else:
            chars.append(char)
    return '"' + "".join(chars) + '"'
