"""
ECMAScript-specific naming utilities.
"""

from pathlib import Path

from ...core.naming import IdentifierPolicy, NamingCase, create_policy, load_reserved_words
from ...core.target import TargetError

RESERVED_WORDS_FILE = Path(__file__).parent / "reserved-words.txt"


def create_ecmascript_policy(
    reserved_words_file: Path = RESERVED_WORDS_FILE,
) -> IdentifierPolicy:
    """
    Create an identifier policy configured for ECMAScript.

    Types are PascalCase, variables and fields camelCase.

    Raises:
        TargetError: If the reserved word list cannot be read
    """
    try:
        reserved = load_reserved_words(reserved_words_file)
    except OSError as e:
        raise TargetError(
            f"Cannot load ECMAScript reserved words from {reserved_words_file}: {e}"
        ) from e
    return create_policy(NamingCase.CAMEL_CASE, reserved)


def line_comment(content: str, indent: int) -> str:
    """Render ``//`` comments, continuation lines indented by ``indent``."""
    prefix = " " * indent
    lines = content.strip().split("\n")
    return "// " + f"\n{prefix}// ".join(lines)
