"""
Naming utilities for safe code generation.

Handles word splitting, case conversions and reserved-word conflicts
for every target language. All functions are pure: the same raw name
always maps to the same identifier.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from itertools import groupby
from pathlib import Path
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Set, Union

from ...logging_config import get_logger

logger = get_logger(__name__)

# Words over a string of character classes (U upper, L other letter,
# D digit): acronyms before a capitalized word, capitalized/lower words,
# bare acronyms and digit runs.
_WORD_RE = re.compile(r"U+(?=UL)|U?L+|U+|D+")

_CHARACTER_SUBSTITUTIONS = (("@", "at_"),)

# Prefix of identifiers built from the code points of a name without words
FALLBACK_PREFIX = "u"

# Re-casing converges after one extra pass; the bound is a safety net
_MAX_PASSES = 8


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName


def _is_word_char(char: str) -> bool:
    # Identifier characters of any script; underscores separate words
    return char != "_" and f"a{char}".isidentifier()


def _char_class(char: str) -> str:
    if char.isdigit():
        return "D"
    if char.isupper():
        return "U"
    return "L"


def split_words(name: str) -> List[str]:
    """Split a raw name into words, after substituting illegal characters."""
    for char, replacement in _CHARACTER_SUBSTITUTIONS:
        name = name.replace(char, replacement)

    words = []
    for is_word, run in groupby(name, key=_is_word_char):
        if not is_word:
            continue
        chunk = "".join(run)
        classes = "".join(_char_class(char) for char in chunk)
        words.extend(chunk[m.start():m.end()] for m in _WORD_RE.finditer(classes))
    return words


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    return "_".join(word.lower() for word in split_words(name))


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    words = split_words(name)
    if not words:
        return ""
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    return "".join(word.capitalize() for word in split_words(name))


_CONVERTERS: Dict[NamingCase, Callable[[str], str]] = {
    NamingCase.SNAKE_CASE: to_snake_case,
    NamingCase.CAMEL_CASE: to_camel_case,
    NamingCase.PASCAL_CASE: to_pascal_case,
}


def convert_case(name: str, target_case: NamingCase) -> str:
    """
    Convert name to target case style.

    The conversion is repeated until it is stable, so converting a
    converted name never changes it. Adjacent one-letter words such as
    ``a_b_c`` would otherwise read back as an acronym (``aBC`` -> ``aBc``).
    """
    converter = _CONVERTERS.get(target_case)
    if converter is None:
        return name

    converted = converter(name)
    for _ in range(_MAX_PASSES):
        again = converter(converted)
        if again == converted:
            break
        converted = again
    return converted


def unique_name(name: str, taken: Set[str], suffix: str = "_") -> str:
    """Append ``suffix`` until ``name`` is not in ``taken``, then claim it."""
    while name in taken:
        name = f"{name}{suffix}"
    taken.add(name)
    return name


def load_reserved_words(path: Union[str, Path]) -> FrozenSet[str]:
    """
    Load a newline-delimited reserved word list.

    Blank lines and lines starting with ``#`` are ignored.

    Raises:
        OSError: If the file cannot be read
    """
    text = Path(path).read_text(encoding="utf-8")
    words = (line.strip() for line in text.splitlines())
    return frozenset(word for word in words if word and not word.startswith("#"))


@dataclass(frozen=True)
class IdentifierPolicy:
    """
    Casing and reserved-word rules for one target language.

    The policy never rejects a name. Illegal characters are substituted,
    a name without any word is spelled from its code points, a leading
    digit gets an underscore prefix and a reserved word gets
    ``conflict_suffix`` appended.
    """

    type_case: NamingCase = NamingCase.PASCAL_CASE
    variable_case: NamingCase = NamingCase.CAMEL_CASE
    reserved_words: FrozenSet[str] = field(default_factory=frozenset)
    conflict_suffix: str = "_"

    def sanitize_name(self, name: str, target_case: NamingCase) -> str:
        """
        Sanitize a name for safe use in the target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style

        Returns:
            Identifier safe for use, or an empty string for empty input
        """
        if not name:
            logger.warning("Empty name passed to identifier policy")
            return ""

        converted = convert_case(name, target_case)
        if not converted:
            spelled = " ".join(str(ord(char)) for char in name)
            converted = convert_case(f"{FALLBACK_PREFIX} {spelled}", target_case)
            logger.warning("Name %r has no identifier characters, using %s", name, converted)

        # Digits and combining marks cannot start an identifier
        if not converted[:1].isidentifier():
            converted = f"_{converted}"

        return self._resolve_conflicts(converted)

    def _resolve_conflicts(self, name: str) -> str:
        if name in self.reserved_words:
            return f"{name}{self.conflict_suffix}"
        return name

    def type_name(self, raw: str) -> str:
        """Class/struct style name."""
        return self.sanitize_name(raw, self.type_case)

    def variable_name(self, raw: str) -> str:
        """Variable/field style name."""
        return self.sanitize_name(raw, self.variable_case)

    def enum_member_name(self, raw: str) -> str:
        return self.type_name(raw)

    def interface_name(self, raw: str) -> str:
        return self.type_name(raw)

    def union_variant_name(self, raw: str) -> str:
        return self.type_name(raw)


def create_policy(
    variable_case: NamingCase,
    reserved_words: Optional[Iterable[str]] = None,
    type_case: NamingCase = NamingCase.PASCAL_CASE,
) -> IdentifierPolicy:
    """Create an identifier policy from a reserved word collection."""
    return IdentifierPolicy(
        type_case=type_case,
        variable_case=variable_case,
        reserved_words=frozenset(reserved_words or ()),
    )
