"""Built-in single-value constraints.

Each constraint receives the filtered value and the argument configured for
it in the rule:
- ascii, int, uint, alpha, alpha_space, alnum, alnum_space: Character class
  checks over the whole value. A falsy argument inverts the result.
- regexp: Pattern search
- uri: Scheme allow-list
- length: Length in raw units (UTF-8 bytes)
- characters: Length in Unicode code points
"""

import re
from typing import Any
from urllib.parse import urlsplit

from formkeeper.types import ConfigurationError, Constraint, IntRange


# =============================================================================
# Character Class Patterns
# =============================================================================

# Printable, non-space ASCII
ASCII_PATTERN = re.compile(r"[\x21-\x7e]+")

INT_PATTERN = re.compile(r"-?[0-9]+")

UINT_PATTERN = re.compile(r"[0-9]+")

# Letters only ([^\W\d_] is \w without digits and underscore)
ALPHA_PATTERN = re.compile(r"[^\W\d_]+")

ALPHA_SPACE_PATTERN = re.compile(r"(?:[^\W\d_]|\s)+")

ALNUM_PATTERN = re.compile(r"[^\W_]+")

ALNUM_SPACE_PATTERN = re.compile(r"(?:[^\W_]|\s)+")


# =============================================================================
# Constraints
# =============================================================================


class PatternConstraint:
    """Passes when the whole value matches pattern.

    A falsy argument (``ascii: false``) inverts the check, so the constraint
    passes only when the value does NOT match.
    """

    def __init__(self, pattern: re.Pattern[str]):
        self.pattern = pattern

    def validate(self, value: str, arg: Any) -> bool:
        matched = self.pattern.fullmatch(value) is not None
        return matched if arg else not matched


class RegexpConstraint:
    """Passes when the argument pattern is found anywhere in the value."""

    def check_arg(self, arg: Any) -> re.Pattern[str]:
        if isinstance(arg, re.Pattern):
            return arg
        if isinstance(arg, str):
            try:
                return re.compile(arg)
            except re.error as e:
                raise ConfigurationError(f"invalid regexp {arg!r}: {e}") from e
        raise ConfigurationError(f"regexp requires a pattern, got {arg!r}")

    def validate(self, value: str, arg: Any) -> bool:
        return self.check_arg(arg).search(value) is not None


class URIConstraint:
    """Passes when the value parses as a URI whose scheme is allowed.

    The argument is a single scheme or a list of schemes.
    """

    def validate(self, value: str, arg: Any) -> bool:
        try:
            scheme = urlsplit(value).scheme
        except ValueError:
            return False
        if not scheme:
            return False
        schemes = arg if isinstance(arg, (list, tuple, set, frozenset)) else [arg]
        return scheme in {str(s) for s in schemes}


class LengthConstraint:
    """Passes when the value length equals an int or falls in a range.

    Length is measured in raw units: UTF-8 bytes.
    """

    name = "length"

    def measure(self, value: str) -> int:
        return len(value.encode("utf-8"))

    def check_arg(self, arg: Any) -> IntRange:
        return IntRange.parse(arg, what=f"{self.name} argument")

    def validate(self, value: str, arg: Any) -> bool:
        return self.measure(value) in self.check_arg(arg)


class CharactersConstraint(LengthConstraint):
    """Like length, but counts Unicode code points."""

    name = "characters"

    def measure(self, value: str) -> int:
        return len(value)


BUILTIN_CONSTRAINTS: dict[str, Constraint] = {
    "ascii": PatternConstraint(ASCII_PATTERN),
    "regexp": RegexpConstraint(),
    "int": PatternConstraint(INT_PATTERN),
    "uint": PatternConstraint(UINT_PATTERN),
    "alpha": PatternConstraint(ALPHA_PATTERN),
    "alpha_space": PatternConstraint(ALPHA_SPACE_PATTERN),
    "alnum": PatternConstraint(ALNUM_PATTERN),
    "alnum_space": PatternConstraint(ALNUM_SPACE_PATTERN),
    "uri": URIConstraint(),
    "length": LengthConstraint(),
    "characters": CharactersConstraint(),
}
