"""Tests for built-in filters and single-value constraints."""

import re

import pytest

from formkeeper.constraints import (
    ALNUM_PATTERN,
    ALPHA_PATTERN,
    ASCII_PATTERN,
    INT_PATTERN,
    UINT_PATTERN,
    BUILTIN_CONSTRAINTS,
)
from formkeeper.filters import BUILTIN_FILTERS, apply_filters
from formkeeper.types import ConfigurationError


def check(kind: str, value: str, arg=True) -> bool:
    return BUILTIN_CONSTRAINTS[kind].validate(value, arg)


# =============================================================================
# Filters
# =============================================================================


class TestFilters:
    def test_strip(self):
        assert BUILTIN_FILTERS["strip"].process("  ab \t\n") == "ab"

    def test_upcase(self):
        assert BUILTIN_FILTERS["upcase"].process("abC") == "ABC"

    def test_downcase(self):
        assert BUILTIN_FILTERS["downcase"].process("AbC") == "abc"

    def test_apply_filters_left_to_right(self):
        filters = [BUILTIN_FILTERS["downcase"], BUILTIN_FILTERS["strip"]]
        assert apply_filters(" AB ", filters) == "ab"

    def test_apply_no_filters(self):
        assert apply_filters(" x ", []) == " x "


# =============================================================================
# Pattern Tests
# =============================================================================


class TestPatterns:
    """Test the regex patterns used for character class constraints."""

    def test_ascii(self):
        assert ASCII_PATTERN.fullmatch("abc!~")
        assert not ASCII_PATTERN.fullmatch("a b")
        assert not ASCII_PATTERN.fullmatch("")
        assert not ASCII_PATTERN.fullmatch("café")

    def test_int(self):
        for value in ["0", "42", "-7"]:
            assert INT_PATTERN.fullmatch(value), f"{value} should be valid"
        for value in ["", "-", "4.2", "+1", "1a"]:
            assert not INT_PATTERN.fullmatch(value), f"{value} should be invalid"

    def test_uint(self):
        assert UINT_PATTERN.fullmatch("123")
        assert not UINT_PATTERN.fullmatch("-123")

    def test_alpha(self):
        assert ALPHA_PATTERN.fullmatch("abcXYZ")
        assert ALPHA_PATTERN.fullmatch("日本語")
        assert not ALPHA_PATTERN.fullmatch("abc1")
        assert not ALPHA_PATTERN.fullmatch("a_b")

    def test_alnum(self):
        assert ALNUM_PATTERN.fullmatch("abc123")
        assert not ALNUM_PATTERN.fullmatch("abc 123")
        assert not ALNUM_PATTERN.fullmatch("a_1")


# =============================================================================
# Character Class Constraints
# =============================================================================


class TestCharacterClassConstraints:
    def test_ascii_true(self):
        assert check("ascii", "hello")
        assert not check("ascii", "hello world")

    def test_ascii_false_inverts(self):
        assert check("ascii", "hello world", False)
        assert not check("ascii", "hello", False)

    def test_int_and_uint(self):
        assert check("int", "-12")
        assert not check("uint", "-12")
        assert check("uint", "12")

    def test_int_false_inverts(self):
        assert check("int", "abc", False)
        assert not check("int", "12", False)

    def test_alpha_space(self):
        assert check("alpha_space", "hello world")
        assert not check("alpha", "hello world")
        assert not check("alpha_space", "hello world 2")

    def test_alnum_space(self):
        assert check("alnum_space", "room 101")
        assert not check("alnum", "room 101")
        assert not check("alnum_space", "room-101")

    def test_returns_bool(self):
        assert check("alpha", "abc") is True
        assert check("alpha", "123") is False


# =============================================================================
# Regexp / URI
# =============================================================================


class TestRegexpConstraint:
    def test_pattern_string(self):
        assert check("regexp", "order-123", r"\d+")
        assert not check("regexp", "order", r"\d+")

    def test_compiled_pattern(self):
        assert check("regexp", "ABC", re.compile(r"^abc$", re.IGNORECASE))

    def test_search_is_unanchored(self):
        assert check("regexp", "xx-yy", "-")

    def test_invalid_pattern_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            check("regexp", "x", "(")

    def test_non_pattern_arg_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            check("regexp", "x", 5)


class TestURIConstraint:
    def test_scheme_in_list(self):
        assert check("uri", "http://example.com", ["http", "https"])
        assert check("uri", "https://example.com/path?q=1", ["http", "https"])

    def test_scheme_not_in_list(self):
        assert not check("uri", "ftp://example.com", ["http", "https"])

    def test_single_scheme(self):
        assert check("uri", "mailto:user@example.com", "mailto")

    def test_no_scheme(self):
        assert not check("uri", "example.com", ["http"])

    def test_unparsable(self):
        assert not check("uri", "http://[::1", ["http"])


# =============================================================================
# Length / Characters
# =============================================================================


class TestLengthConstraint:
    def test_exact(self):
        assert check("length", "abc", 3)
        assert not check("length", "abcd", 3)

    def test_range_boundaries(self):
        assert check("length", "ab", [2, 4])
        assert check("length", "abcd", [2, 4])
        assert not check("length", "a", [2, 4])
        assert not check("length", "abcde", [2, 4])

    def test_mapping_range(self):
        assert check("length", "abc", {"min": 1, "max": 3})

    def test_python_range(self):
        assert check("length", "abcd", range(2, 5))
        assert not check("length", "abcde", range(2, 5))

    def test_counts_bytes(self):
        # Each of these characters is three bytes in UTF-8
        assert check("length", "日本", 6)
        assert not check("length", "日本", 2)

    @pytest.mark.parametrize("arg", ["3", 1.5, None, True, [1, 2, 3], {"min": 1}])
    def test_invalid_arg(self, arg):
        with pytest.raises(ConfigurationError):
            check("length", "abc", arg)


class TestCharactersConstraint:
    def test_exact_uses_argument(self):
        assert check("characters", "日本", 2)
        assert not check("characters", "日本", 6)

    def test_range_boundaries(self):
        assert check("characters", "日本語", [3, 5])
        assert check("characters", "日本語です", [3, 5])
        assert not check("characters", "日本", [3, 5])
        assert not check("characters", "日本語ですよ", [3, 5])

    def test_invalid_arg(self):
        with pytest.raises(ConfigurationError):
            check("characters", "abc", "many")
