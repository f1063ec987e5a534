"""Built-in value filters.

Filters normalize raw input before constraints run:
- strip: Remove leading and trailing whitespace
- upcase: Convert to upper case
- downcase: Convert to lower case
"""

from typing import Callable

from formkeeper.types import Filter


class StringFilter:
    """Filter backed by a plain ``str -> str`` function."""

    def __init__(self, fn: Callable[[str], str]):
        self.fn = fn

    def process(self, value: str) -> str:
        return self.fn(value)


BUILTIN_FILTERS: dict[str, Filter] = {
    "strip": StringFilter(str.strip),
    "upcase": StringFilter(str.upper),
    "downcase": StringFilter(str.lower),
}


def apply_filters(value: str, filters: list[Filter]) -> str:
    """Run value through filters left to right."""
    for f in filters:
        value = f.process(value)
    return value
