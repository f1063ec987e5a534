"""Built-in combination constraints.

These check several input values together:
- same: Two values are equal (password confirmation)
- any: At least one value is filled in
- date: year, month, day form a real calendar date
- time: hour, minute, second are in range
- datetime: date and time parts together

The date/time kinds accept a ``{"from": ..., "to": ...}`` argument for range
bounds; bounds are accepted but not enforced yet.
"""

from collections.abc import Sequence
from datetime import date
from typing import Any

from formkeeper.constraints import INT_PATTERN
from formkeeper.types import CombinationConstraint, CombinationKind


def _to_ints(values: Sequence[str | None]) -> list[int] | None:
    """Parse every value as an ASCII-digit integer, or return None."""
    result = []
    for v in values:
        if v is None or INT_PATTERN.fullmatch(v) is None:
            return None
        result.append(int(v))
    return result


def _valid_date(year: int, month: int, day: int) -> bool:
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def _valid_time(hour: int, minute: int, second: int) -> bool:
    return 0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59


class SameConstraint:
    def validate(self, values: Sequence[str | None], arg: Any) -> bool:
        if len(values) != 2:
            return False
        return values[0] == values[1]


class AnyConstraint:
    def validate(self, values: Sequence[str | None], arg: Any) -> bool:
        return any(v is not None and v != "" for v in values)


class DateConstraint:
    def validate(self, values: Sequence[str | None], arg: Any) -> bool:
        if len(values) != 3:
            return False
        # TODO: enforce arg["from"] / arg["to"] bounds
        parts = _to_ints(values)
        return parts is not None and _valid_date(*parts)


class TimeConstraint:
    def validate(self, values: Sequence[str | None], arg: Any) -> bool:
        if len(values) != 3:
            return False
        parts = _to_ints(values)
        return parts is not None and _valid_time(*parts)


class DateTimeConstraint:
    def validate(self, values: Sequence[str | None], arg: Any) -> bool:
        if len(values) != 6:
            return False
        parts = _to_ints(values)
        if parts is None:
            return False
        return _valid_date(*parts[:3]) and _valid_time(*parts[3:])


BUILTIN_COMBINATION_CONSTRAINTS: dict[str, CombinationConstraint] = {
    CombinationKind.DATETIME.value: DateTimeConstraint(),
    CombinationKind.DATE.value: DateConstraint(),
    CombinationKind.TIME.value: TimeConstraint(),
    CombinationKind.SAME.value: SameConstraint(),
    CombinationKind.ANY.value: AnyConstraint(),
}
