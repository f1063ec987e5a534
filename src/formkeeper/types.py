"""Core types for the FormKeeper validation engine.

This module defines the foundational types shared by every layer:
- Exceptions for malformed rules and unreadable definition files
- Protocols that filters, constraints and combination constraints implement
- IntRange, the inclusive range used by count/length arguments
- Record and Report, the outcome of one validation run
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from formkeeper.messages import MessageCatalog


class FormKeeperError(Exception):
    """Base class for all FormKeeper errors."""


class ConfigurationError(FormKeeperError, ValueError):
    """A rule or registry is malformed.

    These are authoring mistakes (unknown kinds, bad argument shapes) and are
    never reported as per-field validation failures.
    """


class LoaderError(FormKeeperError):
    """A rule or message definition file could not be loaded."""


class CombinationKind(str, Enum):
    """Built-in combination constraint kinds."""

    SAME = "same"
    ANY = "any"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"


class Filter(Protocol):
    """Protocol for value filters. Filters are total and stateless."""

    def process(self, value: str) -> str:
        ...


class Constraint(Protocol):
    """Protocol for single-value constraints.

    Returning False records a failure on the field. Raising
    ConfigurationError signals an unsupported argument.

    Constraints may also define ``check_arg(arg)``; the validator calls it
    for every configured argument before any input is evaluated.
    """

    def validate(self, value: str, arg: Any) -> bool:
        ...


class CombinationConstraint(Protocol):
    """Protocol for constraints spanning several input values.

    Values arrive filtered, in the order the combination declares its
    fields. Absent inputs are passed as None.
    """

    def validate(self, values: Sequence[str | None], arg: Any) -> bool:
        ...


# =============================================================================
# Ranges
# =============================================================================


@dataclass(frozen=True)
class IntRange:
    """Inclusive integer range."""

    low: int
    high: int

    def __contains__(self, value: int) -> bool:
        return self.low <= value <= self.high

    @classmethod
    def parse(cls, arg: Any, what: str = "range") -> "IntRange":
        """Build an IntRange from any supported argument shape.

        Accepted shapes:
            7               -> IntRange(7, 7)
            [2, 5] / (2, 5) -> IntRange(2, 5)
            {"min": 2, "max": 5}
            range(2, 6)     -> IntRange(2, 5)
            IntRange(2, 5)

        Bounds must satisfy 0 <= low <= high.

        Raises:
            ConfigurationError: For any other shape or for invalid bounds
        """
        bounds = cls._from_shape(arg, what)
        if bounds.low < 0 or bounds.low > bounds.high:
            raise ConfigurationError(
                f"invalid {what}: bounds must satisfy 0 <= min <= max, got {arg!r}"
            )
        return bounds

    @classmethod
    def _from_shape(cls, arg: Any, what: str) -> "IntRange":
        if isinstance(arg, IntRange):
            return arg
        if _is_int(arg):
            return cls(arg, arg)
        if isinstance(arg, range):
            if arg.step != 1:
                raise ConfigurationError(f"invalid {what}: range step must be 1")
            return cls(arg.start, arg.stop - 1)
        if isinstance(arg, Mapping):
            if set(arg.keys()) == {"min", "max"} and _is_int(arg["min"]) and _is_int(arg["max"]):
                return cls(arg["min"], arg["max"])
        elif isinstance(arg, (list, tuple)):
            if len(arg) == 2 and _is_int(arg[0]) and _is_int(arg[1]):
                return cls(arg[0], arg[1])
        raise ConfigurationError(f"invalid {what}: {arg!r}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# =============================================================================
# Outcomes
# =============================================================================


@dataclass
class Record:
    """Outcome of validating one field, checkbox group or combination.

    Attributes:
        name: The field, checkbox or combination name
        value: Cleaned value (only meaningful when not failed)
        failed_constraints: Every failing constraint kind, in evaluation order
    """

    name: str
    value: Any = None
    failed_constraints: list[str] = field(default_factory=list)

    def fail(self, constraint: str) -> None:
        self.failed_constraints.append(constraint)

    def failed(self) -> bool:
        return len(self.failed_constraints) > 0

    def failed_by(self, constraint: str) -> bool:
        return constraint in self.failed_constraints


class Report:
    """Aggregate outcome of one validate call.

    Failed entries are kept as Records; entries that passed expose their
    cleaned value through item access:

        if report.failed_on("email"):
            ...
        email = report["email"]
    """

    def __init__(self, messages: "MessageCatalog | None" = None):
        self.failed_records: dict[str, Record] = {}
        self.valid_params: dict[str, Any] = {}
        self.messages = messages

    def push(self, record: Record) -> None:
        """Register a failed record."""
        self.failed_records[record.name] = record

    def __getitem__(self, name: str) -> Any:
        return self.valid_params.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.valid_params[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self.valid_params

    def get(self, name: str, default: Any = None) -> Any:
        return self.valid_params.get(name, default)

    def failed(self) -> bool:
        return len(self.failed_records) > 0

    def failed_on(self, name: str) -> bool:
        return name in self.failed_records

    def failed_fields(self) -> list[str]:
        return list(self.failed_records.keys())

    def failed_messages(self, action: str) -> dict[str, list[str]]:
        """Resolve every failure into human-readable messages.

        Args:
            action: Action name to look up in the message catalog

        Returns:
            Dict of failed name -> one message per failed constraint
        """
        from formkeeper.messages import MessageCatalog

        catalog = self.messages or MessageCatalog({})
        return {
            name: [catalog.get(action, name, c) for c in record.failed_constraints]
            for name, record in self.failed_records.items()
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "failed": self.failed(),
            "failures": {
                name: list(record.failed_constraints)
                for name, record in self.failed_records.items()
            },
            "values": dict(self.valid_params),
        }
