"""Parsed criteria for fields, checkbox groups and combinations.

A criteria map is the loosely typed mapping a rule author writes, e.g.

    {"present": True, "filters": ["strip"], "length": [1, 20]}

Reserved keys (default, filters, present, count, fields) are extracted;
every other key is a constraint kind mapped to its argument. Parsing never
mutates the caller's mapping.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from formkeeper.types import ConfigurationError, IntRange


def _parse_filters(criteria: Mapping[str, Any]) -> tuple[str, ...]:
    """Normalize the filters entry to a tuple of filter names."""
    if "filters" not in criteria:
        return ()
    filters = criteria["filters"]
    if isinstance(filters, str):
        return (filters,)
    if isinstance(filters, (list, tuple)):
        return tuple(str(f) for f in filters)
    raise ConfigurationError(f"invalid filters: {filters!r}")


def _require_mapping(criteria: Any) -> Mapping[str, Any]:
    if not isinstance(criteria, Mapping):
        raise ConfigurationError(f"criteria must be a mapping, got {type(criteria).__name__}")
    return criteria


def _remaining(criteria: Mapping[str, Any], reserved: set[str]) -> dict[str, Any]:
    return {str(k): v for k, v in criteria.items() if k not in reserved}


@dataclass(frozen=True)
class FieldCriteria:
    """Criteria for a single-valued field.

    Attributes:
        default: Value used when the field is missing; never validated
        present: Fail with "present" when the field is missing
        filters: Filter names applied before the rule's default filters
        constraints: Constraint kind -> argument
    """

    default: Any = None
    present: bool = False
    filters: tuple[str, ...] = ()
    constraints: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    RESERVED = frozenset({"default", "filters", "present"})

    @classmethod
    def from_dict(cls, criteria: Mapping[str, Any]) -> "FieldCriteria":
        criteria = _require_mapping(criteria)
        default = criteria.get("default")
        if default == "":
            default = None

        present = False
        if "present" in criteria:
            if default is not None:
                raise ConfigurationError("don't set both 'default' and 'present' at once")
            present = bool(criteria["present"])

        return cls(
            default=default,
            present=present,
            filters=_parse_filters(criteria),
            constraints=MappingProxyType(_remaining(criteria, cls.RESERVED)),
        )

    @property
    def require_presence(self) -> bool:
        return self.present


@dataclass(frozen=True)
class CheckboxCriteria:
    """Criteria for a multi-valued checkbox group.

    Attributes:
        default: Values used when nothing was checked
        filters: Filter names applied to every value
        count: Allowed number of checked values, or None for any
        constraints: Constraint kind -> argument, applied to every value
    """

    default: tuple[str, ...] = ()
    filters: tuple[str, ...] = ()
    count: IntRange | None = None
    constraints: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    RESERVED = frozenset({"default", "filters", "count"})

    @classmethod
    def from_dict(cls, criteria: Mapping[str, Any]) -> "CheckboxCriteria":
        criteria = _require_mapping(criteria)
        default = criteria.get("default")
        if default is None:
            defaults: tuple[str, ...] = ()
        elif isinstance(default, (list, tuple)):
            defaults = tuple(str(d) for d in default)
        else:
            defaults = (str(default),)

        count = None
        if "count" in criteria:
            count = IntRange.parse(criteria["count"], what="count")

        return cls(
            default=defaults,
            filters=_parse_filters(criteria),
            count=count,
            constraints=MappingProxyType(_remaining(criteria, cls.RESERVED)),
        )


@dataclass(frozen=True)
class CombinationCriteria:
    """Criteria for a constraint across several fields.

    Attributes:
        fields: Input names whose values are checked together (at least two)
        filters: Filter names applied to each value
        constraint: The single combination constraint kind
        arg: Its argument
    """

    fields: tuple[str, ...]
    constraint: str
    arg: Any = True
    filters: tuple[str, ...] = ()

    RESERVED = frozenset({"fields", "filters"})

    @classmethod
    def from_dict(cls, criteria: Mapping[str, Any]) -> "CombinationCriteria":
        criteria = _require_mapping(criteria)
        if "fields" not in criteria:
            raise ConfigurationError("combination rule requires 'fields'")
        fields = criteria["fields"]
        if not isinstance(fields, (list, tuple)) or len(fields) < 2:
            raise ConfigurationError(
                "combination rule requires 'fields' as a list of at least 2 fields"
            )

        remaining = _remaining(criteria, cls.RESERVED)
        if not remaining:
            raise ConfigurationError("combination constraint not found")
        if len(remaining) > 1:
            raise ConfigurationError(
                "combination rule takes exactly one constraint, got: "
                + ", ".join(remaining)
            )
        (constraint, arg), = remaining.items()

        return cls(
            fields=tuple(str(f) for f in fields),
            constraint=constraint,
            arg=arg,
            filters=_parse_filters(criteria),
        )
