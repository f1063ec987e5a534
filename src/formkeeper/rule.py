"""Rule authoring surface.

A Rule collects field, checkbox and combination criteria plus the filters
applied to every entry:

    rule = Rule()
    rule.filters("strip")
    rule.field("email", {"present": True, "uri": ["http", "https"]})
    rule.checkbox("colors", {"count": [1, 3], "alpha": True})
    rule.combine(CombinationKind.SAME, "password_check", ["password", "confirm"])

Build a rule once, before the first validate call, then share it freely.
"""

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from formkeeper.criteria import CheckboxCriteria, CombinationCriteria, FieldCriteria
from formkeeper.types import CombinationKind, ConfigurationError


class Rule:
    """A named set of criteria to validate one form against."""

    def __init__(self) -> None:
        self._default_filters: tuple[str, ...] = ()
        self._fields: dict[str, FieldCriteria] = {}
        self._checkboxes: dict[str, CheckboxCriteria] = {}
        self._combinations: dict[str, CombinationCriteria] = {}

    @property
    def default_filters(self) -> tuple[str, ...]:
        return self._default_filters

    @property
    def fields(self) -> Mapping[str, FieldCriteria]:
        return MappingProxyType(self._fields)

    @property
    def checkboxes(self) -> Mapping[str, CheckboxCriteria]:
        return MappingProxyType(self._checkboxes)

    @property
    def combinations(self) -> Mapping[str, CombinationCriteria]:
        return MappingProxyType(self._combinations)

    def filters(self, *names: str) -> "Rule":
        """Set the filters applied to every entry after its own filters."""
        self._default_filters = tuple(str(n) for n in names)
        return self

    def field(self, name: str, criteria: Mapping[str, Any]) -> "Rule":
        self._fields[str(name)] = FieldCriteria.from_dict(criteria)
        return self

    def checkbox(self, name: str, criteria: Mapping[str, Any]) -> "Rule":
        self._checkboxes[str(name)] = CheckboxCriteria.from_dict(criteria)
        return self

    def combination(self, name: str, criteria: Mapping[str, Any]) -> "Rule":
        self._combinations[str(name)] = CombinationCriteria.from_dict(criteria)
        return self

    def combine(
        self,
        kind: CombinationKind | str,
        name: str,
        fields: Sequence[str],
        options: Mapping[str, Any] | None = None,
    ) -> "Rule":
        """Declare a combination with an explicit constraint kind.

        A "filters" entry in options applies to the combination's values.
        Any remaining options become the constraint argument; with none the
        argument is True.

        Example:
            rule.combine(CombinationKind.DATE, "birthday", ["year", "month", "day"])
        """
        kind_name = kind.value if isinstance(kind, CombinationKind) else str(kind)
        if kind_name in CombinationCriteria.RESERVED:
            raise ConfigurationError(f"invalid combination kind: {kind_name}")
        opts = dict(options or {})
        criteria: dict[str, Any] = {"fields": fields}
        if "filters" in opts:
            criteria["filters"] = opts.pop("filters")
        criteria[kind_name] = opts if opts else True
        return self.combination(name, criteria)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Rule":
        """Build a rule from a nested configuration structure.

        Expected shape (every section optional):
            {
                "filters": ["strip"],
                "fields": {"name": {...criteria...}},
                "checkboxes": {"name": {...criteria...}},
                "combinations": {"name": {"fields": [...], "same": True}},
            }
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"rule must be a mapping, got {type(data).__name__}")
        unknown = set(data) - {"filters", "fields", "checkboxes", "combinations"}
        if unknown:
            raise ConfigurationError(
                "unknown rule section(s): " + ", ".join(sorted(str(u) for u in unknown))
            )

        rule = cls()
        filters = data.get("filters") or []
        if isinstance(filters, str):
            filters = [filters]
        rule.filters(*filters)

        for section, declare in (
            ("fields", rule.field),
            ("checkboxes", rule.checkbox),
            ("combinations", rule.combination),
        ):
            entries = data.get(section) or {}
            if not isinstance(entries, Mapping):
                raise ConfigurationError(f"'{section}' must be a mapping of name -> criteria")
            for name, criteria in entries.items():
                declare(name, criteria)
        return rule
