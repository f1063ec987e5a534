"""FormKeeper form input validation.

This package validates flat name -> value(s) input against declarative rules:
- Fields: single values with filters, constraints, defaults and presence
- Checkboxes: value lists with an optional count range
- Combinations: constraints across several fields (same, date, ...)

Usage:
    from formkeeper import MessageCatalog, Rule, Validator

    rule = Rule()
    rule.filters("strip")
    rule.field("email", {"present": True, "uri": ["http", "https"]})

    report = Validator().validate({"email": " http://example.com "}, rule)
    report.failed()     # False
    report["email"]     # "http://example.com"
"""

from formkeeper.criteria import CheckboxCriteria, CombinationCriteria, FieldCriteria
from formkeeper.loader import load_messages, load_params, load_rule
from formkeeper.messages import MessageCatalog
from formkeeper.registry import (
    CombinationConstraintRegistry,
    ConstraintRegistry,
    FilterRegistry,
    Registries,
)
from formkeeper.rule import Rule
from formkeeper.types import (
    CombinationConstraint,
    CombinationKind,
    ConfigurationError,
    Constraint,
    Filter,
    FormKeeperError,
    IntRange,
    LoaderError,
    Record,
    Report,
)
from formkeeper.validator import Validator

__all__ = [
    # Types
    "CombinationConstraint",
    "CombinationKind",
    "ConfigurationError",
    "Constraint",
    "Filter",
    "FormKeeperError",
    "IntRange",
    "LoaderError",
    "Record",
    "Report",
    # Criteria
    "CheckboxCriteria",
    "CombinationCriteria",
    "FieldCriteria",
    "Rule",
    # Registries
    "CombinationConstraintRegistry",
    "ConstraintRegistry",
    "FilterRegistry",
    "Registries",
    # Validation
    "MessageCatalog",
    "Validator",
    # Loading
    "load_messages",
    "load_params",
    "load_rule",
]
