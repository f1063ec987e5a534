"""Validation engine.

Validator.validate applies a Rule to a flat input mapping:

1. Every kind the rule references is resolved up front, so a malformed rule
   raises ConfigurationError before any entry is evaluated.
2. Fields, then checkboxes, then combinations are evaluated in declaration
   order. Each entry is independent of the others.
3. Each entry produces a Record. Failed records are pushed onto the Report;
   fields and checkboxes that pass contribute their cleaned value.

Combination successes are not written into the report's values.
"""

import logging
from collections.abc import Mapping
from typing import Any

from formkeeper.criteria import CheckboxCriteria, CombinationCriteria, FieldCriteria
from formkeeper.filters import apply_filters
from formkeeper.messages import MessageCatalog
from formkeeper.registry import Registries
from formkeeper.rule import Rule
from formkeeper.types import ConfigurationError, Filter, Record, Report

logger = logging.getLogger(__name__)

Params = Mapping[str, str | list[str]]


def _is_empty(value: Any) -> bool:
    """Missing optional entries leave no trace in the report's values."""
    if value is None:
        return True
    if isinstance(value, (str, list)) and len(value) == 0:
        return True
    return False


class Validator:
    """Validates input against rules using a frozen set of registries.

    Usage:
        registries = Registries()
        registries.filters.register("squeeze", SqueezeFilter())
        validator = Validator(registries)

        report = validator.validate(params, rule, messages)
    """

    def __init__(self, registries: Registries | None = None):
        self.registries = registries or Registries()
        self.registries.freeze()

    def validate(
        self,
        params: Params,
        rule: Rule,
        messages: MessageCatalog | None = None,
    ) -> Report:
        """Validate params against rule.

        Raises:
            ConfigurationError: If the rule references unregistered kinds
                or carries an invalid argument
        """
        self.check(rule)

        report = Report(messages)
        for name, criteria in rule.fields.items():
            filters = self._filters(criteria.filters, rule)
            self._collect(report, self._validate_field(name, criteria, filters, params))
        for name, criteria in rule.checkboxes.items():
            filters = self._filters(criteria.filters, rule)
            self._collect(report, self._validate_checkbox(name, criteria, filters, params))
        for name, criteria in rule.combinations.items():
            filters = self._filters(criteria.filters, rule)
            record = self._validate_combination(name, criteria, filters, params)
            if record.failed():
                report.push(record)
            logger.debug("Combination '%s': %s", name, "failed" if record.failed() else "ok")

        logger.info(
            "Validated %d entries, %d failed",
            len(rule.fields) + len(rule.checkboxes) + len(rule.combinations),
            len(report.failed_records),
        )
        return report

    def check(self, rule: Rule) -> None:
        """Resolve every kind the rule references and check constraint arguments.

        Raises:
            ConfigurationError: On the first unregistered kind or bad argument
        """
        reg = self.registries
        try:
            for name in rule.default_filters:
                reg.filters.get(name)
            for criteria in [*rule.fields.values(), *rule.checkboxes.values()]:
                for name in criteria.filters:
                    reg.filters.get(name)
                for name, arg in criteria.constraints.items():
                    check_arg = getattr(reg.constraints.get(name), "check_arg", None)
                    if check_arg is not None:
                        check_arg(arg)
            for criteria in rule.combinations.values():
                for name in criteria.filters:
                    reg.filters.get(name)
                reg.combinations.get(criteria.constraint)
        except ConfigurationError as e:
            logger.error("Rule is malformed: %s", e)
            raise

    # -------------------------------------------------------------------------
    # Fields
    # -------------------------------------------------------------------------

    def _validate_field(
        self,
        name: str,
        criteria: FieldCriteria,
        filters: list[Filter],
        params: Params,
    ) -> Record:
        record = Record(name)
        value = params.get(name)
        if value is None or isinstance(value, list):
            self._handle_missing_field(criteria, record)
            return record

        value = apply_filters(value, filters)
        record.value = value
        if value == "":
            self._handle_missing_field(criteria, record)
        else:
            self._validate_value(value, criteria.constraints, record)
        return record

    def _handle_missing_field(self, criteria: FieldCriteria, record: Record) -> None:
        if criteria.default is None:
            if criteria.require_presence:
                record.fail("present")
        else:
            record.value = criteria.default

    # -------------------------------------------------------------------------
    # Checkboxes
    # -------------------------------------------------------------------------

    def _validate_checkbox(
        self,
        name: str,
        criteria: CheckboxCriteria,
        filters: list[Filter],
        params: Params,
    ) -> Record:
        record = Record(name)
        values = params.get(name)
        if not isinstance(values, list):
            self._handle_missing_checkbox(criteria, record)
            return record

        values = [apply_filters(v, filters) for v in values]
        values = [v for v in values if v != ""]
        record.value = values

        if criteria.count is None:
            if not values:
                self._handle_missing_checkbox(criteria, record)
            for value in values:
                self._validate_value(value, criteria.constraints, record)
        elif len(values) in criteria.count:
            for value in values:
                self._validate_value(value, criteria.constraints, record)
        elif not values:
            self._handle_missing_checkbox(criteria, record)
        else:
            record.fail("count")
        return record

    def _handle_missing_checkbox(self, criteria: CheckboxCriteria, record: Record) -> None:
        if not criteria.default:
            if criteria.count is not None:
                record.fail("count")
        else:
            record.value = list(criteria.default)

    # -------------------------------------------------------------------------
    # Combinations
    # -------------------------------------------------------------------------

    def _validate_combination(
        self,
        name: str,
        criteria: CombinationCriteria,
        filters: list[Filter],
        params: Params,
    ) -> Record:
        record = Record(name)
        values: list[str | None] = []
        for field_name in criteria.fields:
            raw = params.get(field_name)
            if raw is None or isinstance(raw, list):
                values.append(None)
            else:
                values.append(apply_filters(raw, filters))
        record.value = values

        constraint = self.registries.combinations.get(criteria.constraint)
        if not constraint.validate(values, criteria.arg):
            record.fail(name)
        return record

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _filters(self, own: tuple[str, ...], rule: Rule) -> list[Filter]:
        """Entry filters first, then the rule's default filters."""
        return [self.registries.filters.get(n) for n in (*own, *rule.default_filters)]

    def _validate_value(
        self,
        value: str,
        constraints: Mapping[str, Any],
        record: Record,
    ) -> None:
        # Every constraint runs; failures accumulate on the record
        for kind, arg in constraints.items():
            if not self.registries.constraints.get(kind).validate(value, arg):
                record.fail(kind)

    def _collect(self, report: Report, record: Record) -> None:
        if record.failed():
            report.push(record)
        elif not _is_empty(record.value):
            report[record.name] = record.value
        logger.debug(
            "Entry '%s': %s",
            record.name,
            ", ".join(record.failed_constraints) if record.failed() else "ok",
        )
