"""Kind registries for FormKeeper.

Provides registration and lookup for:
- Filters (strip, upcase, ...)
- Constraints (ascii, length, ...)
- Combination constraints (same, date, ...)

Registries are plain objects rather than process-wide state. A Validator
owns one Registries bundle and freezes it, after which lookups are safe to
share between threads.
"""

import logging
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from formkeeper.combinations import BUILTIN_COMBINATION_CONSTRAINTS
from formkeeper.constraints import BUILTIN_CONSTRAINTS
from formkeeper.filters import BUILTIN_FILTERS
from formkeeper.types import (
    CombinationConstraint,
    ConfigurationError,
    Constraint,
    Filter,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KindRegistry(Generic[T]):
    """Registry mapping a kind name to its implementation.

    Kinds must be registered before a rule can reference them.

    Example:
        filters = FilterRegistry.with_builtins()
        filters.register("squeeze", SqueezeFilter())

        f = filters.get("squeeze")
    """

    label = "kind"

    def __init__(self, entries: dict[str, T] | None = None):
        self._entries: dict[str, T] = dict(entries or {})
        self._frozen = False

    def register(self, name: str, impl: T) -> None:
        """Register an implementation by name.

        Registering a name already present replaces it, so applications
        can override built-in kinds.

        Raises:
            ConfigurationError: If the registry has been frozen
        """
        if self._frozen:
            raise ConfigurationError(
                f"cannot register {self.label} '{name}': registry is frozen"
            )
        if name in self._entries:
            logger.debug("Replacing %s '%s'", self.label, name)
        else:
            logger.debug("Registered %s '%s'", self.label, name)
        self._entries[name] = impl

    def get(self, name: str) -> T:
        """Look up an implementation.

        Raises:
            ConfigurationError: If name is not registered
        """
        if name not in self._entries:
            raise ConfigurationError(
                f"unknown {self.label} type: {name}. "
                "Available types: " + ", ".join(self.list_registered())
            )
        return self._entries[name]

    def is_registered(self, name: str) -> bool:
        return name in self._entries

    def list_registered(self) -> list[str]:
        return sorted(self._entries.keys())

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen


class FilterRegistry(KindRegistry[Filter]):
    label = "filter"

    @classmethod
    def with_builtins(cls) -> "FilterRegistry":
        return cls(BUILTIN_FILTERS)


class ConstraintRegistry(KindRegistry[Constraint]):
    label = "constraint"

    @classmethod
    def with_builtins(cls) -> "ConstraintRegistry":
        return cls(BUILTIN_CONSTRAINTS)


class CombinationConstraintRegistry(KindRegistry[CombinationConstraint]):
    label = "combination constraint"

    @classmethod
    def with_builtins(cls) -> "CombinationConstraintRegistry":
        return cls(BUILTIN_COMBINATION_CONSTRAINTS)


@dataclass
class Registries:
    """The three registries a Validator dispatches through."""

    filters: FilterRegistry = field(default_factory=FilterRegistry.with_builtins)
    constraints: ConstraintRegistry = field(default_factory=ConstraintRegistry.with_builtins)
    combinations: CombinationConstraintRegistry = field(
        default_factory=CombinationConstraintRegistry.with_builtins
    )

    def freeze(self) -> None:
        self.filters.freeze()
        self.constraints.freeze()
        self.combinations.freeze()
