"""Boolean condition tree emitted by the boundary compiler.

A compiled boundary has the shape ``Or[And[Comparison, ...], ...]``, optionally
wrapped in an outer ``And`` carrying the leading-column access predicate. Each
node can be evaluated against a materialized row, rendered for logging, or
walked by a query-builder backend to produce a native filter expression.
"""

from __future__ import annotations

import enum
import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final

from keyset.app.contracts.exceptions import NullValueError
from keyset.app.contracts.pagination import SortKey

from .comparators import ThreeWayComparator


class Operator(enum.Enum):
    EQ = "="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="

    @property
    def function(self) -> Callable[[Any, Any], Any]:
        return _FUNCTIONS[self]

    @classmethod
    def choose(cls, *, greater_than: bool, or_equal: bool) -> Operator:
        if greater_than:
            return cls.GE if or_equal else cls.GT

        return cls.LE if or_equal else cls.LT


_FUNCTIONS: Final[dict[Operator, Callable[[Any, Any], Any]]] = {
    Operator.EQ: operator.eq,
    Operator.GT: operator.gt,
    Operator.GE: operator.ge,
    Operator.LT: operator.lt,
    Operator.LE: operator.le,
}


def column_value(key: SortKey, entity: Any) -> Any:
    """Read a key value for evaluation in Python, where NULL has no order."""
    value = key.value_of(entity)
    if value is None:
        raise NullValueError(key=key.name, entity=type(entity).__name__)

    return value


@dataclass(frozen=True, slots=True)
class Comparison:
    key: SortKey
    op: Operator
    value: Any
    comparator: ThreeWayComparator | None = None

    def __call__(self, entity: Any) -> bool:
        value = column_value(self.key, entity)
        if self.comparator is not None:
            return bool(self.op.function(self.comparator(value, self.value), 0))

        return bool(self.op.function(value, self.value))

    def __str__(self) -> str:
        return f"{self.key.name} {self.op.value} {self.value!r}"


@dataclass(frozen=True, slots=True)
class And:
    clauses: tuple[Condition, ...]

    def __call__(self, entity: Any) -> bool:
        return all(clause(entity) for clause in self.clauses)

    def __str__(self) -> str:
        return " AND ".join(_wrap(clause) for clause in self.clauses)


@dataclass(frozen=True, slots=True)
class Or:
    clauses: tuple[Condition, ...]

    def __call__(self, entity: Any) -> bool:
        return any(clause(entity) for clause in self.clauses)

    def __str__(self) -> str:
        return " OR ".join(_wrap(clause) for clause in self.clauses)


@dataclass(frozen=True, slots=True)
class Constant:
    value: bool

    def __call__(self, entity: Any) -> bool:
        return self.value

    def __str__(self) -> str:
        return "TRUE" if self.value else "FALSE"


type Condition = Comparison | And | Or | Constant

TRUE: Final[Constant] = Constant(True)


def _wrap(condition: Condition) -> str:
    return f"({condition})"


def and_(*clauses: Condition) -> Condition:
    return clauses[0] if len(clauses) == 1 else And(clauses)


def or_(*clauses: Condition) -> Condition:
    return clauses[0] if len(clauses) == 1 else Or(clauses)
