from __future__ import annotations

from collections.abc import Iterable
from functools import cmp_to_key
from typing import Any, Self, override

from keyset.app.contracts.pagination import Ordering
from keyset.app.contracts.sequence import KeysetSequence
from keyset.app.keyset.comparators import compare, get_comparator
from keyset.app.keyset.predicate import Condition, column_value


class InMemorySequence[E](KeysetSequence[E]):
    """Keyset sequence over rows already held in memory.

    Conditions are evaluated in Python and ordering uses the same three-way
    comparators as the boundary compiler, so results match what a database
    would return for the same keyset.

    Keys holding ``None`` raise ``NullValueError``: NULL ordering is defined
    by each database, so rows must be filtered or defaulted before paging
    them in memory.
    """

    __slots__ = ("_comparators", "_conditions", "_orderings", "_rows")

    def __init__(
        self,
        rows: Iterable[E],
        *,
        orderings: tuple[Ordering, ...] = (),
        conditions: tuple[Condition, ...] = (),
    ) -> None:
        self._rows = tuple(rows)
        self._orderings = orderings
        self._conditions = conditions
        self._comparators = tuple(
            get_comparator(ordering.key.declared_type) or compare for ordering in orderings
        )

    @override
    def order_by(self, *orderings: Ordering) -> Self:
        return type(self)(self._rows, orderings=orderings, conditions=self._conditions)

    @override
    def where(self, condition: Condition) -> Self:
        return type(self)(
            self._rows,
            orderings=self._orderings,
            conditions=(*self._conditions, condition),
        )

    @override
    async def fetch(self, size: int | None = None) -> list[E]:
        rows = self.all()
        return rows if size is None else rows[:size]

    @override
    async def exists(self, condition: Condition) -> bool:
        return any(condition(row) for row in self._matching())

    def all(self) -> list[E]:
        rows = list(self._matching())
        if self._orderings:
            rows.sort(key=cmp_to_key(self._compare_rows))

        return rows

    def _matching(self) -> Iterable[E]:
        return (row for row in self._rows if all(cond(row) for cond in self._conditions))

    def _compare_rows(self, left: Any, right: Any) -> int:
        for ordering, comparator in zip(self._orderings, self._comparators, strict=True):
            key = ordering.key
            result = comparator(column_value(key, left), column_value(key, right))
            if result:
                return -result if ordering.descending else result

        return 0
