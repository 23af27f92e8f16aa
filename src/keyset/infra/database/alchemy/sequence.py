from __future__ import annotations

from typing import Any, Self, override

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from keyset.app.contracts.exceptions import ConfigurationError
from keyset.app.contracts.pagination import Ordering, SortKey
from keyset.app.contracts.sequence import KeysetSequence
from keyset.app.keyset.predicate import And, Comparison, Condition, Constant, Or


def get_column(key: SortKey) -> Any:
    if key.expression is None:
        raise ConfigurationError(
            "Keyset column has no SQL expression, register it with a SQLAlchemy column",
            key=key.name,
        )

    return key.expression


def to_clause(condition: Condition) -> sa.ColumnElement[bool]:
    """Translate a compiled condition into a SQLAlchemy boolean expression.

    Three-way comparisons are emitted as plain relational operators: SQL
    orders text, uuid and boolean values natively, so ``compare(x, v) > 0``
    and ``x > v`` select the same rows, and only the latter is sargable.
    """
    match condition:
        case Comparison(key=key, op=op, value=value):
            return op.function(get_column(key), value)
        case And(clauses=clauses):
            return sa.and_(*(to_clause(clause) for clause in clauses))
        case Or(clauses=clauses):
            return sa.or_(*(to_clause(clause) for clause in clauses))
        case Constant(value=value):
            return sa.true() if value else sa.false()

    raise TypeError(f"Unsupported condition: {condition!r}")


def to_order_by(ordering: Ordering) -> sa.UnaryExpression[Any]:
    column = get_column(ordering.key)
    return column.desc() if ordering.descending else column.asc()


class AlchemySequence[E](KeysetSequence[E]):
    __slots__ = ("_conn", "_stmt")

    def __init__(self, conn: AsyncSession, stmt: sa.Select[tuple[E]]) -> None:
        self._conn = conn
        self._stmt = stmt

    @classmethod
    def from_entity(cls, conn: AsyncSession, entity: type[E], *clauses: Any) -> AlchemySequence[E]:
        return cls(conn, sa.select(entity).where(*clauses))

    @property
    def statement(self) -> sa.Select[tuple[E]]:
        return self._stmt

    @override
    def order_by(self, *orderings: Ordering) -> Self:
        stmt = self._stmt.order_by(None).order_by(*(to_order_by(ordering) for ordering in orderings))
        return type(self)(self._conn, stmt)

    @override
    def where(self, condition: Condition) -> Self:
        return type(self)(self._conn, self._stmt.where(to_clause(condition)))

    @override
    async def fetch(self, size: int | None = None) -> list[E]:
        stmt = self._stmt if size is None else self._stmt.limit(size)
        return list((await self._conn.scalars(stmt)).unique().all())

    @override
    async def exists(self, condition: Condition) -> bool:
        subquery = self._stmt.order_by(None).where(to_clause(condition)).exists()
        return bool(await self._conn.scalar(sa.select(subquery)))
