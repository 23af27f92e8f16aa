from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable


if TYPE_CHECKING:
    from keyset.app.keyset.predicate import Condition

    from .pagination import Ordering


@runtime_checkable
class KeysetSequence[E](Protocol):
    def order_by(self, *orderings: Ordering) -> Self: ...
    def where(self, condition: Condition) -> Self: ...
    async def fetch(self, size: int | None = None) -> list[E]: ...
    async def exists(self, condition: Condition) -> bool: ...
