from __future__ import annotations

import logging
from collections.abc import Callable, MutableSequence, Sequence
from typing import Any

from config.core import get_config
from keyset.app.contracts.exceptions import ConfigurationError
from keyset.app.contracts.pagination import Direction, KeysetPage, KeysetSpec, PaginationContext
from keyset.app.contracts.sequence import KeysetSequence

from .builder import KeysetBuilder
from .compiler import apply_order, build_boundary


logger = logging.getLogger(__name__)

type KeysetDefinition = KeysetSpec | Callable[[KeysetBuilder], Any]


def build_spec(keyset: KeysetDefinition) -> KeysetSpec:
    if isinstance(keyset, KeysetSpec):
        return keyset

    builder = KeysetBuilder()
    keyset(builder)

    return builder.build()


def _resolve_optimize(optimize: bool | None) -> bool:
    return get_config().first_column_optimization if optimize is None else optimize


def paginate[E](
    source: KeysetSequence[E],
    keyset: KeysetDefinition,
    direction: Direction = Direction.FORWARD,
    reference: Any | None = None,
    *,
    optimize: bool | None = None,
) -> PaginationContext[E]:
    """Prepare ``source`` for keyset pagination.

    Any ordering previously applied to ``source`` is replaced by the keyset
    order. ``reference`` may be any mapping or object exposing the keyset
    column names; it does not need to be an instance of the paginated entity.
    Without a reference the first page (forward) or the last page (backward)
    is selected.

    Raises:
        ConfigurationError: no column was registered.
        MissingReferenceValueError: ``reference`` lacks a column value.
        TypeConversionError: a reference value cannot be converted to the column type.
        UnsupportedTypeError: a column type cannot be compared.
    """
    spec = build_spec(keyset)
    optimize = _resolve_optimize(optimize)

    ordered = source.order_by(*apply_order(spec, direction))
    filtered = ordered
    if reference is not None:
        filtered = ordered.where(build_boundary(spec, direction, reference, optimize=optimize))

    return PaginationContext(
        spec=spec,
        direction=direction,
        ordered=ordered,
        filtered=filtered,
        optimize=optimize,
    )


def paginate_query[E](
    source: KeysetSequence[E],
    keyset: KeysetDefinition,
    direction: Direction = Direction.FORWARD,
    reference: Any | None = None,
    *,
    optimize: bool | None = None,
) -> KeysetSequence[E]:
    return paginate(source, keyset, direction, reference, optimize=optimize).filtered


async def fetch_page[E](context: PaginationContext[E], size: int) -> list[E]:
    if size <= 0:
        raise ConfigurationError("Page size must be positive", size=size)

    return await context.filtered.fetch(size)


async def has_previous[E](context: PaginationContext[E], page: Sequence[Any]) -> bool:
    """Return whether there are rows before the first row of ``page``."""
    if not page:
        return False

    return await _has(context, Direction.BACKWARD, page[0])


async def has_next[E](context: PaginationContext[E], page: Sequence[Any]) -> bool:
    """Return whether there are rows after the last row of ``page``."""
    if not page:
        return False

    return await _has(context, Direction.FORWARD, page[-1])


async def _has[E](context: PaginationContext[E], direction: Direction, reference: Any) -> bool:
    condition = build_boundary(context.spec, direction, reference, optimize=context.optimize)
    return await context.ordered.exists(condition)


def ensure_correct_order[E, T](
    context: PaginationContext[E], page: MutableSequence[T]
) -> MutableSequence[T]:
    """Restore forward reading order of a page fetched backward, in place."""
    if context.direction is Direction.BACKWARD:
        page.reverse()

    return page


async def fetch_keyset_page[E](
    source: KeysetSequence[E],
    keyset: KeysetDefinition,
    size: int | None = None,
    direction: Direction = Direction.FORWARD,
    reference: Any | None = None,
    *,
    optimize: bool | None = None,
) -> KeysetPage[E]:
    config = get_config()
    size = min(config.default_page_size if size is None else size, config.max_page_size)

    context = paginate(source, keyset, direction, reference, optimize=optimize)
    items = ensure_correct_order(context, await fetch_page(context, size))

    page = KeysetPage(
        items=items,
        has_previous=await has_previous(context, items),
        has_next=await has_next(context, items),
    )
    logger.debug(
        "Fetched %d rows %s (previous=%s, next=%s)",
        len(items),
        direction.value,
        page.has_previous,
        page.has_next,
    )

    return page
