from __future__ import annotations

import logging
from typing import Any

from keyset.app.contracts.pagination import Direction, KeysetSpec, Ordering, SortKey

from .comparators import coerce, get_comparator
from .predicate import TRUE, Comparison, Condition, Operator, and_, or_


logger = logging.getLogger(__name__)


def apply_order(spec: KeysetSpec, direction: Direction) -> tuple[Ordering, ...]:
    """Build the total order for ``direction``.

    Paging backward inverts every column, so the row right before the
    reference becomes the first matching row of the scan.
    """
    backward = direction is Direction.BACKWARD
    return tuple(Ordering(key=key, descending=key.descending is not backward) for key in spec)


def choose_operator(direction: Direction, key: SortKey, *, or_equal: bool = False) -> Operator:
    greater_than = (direction is Direction.FORWARD) is not key.descending
    return Operator.choose(greater_than=greater_than, or_equal=or_equal)


def reference_values(spec: KeysetSpec, reference: Any) -> tuple[Any, ...]:
    return tuple(
        coerce(key.reference_value(reference), key.declared_type, name=key.name) for key in spec
    )


def compare_key(key: SortKey, op: Operator, value: Any) -> Comparison:
    return Comparison(key=key, op=op, value=value, comparator=get_comparator(key.declared_type))


def build_boundary(
    spec: KeysetSpec,
    direction: Direction,
    reference: Any | None,
    *,
    optimize: bool = True,
) -> Condition:
    """Compile the condition selecting rows strictly past ``reference``.

    For columns ``x, y, z`` and reference values ``a, b, c`` this is the row
    value comparison ``(x, y, z) > (a, b, c)`` spelled out so that each column
    may carry its own direction::

        (x > a) OR (x = a AND y > b) OR (x = a AND y = b AND z > c)

    with ``>`` flipped to ``<`` on every column whose effective direction is
    descending. When ``optimize`` is set and there is more than one column the
    whole disjunction is additionally ANDed with ``x >= a`` (or ``x <= a``),
    which is implied by it but lets a database use an index on ``x`` as an
    access predicate.

    Raises:
        MissingReferenceValueError: the reference lacks a value for a column.
        TypeConversionError: a reference value cannot be converted to the column type.
        UnsupportedTypeError: a column type cannot be compared.
    """
    if reference is None:
        return TRUE

    values = reference_values(spec, reference)
    keys = spec.keys

    disjuncts: list[Condition] = []
    for i, key in enumerate(keys):
        equalities = [compare_key(keys[j], Operator.EQ, values[j]) for j in range(i)]
        boundary = compare_key(key, choose_operator(direction, key), values[i])
        disjuncts.append(and_(*equalities, boundary))

    condition = or_(*disjuncts)
    if optimize and len(keys) > 1:
        access = compare_key(keys[0], choose_operator(direction, keys[0], or_equal=True), values[0])
        condition = and_(access, condition)

    logger.debug("Compiled %s keyset boundary: %s", direction.value, condition)

    return condition
