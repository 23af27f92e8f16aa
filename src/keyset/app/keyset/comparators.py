from __future__ import annotations

import uuid
from collections.abc import Callable, Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Final

import msgspec

from keyset.app.common.tools import convert_to
from keyset.app.contracts.exceptions import TypeConversionError, UnsupportedTypeError


type ThreeWayComparator = Callable[[Any, Any], int]


def compare(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


# Types that are totally ordered but are compared through a three-way function
# returning a negative, zero or positive signal, rather than with relational
# operators applied directly to the values.
THREE_WAY_COMPARATORS: Final[Mapping[type[Any], ThreeWayComparator]] = MappingProxyType(
    {
        str: compare,
        uuid.UUID: compare,
        bool: compare,
        bytes: compare,
    }
)

NATIVE_ORDERED_TYPES: Final[frozenset[type[Any]]] = frozenset(
    {int, float, Decimal, datetime, date, time, timedelta}
)


def get_comparator(typ: type[Any]) -> ThreeWayComparator | None:
    """Return the three-way comparator registered for ``typ``.

    Lookup walks the MRO, so subclasses of a registered type (e.g. a ``str``
    based enum) share its comparator. ``None`` means the type is compared
    with its native relational operators.

    Raises:
        UnsupportedTypeError: the type is neither natively ordered nor registered.
    """
    if not isinstance(typ, type):
        raise UnsupportedTypeError(type=repr(typ))

    for base in typ.__mro__:
        if base in THREE_WAY_COMPARATORS:
            return THREE_WAY_COMPARATORS[base]
        if base in NATIVE_ORDERED_TYPES:
            return None

    raise UnsupportedTypeError(type=typ.__qualname__)


def ensure_supported(typ: type[Any]) -> type[Any]:
    get_comparator(typ)

    return typ


def coerce(value: Any, typ: type[Any], *, name: str | None = None) -> Any:
    if type(value) is typ:
        return value

    try:
        return convert_to(typ, value, strict=False)
    except (msgspec.ValidationError, TypeError) as exc:
        raise TypeConversionError(
            key=name,
            type=typ.__qualname__,
            value_type=type(value).__qualname__,
            detail=str(exc),
        ) from exc
