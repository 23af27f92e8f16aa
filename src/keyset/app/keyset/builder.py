from __future__ import annotations

import logging
from typing import Any, Self

from keyset.app.contracts.exceptions import ConfigurationError, UnsupportedTypeError
from keyset.app.contracts.pagination import Accessor, KeysetSpec, SortKey

from .comparators import ensure_supported


logger = logging.getLogger(__name__)


def _column_python_type(column: Any) -> type[Any]:
    try:
        return column.type.python_type
    except (AttributeError, NotImplementedError):
        raise UnsupportedTypeError(
            "Cannot infer a python type for the column, pass `type_` explicitly",
            key=getattr(column, "key", None),
        ) from None


def _column_nullable(column: Any) -> bool:
    expression = getattr(column, "expression", column)
    return bool(getattr(expression, "nullable", False))


class KeysetBuilder:
    """Collects the ordered columns the keyset is made of.

    The first registered column is the primary sort key; each following one
    breaks ties of the columns before it, so the last column should make the
    order total (usually a primary key).

    Columns can be registered by name, e.g. ``builder.ascending("id", int)``,
    or with a SQLAlchemy column/attribute, e.g. ``builder.descending(User.created)``,
    in which case the name, python type and nullability are read from it.
    """

    __slots__ = ("_keys",)

    def __init__(self) -> None:
        self._keys: list[SortKey] = []

    def ascending(
        self,
        column: Any,
        type_: type[Any] | None = None,
        *,
        nullable: bool | None = None,
        accessor: Accessor | None = None,
    ) -> Self:
        return self._add(column, type_, descending=False, nullable=nullable, accessor=accessor)

    def descending(
        self,
        column: Any,
        type_: type[Any] | None = None,
        *,
        nullable: bool | None = None,
        accessor: Accessor | None = None,
    ) -> Self:
        return self._add(column, type_, descending=True, nullable=nullable, accessor=accessor)

    def build(self) -> KeysetSpec:
        if not self._keys:
            raise ConfigurationError("There should be at least one configured column in the keyset")

        spec = KeysetSpec(tuple(self._keys))
        for key in find_nullable_keys(spec):
            logger.warning(
                "Keyset column %r is nullable, rows with NULL values may be skipped or repeated",
                key.name,
            )

        return spec

    def _add(
        self,
        column: Any,
        type_: type[Any] | None,
        *,
        descending: bool,
        nullable: bool | None,
        accessor: Accessor | None,
    ) -> Self:
        if isinstance(column, str):
            if type_ is None:
                raise ConfigurationError(
                    "A type is required when a column is registered by name", key=column
                )
            name, expression = column, None
        else:
            name = getattr(column, "key", None) or getattr(column, "name", None)
            if not name:
                raise ConfigurationError("Cannot determine a name for the column", column=repr(column))
            expression = column
            type_ = type_ or _column_python_type(column)
            if nullable is None:
                nullable = _column_nullable(column)

        if name in {key.name for key in self._keys}:
            raise ConfigurationError("Column is already registered in the keyset", key=name)

        self._keys.append(
            SortKey(
                name=name,
                declared_type=ensure_supported(type_),
                descending=descending,
                nullable=bool(nullable),
                accessor=accessor,
                expression=expression,
            )
        )

        return self


def find_nullable_keys(spec: KeysetSpec) -> tuple[SortKey, ...]:
    return tuple(key for key in spec if key.nullable)
