"""Keyset (cursor based) pagination over ordered, filterable sequences."""

from keyset.app.contracts import (
    ConfigurationError,
    Direction,
    InvalidCursorError,
    KeysetError,
    KeysetPage,
    KeysetSequence,
    KeysetSpec,
    MissingReferenceValueError,
    NullValueError,
    PaginationContext,
    SortKey,
    TypeConversionError,
    UnsupportedTypeError,
)
from keyset.app.keyset import (
    KeysetBuilder,
    apply_order,
    build_boundary,
    ensure_correct_order,
    fetch_keyset_page,
    fetch_page,
    find_nullable_keys,
    has_next,
    has_previous,
    paginate,
    paginate_query,
)
from keyset.infra.memory import InMemorySequence


__all__ = (
    "ConfigurationError",
    "Direction",
    "InMemorySequence",
    "InvalidCursorError",
    "KeysetBuilder",
    "KeysetError",
    "KeysetPage",
    "KeysetSequence",
    "KeysetSpec",
    "MissingReferenceValueError",
    "NullValueError",
    "PaginationContext",
    "SortKey",
    "TypeConversionError",
    "UnsupportedTypeError",
    "apply_order",
    "build_boundary",
    "ensure_correct_order",
    "fetch_keyset_page",
    "fetch_page",
    "find_nullable_keys",
    "has_next",
    "has_previous",
    "paginate",
    "paginate_query",
)
