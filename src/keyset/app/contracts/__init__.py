from .exceptions import (
    AppError,
    ConfigurationError,
    DetailedError,
    InvalidCursorError,
    KeysetError,
    MissingReferenceValueError,
    NullValueError,
    TypeConversionError,
    UnsupportedTypeError,
)
from .pagination import (
    Direction,
    KeysetPage,
    KeysetSpec,
    Ordering,
    PaginationContext,
    SortKey,
    SortOrder,
    resolve_value,
)
from .sequence import KeysetSequence


__all__ = (
    "AppError",
    "ConfigurationError",
    "DetailedError",
    "Direction",
    "InvalidCursorError",
    "KeysetError",
    "KeysetPage",
    "KeysetSequence",
    "KeysetSpec",
    "MissingReferenceValueError",
    "NullValueError",
    "Ordering",
    "PaginationContext",
    "SortKey",
    "SortOrder",
    "TypeConversionError",
    "UnsupportedTypeError",
    "resolve_value",
)
