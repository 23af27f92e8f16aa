from .builder import KeysetBuilder, find_nullable_keys
from .comparators import THREE_WAY_COMPARATORS, coerce, get_comparator
from .compiler import apply_order, build_boundary
from .core import (
    build_spec,
    ensure_correct_order,
    fetch_keyset_page,
    fetch_page,
    has_next,
    has_previous,
    paginate,
    paginate_query,
)
from .predicate import TRUE, And, Comparison, Condition, Constant, Operator, Or


__all__ = (
    "THREE_WAY_COMPARATORS",
    "TRUE",
    "And",
    "Comparison",
    "Condition",
    "Constant",
    "KeysetBuilder",
    "Operator",
    "Or",
    "apply_order",
    "build_boundary",
    "build_spec",
    "coerce",
    "ensure_correct_order",
    "fetch_keyset_page",
    "fetch_page",
    "find_nullable_keys",
    "get_comparator",
    "has_next",
    "has_previous",
    "paginate",
    "paginate_query",
)
