from __future__ import annotations

import enum
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from .exceptions import ConfigurationError, MissingReferenceValueError


if TYPE_CHECKING:
    from .sequence import KeysetSequence


type SortOrder = Literal["ASC", "DESC"]
type Accessor = Callable[[Any], Any]


class Direction(enum.Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


_MISSING: Any = object()


def resolve_value(obj: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an object, raising ``LookupError`` when absent."""
    if isinstance(obj, Mapping):
        value = obj.get(name, _MISSING)
    else:
        value = getattr(obj, name, _MISSING)

    if value is _MISSING:
        raise LookupError(name)

    return value


@dataclass(frozen=True, slots=True)
class _AsDict:
    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class SortKey:
    name: str
    declared_type: type[Any]
    descending: bool = False
    nullable: bool = False
    accessor: Accessor | None = field(default=None, compare=False, repr=False)
    expression: Any = field(default=None, compare=False, repr=False)

    @property
    def order(self) -> SortOrder:
        return "DESC" if self.descending else "ASC"

    def value_of(self, entity: Any) -> Any:
        if self.accessor is not None:
            return self.accessor(entity)

        return resolve_value(entity, self.name)

    def reference_value(self, reference: Any) -> Any:
        """Read the key value from ``reference``.

        The name lookup serves duck-typed references such as decoded cursors;
        rows of the paginated entity fall back to ``accessor`` when the key
        is not a plain attribute of them.
        """
        try:
            return resolve_value(reference, self.name)
        except LookupError:
            if self.accessor is None:
                raise MissingReferenceValueError(
                    key=self.name,
                    reference=type(reference).__name__,
                ) from None

        try:
            return self.accessor(reference)
        except (AttributeError, KeyError, TypeError) as exc:
            raise MissingReferenceValueError(
                key=self.name,
                reference=type(reference).__name__,
                detail=str(exc),
            ) from exc


@dataclass(frozen=True, slots=True)
class KeysetSpec:
    keys: tuple[SortKey, ...]

    def __post_init__(self) -> None:
        if not self.keys:
            raise ConfigurationError("There should be at least one configured column in the keyset")

    def __len__(self) -> int:
        return len(self.keys)

    def __iter__(self) -> Iterator[SortKey]:
        return iter(self.keys)

    def __getitem__(self, index: int) -> SortKey:
        return self.keys[index]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(key.name for key in self.keys)


@dataclass(frozen=True, slots=True)
class Ordering:
    key: SortKey
    descending: bool

    @property
    def order(self) -> SortOrder:
        return "DESC" if self.descending else "ASC"


@dataclass(frozen=True, slots=True)
class PaginationContext[E]:
    spec: KeysetSpec
    direction: Direction
    ordered: KeysetSequence[E]
    filtered: KeysetSequence[E]
    optimize: bool = True


@dataclass(frozen=True, slots=True)
class KeysetPage[T](_AsDict):
    items: Sequence[T]
    has_previous: bool
    has_next: bool
