from __future__ import annotations

import operator
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Final

from keyset import Direction, KeysetSpec


BASE_DATE: Final[datetime] = datetime(2021, 1, 1)


@dataclass(slots=True)
class Post:
    id: int
    created: datetime
    title: str
    rating: int
    published: bool
    uid: uuid.UUID


def make_posts(count: int = 30) -> list[Post]:
    return [
        Post(
            id=i,
            created=BASE_DATE + timedelta(days=i % 7),
            title=f"post-{i % 5}",
            rating=i % 3,
            published=i % 2 == 0,
            uid=uuid.UUID(int=(i * 7919) % 1000),
        )
        for i in range(1, count + 1)
    ]


def expected_order[T](rows: Sequence[T], spec: KeysetSpec, direction: Direction) -> list[T]:
    backward = direction is Direction.BACKWARD
    result = list(rows)
    for key in reversed(spec.keys):
        result.sort(key=operator.attrgetter(key.name), reverse=key.descending is not backward)

    return result


def ids(rows: Sequence[Any]) -> list[int]:
    return [row.id for row in rows]
