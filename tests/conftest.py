from __future__ import annotations

import pytest

from keyset import InMemorySequence
from tests.utils import Post, make_posts


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def posts() -> list[Post]:
    return make_posts()


@pytest.fixture
def source(posts: list[Post]) -> InMemorySequence[Post]:
    return InMemorySequence(posts)
