from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime

import pytest
import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from keyset import (
    ConfigurationError,
    Direction,
    KeysetBuilder,
    KeysetSpec,
    ensure_correct_order,
    fetch_keyset_page,
    fetch_page,
    find_nullable_keys,
    has_next,
    has_previous,
    paginate,
    paginate_query,
)
from keyset.infra.database.alchemy import AlchemySequence, ConnectionFactory
from tests.utils import expected_order, ids, make_posts


pytestmark = pytest.mark.anyio


class Base(DeclarativeBase):
    pass


class Article(Base):
    __tablename__ = "article"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    created: Mapped[datetime]
    title: Mapped[str]
    rating: Mapped[int]
    published: Mapped[bool]
    deleted_at: Mapped[datetime | None]


@pytest.fixture
async def session() -> AsyncIterator[AsyncSession]:
    connection = ConnectionFactory.from_url(
        "sqlite+aiosqlite://",
        poolclass=sa.pool.StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with connection.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with connection() as session:
        session.add_all(
            Article(
                id=post.id,
                created=post.created,
                title=post.title,
                rating=post.rating,
                published=post.published,
                deleted_at=None,
            )
            for post in make_posts()
        )
        await session.commit()

        yield session

    await connection.engine.dispose()


@pytest.fixture
def spec() -> KeysetSpec:
    return (
        KeysetBuilder()
        .descending(Article.created)
        .ascending(Article.title)
        .ascending(Article.id)
        .build()
    )


@pytest.fixture
async def articles(session: AsyncSession) -> list[Article]:
    return list((await session.scalars(sa.select(Article))).all())


async def test_builder_reads_column_metadata() -> None:
    spec = KeysetBuilder().descending(Article.deleted_at).ascending(Article.id).build()

    assert spec.names == ("deleted_at", "id")
    assert [key.declared_type for key in spec] == [datetime, int]
    assert [key.name for key in find_nullable_keys(spec)] == ["deleted_at"]


async def test_statement_orders_and_filters(
    session: AsyncSession, articles: list[Article], spec: KeysetSpec
) -> None:
    context = paginate(AlchemySequence.from_entity(session, Article), spec, reference=articles[3])

    statement = str(context.filtered.statement)

    assert "ORDER BY article.created DESC, article.title ASC, article.id ASC" in statement
    assert "article.created <= " in statement
    assert "article.created < " in statement


async def test_backward_order_is_inverted(session: AsyncSession, spec: KeysetSpec) -> None:
    context = paginate(AlchemySequence.from_entity(session, Article), spec, Direction.BACKWARD)

    assert "ORDER BY article.created ASC, article.title DESC, article.id DESC" in str(
        context.ordered.statement
    )


async def test_forward_pages_continue_without_gaps(
    session: AsyncSession, articles: list[Article], spec: KeysetSpec
) -> None:
    source = AlchemySequence.from_entity(session, Article)
    collected: list[Article] = []
    reference = None
    while page := await fetch_page(paginate(source, spec, reference=reference), 8):
        collected.extend(page)
        reference = page[-1]

    assert ids(collected) == ids(expected_order(articles, spec, Direction.FORWARD))


async def test_backward_page_and_probes(
    session: AsyncSession, articles: list[Article], spec: KeysetSpec
) -> None:
    forward = expected_order(articles, spec, Direction.FORWARD)
    source = AlchemySequence.from_entity(session, Article)

    context = paginate(source, spec, Direction.BACKWARD, forward[15])
    page = ensure_correct_order(context, await fetch_page(context, 5))

    assert ids(page) == ids(forward[10:15])
    assert await has_previous(context, page)
    assert await has_next(context, page)


async def test_probes_at_both_ends(
    session: AsyncSession, articles: list[Article], spec: KeysetSpec
) -> None:
    source = AlchemySequence.from_entity(session, Article)

    first = await fetch_keyset_page(source, spec, 10)
    last = await fetch_keyset_page(source, spec, 10, Direction.BACKWARD)

    assert (first.has_previous, first.has_next) == (False, True)
    assert (last.has_previous, last.has_next) == (True, False)
    assert ids(last.items) == ids(expected_order(articles, spec, Direction.FORWARD)[-10:])


async def test_filters_on_source_are_kept(
    session: AsyncSession, articles: list[Article], spec: KeysetSpec
) -> None:
    source = AlchemySequence.from_entity(session, Article, Article.published.is_(True))

    rows = await paginate_query(source, spec).fetch()

    published = [article for article in articles if article.published]
    assert ids(rows) == ids(expected_order(published, spec, Direction.FORWARD))


@pytest.mark.parametrize("direction", list(Direction))
async def test_optimization_does_not_change_results(
    session: AsyncSession, articles: list[Article], direction: Direction
) -> None:
    spec = KeysetBuilder().ascending(Article.rating).descending(Article.id).build()
    source = AlchemySequence.from_entity(session, Article)

    for reference in articles[::4]:
        optimized = await paginate_query(source, spec, direction, reference, optimize=True).fetch()
        plain = await paginate_query(source, spec, direction, reference, optimize=False).fetch()
        assert ids(optimized) == ids(plain)


async def test_named_column_cannot_be_translated(session: AsyncSession) -> None:
    source = AlchemySequence.from_entity(session, Article)

    with pytest.raises(ConfigurationError):
        paginate(source, lambda b: b.ascending("id", int))
