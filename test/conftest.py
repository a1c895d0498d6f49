"""
Pytest configuration and fixtures for the brigade site tests

Store-backed tests run against an in-memory SQLite database created fresh
for every test function.
"""

import os
import sys
from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH120

from brigade_site.database import Base  # noqa: E402
from brigade_site.models import Category, Page, Post, PublishStatus  # noqa: E402
from brigade_site.services.retry import RetryPolicy  # noqa: E402
from brigade_site.store import SQLAlchemyDocumentStore  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def utc(year, month, day, hour=12):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(session_factory):
    return SQLAlchemyDocumentStore(session_factory)


@pytest.fixture
def no_wait_policy():
    """Retry policy without backoff delays."""
    return RetryPolicy(max_attempts=3, base_delay_ms=0)


# ── Seeding helpers ────────────────────────────────────────────────────────────


async def add_category(db, de_slug, en_slug, *, name=None, active=True):
    category = Category(
        name=name or {"de": de_slug, "en": en_slug},
        slug={"de": de_slug, "en": en_slug},
        active=active,
    )
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category


async def add_post(
    db,
    category,
    *,
    slug,
    title=None,
    status=PublishStatus.PUBLISHED,
    published_date=None,
    created_at=None,
):
    post = Post(
        title=title or {locale: f"Title {value}" for locale, value in slug.items()},
        slug=slug,
        content={locale: {"root": {"children": []}} for locale in slug},
        category_id=category.id if category is not None else None,
        status=status,
        published_date=published_date,
        created_at=created_at or utc(2024, 1, 1),
    )
    db.add(post)
    await db.commit()
    await db.refresh(post)
    return post


async def add_page(db, **fields):
    fields.setdefault("status", PublishStatus.PUBLISHED)
    page = Page(**fields)
    db.add(page)
    await db.commit()
    await db.refresh(page)
    return page


@pytest.fixture
def seed():
    """Expose the seeding helpers to tests as ``seed.category(...)`` etc."""

    class Seed:
        category = staticmethod(add_category)
        post = staticmethod(add_post)
        page = staticmethod(add_page)

    return Seed
