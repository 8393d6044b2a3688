"""
Pytest configuration and fixtures for Galatide tests
"""

import os
import sys

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, select
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH120

from galatide.config import Settings, settings  # noqa: E402
from galatide.database import Store  # noqa: E402
from galatide.i18n.locale import get_language_info  # noqa: E402
from galatide.models import (  # noqa: E402
    Article,
    ArticleStatus,
    ArticleTranslation,
    Language,
    Tag,
    TagTranslation,
    User,
    UserRole,
)
from galatide.models.article import utcnow  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
BASE_URL = settings.base_url.rstrip("/")

ADMIN_HEADERS = {"X-Role": "ADMIN"}
EDITOR_HEADERS = {"X-Role": "EDITOR"}


def make_store(database_url: str | None = TEST_DATABASE_URL, **kwargs) -> Store:
    """A store over one shared in-memory connection, with no retry delay."""
    kwargs.setdefault("base_delay", 0)
    if database_url and database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        kwargs.setdefault("poolclass", StaticPool)
    return Store(database_url, **kwargs)


@pytest.fixture
async def store():
    """Fresh schema per test, with sqlite foreign keys enforced."""
    store = make_store()

    @event.listens_for(store.engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    await store.create_all()
    assert await store.connect()
    yield store
    await store.drop_all()
    await store.disconnect()


@pytest.fixture
def unavailable_store():
    """A store with no database configured."""
    return make_store(None)


@pytest.fixture
async def languages(store) -> dict[str, int]:
    """English (default), French, German and Arabic; returns code -> id."""
    async with store.session() as db:
        rows = []
        for code in ("en", "fr", "de", "ar"):
            info = get_language_info(code)
            rows.append(
                Language(
                    code=code,
                    name=info["name"],
                    native_name=info["native_name"],
                    is_rtl=info["is_rtl"],
                    is_default=code == "en",
                )
            )
        db.add_all(rows)
        await db.commit()
        return {lang.code: lang.id for lang in rows}


@pytest.fixture
async def author(store) -> int:
    async with store.session() as db:
        user = User(name="Marina Reyes", email="marina@galatide.com", role=UserRole.EDITOR)
        db.add(user)
        await db.commit()
        return user.id


@pytest.fixture
async def tags(store) -> dict[str, int]:
    """"Coral" (French name "Coraux") and "Deep Sea"; returns slug -> id."""
    async with store.session() as db:
        coral = Tag(name="Coral", slug="coral", color="#f97316")
        deep_sea = Tag(name="Deep Sea", slug="deep-sea")
        coral.translations = [TagTranslation(language_code="fr", name="Coraux")]
        db.add_all([coral, deep_sea])
        await db.commit()
        return {"coral": coral.id, "deep-sea": deep_sea.id}


@pytest.fixture
def make_article(store, languages):
    async def _make(
        slug: str,
        language: str = "en",
        status: ArticleStatus = ArticleStatus.PUBLISHED,
        tag_ids=(),
        **fields,
    ) -> int:
        fields.setdefault("title", slug.replace("-", " ").title())
        fields.setdefault("content", "<p>The ocean floor is the least mapped place on Earth.</p>")
        async with store.session() as db:
            article = Article(
                slug=slug,
                original_language_id=languages[language],
                status=status,
                published_at=utcnow() if status == ArticleStatus.PUBLISHED else None,
                **fields,
            )
            if tag_ids:
                result = await db.execute(select(Tag).where(Tag.id.in_(list(tag_ids))))
                article.tags = list(result.scalars().all())
            db.add(article)
            await db.commit()
            return article.id

    return _make


@pytest.fixture
def make_translation(store, languages):
    async def _make(
        article_id: int,
        language: str,
        slug: str,
        status: ArticleStatus = ArticleStatus.PUBLISHED,
        **fields,
    ) -> int:
        fields.setdefault("title", slug.replace("-", " ").title())
        fields.setdefault("content", "<p>Traduction.</p>")
        async with store.session() as db:
            translation = ArticleTranslation(
                article_id=article_id,
                language_id=languages[language],
                slug=slug,
                status=status,
                published_at=utcnow() if status == ArticleStatus.PUBLISHED else None,
                **fields,
            )
            db.add(translation)
            await db.commit()
            return translation.id

    return _make


@pytest.fixture
async def abyssal(make_article, make_translation, tags) -> dict[str, int]:
    """Published English "abyssal-station" with a published French translation."""
    article_id = await make_article(
        "abyssal-station",
        title="Abyssal Station",
        excerpt="Life at 4,000 metres.",
        tag_ids=[tags["coral"]],
    )
    translation_id = await make_translation(
        article_id,
        "fr",
        "station-abyssale",
        title="Station abyssale",
        meta_title="Station abyssale | Galatide",
    )
    return {"article_id": article_id, "translation_id": translation_id}


def build_client(store: Store) -> AsyncClient:
    from main import create_app

    app = create_app(Settings(database_url=TEST_DATABASE_URL, log_json=False), store=store)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
async def client(store):
    async with build_client(store) as ac:
        yield ac


@pytest.fixture
async def degraded_client(unavailable_store):
    async with build_client(unavailable_store) as ac:
        yield ac
