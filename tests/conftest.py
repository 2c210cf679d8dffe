"""
Shared fixtures.

Tests run against a file-backed SQLite database so that worker threads
(background history writes, concurrent suggestion lookups) can open their
own connections. Tables are recreated for every test.
"""

from datetime import datetime, timedelta, timezone
import os
from typing import Callable, Iterable, Optional

os.environ.setdefault("ENVIRONMENT", "test")

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from blog_search.api.dependencies.database import get_db, get_session_factory  # noqa: E402
from blog_search.auth import create_access_token  # noqa: E402
from blog_search.core.background import background_tasks  # noqa: E402
from blog_search.database import Base  # noqa: E402
from blog_search.main import app  # noqa: E402
from blog_search.models import Blog, BlogStatus, Category, SearchHistory, Tag, User, blog_likes  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def engine(tmp_path_factory):
    db_path = tmp_path_factory.mktemp("db") / "blog_search_test.db"
    test_engine = create_engine(
        f"sqlite:///{db_path}",
        future=True,
        connect_args={"check_same_thread": False, "timeout": 15},
    )
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory) -> Session:
    """Session for arranging and asserting test data."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """Test client with per-request sessions bound to the test database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def drain(client: TestClient) -> Callable[[], None]:
    """Block until background work spawned by requests has finished."""

    def _drain() -> None:
        client.portal.call(background_tasks.drain)

    return _drain


# Data builders


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    counter = {"n": 0}

    def _make(name: str = "Reader", avatar: Optional[str] = None) -> User:
        counter["n"] += 1
        user = User(name=name, email=f"user{counter['n']}@example.com", avatar=avatar)
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_category(db: Session) -> Callable[..., Category]:
    def _make(name: str, slug: Optional[str] = None) -> Category:
        category = Category(name=name, slug=slug or name.lower().replace(" ", "-"))
        db.add(category)
        db.commit()
        return category

    return _make


@pytest.fixture
def make_tag(db: Session) -> Callable[..., Tag]:
    def _make(name: str, display_name: Optional[str] = None, slug: Optional[str] = None) -> Tag:
        tag = Tag(name=name, display_name=display_name or name.title(), slug=slug or f"{name}-tag")
        db.add(tag)
        db.commit()
        return tag

    return _make


@pytest.fixture
def make_blog(db: Session) -> Callable[..., Blog]:
    counter = {"n": 0}

    def _make(
        *,
        author: User,
        category: Category,
        title: str = "Untitled",
        content: str = "Lorem ipsum",
        excerpt: str = "",
        tags: Iterable[Tag] = (),
        status: BlogStatus = BlogStatus.PUBLISHED,
        views: int = 0,
        created_at: Optional[datetime] = None,
        likers: Iterable[User] = (),
    ) -> Blog:
        counter["n"] += 1
        created = created_at or BASE_TIME + timedelta(minutes=counter["n"])
        blog = Blog(
            title=title,
            slug=f"post-{counter['n']}",
            content=content,
            excerpt=excerpt or content[:100],
            author_id=author.id,
            category_id=category.id,
            status=status.value,
            views=views,
            created_at=created,
            updated_at=created,
            published_at=created if status is BlogStatus.PUBLISHED else None,
        )
        blog.tags = list(tags)
        db.add(blog)
        db.flush()
        for liker in likers:
            db.execute(blog_likes.insert().values(blog_id=blog.id, user_id=liker.id))
        db.commit()
        return blog

    return _make


@pytest.fixture
def make_history(db: Session) -> Callable[..., SearchHistory]:
    def _make(
        user: User,
        query_text: str,
        created_at: datetime,
        result_count: int = 0,
        filters: Optional[dict] = None,
    ) -> SearchHistory:
        entry = SearchHistory(
            user_id=user.id,
            query_text=query_text,
            filters=filters or {},
            result_count=result_count,
            created_at=created_at,
        )
        db.add(entry)
        db.commit()
        return entry

    return _make


@pytest.fixture
def author(make_user) -> User:
    return make_user("Ada Writer", avatar="https://cdn.example.com/ada.png")


@pytest.fixture
def reader(make_user) -> User:
    return make_user("Rex Reader")


@pytest.fixture
def tech(make_category) -> Category:
    return make_category("Technology", "technology")


@pytest.fixture
def travel(make_category) -> Category:
    return make_category("Travel", "travel")


def auth_headers_for(user: User) -> dict:
    token = create_access_token(data={"sub": user.id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def reader_headers(reader: User) -> dict:
    return auth_headers_for(reader)
