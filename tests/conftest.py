"""Pytest configuration and fixtures for portfolio admin tests."""
import base64
import os
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Callable

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test env BEFORE any app imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

# Clear config cache so get_settings picks up test env
from portfolio_admin.config import get_settings

get_settings.cache_clear()

from portfolio_admin.main import app
from portfolio_admin.database import get_db
from portfolio_admin.models.base import Base
from portfolio_admin.models.resume import Resume

# Import all models so Base.metadata has all tables
import portfolio_admin.models  # noqa: F401

TEST_DATABASE_URL = os.environ["DATABASE_URL"]

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in TEST_DATABASE_URL else {},
    poolclass=StaticPool if "sqlite" in TEST_DATABASE_URL else None,
    echo=False,
)

TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


def pdf_data_url(content: bytes = PDF_BYTES) -> str:
    return "data:application/pdf;base64," + base64.b64encode(content).decode("ascii")


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables and yield a test database session."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # fresh connection for the next test (each test runs on its own event loop)
    await test_engine.dispose()


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with overridden database dependency."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_resume(db_session: AsyncSession) -> Callable:
    """Insert a resume row directly, with a controllable upload time."""

    async def _make(
        file_name: str = "resume.pdf",
        *,
        is_active: bool = False,
        minutes_ago: int = 0,
        file_data: str | None = None,
    ) -> Resume:
        resume = Resume(
            file_name=file_name,
            file_data=pdf_data_url() if file_data is None else file_data,
            is_active=is_active,
            uploaded_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        )
        db_session.add(resume)
        await db_session.commit()
        await db_session.refresh(resume)
        return resume

    return _make
