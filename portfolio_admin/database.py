import re

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .config import get_settings


settings = get_settings()

# Hosted Postgres URLs come as postgres:// or postgresql://; the app needs the asyncpg driver
DATABASE_URL = re.sub(r"^postgres(ql)?://", "postgresql+asyncpg://", settings.database_url)

engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    pool_pre_ping=DATABASE_URL.startswith("postgresql"),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session
