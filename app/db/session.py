import app.db.base  # noqa: F401

from collections.abc import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.config import settings
from app.db.base_class import Base  # noqa: F401


def _engine_kwargs(database_url: str) -> dict[str, object]:
    kwargs: dict[str, object] = {"echo": settings.env == "local"}
    if make_url(database_url).get_backend_name() != "sqlite":
        kwargs["pool_pre_ping"] = True
    if settings.env == "test":
        # Tests drop/create the schema between cases; never reuse connections.
        kwargs["poolclass"] = NullPool
    return kwargs


engine = create_async_engine(
    settings.database_url,
    **_engine_kwargs(settings.database_url),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
