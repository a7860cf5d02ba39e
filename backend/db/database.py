from collections.abc import AsyncGenerator
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from core.config import settings


class Base(DeclarativeBase):
    pass


engine = create_async_engine(settings.database_url, echo=settings.database_echo)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


def safe_database_url(url: str = settings.database_url) -> str:
    """Database URL with the password masked, for logs."""
    return make_url(url).render_as_string(hide_password=True)


async def create_db_and_tables(bind: AsyncEngine = engine):
    from db import food_item  # noqa: F401  registers food_items on Base.metadata

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session
