"""Declarative base, engine/session factories and the request-scoped session dependency."""
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# async driver the app runs on -> sync driver Alembic migrates with
SYNC_DRIVERS = {
    "sqlite+aiosqlite": "sqlite",
    "postgresql+asyncpg": "postgresql+psycopg2",
}


def is_sqlite(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


def sync_database_url(database_url: str) -> str:
    """Same database, sync driver. URLs already on a sync driver pass through."""
    url = make_url(database_url)
    driver = SYNC_DRIVERS.get(url.drivername)
    if driver is None:
        return database_url
    return url.set(drivername=driver).render_as_string(hide_password=False)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    kwargs = {"echo": echo, "future": True}
    if is_sqlite(database_url):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_pre_ping"] = True
    return create_async_engine(database_url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create missing tables. Alembic owns schema changes after the first deploy."""
    # register models on Base.metadata
    import miremover_api.db.base  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """One session per request, taken from the app context's factory."""
    session_factory = request.app.state.context.session_factory
    async with session_factory() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]
