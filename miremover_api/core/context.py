"""Application context: everything a request handler needs, built once at startup."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from miremover_api.core.config import Settings
from miremover_api.db.session import build_engine, build_session_factory


@dataclass
class AppContext:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        engine = build_engine(settings.database_url, echo=settings.debug)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
        )

    async def dispose(self) -> None:
        await self.engine.dispose()
