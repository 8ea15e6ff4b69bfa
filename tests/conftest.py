"""Shared fixtures: a throwaway SQLite database per test."""
import pytest
from fastapi.testclient import TestClient

from miremover_api.core.config import Settings
from miremover_api.core.context import AppContext
from miremover_api.db.session import create_all
from miremover_api.main import create_app
from miremover_api.schemas.user import RegisterSchema
from miremover_api.services import identity

API_KEY = "test-secret-key"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'miremover_test.db'}",
        api_key=API_KEY,
        log_level="WARNING",
    )


@pytest.fixture
async def db(settings):
    context = AppContext.from_settings(settings)
    await create_all(context.engine)
    async with context.session_factory() as session:
        yield session
    await context.dispose()


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {API_KEY}"}


async def make_user(db, user_id: str, username: str | None = None, email: str | None = None):
    await identity.register_or_update(
        db,
        RegisterSchema(
            user_id=user_id,
            username=username or f"user_{user_id}",
            email=email or f"{user_id}@example.com",
            full_name=f"User {user_id}",
        ),
    )
    return await identity.find(db, user_id)


def report(stat_id: str, user_id: str, date: str = "2024-02-01", **counters) -> dict:
    data = {
        "stat_id": stat_id,
        "user_id": user_id,
        "date": date,
        "images_processed": 0,
        "resize_operations": 0,
        "bg_removal_operations": 0,
        "face_crop_operations": 0,
        "process_time": 0.0,
    }
    data.update(counters)
    return data
