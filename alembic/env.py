"""Migrations for the users/stats schema, run on the sync twin of the app's database_url."""
from logging.config import fileConfig
import os

from alembic import context
from sqlalchemy import create_engine, pool

from miremover_api.core.config import get_settings
from miremover_api.db.base import Base
from miremover_api.db.session import is_sqlite, sync_database_url

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def migration_url() -> str:
    # ALEMBIC_DATABASE_URL lets ops point at a different database than the app
    return os.getenv("ALEMBIC_DATABASE_URL") or sync_database_url(get_settings().database_url)


def run() -> None:
    url = migration_url()
    options = {
        "target_metadata": Base.metadata,
        "compare_type": True,
        # SQLite can't ALTER most columns in place
        "render_as_batch": is_sqlite(url),
    }

    if context.is_offline_mode():
        context.configure(url=url, literal_binds=True, **options)
        with context.begin_transaction():
            context.run_migrations()
        return

    engine = create_engine(url, poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, **options)
        with context.begin_transaction():
            context.run_migrations()


run()
