"""SQLAlchemy declarative base and model imports for Alembic."""
from miremover_api.db.session import Base

# Import all models so Alembic can see them
from miremover_api.models.stat import Stat  # noqa: F401
from miremover_api.models.user import User  # noqa: F401

__all__ = ["Base", "User", "Stat"]
