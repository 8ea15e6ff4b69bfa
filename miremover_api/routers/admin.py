"""Admin routes: user listing and the global usage report."""
from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from miremover_api.core.errors import Internal
from miremover_api.core.logger import get_logger
from miremover_api.db.session import DbSession
from miremover_api.schemas.stats import GlobalReportSchema
from miremover_api.schemas.user import UserListSchema, UserOutSchema
from miremover_api.services import identity, reporting

router = APIRouter(prefix="/api/admin", tags=["admin"])
logger = get_logger(__name__)


@router.get("/users", response_model=UserListSchema)
async def list_users(db: DbSession):
    try:
        users = await identity.list_all(db)
    except SQLAlchemyError:
        logger.exception("Listing users failed")
        raise Internal("Server error")
    return UserListSchema(users=[UserOutSchema.model_validate(u) for u in users])


@router.get("/stats", response_model=GlobalReportSchema)
async def global_stats(db: DbSession):
    try:
        return await reporting.global_report(db)
    except SQLAlchemyError:
        logger.exception("Global report failed")
        raise Internal("Server error")
