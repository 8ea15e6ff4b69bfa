"""Stats routes: batch sync from clients and per-user summaries."""
from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from miremover_api.core.errors import Internal
from miremover_api.core.logger import get_logger
from miremover_api.db.session import DbSession
from miremover_api.schemas.stats import StatsUpdateResultSchema, StatsUpdateSchema, UserStatsSchema
from miremover_api.services import reconciliation, reporting
from miremover_api.services.reporting import Period

router = APIRouter(prefix="/api/stats", tags=["stats"])
logger = get_logger(__name__)


@router.post("/update", response_model=StatsUpdateResultSchema, response_model_exclude_none=True)
async def update_stats(body: StatsUpdateSchema, db: DbSession):
    """Upsert a batch of daily counters. Always 200 for a well-formed batch; check per-item results."""
    try:
        results = await reconciliation.reconcile(db, body.stats)
    except SQLAlchemyError:
        logger.exception("Stats batch failed")
        raise Internal("Server error while updating statistics")
    return StatsUpdateResultSchema(results=results)


@router.get("/{user_id}", response_model=UserStatsSchema)
async def get_user_stats(user_id: str, db: DbSession, period: str | None = None):
    """Summary and rows for one user; period is 'today', 'month' or omitted for all time."""
    try:
        return await reporting.summarize(db, user_id, Period.parse(period))
    except SQLAlchemyError:
        logger.exception("Stats lookup failed for user_id=%s", user_id)
        raise Internal("Server error while fetching statistics")
