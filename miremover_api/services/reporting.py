"""Per-user period summaries and the global admin report."""
import enum
from datetime import date, datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from miremover_api.core.errors import NotFound
from miremover_api.models.stat import Stat
from miremover_api.models.user import User
from miremover_api.schemas.stats import (
    GlobalReportSchema,
    GlobalStatsSchema,
    StatOutSchema,
    StatsSummarySchema,
    TopUserSchema,
    UserStatsSchema,
)
from miremover_api.services import identity

TOP_USERS_LIMIT = 10


class Period(str, enum.Enum):
    NONE = "none"
    TODAY = "today"
    MONTH = "month"

    @classmethod
    def parse(cls, raw: str | None) -> "Period":
        """Absent or unknown values mean no filtering."""
        try:
            return cls(raw) if raw else cls.NONE
        except ValueError:
            return cls.NONE


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def summarize_rows(rows: list[Stat]) -> StatsSummarySchema:
    summary = StatsSummarySchema()
    for row in rows:
        for field in Stat.COUNTER_FIELDS:
            setattr(summary, field, getattr(summary, field) + (getattr(row, field) or 0))
    return summary


async def summarize(
    db: AsyncSession,
    user_id: str,
    period: Period = Period.NONE,
    today: date | None = None,
) -> UserStatsSchema:
    """Sum a user's counters over all rows, today's rows or this month's rows.

    The month filter is a prefix match on the stored date string ("2024-02"),
    so rows whose date is not in YYYY-MM-DD form never match it.
    """
    if await identity.find(db, user_id) is None:
        raise NotFound()

    today = today or utc_today()
    query = select(Stat).where(Stat.user_id == user_id)
    if period == Period.TODAY:
        query = query.where(Stat.date == today.isoformat())
    elif period == Period.MONTH:
        query = query.where(Stat.date.startswith(today.isoformat()[:7], autoescape=True))

    result = await db.execute(query.order_by(Stat.id.asc()))
    rows = list(result.scalars().all())

    return UserStatsSchema(
        summary=summarize_rows(rows),
        details=[StatOutSchema.model_validate(r) for r in rows],
    )


async def _global_stats(db: AsyncSession) -> GlobalStatsSchema:
    result = await db.execute(
        select(
            func.coalesce(func.sum(Stat.images_processed), 0),
            func.coalesce(func.sum(Stat.resize_operations), 0),
            func.coalesce(func.sum(Stat.bg_removal_operations), 0),
            func.coalesce(func.sum(Stat.face_crop_operations), 0),
            func.coalesce(func.sum(Stat.process_time), 0.0),
        )
    )
    images, resize, bg_removal, face_crop, total_time = result.one()
    return GlobalStatsSchema(
        total_images=images,
        total_resize=resize,
        total_bg_removal=bg_removal,
        total_face_crop=face_crop,
        total_time=total_time,
    )


async def _top_users(db: AsyncSession, limit: int = TOP_USERS_LIMIT) -> list[TopUserSchema]:
    """Users ranked by total images processed. Ties come back in database order."""
    total_images = func.coalesce(func.sum(Stat.images_processed), 0).label("total_images")
    total_time = func.coalesce(func.sum(Stat.process_time), 0.0).label("total_time")
    result = await db.execute(
        select(Stat.user_id, total_images, total_time)
        .group_by(Stat.user_id)
        .order_by(total_images.desc())
        .limit(limit)
    )
    ranked = result.all()
    if not ranked:
        return []

    users_result = await db.execute(
        select(User).where(User.user_id.in_([row.user_id for row in ranked]))
    )
    users = {u.user_id: u for u in users_result.scalars().all()}

    top = []
    for row in ranked:
        user = users.get(row.user_id)
        if user is None:
            # stats for an identity that no longer exists
            continue
        top.append(
            TopUserSchema(
                user_id=row.user_id,
                total_images=row.total_images,
                total_time=row.total_time,
                username=user.username,
                email=user.email,
                full_name=user.full_name,
            )
        )
    return top


async def global_report(db: AsyncSession) -> GlobalReportSchema:
    user_count = (await db.execute(select(func.count(User.id)))).scalar_one()
    return GlobalReportSchema(
        user_count=user_count,
        global_stats=await _global_stats(db),
        top_users=await _top_users(db),
    )
