"""Batch ingest of client-side daily counters.

Every report is resolved on its own: a report for an unknown user or a
malformed report becomes an ``error`` outcome and the rest of the batch still
runs. Each created/updated row is committed before the next report is read,
so a persistence failure mid-batch leaves earlier items applied.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from miremover_api.core.errors import BadRequest
from miremover_api.core.logger import get_logger
from miremover_api.models.stat import Stat
from miremover_api.schemas.stats import StatOutcomeSchema, StatReportSchema
from miremover_api.services import identity

logger = get_logger(__name__)

STATUS_CREATED = "created"
STATUS_UPDATED = "updated"
STATUS_ERROR = "error"

MSG_USER_NOT_FOUND = "User not found"
MSG_INVALID_REPORT = "Invalid stat report"


@dataclass
class BatchCounts:
    created: int = 0
    updated: int = 0
    errors: int = 0

    def add(self, outcome: StatOutcomeSchema) -> None:
        if outcome.status == STATUS_CREATED:
            self.created += 1
        elif outcome.status == STATUS_UPDATED:
            self.updated += 1
        else:
            self.errors += 1


def _raw_stat_id(item: Any) -> str | None:
    if isinstance(item, dict):
        value = item.get("stat_id")
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return str(value)
    return None


async def _find_stat(db: AsyncSession, stat_id: str) -> Stat | None:
    result = await db.execute(select(Stat).where(Stat.stat_id == stat_id))
    return result.scalar_one_or_none()


async def apply_report(db: AsyncSession, report: StatReportSchema) -> StatOutcomeSchema:
    """Upsert one report keyed by stat_id. Counters are replaced, never added."""
    user = await identity.find(db, report.user_id)
    if user is None:
        return StatOutcomeSchema(stat_id=report.stat_id, status=STATUS_ERROR, message=MSG_USER_NOT_FOUND)

    stat = await _find_stat(db, report.stat_id)
    now = datetime.now(timezone.utc)

    if stat is not None:
        # date and user_id stay as first reported
        for field, value in report.counters().items():
            setattr(stat, field, value)
        stat.sync_timestamp = now
        await db.commit()
        return StatOutcomeSchema(stat_id=report.stat_id, status=STATUS_UPDATED)

    db.add(
        Stat(
            stat_id=report.stat_id,
            user_id=report.user_id,
            date=report.date,
            sync_timestamp=now,
            **report.counters(),
        )
    )
    await db.commit()
    return StatOutcomeSchema(stat_id=report.stat_id, status=STATUS_CREATED)


async def reconcile(db: AsyncSession, reports: Any) -> list[StatOutcomeSchema]:
    """Apply a batch of reports in order, one outcome per report."""
    if not isinstance(reports, list) or not reports:
        raise BadRequest("No statistics provided")

    outcomes: list[StatOutcomeSchema] = []
    counts = BatchCounts()
    for item in reports:
        try:
            report = StatReportSchema.model_validate(item)
        except ValidationError:
            outcome = StatOutcomeSchema(stat_id=_raw_stat_id(item), status=STATUS_ERROR, message=MSG_INVALID_REPORT)
        else:
            outcome = await apply_report(db, report)
        counts.add(outcome)
        outcomes.append(outcome)

    logger.info(
        "Stats batch of %d: %d created, %d updated, %d errors",
        len(reports), counts.created, counts.updated, counts.errors,
    )
    return outcomes
