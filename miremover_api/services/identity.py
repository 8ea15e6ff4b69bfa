"""Identity store access: registration upsert, login bookkeeping, admin reads."""
import enum
from datetime import datetime, timezone

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from miremover_api.core.errors import Conflict, NotFound
from miremover_api.core.logger import get_logger
from miremover_api.models.user import User
from miremover_api.schemas.user import RegisterSchema

logger = get_logger(__name__)


class RegistrationResult(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def find(db: AsyncSession, user_id: str) -> User | None:
    result = await db.execute(select(User).where(User.user_id == user_id))
    return result.scalar_one_or_none()


async def list_all(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.id.asc()))
    return list(result.scalars().all())


async def register_or_update(db: AsyncSession, payload: RegisterSchema) -> RegistrationResult:
    """Create the user, or overwrite username/email/full_name for a known user_id.

    Raises Conflict when the username or email belongs to another user_id.
    """
    result = await db.execute(
        select(User).where(
            or_(
                User.user_id == payload.user_id,
                User.username == payload.username,
                User.email == payload.email,
            )
        )
    )
    matches = list(result.scalars().all())

    if any(u.user_id != payload.user_id for u in matches):
        logger.info("Registration conflict for user_id=%s", payload.user_id)
        raise Conflict()

    if matches:
        user = matches[0]
        user.username = payload.username
        user.email = payload.email
        user.full_name = payload.full_name
        outcome = RegistrationResult.UPDATED
    else:
        user = User(
            user_id=payload.user_id,
            username=payload.username,
            email=payload.email,
            full_name=payload.full_name,
            created_at=payload.created_at or utcnow(),
            is_active=True,
        )
        db.add(user)
        outcome = RegistrationResult.CREATED

    try:
        await db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration
        await db.rollback()
        logger.info("Registration conflict on commit for user_id=%s", payload.user_id)
        raise Conflict()

    logger.info("User %s %s", payload.user_id, outcome.value)
    return outcome


async def record_login(db: AsyncSession, user_id: str, timestamp: datetime | None = None) -> User:
    user = await find(db, user_id)
    if user is None:
        raise NotFound()

    user.last_login = timestamp or utcnow()
    await db.commit()
    logger.info("Login recorded for user_id=%s", user_id)
    return user
