"""User routes: registration upsert and login bookkeeping."""
from fastapi import APIRouter, Response
from sqlalchemy.exc import SQLAlchemyError

from miremover_api.core.errors import Internal
from miremover_api.core.logger import get_logger
from miremover_api.db.session import DbSession
from miremover_api.schemas.user import LoginSchema, MessageSchema, RegisterSchema
from miremover_api.services import identity
from miremover_api.services.identity import RegistrationResult

router = APIRouter(prefix="/api/users", tags=["users"])
logger = get_logger(__name__)


@router.post(
    "/register",
    response_model=MessageSchema,
    status_code=201,
    responses={200: {"model": MessageSchema}, 409: {"description": "Username or email already in use"}},
)
async def register(body: RegisterSchema, db: DbSession, response: Response):
    """Register a new user (201) or overwrite a known user_id (200)."""
    try:
        outcome = await identity.register_or_update(db, body)
    except SQLAlchemyError:
        logger.exception("Registration failed for user_id=%s", body.user_id)
        raise Internal("Server error during registration")

    if outcome == RegistrationResult.UPDATED:
        response.status_code = 200
        return MessageSchema(message="User updated successfully")
    response.status_code = 201
    return MessageSchema(message="User registered successfully")


@router.post("/login", response_model=MessageSchema)
async def login(body: LoginSchema, db: DbSession):
    """Record the client-side login time for a known user."""
    try:
        await identity.record_login(db, body.user_id, body.timestamp)
    except SQLAlchemyError:
        logger.exception("Login bookkeeping failed for user_id=%s", body.user_id)
        raise Internal("Server error while recording login")
    return MessageSchema(message="Login recorded successfully")
