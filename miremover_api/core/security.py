"""Static API key gate for every business route."""
import hmac

from fastapi import Request
from fastapi.responses import JSONResponse

from miremover_api.core.errors import Unauthorized

API_PREFIX = "/api/"
BEARER_PREFIX = "Bearer "


def extract_bearer_key(authorization: str | None) -> str | None:
    """Return the key from 'Bearer <key>', or None if the header is absent/malformed."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    parts = authorization.split(" ")
    return parts[1] if len(parts) > 1 else ""


def keys_match(provided: str, expected: str) -> bool:
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def check_api_key(authorization: str | None, expected: str) -> None:
    key = extract_bearer_key(authorization)
    if key is None:
        raise Unauthorized("Missing or malformed API key")
    if not keys_match(key, expected):
        raise Unauthorized("Invalid API key")


async def api_key_gate(request: Request, call_next):
    """HTTP middleware: reject /api/ calls before the body is read or a session is opened."""
    if request.url.path.startswith(API_PREFIX):
        try:
            check_api_key(
                request.headers.get("authorization"),
                request.app.state.context.settings.api_key,
            )
        except Unauthorized as exc:
            return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
    return await call_next(request)
