"""Service errors. Each maps to one HTTP status and renders as {"error": message}."""


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ServiceError):
    status_code = 401
    default_message = "Missing or invalid API key"


class BadRequest(ServiceError):
    status_code = 400
    default_message = "Bad request"


class NotFound(ServiceError):
    status_code = 404
    default_message = "User not found"


class Conflict(ServiceError):
    status_code = 409
    default_message = "Username or email already in use"


class Internal(ServiceError):
    status_code = 500
