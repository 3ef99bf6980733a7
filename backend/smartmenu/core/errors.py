"""Domain errors and their HTTP mapping.

Services raise these; the exception handler registered in ``main`` turns
them into ``{"detail": ...}`` responses with the matching status code.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse


class SmartMenuError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Request failed"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class DuplicateUsername(SmartMenuError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Error: Username is already taken!"


class DuplicateEmail(SmartMenuError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Error: Email is already in use!"


class InvalidCredentials(SmartMenuError):
    """Unknown username, wrong password and inactive accounts all map here."""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid username or password"


class NotFound(SmartMenuError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class InvalidRequest(SmartMenuError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid request"


# Token validation failures. The authentication gate catches these and
# treats the request as anonymous, so they never reach the handler below.

class TokenError(SmartMenuError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid token"


class BadSignature(TokenError):
    detail = "Invalid token signature"


class Malformed(TokenError):
    detail = "Malformed token"


class Expired(TokenError):
    detail = "Token has expired"


class Unsupported(TokenError):
    detail = "Unsupported token"


async def smartmenu_error_handler(request: Request, exc: SmartMenuError) -> JSONResponse:
    """Render a domain error as JSON."""
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )
