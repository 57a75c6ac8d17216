"""
Session API Endpoints.

Administrator login and logout.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from blog.backend.core.dependencies import CurrentSession, DbSession, Locale
from blog.backend.core.exceptions import endpoint_errors
from blog.backend.core.responses import success_response
from blog.backend.schemas.base import SuccessResponse
from blog.backend.schemas.session import LoginRequest, TokenResponse
from blog.backend.services.auth import AuthService

router = APIRouter()


@router.post(
    "/login",
    response_model=SuccessResponse[TokenResponse],
    status_code=202,
    summary="Log in",
    description="Check the administrator credentials and open a session.",
)
async def login(
    data: LoginRequest,
    request: Request,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Open a session and return its token."""
    client_ip = request.client.host if request.client else None

    with endpoint_errors("indexApi-1002"):
        token = await AuthService(db).login(data.username, data.password, client_ip)

    return success_response(202, "indexApi-1000", TokenResponse(token=token), locale)


@router.post(
    "/logout",
    response_model=SuccessResponse[None],
    summary="Log out",
    description="Close the session holding the presented token.",
)
async def logout(
    session: CurrentSession,
    db: DbSession,
    locale: Locale,
) -> JSONResponse:
    """Close the current session."""
    with endpoint_errors("indexApi-1003"):
        await AuthService(db).logout(session)

    return success_response(200, "indexApi-1001", locale=locale)
