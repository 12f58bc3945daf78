"""
Authentication API endpoints for dashboard sign-in.
Accepts the credentials form and returns a JWT access token.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from app.models.user import User
from app.services.auth import AuthService
from app.schemas.auth import CurrentUserResponse, LoginResponse, LoginErrorResponse
from app.schemas.error import get_error_responses
from app.routers.common import read_form
from app.utils.dependencies import get_auth_service, get_current_active_user


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Sign in with the email and password form fields. Returns a JWT access token.",
    responses={401: {"description": "Sign-in failed", "model": LoginErrorResponse}}
)
async def login(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Run the authenticate action on the submitted credentials.

    Recognized credential failures return their fixed message with 401;
    anything else propagates to the global exception handlers.
    """
    form = await read_form(request)
    message = await auth_service.authenticate(form)

    if message is not None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=LoginErrorResponse(message=message).model_dump()
        )

    session = auth_service.session
    return LoginResponse(
        user=CurrentUserResponse.model_validate(session.user.to_dict()),
        access_token=session.access_token,
        token_type="bearer",
        expires_in=session.expires_in
    )


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Get current user",
    responses=get_error_responses(401, 403)
)
async def get_current_user_info(
    current_user: User = Depends(get_current_active_user)
) -> CurrentUserResponse:
    return CurrentUserResponse.model_validate(current_user.to_dict())
