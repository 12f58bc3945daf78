"""
Authentication service for dashboard sign-in and token checks.
Maps credential failures to the fixed messages shown on the login form.
"""

from typing import Any, Mapping, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.models.user import User
from app.repositories.user import UserRepository
from app.utils.auth import create_access_token, verify_token, JWTError, ExpiredSignatureError
from app.utils.exceptions import (
    APIException,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    InactiveUserError,
    UnauthorizedError
)
import uuid
import logging

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_AUTH_FAILURE_MESSAGE = "Something went wrong."

MIN_PASSWORD_LENGTH = 6


class LoginSession:
    """A successful sign-in: the user and their access token."""

    def __init__(self, user: User, access_token: str):
        self.user = user
        self.access_token = access_token
        self.expires_in = settings.access_token_expire_minutes * 60


def auth_failure_message(exception: BaseException) -> Optional[str]:
    """
    Map a recognized authentication failure to its user-facing message.

    Returns:
        The fixed message, or None when the failure is not an authentication error
    """
    if isinstance(exception, InvalidCredentialsError):
        return INVALID_CREDENTIALS_MESSAGE
    if isinstance(exception, (UnauthorizedError, InactiveUserError)):
        return GENERIC_AUTH_FAILURE_MESSAGE
    return None


class AuthService:
    """
    Authentication service for the dashboard.
    Created per request; `session` holds the result of the last successful sign-in.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.session: Optional[LoginSession] = None

    async def authenticate_user(self, email: Optional[str], password: Optional[str]) -> User:
        """
        Authenticate user with email and password.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            Authenticated User object

        Raises:
            InvalidCredentialsError: If credentials are missing, malformed or wrong
            InactiveUserError: If user account is inactive
        """
        if not isinstance(email, str) or not email.strip():
            raise InvalidCredentialsError()
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidCredentialsError()

        user = await self.user_repo.authenticate_user(email, password)

        if not user:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        if not user.is_active:
            logger.warning(f"Inactive user attempted to sign in: {email}")
            raise InactiveUserError()

        logger.info(f"User authenticated successfully: {user.email}")
        return user

    async def sign_in(self, form: Mapping[str, Any]) -> LoginSession:
        """
        Sign in with a credentials form and issue an access token.

        Args:
            form: Raw form values for email and password

        Returns:
            LoginSession for the authenticated user
        """
        user = await self.authenticate_user(form.get("email"), form.get("password"))
        access_token = create_access_token(user_id=user.id, email=user.email)
        self.session = LoginSession(user, access_token)
        return self.session

    async def authenticate(self, form: Mapping[str, Any]) -> Optional[str]:
        """
        Login form action.

        Args:
            form: Raw form values for email and password

        Returns:
            None on success (the session is available on `self.session`),
            otherwise the user-facing failure message

        Raises:
            Exception: Any failure that is not an authentication error
        """
        try:
            await self.sign_in(form)
        except APIException as e:
            message = auth_failure_message(e)
            if message is None:
                raise
            return message
        return None

    async def get_current_user(self, token: str) -> User:
        """
        Get current user from access token.

        Args:
            token: JWT access token

        Returns:
            Current User object

        Raises:
            InvalidTokenError: If token is invalid or its user no longer exists
            TokenExpiredError: If token is expired
            InactiveUserError: If user account is inactive
        """
        try:
            token_payload = verify_token(token)
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            raise InvalidTokenError(str(e))

        try:
            user_id = uuid.UUID(token_payload.user_id)
        except ValueError:
            raise InvalidTokenError("Invalid token subject")

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise InvalidTokenError("User no longer exists")

        if not user.is_active:
            raise InactiveUserError()

        return user
