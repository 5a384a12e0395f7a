"""
Authentication service for password and Google OAuth sign-in.
"""
import logging
from datetime import datetime
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from diary_api.core.constants import PasswordPolicy
from diary_api.core.exceptions import DiaryAppError, ValidationError
from diary_api.core.passwords import compare_password, hash_password
from diary_api.core.security import TokenService
from diary_api.core.validation import is_blank, is_valid_email
from diary_api.models.user import User
from diary_api.schemas.auth import GoogleUserInfo, LoginRequest, SignupRequest
from diary_api.services.google_oauth import GoogleOAuthClient
from diary_api.services.user_service import UserService

logger = logging.getLogger(__name__)


class EmailAlreadyExistsError(DiaryAppError):
    status_code = 409
    message = "Email already exists"


class InvalidCredentialsError(DiaryAppError):
    status_code = 401
    message = "Invalid email or password"


class AuthService:
    """Service for authentication operations."""

    def __init__(self, token_service: TokenService):
        self.token_service = token_service
        self.user_service = UserService()

    def create_token_for_user(self, user: User) -> str:
        """
        Create the session JWT for a user.

        Args:
            user: User row

        Returns:
            JWT string to store in the auth-token cookie
        """
        return self.token_service.sign_session_token(user.user_id, user.email)

    async def signup(self, request: SignupRequest, db: AsyncSession) -> Tuple[User, str]:
        """
        Register a password account.

        Returns:
            Tuple of (created user, session token)

        Raises:
            ValidationError: On the first invalid field
            EmailAlreadyExistsError: If the email is taken
        """
        if not request.email:
            raise ValidationError("Email is required")
        if not is_valid_email(request.email):
            raise ValidationError("Invalid email format")
        if not request.password:
            raise ValidationError("Password is required")
        if len(request.password) < PasswordPolicy.MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PasswordPolicy.MIN_LENGTH} characters long"
            )
        if request.password != request.passwordConfirm:
            raise ValidationError("Passwords do not match")
        if is_blank(request.nickname):
            raise ValidationError("Nickname is required")

        email = request.email.lower()
        existing = await self.user_service.get_user_by_email(email, db)
        if existing:
            raise EmailAlreadyExistsError()


        password_hash = hash_password(request.password)
        try:
            user = await self.user_service.create_user(
                email=email,
                nickname=request.nickname.strip(),
                password_hash=password_hash,
                db=db,
            )
        except IntegrityError:
            # A concurrent signup took the email after the lookup
            await db.rollback()
            raise EmailAlreadyExistsError()
        logger.info("User signed up: %s", user.user_id)

        return user, self.create_token_for_user(user)

    async def login(self, request: LoginRequest, db: AsyncSession) -> Tuple[User, str]:
        """
        Authenticate with email and password.

        Unknown email, Google-only accounts and wrong passwords all raise the
        same error so responses do not reveal which accounts exist.
        """
        if not request.email or not request.password:
            raise ValidationError("Email and password are required")

        user = await self.user_service.get_user_by_email(request.email.lower(), db)
        if user is None or not user.password_hash:
            raise InvalidCredentialsError()

        try:
            matches = compare_password(request.password, user.password_hash)
        except ValidationError:
            logger.error("Stored password hash is malformed for user %s", user.user_id)
            raise InvalidCredentialsError()

        if not matches:
            raise InvalidCredentialsError()

        user.last_active_at = datetime.utcnow()
        await db.commit()
        await db.refresh(user)

        return user, self.create_token_for_user(user)

    async def get_or_create_google_user(
        self, google_user: GoogleUserInfo, db: AsyncSession
    ) -> User:
        """
        Upsert a user by Google email.

        New accounts get the Google display name (or the email's local part)
        as nickname and no password; existing accounts only have their
        activity timestamp refreshed.
        """
        email = google_user.email.lower()
        user = await self.user_service.get_user_by_email(email, db)

        if user:
            user.last_active_at = datetime.utcnow()
            await db.commit()
            await db.refresh(user)
            return user

        nickname = google_user.name or email.split("@")[0]
        try:
            user = await self.user_service.create_user(email=email, nickname=nickname, db=db)
        except IntegrityError:
            # A concurrent sign-in created the account after the lookup
            await db.rollback()
            user = await self.user_service.get_user_by_email(email, db)
            if user is None:
                raise
            return user

        logger.info("User created from Google sign-in: %s", user.user_id)
        return user

    async def authenticate_with_google(
        self,
        code: str,
        oauth_client: GoogleOAuthClient,
        db: AsyncSession,
    ) -> Tuple[User, str]:
        """
        Complete the Google OAuth flow.

        Args:
            code: Authorization code from Google
            oauth_client: Configured Google client
            db: Database session

        Returns:
            Tuple of (user, session token)
        """
        # Exchange code for Google access token
        token_response = await oauth_client.exchange_code_for_token(code)

        # Get user info from Google
        google_user = await oauth_client.get_google_user_info(token_response.access_token)

        user = await self.get_or_create_google_user(google_user, db)

        return user, self.create_token_for_user(user)
