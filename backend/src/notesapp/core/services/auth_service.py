"""Authentication service implementation."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...exceptions import NotFoundError, ValidationError
from ...security import blacklist_token, create_access_token, hash_password, verify_password
from ..logging import get_logger
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from .interfaces import IAuthService

logger = get_logger("services.auth")

USER_EXISTS_MESSAGE = "User with this email or username already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def register_user(self, request: RegisterRequest) -> AuthResponse:
        """Register new user."""
        if await self.user_repo.exists_with_email_or_username(request.email, request.username):
            raise ValidationError(USER_EXISTS_MESSAGE)

        user_data = {
            "username": request.username,
            "email": request.email,
            "password_hash": hash_password(request.password),
        }

        try:
            user = await self.user_repo.create_user(user_data)
        except IntegrityError as exc:
            # lost a race against a concurrent registration
            await self.session.rollback()
            raise ValidationError(USER_EXISTS_MESSAGE) from exc

        logger.info("User registered", extra={"user_id": str(user.id)})
        return self._auth_response("User registered successfully", user)

    async def authenticate_user(self, request: LoginRequest) -> AuthResponse:
        """Login user and return a JWT."""
        user = await self.user_repo.get_by_email(request.email)
        if not user or not verify_password(request.password, user.password_hash):
            raise ValidationError(INVALID_CREDENTIALS_MESSAGE)

        return self._auth_response("Login successful", user)

    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserResponse.model_validate(user)

    async def logout_user(self, access_token: str) -> bool:
        """Revoke the access token; a Redis outage does not fail logout."""
        try:
            return await blacklist_token(access_token)
        except Exception as e:
            logger.warning(f"Failed to blacklist token in Redis: {e}")
            return False

    @staticmethod
    def _auth_response(message: str, user: User) -> AuthResponse:
        access_token = create_access_token(data={"sub": str(user.id)})
        return AuthResponse(
            message=message,
            token=access_token,
            user=UserResponse.model_validate(user),
        )
