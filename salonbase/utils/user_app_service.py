from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from salonbase.models.user_model import User
from salonbase.schemas.user_schema import (
    UserCreate,
    UserOut,
    UserLogin,
    LoginResponse,
    RefreshTokenRequest,
    RefreshTokenResponse,
)
from salonbase.security.auth import (
    authenticate_user,
    create_token_pair,
    verify_refresh_token,
)
from salonbase.services.user_crud import user_crud
from salonbase.utils.token_blacklist import token_blacklist_service
from salonbase.logger import get_logger

logger = get_logger(__name__)


class UserService:
    """Account flows that hand out or revoke tokens"""

    @staticmethod
    def _login_response(user: User) -> LoginResponse:
        access_token, refresh_token = create_token_pair(user)
        return LoginResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            token_type="bearer",
            user=UserOut.model_validate(user),
        )

    @staticmethod
    def register_user(db: Session, user_create: UserCreate) -> LoginResponse:
        user = user_crud.create_user(db, user_create)
        logger.info(f"User registered: {user.email}")
        return UserService._login_response(user)

    @staticmethod
    def login_user(db: Session, user_login: UserLogin) -> LoginResponse:
        user = authenticate_user(db, user_login.email, user_login.password)
        logger.info(f"User logged in: {user.email}")
        return UserService._login_response(user)

    @staticmethod
    def logout_user(db: Session, user: User, access_token: str, refresh_token: str) -> None:
        """Revoke both tokens of the session; the refresh token must belong to ``user``"""
        session_user = verify_refresh_token(refresh_token, db)
        if str(session_user.id) != str(user.id):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid refresh token",
                headers={"WWW-Authenticate": "Bearer"},
            )

        token_blacklist_service.blacklist_token(
            db, access_token, token_blacklist_service.token_expiry(access_token)
        )
        token_blacklist_service.blacklist_token(
            db, refresh_token, token_blacklist_service.token_expiry(refresh_token)
        )
        logger.info(f"User logged out: {user.email}")

    @staticmethod
    def refresh_access_token(db: Session, refresh_request: RefreshTokenRequest) -> RefreshTokenResponse:
        """Rotate tokens: the presented refresh token is revoked and a fresh pair issued"""
        user = verify_refresh_token(refresh_request.refresh_token, db)
        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User account is deactivated",
            )

        token_blacklist_service.blacklist_token(
            db,
            refresh_request.refresh_token,
            token_blacklist_service.token_expiry(refresh_request.refresh_token),
        )
        access_token, refresh_token = create_token_pair(user)
        logger.info(f"Tokens refreshed for user: {user.email}")
        return RefreshTokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            token_type="bearer",
        )


user_app_service = UserService()
