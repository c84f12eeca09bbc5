from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from typing import Annotated
from salonbase.services.user_crud import user_crud
from salonbase.schemas.common_schema import ApiResponse, ERROR_RESPONSES
from salonbase.schemas.user_schema import (
    UserCreate, UserOut, ProfileUpdate, UserLogin, LoginResponse,
    RefreshTokenRequest, RefreshTokenResponse,
)
from salonbase.database import get_db
from salonbase.security.auth import oauth2_scheme, get_current_active_user
from salonbase.utils.user_app_service import user_app_service
from salonbase.models.user_model import User
from salonbase.logger import get_logger

auth_router = APIRouter(prefix="/auth", responses=ERROR_RESPONSES)
logger = get_logger(__name__)


@auth_router.post(
    "/register", response_model=ApiResponse[LoginResponse], status_code=status.HTTP_201_CREATED
)
def register_user(user: UserCreate, db: Session = Depends(get_db)):
    """Register a new customer account and log it in"""
    try:
        logger.info(f"Registering user: {user.email}")
        data = user_app_service.register_user(db, user)
        return ApiResponse(data=data, message="User registered successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error registering user {user.email}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while registering user"
        )


@auth_router.post("/login", response_model=ApiResponse[LoginResponse], status_code=status.HTTP_200_OK)
def login_user(user_login: UserLogin, db: Session = Depends(get_db)):
    """Login user and return access and refresh tokens"""
    try:
        logger.info(f"Login attempt for user: {user_login.email}")
        data = user_app_service.login_user(db, user_login)
        return ApiResponse(data=data, message="Login successful")
    except HTTPException:
        logger.warning(f"Failed login attempt for email: {user_login.email}")
        raise
    except Exception as e:
        logger.error(f"Error during login for {user_login.email}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred during login"
        )


@auth_router.post("/token", response_model=LoginResponse)
def user_token(
        form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
        db: Session = Depends(get_db),
):
    """OAuth2 password flow used by the interactive API docs"""
    logger.info(f"Token request for user: {form_data.username}")
    user_login = UserLogin(email=form_data.username, password=form_data.password)
    return user_app_service.login_user(db, user_login)


@auth_router.post("/logout", response_model=ApiResponse[None], status_code=status.HTTP_200_OK)
def logout_user(
        refresh_request: RefreshTokenRequest,
        current_user: User = Depends(get_current_active_user),
        token: str = Depends(oauth2_scheme),
        db: Session = Depends(get_db)
):
    """Logout user by blacklisting both access and refresh tokens"""
    try:
        user_app_service.logout_user(db, current_user, token, refresh_request.refresh_token)
        return ApiResponse(message="Successfully logged out")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during logout for user {current_user.email}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred during logout"
        )


@auth_router.post("/refresh", response_model=ApiResponse[RefreshTokenResponse], status_code=status.HTTP_200_OK)
def refresh_access_token(refresh_request: RefreshTokenRequest, db: Session = Depends(get_db)):
    """Refresh access token using valid refresh token"""
    try:
        logger.info("Refreshing access token")
        return ApiResponse(data=user_app_service.refresh_access_token(db, refresh_request))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error refreshing token: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while refreshing token"
        )


@auth_router.get("/me", response_model=ApiResponse[UserOut], status_code=status.HTTP_200_OK)
def get_current_user_profile(current_user: User = Depends(get_current_active_user)):
    return ApiResponse(data=UserOut.model_validate(current_user))


@auth_router.put("/me", response_model=ApiResponse[UserOut], status_code=status.HTTP_200_OK)
def update_current_user_profile(
        profile_update: ProfileUpdate,
        current_user: User = Depends(get_current_active_user),
        db: Session = Depends(get_db)
):
    """Update own name, phone or password"""
    logger.info(f"User updating profile: {current_user.email}")
    updated_user = user_crud.update_profile(db, current_user, profile_update)
    return ApiResponse(data=UserOut.model_validate(updated_user), message="Profile updated successfully")
