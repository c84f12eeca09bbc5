from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from uuid import UUID
from typing import Optional
from salonbase.services.user_crud import user_crud
from salonbase.schemas.common_schema import ApiResponse, Page, ERROR_RESPONSES
from salonbase.schemas.user_schema import UserOut, UserUpdate, UserStats, Role
from salonbase.database import get_db
from salonbase.security.auth import get_current_admin_user
from salonbase.models.user_model import User
from salonbase.logger import get_logger

# Every user management endpoint is admin only
user_router = APIRouter(prefix="/users", responses=ERROR_RESPONSES)
logger = get_logger(__name__)


@user_router.get("", response_model=ApiResponse[Page[UserOut]], status_code=status.HTTP_200_OK)
def get_all_users(
        page: int = Query(1, ge=1, description="Page number"),
        limit: int = Query(50, ge=1, le=100, description="Users per page"),
        role: Optional[Role] = Query(None, description="Filter by role"),
        is_active: Optional[bool] = Query(None, description="Filter by active flag"),
        search: Optional[str] = Query(None, description="Search name or email"),
        current_user: User = Depends(get_current_admin_user),
        db: Session = Depends(get_db)
):
    try:
        logger.info(f"Admin {current_user.email} fetching users list")
        users, pagination = user_crud.get_users(
            db,
            page=page,
            limit=limit,
            role=role.value if role else None,
            is_active=is_active,
            search=search,
        )
        return ApiResponse(
            data=Page(items=[UserOut.model_validate(user) for user in users], pagination=pagination)
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching users: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching users"
        )


@user_router.get("/stats", response_model=ApiResponse[UserStats], status_code=status.HTTP_200_OK)
def get_user_stats(
        current_user: User = Depends(get_current_admin_user),
        db: Session = Depends(get_db)
):
    logger.info(f"Admin {current_user.email} fetching user stats")
    return ApiResponse(data=user_crud.get_user_stats(db))


@user_router.get("/{user_id}", response_model=ApiResponse[UserOut], status_code=status.HTTP_200_OK)
def get_user_by_id(
        user_id: UUID,
        current_user: User = Depends(get_current_admin_user),
        db: Session = Depends(get_db)
):
    """Get user by ID (admin only)"""
    logger.info(f"Admin {current_user.email} fetching user {user_id}")
    user = user_crud.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return ApiResponse(data=UserOut.model_validate(user))


@user_router.put("/{user_id}", response_model=ApiResponse[UserOut], status_code=status.HTTP_200_OK)
def update_user_by_id(
        user_id: UUID,
        user_update: UserUpdate,
        current_user: User = Depends(get_current_admin_user),
        db: Session = Depends(get_db)
):
    """Update user by ID (admin only)"""
    try:
        logger.info(f"Admin {current_user.email} updating user {user_id}")
        updated_user = user_crud.update_user(db, user_id, user_update)
        return ApiResponse(data=UserOut.model_validate(updated_user), message="User updated successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while updating user"
        )


@user_router.delete("/{user_id}", response_model=ApiResponse[None], status_code=status.HTTP_200_OK)
def delete_user_by_id(
        user_id: UUID,
        current_user: User = Depends(get_current_admin_user),
        db: Session = Depends(get_db)
):
    """Delete user by ID (admin only, never yourself)"""
    try:
        logger.info(f"Admin {current_user.email} deleting user {user_id}")
        user_crud.delete_user(db, user_id, current_user.id)
        return ApiResponse(message="User deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while deleting user"
        )
