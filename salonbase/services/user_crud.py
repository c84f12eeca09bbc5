from datetime import datetime, timedelta, timezone
from fastapi import HTTPException, status
from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.orm import Session
from salonbase.schemas.common_schema import Pagination
from salonbase.schemas.user_schema import UserCreate, UserUpdate, ProfileUpdate, UserStats
from salonbase.models.user_model import User
from salonbase.security.auth import get_password_hash
from salonbase.utils.pagination import paginate
from salonbase.logger import get_logger

logger = get_logger(__name__)


class UserCRUD:
    @staticmethod
    def get_user_by_id(db: Session, user_id: UUID) -> Optional[User]:
        return db.query(User).filter(User.id == str(user_id)).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_users(
            db: Session,
            page: int = 1,
            limit: int = 50,
            role: Optional[str] = None,
            is_active: Optional[bool] = None,
            search: Optional[str] = None,
    ) -> Tuple[List[User], Pagination]:
        """Get users with optional filtering, newest first"""
        query = db.query(User)

        if role:
            query = query.filter(User.role == role)
        if is_active is not None:
            query = query.filter(User.is_active == is_active)
        if search:
            query = query.filter(
                or_(User.name.ilike(f"%{search}%"), User.email.ilike(f"%{search}%"))
            )

        return paginate(query.order_by(User.created_at.desc()), page, limit)

    @staticmethod
    def create_user(db: Session, user: UserCreate) -> User:
        if UserCRUD.get_user_by_email(db, user.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User with this email already exists",
            )

        try:
            db_user = User(
                name=user.name,
                email=user.email,
                phone=user.phone,
                password_hash=get_password_hash(user.password),
                role="user",
                is_active=True,
            )
            db.add(db_user)
            db.commit()
            db.refresh(db_user)
            return db_user

        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user {user.email}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while creating user",
            )

    @staticmethod
    def update_user(db: Session, user_id: UUID, user_update: UserUpdate) -> User:
        """Admin update of any account"""
        db_user = UserCRUD.get_user_by_id(db, user_id)
        if not db_user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        update_data = user_update.model_dump(exclude_unset=True)
        new_email = update_data.get("email")
        if new_email and new_email != db_user.email:
            email_taken = db.query(User).filter(
                User.email == new_email, User.id != db_user.id
            ).first()
            if email_taken:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Email already exists",
                )

        try:
            for key, value in update_data.items():
                if value is not None:
                    setattr(db_user, key, value.value if key == "role" else value)

            db.commit()
            db.refresh(db_user)
            logger.info(f"User updated: {user_id}")
            return db_user

        except Exception as e:
            db.rollback()
            logger.error(f"Error updating user {user_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while updating user",
            )

    @staticmethod
    def update_profile(db: Session, db_user: User, profile_update: ProfileUpdate) -> User:
        """Self-service update; role and active flag are never touched here"""
        try:
            for key, value in profile_update.model_dump(exclude_unset=True).items():
                if value is None:
                    continue
                if key == "password":
                    db_user.password_hash = get_password_hash(value)
                else:
                    setattr(db_user, key, value)

            db.commit()
            db.refresh(db_user)
            return db_user

        except Exception as e:
            db.rollback()
            logger.error(f"Error updating profile for {db_user.email}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while updating profile",
            )

    @staticmethod
    def delete_user(db: Session, user_id: UUID, current_user_id: str) -> User:
        """Hard delete; an admin can never remove their own account"""
        db_user = UserCRUD.get_user_by_id(db, user_id)
        if not db_user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        if str(db_user.id) == str(current_user_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete your own account",
            )

        try:
            db.delete(db_user)
            db.commit()
            logger.info(f"User deleted: {user_id}")
            return db_user

        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting user {user_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while deleting user",
            )

    @staticmethod
    def get_user_stats(db: Session) -> UserStats:
        thirty_days_ago = datetime.now(timezone.utc) - timedelta(days=30)
        return UserStats(
            total_users=db.query(User).count(),
            active_users=db.query(User).filter(User.is_active == True).count(),
            admin_users=db.query(User).filter(User.role == "admin").count(),
            regular_users=db.query(User).filter(User.role == "user").count(),
            new_users=db.query(User).filter(User.created_at >= thirty_days_ago).count(),
        )


user_crud = UserCRUD()
