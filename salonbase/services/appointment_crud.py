from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import or_, func
from typing import List, Optional, Tuple
from uuid import UUID
from datetime import date, datetime, timedelta, timezone
from salonbase.config import DEFAULT_APPOINTMENT_DURATION
from salonbase.models.appointment_model import Appointment
from salonbase.models.service_model import Service
from salonbase.models.user_model import User
from salonbase.schemas.appointment_schema import AppointmentCreate, AppointmentUpdate, AppointmentStats
from salonbase.schemas.common_schema import Pagination
from salonbase.utils.pagination import paginate
from salonbase.utils.time_slots import time_to_minutes
from salonbase.logger import get_logger

logger = get_logger(__name__)


class AppointmentCRUD:
    @staticmethod
    def _ensure_future_date(appointment_date: date) -> None:
        """A day counts as future once its UTC midnight is still ahead of now"""
        if appointment_date <= datetime.now(timezone.utc).date():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Appointment date must be in the future",
            )

    @staticmethod
    def _has_time_conflict(
            db: Session,
            appointment_date: date,
            start_time: str,
            duration: int,
            exclude_appointment_id: Optional[str] = None,
    ) -> bool:
        """Check whether [start, start + duration) meets any live appointment that day.

        Intervals are half-open, so back-to-back slots do not conflict.
        """
        start = time_to_minutes(start_time)
        end = start + duration
        query = db.query(Appointment).filter(
            Appointment.date == appointment_date,
            Appointment.status != "cancelled",
            Appointment.start_minutes < end,
            Appointment.end_minutes > start,
        )

        # Exclude current appointment if updating
        if exclude_appointment_id:
            query = query.filter(Appointment.id != exclude_appointment_id)

        return query.first() is not None

    @staticmethod
    def create_appointment(db: Session, appointment: AppointmentCreate, user: User) -> Appointment:
        """Book a slot for ``user`` after date and conflict validation"""
        AppointmentCRUD._ensure_future_date(appointment.date)

        service_id_str = None
        duration = DEFAULT_APPOINTMENT_DURATION
        price = 0
        if appointment.service_id:
            service_id_str = str(appointment.service_id)
            service = db.query(Service).filter(Service.id == service_id_str).first()
            if not service:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Service not found",
                )
            if not service.is_active:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Service is not available",
                )
            duration = service.duration
            price = service.price

        if AppointmentCRUD._has_time_conflict(db, appointment.date, appointment.time, duration):
            logger.info(f"Slot {appointment.date} {appointment.time} rejected for user {user.id}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Time slot is not available",
            )

        try:
            db_appointment = Appointment(
                user_id=str(user.id),
                user_name=user.name,
                user_phone=user.phone,
                service=appointment.service,
                service_id=service_id_str,
                date=appointment.date,
                time=appointment.time,
                notes=appointment.notes,
                duration=duration,
                price=price,
                status="pending",
            )
            db.add(db_appointment)
            db.commit()
            db.refresh(db_appointment)
            logger.info(f"Appointment created: {db_appointment.id} by user {user.id}")
            return db_appointment

        except Exception as e:
            db.rollback()
            logger.error(f"Error creating appointment: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while creating appointment",
            )

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: UUID) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == str(appointment_id)).first()

    @staticmethod
    def get_appointments(
            db: Session,
            page: int = 1,
            limit: int = 10,
            user_id: Optional[UUID] = None,
            status: Optional[str] = None,
            on_date: Optional[date] = None,
            search: Optional[str] = None,
    ) -> Tuple[List[Appointment], Pagination]:
        """Get appointments with optional filtering, soonest first"""
        query = db.query(Appointment)

        if user_id:
            query = query.filter(Appointment.user_id == str(user_id))

        if status:
            query = query.filter(Appointment.status == status)

        if on_date:
            query = query.filter(Appointment.date == on_date)

        # Search by customer or service name
        if search:
            query = query.filter(
                or_(
                    Appointment.user_name.ilike(f"%{search}%"),
                    Appointment.service.ilike(f"%{search}%"),
                )
            )

        query = query.order_by(Appointment.date.asc(), Appointment.time.asc())
        return paginate(query, page, limit)

    @staticmethod
    def update_appointment(
            db: Session,
            appointment_id: UUID,
            appointment_update: AppointmentUpdate,
            current_user: User,
    ) -> Appointment:
        """Update appointment; owners may reschedule, only admins change status"""
        db_appointment = AppointmentCRUD.get_appointment_by_id(db, appointment_id)
        if not db_appointment:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found"
            )

        is_admin = current_user.role == "admin"
        if not is_admin and db_appointment.user_id != str(current_user.id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized to update this appointment",
            )

        update_data = appointment_update.model_dump(exclude_unset=True)
        if update_data.get("status") is not None and not is_admin:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only admins can change appointment status",
            )

        if update_data.get("date") is not None:
            AppointmentCRUD._ensure_future_date(update_data["date"])

        new_date = update_data.get("date") or db_appointment.date
        new_time = update_data.get("time") or db_appointment.time
        new_status = update_data["status"].value if update_data.get("status") else db_appointment.status

        # Re-check the slot when it moves, or when a cancelled booking comes back
        slot_moved = new_date != db_appointment.date or new_time != db_appointment.time
        reactivated = db_appointment.status == "cancelled" and new_status != "cancelled"
        if new_status != "cancelled" and (slot_moved or reactivated):
            if AppointmentCRUD._has_time_conflict(
                    db, new_date, new_time, db_appointment.duration, str(db_appointment.id)
            ):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Time slot is not available",
                )

        try:
            if update_data.get("service"):
                db_appointment.service = update_data["service"]
            db_appointment.date = new_date
            db_appointment.time = new_time
            db_appointment.status = new_status
            if "notes" in update_data:
                db_appointment.notes = update_data["notes"]

            db.commit()
            db.refresh(db_appointment)
            logger.info(f"Appointment updated: {appointment_id}")
            return db_appointment

        except Exception as e:
            db.rollback()
            logger.error(f"Error updating appointment {appointment_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while updating appointment",
            )

    @staticmethod
    def delete_appointment(db: Session, appointment_id: UUID, current_user: User) -> Appointment:
        db_appointment = AppointmentCRUD.get_appointment_by_id(db, appointment_id)
        if not db_appointment:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found"
            )

        if current_user.role != "admin" and db_appointment.user_id != str(current_user.id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized to delete this appointment",
            )

        try:
            db.delete(db_appointment)
            db.commit()
            logger.info(f"Appointment deleted: {appointment_id}")
            return db_appointment

        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting appointment {appointment_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while deleting appointment",
            )

    @staticmethod
    def get_appointment_stats(db: Session) -> AppointmentStats:
        def count_status(value: str) -> int:
            return db.query(Appointment).filter(Appointment.status == value).count()

        today = datetime.now(timezone.utc).date()
        revenue = db.query(
            func.sum(Appointment.price).label("total_revenue"),
            func.avg(Appointment.price).label("avg_value"),
        ).filter(Appointment.status == "completed").first()

        return AppointmentStats(
            total_appointments=db.query(Appointment).count(),
            pending_appointments=count_status("pending"),
            confirmed_appointments=count_status("confirmed"),
            completed_appointments=count_status("completed"),
            cancelled_appointments=count_status("cancelled"),
            today_appointments=db.query(Appointment).filter(Appointment.date == today).count(),
            weekly_appointments=db.query(Appointment).filter(
                Appointment.date >= today - timedelta(days=7)
            ).count(),
            total_revenue=float(revenue.total_revenue or 0),
            avg_appointment_value=float(revenue.avg_value or 0),
        )


appointment_crud = AppointmentCRUD()
