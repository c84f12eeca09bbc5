from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from uuid import UUID
from typing import Optional
from datetime import date
from salonbase.services.appointment_crud import appointment_crud
from salonbase.schemas.common_schema import ApiResponse, Page, ERROR_RESPONSES
from salonbase.schemas.appointment_schema import (
    AppointmentCreate, AppointmentUpdate, AppointmentResponse, AppointmentStats, AppointmentStatus,
)
from salonbase.database import get_db
from salonbase.security.auth import get_current_active_user, get_current_admin_user
from salonbase.models.user_model import User
from salonbase.logger import get_logger

appointment_router = APIRouter(prefix="/appointments", responses=ERROR_RESPONSES)
logger = get_logger(__name__)


def _page(appointments, pagination) -> Page[AppointmentResponse]:
    return Page(
        items=[AppointmentResponse.model_validate(appointment) for appointment in appointments],
        pagination=pagination,
    )


# ADMIN ENDPOINTS


@appointment_router.get(
    "",
    response_model=ApiResponse[Page[AppointmentResponse]],
    status_code=status.HTTP_200_OK,
)
def get_all_appointments(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Appointments per page"),
    appointment_status: Optional[AppointmentStatus] = Query(
        None, alias="status", description="Filter by appointment status"
    ),
    on_date: Optional[date] = Query(None, alias="date", description="Only appointments on this day"),
    search: Optional[str] = Query(None, description="Search customer or service name"),
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    """Get all appointments with filtering (admin only)"""
    try:
        logger.info(f"Admin {current_user.email} fetching all appointments")
        appointments, pagination = appointment_crud.get_appointments(
            db=db,
            page=page,
            limit=limit,
            status=appointment_status.value if appointment_status else None,
            on_date=on_date,
            search=search,
        )
        return ApiResponse(data=_page(appointments, pagination))

    except Exception as e:
        logger.error(f"Error fetching all appointments: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching appointments",
        )


@appointment_router.get(
    "/stats",
    response_model=ApiResponse[AppointmentStats],
    status_code=status.HTTP_200_OK,
)
def get_appointment_stats(
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    """Booking and revenue statistics (admin only)"""
    try:
        logger.info(f"Admin {current_user.email} fetching appointment stats")
        return ApiResponse(data=appointment_crud.get_appointment_stats(db))

    except Exception as e:
        logger.error(f"Error fetching appointment stats: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching appointment statistics",
        )


# USER ENDPOINTS - Users manage their own appointments


@appointment_router.get(
    "/user/{user_id}",
    response_model=ApiResponse[Page[AppointmentResponse]],
    status_code=status.HTTP_200_OK,
)
def get_user_appointments(
    user_id: UUID,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Appointments per page"),
    appointment_status: Optional[AppointmentStatus] = Query(
        None, alias="status", description="Filter by appointment status"
    ),
    on_date: Optional[date] = Query(None, alias="date", description="Only appointments on this day"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Get one user's appointments (the user themselves or an admin)"""
    if current_user.role != "admin" and str(current_user.id) != str(user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access these appointments",
        )

    try:
        logger.info(f"User {current_user.email} fetching appointments of {user_id}")
        appointments, pagination = appointment_crud.get_appointments(
            db=db,
            page=page,
            limit=limit,
            user_id=user_id,
            status=appointment_status.value if appointment_status else None,
            on_date=on_date,
        )
        return ApiResponse(data=_page(appointments, pagination))

    except Exception as e:
        logger.error(f"Error fetching user appointments: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching appointments",
        )


@appointment_router.get(
    "/{appointment_id}",
    response_model=ApiResponse[AppointmentResponse],
    status_code=status.HTTP_200_OK,
)
def get_appointment(
    appointment_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Get appointment by ID (owner or admin)"""
    appointment = appointment_crud.get_appointment_by_id(db, appointment_id)
    if not appointment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found"
        )

    if current_user.role != "admin" and appointment.user_id != str(current_user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this appointment",
        )

    return ApiResponse(data=AppointmentResponse.model_validate(appointment))


@appointment_router.post(
    "",
    response_model=ApiResponse[AppointmentResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_appointment(
    appointment: AppointmentCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Book an appointment for the current user"""
    try:
        logger.info(
            f"User {current_user.email} booking {appointment.service} on {appointment.date} {appointment.time}"
        )
        db_appointment = appointment_crud.create_appointment(db, appointment, current_user)
        return ApiResponse(
            data=AppointmentResponse.model_validate(db_appointment),
            message="Appointment created successfully",
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating appointment: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while creating appointment",
        )


@appointment_router.put(
    "/{appointment_id}",
    response_model=ApiResponse[AppointmentResponse],
    status_code=status.HTTP_200_OK,
)
def update_appointment(
    appointment_id: UUID,
    appointment_update: AppointmentUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Update appointment (owner can reschedule; only admin can change status)"""
    try:
        logger.info(f"User {current_user.email} updating appointment: {appointment_id}")
        updated = appointment_crud.update_appointment(
            db, appointment_id, appointment_update, current_user
        )
        return ApiResponse(
            data=AppointmentResponse.model_validate(updated),
            message="Appointment updated successfully",
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating appointment {appointment_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while updating appointment",
        )


@appointment_router.delete(
    "/{appointment_id}",
    response_model=ApiResponse[None],
    status_code=status.HTTP_200_OK,
)
def delete_appointment(
    appointment_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Delete appointment (owner or admin)"""
    try:
        logger.info(f"User {current_user.email} deleting appointment: {appointment_id}")
        appointment_crud.delete_appointment(db, appointment_id, current_user)
        return ApiResponse(message="Appointment deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting appointment {appointment_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while deleting appointment",
        )
