from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from uuid import UUID
from typing import Optional
from salonbase.services.service_crud import service_crud
from salonbase.schemas.common_schema import ApiResponse, Page, ERROR_RESPONSES
from salonbase.schemas.service_schema import (
    ServiceCreate, ServiceUpdate, ServiceResponse, ServiceStats, ServiceCategory,
)
from salonbase.database import get_db
from salonbase.security.auth import get_current_active_user, get_current_admin_user
from salonbase.models.user_model import User
from salonbase.logger import get_logger

service_router = APIRouter(prefix="/services", responses=ERROR_RESPONSES)
logger = get_logger(__name__)

# BROWSING ENDPOINTS - any signed in user


@service_router.get(
    "", response_model=ApiResponse[Page[ServiceResponse]], status_code=status.HTTP_200_OK
)
def get_services(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Services per page"),
    search: Optional[str] = Query(None, description="Search name or description"),
    category: Optional[ServiceCategory] = Query(None, description="Filter by category"),
    is_active: Optional[bool] = Query(None, description="Filter by active flag"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Get services with optional filtering"""
    try:
        logger.info(f"Fetching services: page={page}, limit={limit}, search={search}")
        services, pagination = service_crud.get_services(
            db=db,
            page=page,
            limit=limit,
            search=search,
            category=category.value if category else None,
            is_active=is_active,
        )
        return ApiResponse(
            data=Page(
                items=[ServiceResponse.model_validate(service) for service in services],
                pagination=pagination,
            )
        )

    except Exception as e:
        logger.error(f"Error fetching services: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching services",
        )


@service_router.get(
    "/stats", response_model=ApiResponse[ServiceStats], status_code=status.HTTP_200_OK
)
def get_service_stats(
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    """Catalogue statistics (admin only)"""
    try:
        logger.info(f"Admin {current_user.email} fetching service stats")
        return ApiResponse(data=service_crud.get_service_stats(db))

    except Exception as e:
        logger.error(f"Error fetching service stats: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching service statistics",
        )


@service_router.get(
    "/{service_id}",
    response_model=ApiResponse[ServiceResponse],
    status_code=status.HTTP_200_OK,
)
def get_service(
    service_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    logger.info(f"Fetching service: {service_id}")
    service = service_crud.get_service_by_id(db, service_id)
    if not service:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Service not found"
        )
    return ApiResponse(data=ServiceResponse.model_validate(service))


# ADMIN ENDPOINTS - Service management


@service_router.post(
    "", response_model=ApiResponse[ServiceResponse], status_code=status.HTTP_201_CREATED
)
def create_service(
    service: ServiceCreate,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    """Create a new service (admin only)"""
    try:
        logger.info(f"Admin {current_user.email} creating service: {service.name}")
        db_service = service_crud.create_service(db, service)
        return ApiResponse(
            data=ServiceResponse.model_validate(db_service),
            message="Service created successfully",
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating service: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while creating service",
        )


@service_router.put(
    "/{service_id}",
    response_model=ApiResponse[ServiceResponse],
    status_code=status.HTTP_200_OK,
)
def update_service(
    service_id: UUID,
    service_update: ServiceUpdate,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    """Update service by ID (admin only)"""
    try:
        logger.info(f"Admin {current_user.email} updating service: {service_id}")
        updated_service = service_crud.update_service(db, service_id, service_update)
        return ApiResponse(
            data=ServiceResponse.model_validate(updated_service),
            message="Service updated successfully",
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating service {service_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while updating service",
        )


@service_router.delete(
    "/{service_id}",
    response_model=ApiResponse[None],
    status_code=status.HTTP_200_OK,
)
def delete_service(
    service_id: UUID,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    """Delete service by ID (admin only)"""
    try:
        logger.info(f"Admin {current_user.email} deleting service: {service_id}")
        service_crud.delete_service(db, service_id)
        return ApiResponse(message="Service deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting service {service_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while deleting service",
        )
