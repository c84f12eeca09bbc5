from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import or_, func
from typing import List, Optional, Tuple
from uuid import UUID
from salonbase.models.service_model import Service
from salonbase.schemas.common_schema import Pagination
from salonbase.schemas.service_schema import ServiceCreate, ServiceUpdate, ServiceStats, CategoryStat
from salonbase.utils.pagination import paginate
from salonbase.logger import get_logger

logger = get_logger(__name__)


class ServiceCRUD:
    @staticmethod
    def create_service(db: Session, service: ServiceCreate) -> Service:
        """Create a new service"""
        try:
            db_service = Service(
                name=service.name,
                description=service.description,
                duration=service.duration,
                price=service.price,
                category=service.category.value,
            )
            db.add(db_service)
            db.commit()
            db.refresh(db_service)
            logger.info(f"Service created: {service.name}")
            return db_service

        except Exception as e:
            db.rollback()
            logger.error(f"Error creating service: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while creating service"
            )

    @staticmethod
    def get_service_by_id(db: Session, service_id: UUID) -> Optional[Service]:
        """Get service by ID"""
        return db.query(Service).filter(Service.id == str(service_id)).first()

    @staticmethod
    def get_services(
            db: Session,
            page: int = 1,
            limit: int = 10,
            search: Optional[str] = None,
            category: Optional[str] = None,
            is_active: Optional[bool] = None,
    ) -> Tuple[List[Service], Pagination]:
        """Get services with optional filtering, newest first"""
        query = db.query(Service)

        # Filter by search query (name or description)
        if search:
            query = query.filter(
                or_(
                    Service.name.ilike(f"%{search}%"),
                    Service.description.ilike(f"%{search}%")
                )
            )

        if category:
            query = query.filter(Service.category == category)

        if is_active is not None:
            query = query.filter(Service.is_active == is_active)

        return paginate(query.order_by(Service.created_at.desc()), page, limit)

    @staticmethod
    def update_service(db: Session, service_id: UUID, service_update: ServiceUpdate) -> Service:
        """Update service by ID"""
        db_service = ServiceCRUD.get_service_by_id(db, service_id)
        if not db_service:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Service not found"
            )

        try:
            # Update only provided fields
            for key, value in service_update.model_dump(exclude_unset=True).items():
                if value is not None:
                    setattr(db_service, key, value.value if key == "category" else value)

            db.commit()
            db.refresh(db_service)
            logger.info(f"Service updated: {service_id}")
            return db_service

        except Exception as e:
            db.rollback()
            logger.error(f"Error updating service {service_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while updating service"
            )

    @staticmethod
    def delete_service(db: Session, service_id: UUID) -> Service:
        db_service = ServiceCRUD.get_service_by_id(db, service_id)
        if not db_service:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Service not found"
            )

        try:
            # Booked appointments keep their service name snapshot
            for appointment in db_service.appointments:
                appointment.service_id = None
            db.delete(db_service)
            db.commit()
            logger.info(f"Service deleted: {service_id}")
            return db_service

        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting service {service_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while deleting service"
            )

    @staticmethod
    def get_service_stats(db: Session) -> ServiceStats:
        total_services = db.query(Service).count()
        active_services = db.query(Service).filter(Service.is_active == True).count()

        category_rows = (
            db.query(
                Service.category.label("category"),
                func.count(Service.id).label("count"),
                func.avg(Service.price).label("avg_price"),
                func.avg(Service.duration).label("avg_duration"),
            )
            .group_by(Service.category)
            .order_by(func.count(Service.id).desc())
            .all()
        )

        averages = db.query(
            func.avg(Service.price).label("avg_price"),
            func.avg(Service.duration).label("avg_duration"),
        ).filter(Service.is_active == True).first()

        return ServiceStats(
            total_services=total_services,
            active_services=active_services,
            inactive_services=total_services - active_services,
            category_stats=[
                CategoryStat(
                    category=row.category,
                    count=row.count,
                    avg_price=float(row.avg_price or 0),
                    avg_duration=float(row.avg_duration or 0),
                )
                for row in category_rows
            ],
            avg_price=float(averages.avg_price or 0),
            avg_duration=float(averages.avg_duration or 0),
        )


service_crud = ServiceCRUD()
