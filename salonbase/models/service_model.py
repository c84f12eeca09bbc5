from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, Numeric, Integer, DateTime, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
import uuid
from salonbase.database import Base
from sqlalchemy.orm import relationship
from salonbase.utils.time_slots import format_duration


class Service(Base):
    __tablename__ = "services"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500), nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String, default="other", nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Deleting a service leaves its appointments in place with service_id cleared
    appointments = relationship("Appointment", back_populates="service_ref")

    __table_args__ = (
        CheckConstraint("duration >= 5 AND duration <= 480", name="check_service_duration"),
        CheckConstraint("price >= 0", name="check_service_price"),
    )

    @property
    def duration_formatted(self) -> str:
        return format_duration(self.duration)
