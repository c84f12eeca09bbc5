from datetime import datetime, timezone
from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Integer, Numeric, Text, Index, cast, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.ext.hybrid import hybrid_property
import uuid
from salonbase.database import Base
from sqlalchemy.orm import relationship
from salonbase.utils.time_slots import time_to_minutes, minutes_to_time


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    user_id = Column(UUID(as_uuid=False), ForeignKey("users.id"), nullable=False, index=True)
    # Snapshot of the booking user at creation time
    user_name = Column(String(50), nullable=False)
    user_phone = Column(String(20), nullable=False)
    service = Column(String(100), nullable=False)
    service_id = Column(UUID(as_uuid=False), ForeignKey("services.id", ondelete="SET NULL"), nullable=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # "HH:MM"
    status = Column(String, default="pending", nullable=False, index=True)
    notes = Column(Text, nullable=True)
    duration = Column(Integer, default=60, nullable=False)  # minutes
    price = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user = relationship("User", back_populates="appointments")
    service_ref = relationship("Service", back_populates="appointments")

    __table_args__ = (
        Index("ix_appointments_user_id_date", "user_id", "date"),
    )

    @hybrid_property
    def start_minutes(self):
        return time_to_minutes(self.time)

    @start_minutes.expression
    def start_minutes(cls):
        # time is stored zero padded, so hours and minutes sit at fixed offsets
        return cast(func.substr(cls.time, 1, 2), Integer) * 60 + cast(func.substr(cls.time, 4, 2), Integer)

    @hybrid_property
    def end_minutes(self):
        return self.start_minutes + self.duration

    @end_minutes.expression
    def end_minutes(cls):
        return cls.start_minutes + cls.duration

    @property
    def end_time(self) -> str:
        return minutes_to_time(self.end_minutes)
