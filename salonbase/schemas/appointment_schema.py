from pydantic import BaseModel, Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import date as date_type, datetime
from enum import Enum
from salonbase.utils.time_slots import normalize_time


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class AppointmentCreate(BaseModel):
    service: str = Field(..., min_length=2, max_length=100, description="Name of the booked service")
    service_id: Optional[UUID] = Field(None, description="Catalogue service, used for price, duration and slot checks")
    date: date_type = Field(..., description="Appointment day")
    time: str = Field(..., description="Start time, HH:MM (24h)", examples=["10:30"])
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("time")
    @classmethod
    def time_must_be_hh_mm(cls, v):
        return normalize_time(v)

    class Config:
        str_strip_whitespace = True


class AppointmentUpdate(BaseModel):
    service: Optional[str] = Field(None, min_length=2, max_length=100)
    date: Optional[date_type] = None
    time: Optional[str] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("time")
    @classmethod
    def time_must_be_hh_mm(cls, v):
        return normalize_time(v) if v is not None else v

    class Config:
        str_strip_whitespace = True


class AppointmentResponse(BaseModel):
    id: UUID
    user_id: UUID
    user_name: str
    user_phone: str
    service: str
    service_id: Optional[UUID] = None
    date: date_type
    time: str
    end_time: str
    status: AppointmentStatus = AppointmentStatus.pending
    notes: Optional[str] = None
    duration: int
    price: float
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AppointmentStats(BaseModel):
    total_appointments: int
    pending_appointments: int
    confirmed_appointments: int
    completed_appointments: int
    cancelled_appointments: int
    today_appointments: int
    weekly_appointments: int
    total_revenue: float
    avg_appointment_value: float
