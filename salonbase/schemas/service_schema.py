from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from enum import Enum


class ServiceCategory(str, Enum):
    hair = "hair"
    nails = "nails"
    facial = "facial"
    massage = "massage"
    other = "other"


class ServiceBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100, examples=["Haircut & Styling"])
    description: str = Field(
        ..., min_length=10, max_length=500, examples=["Professional haircut and styling for all hair types"]
    )
    duration: int = Field(..., ge=5, le=480, description="Duration in minutes", examples=[60])
    price: float = Field(..., ge=0, examples=[45.0])
    category: ServiceCategory = ServiceCategory.other

    class Config:
        str_strip_whitespace = True


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=500)
    duration: Optional[int] = Field(None, ge=5, le=480)
    price: Optional[float] = Field(None, ge=0)
    category: Optional[ServiceCategory] = None
    is_active: Optional[bool] = None

    class Config:
        str_strip_whitespace = True


class ServiceResponse(ServiceBase):
    id: UUID
    is_active: bool
    duration_formatted: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CategoryStat(BaseModel):
    category: str
    count: int
    avg_price: float
    avg_duration: float


class ServiceStats(BaseModel):
    total_services: int
    active_services: int
    inactive_services: int
    category_stats: List[CategoryStat]
    avg_price: float
    avg_duration: float
