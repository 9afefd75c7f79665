"""Tenant Pydantic schemas for request/response validation."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.models.enums import TenantStatus
from app.schemas.rent_entry import RentStatistics


class EmergencyContact(BaseModel):
    """Who to call when the tenant cannot be reached."""

    name: str | None = None
    phone: str | None = None
    relationship: str | None = None


class PropertySummary(BaseModel):
    """Property fields embedded in tenant responses."""

    id: int
    address: str
    city: str
    monthly_rent: Decimal

    model_config = {"from_attributes": True}


class TenantBase(BaseModel):
    """Base tenant schema."""

    name: str = Field(min_length=1, max_length=100)
    phone: str = Field(min_length=1, max_length=30)
    emergency_contact: EmergencyContact | None = None
    move_in_date: date | None = None
    status: TenantStatus = TenantStatus.ACTIVE
    notes: str | None = None


class TenantCreate(TenantBase):
    """Schema for creating a new tenant."""

    pass


class TenantUpdate(BaseModel):
    """Schema for updating a tenant."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = Field(default=None, min_length=1, max_length=30)
    emergency_contact: EmergencyContact | None = None
    move_in_date: date | None = None
    status: TenantStatus | None = None
    notes: str | None = None


class TenantResponse(TenantBase):
    """Schema for tenant response."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TenantDetailResponse(TenantResponse):
    """Tenant annotated with derived rent statistics and current property."""

    rent_stats: RentStatistics
    current_property: PropertySummary | None


class AssignPropertyRequest(BaseModel):
    """Body of the tenant-side assignment."""

    property_id: int
