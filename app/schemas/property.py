"""Property Pydantic schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.models.enums import PropertyStatus, PropertyType


class TenantSummary(BaseModel):
    """Tenant fields embedded in property responses."""

    id: int
    name: str
    phone: str

    model_config = {"from_attributes": True}


class PropertyBase(BaseModel):
    """Base property schema."""

    address: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    zip_code: str = Field(min_length=1, max_length=20)
    property_type: PropertyType = PropertyType.APARTMENT
    bedrooms: int = Field(default=1, ge=0)
    bathrooms: float = Field(default=1, ge=0)
    square_feet: int | None = Field(default=None, ge=0)
    monthly_rent: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    description: str | None = None


class PropertyCreate(PropertyBase):
    """Schema for creating a new property.

    New properties are always ``available``; occupancy is set by assigning a tenant.
    """

    status: PropertyStatus = PropertyStatus.AVAILABLE


class PropertyUpdate(BaseModel):
    """Schema for updating a property.

    The current tenant is deliberately absent: it changes only through
    assign-tenant and vacate.
    """

    address: str | None = Field(default=None, min_length=1, max_length=255)
    city: str | None = Field(default=None, min_length=1, max_length=100)
    state: str | None = Field(default=None, min_length=1, max_length=100)
    zip_code: str | None = Field(default=None, min_length=1, max_length=20)
    property_type: PropertyType | None = None
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: float | None = Field(default=None, ge=0)
    square_feet: int | None = Field(default=None, ge=0)
    monthly_rent: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    description: str | None = None
    status: PropertyStatus | None = None


class PropertyResponse(PropertyBase):
    """Schema for property response."""

    id: int
    status: PropertyStatus
    current_tenant_id: int | None
    current_tenant: TenantSummary | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AssignTenantRequest(BaseModel):
    """Body of the property-side assignment."""

    tenant_id: int


class AssignmentResponse(BaseModel):
    """Result of putting a tenant into a property."""

    message: str
    property: PropertyResponse
    entries_generated: int
