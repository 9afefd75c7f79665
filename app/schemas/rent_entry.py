"""RentEntry Pydantic schemas for request/response validation."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.models.enums import PaymentMethod, RentStatus


class PropertyRef(BaseModel):
    """Property fields embedded in rent entry responses."""

    id: int
    address: str
    city: str
    state: str
    monthly_rent: Decimal

    model_config = {"from_attributes": True}


class TenantRef(BaseModel):
    """Tenant fields embedded in rent entry responses."""

    id: int
    name: str
    phone: str

    model_config = {"from_attributes": True}


class RentEntryCreate(BaseModel):
    """Schema for creating a single rent entry by hand.

    Omitted amount, due date and status are filled in the same way the
    generator fills them.
    """

    property_id: int
    tenant_id: int
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1900, le=9999)
    rent_amount: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    due_date: date | None = None
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    paid_date: date | None = None
    status: RentStatus | None = None
    payment_method: PaymentMethod = PaymentMethod.OTHER
    notes: str | None = None


class RentEntryUpdate(BaseModel):
    """Schema for updating a rent entry; the billing period is fixed."""

    rent_amount: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    due_date: date | None = None
    paid_amount: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    paid_date: date | None = None
    status: RentStatus | None = None
    payment_method: PaymentMethod | None = None
    notes: str | None = None


class PaymentCreate(BaseModel):
    """Payment recorded against a rent entry.

    ``paid_amount`` replaces the stored amount; it is not added to it. Omit it
    to record the full rent.
    """

    paid_amount: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    payment_method: PaymentMethod = PaymentMethod.OTHER
    paid_date: date | None = None


class RentEntryResponse(BaseModel):
    """Schema for rent entry response."""

    id: int
    property_id: int | None
    tenant_id: int | None
    month: int
    year: int
    rent_amount: Decimal
    due_date: date
    paid_amount: Decimal
    paid_date: date | None
    status: RentStatus
    payment_method: PaymentMethod
    notes: str | None
    created_at: datetime
    updated_at: datetime
    property: PropertyRef | None = None
    tenant: TenantRef | None = None

    model_config = {"from_attributes": True}


class TenantPropertyPair(BaseModel):
    """Identifies the (tenant, property) pair to bill."""

    property_id: int
    tenant_id: int


class GenerationResponse(BaseModel):
    """All entries of a (tenant, property) pair after generation."""

    entries_generated: int
    entries: list[RentEntryResponse]
    property: PropertyRef | None = None


class RentStatistics(BaseModel):
    """Aggregate figures over a set of rent entries."""

    total_amount: Decimal
    total_paid: Decimal
    remaining: Decimal
    total_due: Decimal
    pending_amount: Decimal
    overdue_amount: Decimal
    partial_paid: Decimal
    pending_count: int
    overdue_count: int
    partial_count: int
    paid_count: int
    total_entries: int
    collection_rate: float
