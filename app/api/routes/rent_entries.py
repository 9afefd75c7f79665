"""Rent entry API routes."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_now, get_records
from app.models.enums import RentStatus
from app.models.property import Property
from app.schemas.rent_entry import (
    GenerationResponse,
    PaymentCreate,
    PropertyRef,
    RentEntryCreate,
    RentEntryResponse,
    RentEntryUpdate,
    RentStatistics,
    TenantPropertyPair,
)
from app.services import association
from app.services import rent_entry as rent_service
from app.services.ownership import OwnedRecords
from app.services.rent_generation import regenerate_rent_entries

router = APIRouter(prefix="/rent", tags=["rent"])


def _pair_response(
    records: OwnedRecords,
    pair: TenantPropertyPair,
    generated: int,
    property_obj: Property | None = None,
) -> GenerationResponse:
    entries = rent_service.get_entries_for_pair(records, pair.tenant_id, pair.property_id)
    return GenerationResponse(
        entries_generated=generated,
        entries=[RentEntryResponse.model_validate(e) for e in entries],
        property=PropertyRef.model_validate(property_obj) if property_obj else None,
    )


@router.get("", response_model=list[RentEntryResponse])
def list_rent_entries(
    tenant_id: int | None = Query(None, description="Only entries of this tenant"),
    property_id: int | None = Query(None, description="Only entries of this property"),
    status_filter: RentStatus | None = Query(None, alias="status"),
    records: OwnedRecords = Depends(get_records),
) -> list[RentEntryResponse]:
    """List rent entries, latest billing period first."""
    entries = rent_service.get_rent_entries(records, tenant_id, property_id, status_filter)
    return [RentEntryResponse.model_validate(e) for e in entries]


@router.get("/statistics", response_model=RentStatistics)
def get_statistics(
    tenant_id: int | None = Query(None, description="Restrict to one tenant"),
    records: OwnedRecords = Depends(get_records),
) -> RentStatistics:
    """Collection statistics, computed from the current entries."""
    return rent_service.get_statistics(records, tenant_id)


@router.get("/{entry_id}", response_model=RentEntryResponse)
def get_rent_entry(
    entry_id: int,
    records: OwnedRecords = Depends(get_records),
) -> RentEntryResponse:
    """Get a rent entry by ID."""
    entry = rent_service.get_rent_entry(records, entry_id)
    return RentEntryResponse.model_validate(entry)


@router.post("", response_model=RentEntryResponse, status_code=status.HTTP_201_CREATED)
def create_rent_entry(
    entry_data: RentEntryCreate,
    records: OwnedRecords = Depends(get_records),
    now: datetime = Depends(get_now),
) -> RentEntryResponse:
    """Create a single rent entry by hand."""
    entry = rent_service.create_rent_entry(records, entry_data, now)
    return RentEntryResponse.model_validate(entry)


@router.post("/assign", response_model=GenerationResponse, status_code=status.HTTP_201_CREATED)
def assign_tenant_to_property(
    pair: TenantPropertyPair,
    records: OwnedRecords = Depends(get_records),
    now: datetime = Depends(get_now),
) -> GenerationResponse:
    """Assign a tenant to a property and return all of the pair's entries."""
    result = association.assign_tenant_to_property(records, pair.tenant_id, pair.property_id, now)
    return _pair_response(records, pair, len(result.entries), result.property)


@router.post("/regenerate", response_model=GenerationResponse)
def regenerate(
    pair: TenantPropertyPair,
    records: OwnedRecords = Depends(get_records),
    now: datetime = Depends(get_now),
) -> GenerationResponse:
    """Add entries for months not yet billed, e.g. after a move-in date correction."""
    created = regenerate_rent_entries(records, pair.tenant_id, pair.property_id, now)
    return _pair_response(records, pair, len(created))


@router.put("/{entry_id}", response_model=RentEntryResponse)
def update_rent_entry(
    entry_id: int,
    entry_data: RentEntryUpdate,
    records: OwnedRecords = Depends(get_records),
) -> RentEntryResponse:
    """Update a rent entry."""
    entry = rent_service.update_rent_entry(records, entry_id, entry_data)
    return RentEntryResponse.model_validate(entry)


@router.patch("/{entry_id}/pay", response_model=RentEntryResponse)
def mark_as_paid(
    entry_id: int,
    payment: PaymentCreate,
    records: OwnedRecords = Depends(get_records),
    now: datetime = Depends(get_now),
) -> RentEntryResponse:
    """Record a payment. The amount replaces any earlier payment on the entry."""
    entry = rent_service.record_payment(records, entry_id, payment, now)
    return RentEntryResponse.model_validate(entry)


@router.delete("/{entry_id}")
def delete_rent_entry(
    entry_id: int,
    records: OwnedRecords = Depends(get_records),
) -> dict[str, str]:
    """Delete a rent entry."""
    rent_service.delete_rent_entry(records, entry_id)
    return {"message": "Rent entry deleted successfully"}
