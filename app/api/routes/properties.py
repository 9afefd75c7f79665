"""Property API routes."""

from datetime import datetime

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_now, get_records
from app.schemas.property import (
    AssignmentResponse,
    AssignTenantRequest,
    PropertyCreate,
    PropertyResponse,
    PropertyUpdate,
)
from app.services import association
from app.services import property as property_service
from app.services.ownership import OwnedRecords

router = APIRouter(prefix="/properties", tags=["properties"])


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    property_data: PropertyCreate,
    records: OwnedRecords = Depends(get_records),
) -> PropertyResponse:
    """Create a new property."""
    db_property = property_service.create_property(records, property_data)
    return PropertyResponse.model_validate(db_property)


@router.get("", response_model=list[PropertyResponse])
def list_properties(
    skip: int = 0,
    limit: int = 100,
    records: OwnedRecords = Depends(get_records),
) -> list[PropertyResponse]:
    """List the caller's properties with their current tenants."""
    properties = property_service.get_properties(records, skip, limit)
    return [PropertyResponse.model_validate(p) for p in properties]


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: int,
    records: OwnedRecords = Depends(get_records),
) -> PropertyResponse:
    """Get a property by ID."""
    db_property = property_service.get_property(records, property_id)
    return PropertyResponse.model_validate(db_property)


@router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    property_data: PropertyUpdate,
    records: OwnedRecords = Depends(get_records),
) -> PropertyResponse:
    """Update a property."""
    db_property = property_service.update_property(records, property_id, property_data)
    return PropertyResponse.model_validate(db_property)


@router.post("/{property_id}/assign-tenant", response_model=AssignmentResponse)
def assign_tenant(
    property_id: int,
    body: AssignTenantRequest,
    records: OwnedRecords = Depends(get_records),
    now: datetime = Depends(get_now),
) -> AssignmentResponse:
    """Put a tenant into this property and bill them from their move-in month."""
    result = association.assign_tenant_to_property(records, body.tenant_id, property_id, now)
    return AssignmentResponse(
        message="Tenant assigned successfully",
        property=PropertyResponse.model_validate(result.property),
        entries_generated=len(result.entries),
    )


@router.post("/{property_id}/vacate", response_model=PropertyResponse)
def vacate_property(
    property_id: int,
    records: OwnedRecords = Depends(get_records),
) -> PropertyResponse:
    """Remove the current tenant; existing rent entries are kept."""
    db_property = association.vacate_property(records, property_id)
    return PropertyResponse.model_validate(db_property)


@router.delete("/{property_id}")
def delete_property(
    property_id: int,
    records: OwnedRecords = Depends(get_records),
) -> dict[str, str]:
    """Delete a property that has no unpaid rent."""
    property_service.delete_property(records, property_id)
    return {"message": "Property deleted successfully"}
