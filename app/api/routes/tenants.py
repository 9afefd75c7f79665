"""Tenant API routes."""

from datetime import datetime

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_now, get_records
from app.schemas.property import AssignmentResponse, PropertyResponse
from app.schemas.tenant import (
    AssignPropertyRequest,
    TenantCreate,
    TenantDetailResponse,
    TenantResponse,
    TenantUpdate,
)
from app.services import association
from app.services import tenant as tenant_service
from app.services.ownership import OwnedRecords

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
def create_tenant(
    tenant_data: TenantCreate,
    records: OwnedRecords = Depends(get_records),
) -> TenantResponse:
    """Create a new tenant."""
    tenant = tenant_service.create_tenant(records, tenant_data)
    return TenantResponse.model_validate(tenant)


@router.get("", response_model=list[TenantDetailResponse])
def list_tenants(
    skip: int = 0,
    limit: int = 100,
    records: OwnedRecords = Depends(get_records),
) -> list[TenantDetailResponse]:
    """List tenants with rent statistics and the property each one occupies."""
    return tenant_service.get_tenants_with_stats(records, skip, limit)


@router.get("/{tenant_id}", response_model=TenantDetailResponse)
def get_tenant(
    tenant_id: int,
    records: OwnedRecords = Depends(get_records),
) -> TenantDetailResponse:
    """Get a tenant with rent statistics."""
    return tenant_service.get_tenant_with_stats(records, tenant_id)


@router.put("/{tenant_id}", response_model=TenantResponse)
def update_tenant(
    tenant_id: int,
    tenant_data: TenantUpdate,
    records: OwnedRecords = Depends(get_records),
) -> TenantResponse:
    """Update a tenant."""
    tenant = tenant_service.update_tenant(records, tenant_id, tenant_data)
    return TenantResponse.model_validate(tenant)


@router.post("/{tenant_id}/assign-property", response_model=AssignmentResponse)
def assign_property(
    tenant_id: int,
    body: AssignPropertyRequest,
    records: OwnedRecords = Depends(get_records),
    now: datetime = Depends(get_now),
) -> AssignmentResponse:
    """Move this tenant into a property and bill them from their move-in month."""
    result = association.assign_tenant_to_property(records, tenant_id, body.property_id, now)
    return AssignmentResponse(
        message="Property assigned successfully",
        property=PropertyResponse.model_validate(result.property),
        entries_generated=len(result.entries),
    )


@router.delete("/{tenant_id}")
def delete_tenant(
    tenant_id: int,
    records: OwnedRecords = Depends(get_records),
) -> dict[str, str]:
    """Delete a tenant who has no unpaid rent."""
    tenant_service.delete_tenant(records, tenant_id)
    return {"message": "Tenant deleted successfully"}
