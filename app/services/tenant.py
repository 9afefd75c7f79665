"""Tenant service for business logic."""

import logging
from collections import defaultdict
from decimal import Decimal

from app.core.errors import PreconditionFailedError
from app.models.rent_entry import RentEntry
from app.models.tenant import Tenant
from app.schemas.tenant import (
    PropertySummary,
    TenantCreate,
    TenantDetailResponse,
    TenantResponse,
    TenantUpdate,
)
from app.services.association import release_tenant
from app.services.ledger import outstanding_amount, summarize_entries, unsettled_entries
from app.services.ownership import OwnedRecords
from app.services.property import reject_nulls

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {"name", "phone", "status"}


def tenant_to_detail(tenant: Tenant, entries: list[RentEntry]) -> TenantDetailResponse:
    """Annotate a tenant with rent statistics and the property they occupy."""
    base = TenantResponse.model_validate(tenant)
    current = tenant.current_property
    return TenantDetailResponse(
        **base.model_dump(),
        rent_stats=summarize_entries(entries),
        current_property=PropertySummary.model_validate(current) if current else None,
    )


def create_tenant(records: OwnedRecords, tenant_data: TenantCreate) -> Tenant:
    """Create a new tenant."""
    tenant = Tenant(**tenant_data.model_dump())
    records.add(tenant)
    records.db.commit()
    records.db.refresh(tenant)
    logger.info("Created tenant %s for owner %s", tenant.id, records.owner_id)
    return tenant


def get_tenants(records: OwnedRecords, skip: int = 0, limit: int = 100) -> list[Tenant]:
    """Get the owner's tenants, newest first."""
    return (
        records.tenants()
        .order_by(Tenant.created_at.desc(), Tenant.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_tenants_with_stats(
    records: OwnedRecords,
    skip: int = 0,
    limit: int = 100,
) -> list[TenantDetailResponse]:
    """List tenants, each annotated with rent statistics and current property."""
    tenants = get_tenants(records, skip, limit)
    if not tenants:
        return []

    entries_by_tenant: dict[int, list[RentEntry]] = defaultdict(list)
    entries = records.rent_entries().filter(RentEntry.tenant_id.in_([t.id for t in tenants]))
    for entry in entries:
        entries_by_tenant[entry.tenant_id].append(entry)

    return [tenant_to_detail(t, entries_by_tenant[t.id]) for t in tenants]


def get_tenant_with_stats(records: OwnedRecords, tenant_id: int) -> TenantDetailResponse:
    """Get one tenant annotated with rent statistics and current property."""
    tenant = records.get_tenant(tenant_id)
    entries = records.rent_entries().filter(RentEntry.tenant_id == tenant_id).all()
    return tenant_to_detail(tenant, entries)


def update_tenant(records: OwnedRecords, tenant_id: int, tenant_data: TenantUpdate) -> Tenant:
    """Update a tenant.

    A corrected move-in date does not touch existing entries; regenerate to
    add the months it newly covers.
    """
    tenant = records.get_tenant(tenant_id)

    update_data = tenant_data.model_dump(exclude_unset=True)
    reject_nulls(update_data, REQUIRED_FIELDS)
    for field, value in update_data.items():
        setattr(tenant, field, value)

    records.db.commit()
    records.db.refresh(tenant)
    return tenant


def delete_tenant(records: OwnedRecords, tenant_id: int) -> None:
    """Delete a tenant who owes nothing.

    Refused while any pending, overdue or partial entry references the tenant.
    The property they occupy, if any, becomes available. Settled entries are
    kept without a tenant reference.
    """
    tenant = records.get_tenant(tenant_id)

    entries = records.rent_entries().filter(RentEntry.tenant_id == tenant_id).all()
    unpaid = unsettled_entries(entries)
    if unpaid:
        unpaid_amount = sum((outstanding_amount(e) for e in unpaid), Decimal("0"))
        logger.info("Refused to delete tenant %s: %d unpaid entries", tenant_id, len(unpaid))
        raise PreconditionFailedError(
            f"Cannot delete tenant with unpaid rent. "
            f"{len(unpaid)} unpaid entries totaling {unpaid_amount:.2f}",
            unpaid_count=len(unpaid),
            unpaid_amount=unpaid_amount,
        )

    release_tenant(tenant)
    records.db.flush()
    records.db.delete(tenant)
    records.db.commit()
    logger.info("Deleted tenant %s", tenant_id)
