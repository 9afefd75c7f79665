"""Tenant/property occupancy.

The only writer of ``Property.current_tenant`` and of the occupied status.
A property is occupied exactly when it has a current tenant, and a tenant
occupies at most one property.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import OccupancyConflictError, PreconditionFailedError
from app.models.enums import PropertyStatus
from app.models.property import Property
from app.models.rent_entry import RentEntry
from app.models.tenant import Tenant
from app.services.ownership import OwnedRecords
from app.services.rent_generation import generate_rent_entries

logger = logging.getLogger(__name__)


@dataclass
class AssignmentResult:
    """Outcome of an assignment."""

    property: Property
    tenant: Tenant
    entries: list[RentEntry]


def _release(property_obj: Property) -> None:
    property_obj.current_tenant = None
    property_obj.status = PropertyStatus.AVAILABLE


def _flush_occupancy(db: Session) -> None:
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise OccupancyConflictError(
            "The tenant was assigned to another property concurrently; try again"
        ) from exc


def assign_tenant_to_property(
    records: OwnedRecords,
    tenant_id: int,
    property_id: int,
    now: datetime,
) -> AssignmentResult:
    """Make the tenant the property's occupant and bill them from move-in.

    The property update and the generated entries are committed together;
    on any failure neither is kept. A property the tenant occupied before is
    released in the same transaction.
    """
    property_obj = records.get_property(property_id)
    tenant = records.get_tenant(tenant_id)
    if tenant.move_in_date is None:
        raise PreconditionFailedError(
            "Tenant must have a move-in date before being assigned to a property"
        )

    db = records.db
    try:
        previous = tenant.current_property
        if previous is not None and previous.id != property_obj.id:
            _release(previous)
            # current_tenant_id is unique; free it before reusing it
            _flush_occupancy(db)
            logger.info("Released property %s from tenant %s", previous.id, tenant.id)

        property_obj.current_tenant = tenant
        property_obj.status = PropertyStatus.OCCUPIED
        _flush_occupancy(db)

        entries = generate_rent_entries(records, tenant, property_obj, now)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(property_obj)
    logger.info(
        "Assigned tenant %s to property %s; %d rent entries generated",
        tenant.id,
        property_obj.id,
        len(entries),
    )
    return AssignmentResult(property=property_obj, tenant=tenant, entries=entries)


def vacate_property(records: OwnedRecords, property_id: int) -> Property:
    """Remove the current tenant and make the property available again."""
    property_obj = records.get_property(property_id)
    if property_obj.current_tenant is None:
        raise PreconditionFailedError("Property has no current tenant")

    tenant_id = property_obj.current_tenant_id
    _release(property_obj)
    records.db.commit()
    records.db.refresh(property_obj)
    logger.info("Vacated property %s (tenant %s)", property_id, tenant_id)
    return property_obj


def release_tenant(tenant: Tenant) -> None:
    """Release whatever property the tenant occupies. Does not commit."""
    if tenant.current_property is not None:
        _release(tenant.current_property)


def check_status_change(property_obj: Property, new_status: PropertyStatus) -> None:
    """Reject direct status edits that would break occupancy consistency."""
    if new_status == property_obj.status:
        return
    if new_status == PropertyStatus.OCCUPIED:
        raise PreconditionFailedError(
            "A property becomes occupied only by assigning a tenant to it"
        )
    if property_obj.current_tenant_id is not None:
        raise PreconditionFailedError(
            "Vacate the property before changing its status"
        )
