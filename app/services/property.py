"""Property service for business logic."""

import logging
from decimal import Decimal
from typing import Any

from app.core.errors import PreconditionFailedError, ValidationFailedError
from app.models.enums import PropertyStatus
from app.models.property import Property
from app.models.rent_entry import RentEntry
from app.schemas.property import PropertyCreate, PropertyUpdate
from app.services.association import check_status_change
from app.services.ledger import outstanding_amount, unsettled_entries
from app.services.ownership import OwnedRecords

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "address",
    "city",
    "state",
    "zip_code",
    "property_type",
    "bedrooms",
    "bathrooms",
    "monthly_rent",
    "status",
}


def reject_nulls(update_data: dict[str, Any], required: set[str]) -> None:
    """Refuse to clear fields the store requires."""
    cleared = sorted(
        field for field, value in update_data.items() if value is None and field in required
    )
    if cleared:
        raise ValidationFailedError(f"Fields cannot be null: {', '.join(cleared)}", fields=cleared)


def create_property(records: OwnedRecords, property_data: PropertyCreate) -> Property:
    """Create a new property. It starts without a tenant."""
    if property_data.status == PropertyStatus.OCCUPIED:
        raise PreconditionFailedError(
            "A property becomes occupied only by assigning a tenant to it"
        )

    db_property = Property(**property_data.model_dump())
    records.add(db_property)
    records.db.commit()
    records.db.refresh(db_property)
    logger.info("Created property %s for owner %s", db_property.id, records.owner_id)
    return db_property


def get_property(records: OwnedRecords, property_id: int) -> Property:
    """Get a property by ID."""
    return records.get_property(property_id)


def get_properties(records: OwnedRecords, skip: int = 0, limit: int = 100) -> list[Property]:
    """Get the owner's properties, newest first."""
    return (
        records.properties()
        .order_by(Property.created_at.desc(), Property.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def update_property(
    records: OwnedRecords,
    property_id: int,
    property_data: PropertyUpdate,
) -> Property:
    """Update a property.

    Changing ``monthly_rent`` affects only entries generated afterwards.
    """
    db_property = records.get_property(property_id)

    update_data = property_data.model_dump(exclude_unset=True)
    reject_nulls(update_data, REQUIRED_FIELDS)
    if "status" in update_data:
        check_status_change(db_property, update_data["status"])

    for field, value in update_data.items():
        setattr(db_property, field, value)

    records.db.commit()
    records.db.refresh(db_property)
    return db_property


def delete_property(records: OwnedRecords, property_id: int) -> None:
    """Delete a property that nobody owes rent on.

    Refused while any of its entries still carries a balance. Settled entries
    are kept, detached from the property, so they still count in statistics.
    """
    db_property = records.get_property(property_id)

    entries = records.rent_entries().filter(RentEntry.property_id == property_id).all()
    unpaid = unsettled_entries(entries)
    if unpaid:
        unpaid_amount = sum((outstanding_amount(e) for e in unpaid), Decimal("0"))
        logger.info(
            "Refused to delete property %s: %d unpaid entries", property_id, len(unpaid)
        )
        raise PreconditionFailedError(
            f"Cannot delete property with unpaid rent. "
            f"{len(unpaid)} unpaid entries totaling {unpaid_amount:.2f}",
            unpaid_count=len(unpaid),
            unpaid_amount=unpaid_amount,
        )

    records.db.delete(db_property)
    records.db.commit()
    logger.info("Deleted property %s", property_id)
