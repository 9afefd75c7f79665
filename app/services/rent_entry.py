"""RentEntry service: manual entries, edits, payments and statistics."""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from app.core.errors import DuplicateEntryError
from app.models.enums import RentStatus
from app.models.rent_entry import RentEntry
from app.schemas.rent_entry import (
    PaymentCreate,
    RentEntryCreate,
    RentEntryUpdate,
    RentStatistics,
)
from app.services.ledger import summarize_entries
from app.services.ownership import OwnedRecords
from app.services.property import reject_nulls
from app.services.rent_generation import due_date_for, initial_status

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {"rent_amount", "due_date", "paid_amount", "status", "payment_method"}


def get_rent_entries(
    records: OwnedRecords,
    tenant_id: int | None = None,
    property_id: int | None = None,
    status: RentStatus | None = None,
) -> list[RentEntry]:
    """Get the owner's rent entries, latest billing period first."""
    query = records.rent_entries()
    if tenant_id is not None:
        query = query.filter(RentEntry.tenant_id == tenant_id)
    if property_id is not None:
        query = query.filter(RentEntry.property_id == property_id)
    if status is not None:
        query = query.filter(RentEntry.status == status)
    return query.order_by(RentEntry.year.desc(), RentEntry.month.desc(), RentEntry.id).all()


def get_rent_entry(records: OwnedRecords, entry_id: int) -> RentEntry:
    """Get a rent entry by ID."""
    return records.get_rent_entry(entry_id)


def get_entries_for_pair(
    records: OwnedRecords, tenant_id: int, property_id: int
) -> list[RentEntry]:
    """All entries billed to a tenant at a property."""
    return get_rent_entries(records, tenant_id=tenant_id, property_id=property_id)


def _duplicate_period(entry_data: RentEntryCreate) -> DuplicateEntryError:
    return DuplicateEntryError(
        f"A rent entry for {entry_data.month:02d}/{entry_data.year} already exists "
        "for this tenant and property",
        month=entry_data.month,
        year=entry_data.year,
    )


def create_rent_entry(
    records: OwnedRecords, entry_data: RentEntryCreate, now: datetime
) -> RentEntry:
    """Create one rent entry by hand.

    Amount, due date and status default to what generation would have used.
    """
    property_obj = records.get_property(entry_data.property_id)
    tenant = records.get_tenant(entry_data.tenant_id)

    existing = (
        records.rent_entries()
        .filter(
            RentEntry.tenant_id == tenant.id,
            RentEntry.property_id == property_obj.id,
            RentEntry.month == entry_data.month,
            RentEntry.year == entry_data.year,
        )
        .first()
    )
    if existing:
        raise _duplicate_period(entry_data)

    due_date = entry_data.due_date or due_date_for(entry_data.year, entry_data.month)
    entry = RentEntry(
        property_id=property_obj.id,
        tenant_id=tenant.id,
        month=entry_data.month,
        year=entry_data.year,
        rent_amount=(
            entry_data.rent_amount
            if entry_data.rent_amount is not None
            else property_obj.monthly_rent
        ),
        due_date=due_date,
        paid_amount=entry_data.paid_amount,
        paid_date=entry_data.paid_date,
        status=entry_data.status or initial_status(due_date, now),
        payment_method=entry_data.payment_method,
        notes=entry_data.notes,
    )
    records.add(entry)
    try:
        records.db.commit()
    except IntegrityError as exc:
        records.db.rollback()
        raise _duplicate_period(entry_data) from exc

    records.db.refresh(entry)
    logger.info(
        "Created rent entry %s for %02d/%d (tenant %s, property %s)",
        entry.id,
        entry.month,
        entry.year,
        tenant.id,
        property_obj.id,
    )
    return entry


def update_rent_entry(
    records: OwnedRecords, entry_id: int, entry_data: RentEntryUpdate
) -> RentEntry:
    """Update a rent entry. Tenant, property and billing period stay fixed."""
    entry = records.get_rent_entry(entry_id)

    update_data = entry_data.model_dump(exclude_unset=True)
    reject_nulls(update_data, REQUIRED_FIELDS)
    for field, value in update_data.items():
        setattr(entry, field, value)

    records.db.commit()
    records.db.refresh(entry)
    return entry


def apply_payment(entry: RentEntry, payment: PaymentCreate, now: datetime) -> RentEntry:
    """Overwrite the entry's payment with ``payment``.

    Payments replace rather than accumulate: two partial payments must be
    recorded as their running total. Without an amount the full rent is
    recorded. Status becomes ``paid`` when the amount covers the rent,
    ``partial`` when it covers part of it, and is left alone for zero.
    """
    amount = payment.paid_amount if payment.paid_amount is not None else entry.rent_amount

    entry.paid_amount = amount
    entry.paid_date = payment.paid_date or now.date()
    entry.payment_method = payment.payment_method

    if amount >= entry.rent_amount:
        entry.status = RentStatus.PAID
    elif amount > 0:
        entry.status = RentStatus.PARTIAL
    return entry


def record_payment(
    records: OwnedRecords,
    entry_id: int,
    payment: PaymentCreate,
    now: datetime,
) -> RentEntry:
    """Record a payment against a rent entry and commit."""
    entry = records.get_rent_entry(entry_id)
    apply_payment(entry, payment, now)
    records.db.commit()
    records.db.refresh(entry)
    logger.info(
        "Recorded payment of %s on rent entry %s (%s)", entry.paid_amount, entry.id, entry.status
    )
    return entry


def delete_rent_entry(records: OwnedRecords, entry_id: int) -> None:
    """Delete a rent entry. Its property and tenant are untouched."""
    entry = records.get_rent_entry(entry_id)
    records.db.delete(entry)
    records.db.commit()
    logger.info("Deleted rent entry %s", entry_id)


def get_statistics(records: OwnedRecords, tenant_id: int | None = None) -> RentStatistics:
    """Ledger statistics over all of the owner's entries, or one tenant's."""
    query = records.rent_entries()
    if tenant_id is not None:
        records.get_tenant(tenant_id)
        query = query.filter(RentEntry.tenant_id == tenant_id)
    return summarize_entries(query.all())
