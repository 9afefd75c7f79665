"""Monthly rent entry generation.

Back-fills one RentEntry per calendar month from the tenant's move-in month
through the current month (inclusive). Months that already have an entry for
the same tenant and property are skipped, so generation can be repeated
safely after time passes or after the move-in date is corrected.
"""

import logging
from collections.abc import Iterator
from datetime import date, datetime, time

from sqlalchemy.exc import IntegrityError

from app.core.errors import DuplicateEntryError, PreconditionFailedError
from app.models.enums import RentStatus
from app.models.property import Property
from app.models.rent_entry import RentEntry
from app.models.tenant import Tenant
from app.services.ownership import OwnedRecords

logger = logging.getLogger(__name__)

# Rent is due on this day of every billing month
RENT_DUE_DAY = 5


def billing_periods(start: date, until: date) -> Iterator[tuple[int, int]]:
    """Yield (year, month) pairs from start's month through until's month."""
    year, month = start.year, start.month
    while (year, month) <= (until.year, until.month):
        yield year, month
        month += 1
        if month > 12:
            month = 1
            year += 1


def due_date_for(year: int, month: int) -> date:
    """Due date of a billing period."""
    return date(year, month, RENT_DUE_DAY)


def initial_status(due_date: date, now: datetime) -> RentStatus:
    """Status of a freshly created entry: overdue once its due date has passed."""
    due_at = datetime.combine(due_date, time.min, tzinfo=now.tzinfo)
    return RentStatus.OVERDUE if due_at < now else RentStatus.PENDING


def existing_periods(
    records: OwnedRecords, tenant_id: int, property_id: int
) -> set[tuple[int, int]]:
    """(year, month) pairs already billed for a tenant at a property."""
    rows = (
        records.rent_entries()
        .filter(RentEntry.tenant_id == tenant_id, RentEntry.property_id == property_id)
        .with_entities(RentEntry.year, RentEntry.month)
        .all()
    )
    return {(year, month) for year, month in rows}


def build_missing_entries(
    records: OwnedRecords,
    tenant: Tenant,
    property_obj: Property,
    now: datetime,
) -> list[RentEntry]:
    """Construct (unsaved) entries for every unbilled month up to ``now``."""
    if tenant.move_in_date is None:
        raise PreconditionFailedError(
            "Tenant must have a move-in date before rent entries can be generated"
        )

    billed = existing_periods(records, tenant.id, property_obj.id)
    entries: list[RentEntry] = []
    for year, month in billing_periods(tenant.move_in_date, now.date()):
        if (year, month) in billed:
            continue
        due_date = due_date_for(year, month)
        entries.append(
            RentEntry(
                property_id=property_obj.id,
                tenant_id=tenant.id,
                month=month,
                year=year,
                rent_amount=property_obj.monthly_rent,
                due_date=due_date,
                status=initial_status(due_date, now),
            )
        )
    return entries


def generate_rent_entries(
    records: OwnedRecords,
    tenant: Tenant,
    property_obj: Property,
    now: datetime,
) -> list[RentEntry]:
    """Stage and flush the missing entries as one batch.

    The caller owns the transaction and must commit. A concurrent generator
    that inserted the same period first trips the unique constraint; the
    whole transaction is then rolled back.
    """
    entries = build_missing_entries(records, tenant, property_obj, now)
    if not entries:
        return entries

    records.add_all(entries)
    try:
        records.db.flush()
    except IntegrityError as exc:
        records.db.rollback()
        raise DuplicateEntryError(
            "Rent entries for this tenant and property were created concurrently; try again"
        ) from exc
    return entries


def regenerate_rent_entries(
    records: OwnedRecords,
    tenant_id: int,
    property_id: int,
    now: datetime,
) -> list[RentEntry]:
    """Fill in missing months for a (tenant, property) pair and commit."""
    tenant = records.get_tenant(tenant_id)
    property_obj = records.get_property(property_id)

    entries = generate_rent_entries(records, tenant, property_obj, now)
    records.db.commit()
    logger.info(
        "Generated %d rent entries for tenant %s at property %s",
        len(entries),
        tenant_id,
        property_id,
    )
    return entries
