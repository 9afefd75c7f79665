"""Rent ledger statistics.

All figures are derived from the entries on every call; nothing is stored.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from app.models.enums import UNSETTLED_STATUSES, RentStatus
from app.models.rent_entry import RentEntry
from app.schemas.rent_entry import RentStatistics

ZERO = Decimal("0")


def paid_amount(entry: RentEntry) -> Decimal:
    return entry.paid_amount or ZERO


def outstanding_amount(entry: RentEntry) -> Decimal:
    """Amount still owed on one entry."""
    return entry.rent_amount - paid_amount(entry)


def collection_rate(total_paid: Decimal, total_amount: Decimal) -> float:
    """Percentage of the billed amount collected, to one decimal place.

    Zero when nothing has been billed.
    """
    if total_amount <= 0:
        return 0.0
    rate = (total_paid / total_amount * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(rate)


def summarize_entries(entries: Iterable[RentEntry]) -> RentStatistics:
    """Compute totals, per-status amounts and counts over a set of entries."""
    entries = list(entries)

    def with_status(status: RentStatus) -> list[RentEntry]:
        return [entry for entry in entries if entry.status == status]

    total_amount = sum((entry.rent_amount for entry in entries), ZERO)
    total_paid = sum((paid_amount(entry) for entry in entries), ZERO)
    pending = with_status(RentStatus.PENDING)
    overdue = with_status(RentStatus.OVERDUE)
    partial = with_status(RentStatus.PARTIAL)

    return RentStatistics(
        total_amount=total_amount,
        total_paid=total_paid,
        remaining=total_amount - total_paid,
        total_due=sum(
            (outstanding_amount(e) for e in entries if e.status in UNSETTLED_STATUSES), ZERO
        ),
        pending_amount=sum((outstanding_amount(e) for e in pending), ZERO),
        overdue_amount=sum((outstanding_amount(e) for e in overdue), ZERO),
        partial_paid=sum((paid_amount(e) for e in partial), ZERO),
        pending_count=len(pending),
        overdue_count=len(overdue),
        partial_count=len(partial),
        paid_count=len(with_status(RentStatus.PAID)),
        total_entries=len(entries),
        collection_rate=collection_rate(total_paid, total_amount),
    )


def unsettled_entries(entries: Iterable[RentEntry]) -> list[RentEntry]:
    """Entries still carrying a balance (pending, overdue or partial)."""
    return [entry for entry in entries if entry.status in UNSETTLED_STATUSES]
