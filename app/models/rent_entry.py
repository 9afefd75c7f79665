"""RentEntry database model - one billing period for a tenant at a property."""

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.enums import PaymentMethod, RentStatus

if TYPE_CHECKING:
    from app.models.property import Property
    from app.models.tenant import Tenant


class RentEntry(Base):
    """Rent owed for one (month, year) by a tenant at a property.

    ``rent_amount`` is a snapshot of the property's monthly rent when the entry
    was created; later rent changes do not touch existing entries.
    """

    __tablename__ = "rent_entries"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id", "property_id", "month", "year", name="uq_rent_entry_period"
        ),
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_rent_entry_month"),
        CheckConstraint("rent_amount >= 0", name="ck_rent_entry_amount"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    # Entries outlive a deleted property or tenant; the reference is cleared
    property_id: Mapped[int | None] = mapped_column(
        ForeignKey("properties.id", ondelete="SET NULL"), index=True, nullable=True
    )
    tenant_id: Mapped[int | None] = mapped_column(
        ForeignKey("tenants.id", ondelete="SET NULL"), index=True, nullable=True
    )

    # Billing period
    month: Mapped[int]
    year: Mapped[int] = mapped_column(index=True)

    rent_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    due_date: Mapped[date]
    paid_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
    paid_date: Mapped[date | None] = mapped_column(nullable=True)
    status: Mapped[RentStatus] = mapped_column(
        String(20), default=RentStatus.PENDING, index=True
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(
        String(20), default=PaymentMethod.OTHER
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    property: Mapped["Property | None"] = relationship(back_populates="rent_entries")
    tenant: Mapped["Tenant | None"] = relationship(back_populates="rent_entries")
