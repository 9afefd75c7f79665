"""Tenant database model."""

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.enums import TenantStatus

if TYPE_CHECKING:
    from app.models.property import Property
    from app.models.rent_entry import RentEntry
    from app.models.user import User


class Tenant(Base):
    """Tenant; billed monthly from the move-in date once assigned to a property."""

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)

    name: Mapped[str] = mapped_column(String(100), index=True)
    phone: Mapped[str] = mapped_column(String(30))
    # {"name": ..., "phone": ..., "relationship": ...}
    emergency_contact: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    move_in_date: Mapped[date | None] = mapped_column(nullable=True)
    status: Mapped[TenantStatus] = mapped_column(String(20), default=TenantStatus.ACTIVE)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="tenants")
    current_property: Mapped["Property | None"] = relationship(
        back_populates="current_tenant", uselist=False
    )
    rent_entries: Mapped[list["RentEntry"]] = relationship(back_populates="tenant")
