"""Property database model."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.enums import PropertyStatus, PropertyType

if TYPE_CHECKING:
    from app.models.rent_entry import RentEntry
    from app.models.tenant import Tenant
    from app.models.user import User


class Property(Base):
    """Rentable property with at most one current tenant."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)

    address: Mapped[str] = mapped_column(String(255))
    city: Mapped[str] = mapped_column(String(100))
    state: Mapped[str] = mapped_column(String(100))
    zip_code: Mapped[str] = mapped_column(String(20))
    property_type: Mapped[PropertyType] = mapped_column(
        String(20), default=PropertyType.APARTMENT
    )
    bedrooms: Mapped[int] = mapped_column(default=1)
    bathrooms: Mapped[float] = mapped_column(default=1)
    square_feet: Mapped[int | None] = mapped_column(nullable=True)
    monthly_rent: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[PropertyStatus] = mapped_column(
        String(20), default=PropertyStatus.AVAILABLE, index=True
    )

    # Written only by the association service
    current_tenant_id: Mapped[int | None] = mapped_column(
        ForeignKey("tenants.id"), unique=True, nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="properties")
    current_tenant: Mapped["Tenant | None"] = relationship(back_populates="current_property")
    rent_entries: Mapped[list["RentEntry"]] = relationship(back_populates="property")
