"""Enum definitions for property, tenant and rent entry states."""

from enum import Enum


class PropertyType(str, Enum):
    """Kind of rentable property."""

    APARTMENT = "apartment"
    HOUSE = "house"
    CONDO = "condo"
    COMMERCIAL = "commercial"
    OTHER = "other"


class PropertyStatus(str, Enum):
    """Occupancy status of a property."""

    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class TenantStatus(str, Enum):
    """Lifecycle status of a tenant."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"


class RentStatus(str, Enum):
    """Payment status of a rent entry."""

    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    PARTIAL = "partial"


# Statuses that still carry an outstanding balance
UNSETTLED_STATUSES = (RentStatus.PENDING, RentStatus.OVERDUE, RentStatus.PARTIAL)


class PaymentMethod(str, Enum):
    """How a rent payment was made."""

    CASH = "cash"
    CHECK = "check"
    BANK_TRANSFER = "bank_transfer"
    ONLINE = "online"
    OTHER = "other"
