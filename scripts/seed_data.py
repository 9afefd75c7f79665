"""Seed script to populate the database with sample data."""

from datetime import UTC, date, datetime
from decimal import Decimal

from app.core.config import settings
from app.core.database import Database
from app.models.enums import PaymentMethod, PropertyType
from app.models.user import User
from app.schemas.property import PropertyCreate
from app.schemas.rent_entry import PaymentCreate
from app.schemas.tenant import EmergencyContact, TenantCreate
from app.services.association import assign_tenant_to_property
from app.services.auth import get_password_hash
from app.services.ownership import OwnedRecords
from app.services.property import create_property
from app.services.rent_entry import get_entries_for_pair, record_payment
from app.services.tenant import create_tenant


def seed_database(database: Database) -> None:
    """Seed the database with a demo landlord, two properties and a tenant."""
    database.create_all()
    with database.session() as db:
        if db.query(User).first():
            print("Database already has data. Skipping seed.")
            return

        print("Seeding database...")

        owner = User(
            username="demo",
            email="demo@example.com",
            hashed_password=get_password_hash("demo-password"),
        )
        db.add(owner)
        db.commit()
        print(f"Created user: {owner.username} (password: demo-password)")

        records = OwnedRecords(db, owner.id)
        flat = create_property(
            records,
            PropertyCreate(
                address="12 Elm Street, Apt 3",
                city="Springfield",
                state="IL",
                zip_code="62701",
                property_type=PropertyType.APARTMENT,
                bedrooms=2,
                bathrooms=1,
                square_feet=850,
                monthly_rent=Decimal("1200.00"),
            ),
        )
        create_property(
            records,
            PropertyCreate(
                address="48 Oak Avenue",
                city="Springfield",
                state="IL",
                zip_code="62704",
                property_type=PropertyType.HOUSE,
                bedrooms=3,
                bathrooms=2,
                monthly_rent=Decimal("1850.00"),
            ),
        )
        print(f"Created properties (first: {flat.address})")

        today = datetime.now(UTC).date()
        # First of the month, three months back
        year, month = divmod(today.year * 12 + today.month - 1 - 3, 12)
        move_in = date(year, month + 1, 1)
        tenant = create_tenant(
            records,
            TenantCreate(
                name="Jordan Smith",
                phone="555-0142",
                emergency_contact=EmergencyContact(
                    name="Alex Smith", phone="555-0199", relationship="sibling"
                ),
                move_in_date=move_in,
            ),
        )

        now = datetime.now(UTC)
        result = assign_tenant_to_property(records, tenant.id, flat.id, now)
        print(f"Assigned {tenant.name}: {len(result.entries)} rent entries generated")

        entries = sorted(
            get_entries_for_pair(records, tenant.id, flat.id), key=lambda e: (e.year, e.month)
        )
        # Settle all but the last two months, part-pay the second to last
        for entry in entries[:-2]:
            record_payment(
                records, entry.id, PaymentCreate(payment_method=PaymentMethod.BANK_TRANSFER), now
            )
        if len(entries) >= 2:
            record_payment(
                records,
                entries[-2].id,
                PaymentCreate(paid_amount=Decimal("600.00"), payment_method=PaymentMethod.CASH),
                now,
            )

        print("Seeding complete!")


if __name__ == "__main__":
    seed_database(Database(settings.DATABASE_URL))
