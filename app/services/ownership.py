"""Owner-scoped access to properties, tenants and rent entries."""

from sqlalchemy.orm import Query, Session

from app.core.errors import NotFoundError
from app.models.property import Property
from app.models.rent_entry import RentEntry
from app.models.tenant import Tenant


class OwnedRecords:
    """Every query and insert made on behalf of one owner goes through here.

    Records belonging to another owner are indistinguishable from missing ones.
    """

    def __init__(self, db: Session, owner_id: int) -> None:
        self.db = db
        self.owner_id = owner_id

    def properties(self) -> Query[Property]:
        return self.db.query(Property).filter(Property.owner_id == self.owner_id)

    def tenants(self) -> Query[Tenant]:
        return self.db.query(Tenant).filter(Tenant.owner_id == self.owner_id)

    def rent_entries(self) -> Query[RentEntry]:
        return self.db.query(RentEntry).filter(RentEntry.owner_id == self.owner_id)

    def get_property(self, property_id: int) -> Property:
        """Get an owned property or raise NotFoundError."""
        db_property = self.properties().filter(Property.id == property_id).first()
        if not db_property:
            raise NotFoundError("Property not found")
        return db_property

    def get_tenant(self, tenant_id: int) -> Tenant:
        """Get an owned tenant or raise NotFoundError."""
        tenant = self.tenants().filter(Tenant.id == tenant_id).first()
        if not tenant:
            raise NotFoundError("Tenant not found")
        return tenant

    def get_rent_entry(self, entry_id: int) -> RentEntry:
        """Get an owned rent entry or raise NotFoundError."""
        entry = self.rent_entries().filter(RentEntry.id == entry_id).first()
        if not entry:
            raise NotFoundError("Rent entry not found")
        return entry

    def add(self, record: Property | Tenant | RentEntry) -> None:
        """Stage a new record under this owner."""
        record.owner_id = self.owner_id
        self.db.add(record)

    def add_all(self, records: list[RentEntry]) -> None:
        for record in records:
            self.add(record)
