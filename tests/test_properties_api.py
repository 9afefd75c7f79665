"""Tests for the property API."""

from decimal import Decimal

from fastapi.testclient import TestClient

from tests.conftest import PROPERTY_PAYLOAD, create_property, create_tenant


class TestPropertyCrud:
    """Tests for property create/read/update/delete."""

    def test_create_property(self, client: TestClient, auth_headers) -> None:
        """Test creating a property."""
        data = create_property(client, auth_headers)
        assert data["address"] == PROPERTY_PAYLOAD["address"]
        assert Decimal(data["monthly_rent"]) == Decimal("1000")
        assert data["status"] == "available"
        assert data["current_tenant"] is None

    def test_negative_rent_rejected(self, client: TestClient, auth_headers) -> None:
        """Test that monthly rent must not be negative."""
        response = client.post(
            "/api/properties",
            json={**PROPERTY_PAYLOAD, "monthly_rent": "-1"},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_missing_required_field(self, client: TestClient, auth_headers) -> None:
        """Test that required fields are enforced."""
        payload = {k: v for k, v in PROPERTY_PAYLOAD.items() if k != "city"}
        response = client.post("/api/properties", json=payload, headers=auth_headers)
        assert response.status_code == 422
        assert "message" in response.json()

    def test_cannot_create_occupied(self, client: TestClient, auth_headers) -> None:
        """Test that occupancy cannot be declared without a tenant."""
        response = client.post(
            "/api/properties",
            json={**PROPERTY_PAYLOAD, "status": "occupied"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_list_newest_first(self, client: TestClient, auth_headers) -> None:
        """Test listing the caller's properties."""
        create_property(client, auth_headers, address="1 First Street")
        create_property(client, auth_headers, address="2 Second Street")

        response = client.get("/api/properties", headers=auth_headers)
        assert response.status_code == 200
        assert [p["address"] for p in response.json()] == ["2 Second Street", "1 First Street"]

    def test_update_property(self, client: TestClient, auth_headers) -> None:
        """Test a partial update."""
        prop = create_property(client, auth_headers)

        response = client.put(
            f"/api/properties/{prop['id']}",
            json={"monthly_rent": "1100.00", "status": "maintenance"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["monthly_rent"]) == Decimal("1100")
        assert data["status"] == "maintenance"
        assert data["city"] == PROPERTY_PAYLOAD["city"]

    def test_update_cannot_clear_required_field(self, client: TestClient, auth_headers) -> None:
        """Test that required fields cannot be nulled."""
        prop = create_property(client, auth_headers)
        response = client.put(
            f"/api/properties/{prop['id']}", json={"address": None}, headers=auth_headers
        )
        assert response.status_code == 422
        assert response.json()["code"] == "validation_failed"
        assert response.json()["fields"] == ["address"]

    def test_validation_failures_share_one_status(self, client: TestClient, auth_headers):
        """Test that schema errors and cleared fields report the same code and status."""
        prop = create_property(client, auth_headers)
        cleared = client.put(
            f"/api/properties/{prop['id']}", json={"city": None}, headers=auth_headers
        )
        negative = client.put(
            f"/api/properties/{prop['id']}", json={"monthly_rent": "-1"}, headers=auth_headers
        )
        assert (cleared.status_code, cleared.json()["code"]) == (422, "validation_failed")
        assert (negative.status_code, negative.json()["code"]) == (422, "validation_failed")

    def test_delete_property(self, client: TestClient, auth_headers) -> None:
        """Test deleting a property without rent entries."""
        prop = create_property(client, auth_headers)

        response = client.delete(f"/api/properties/{prop['id']}", headers=auth_headers)
        assert response.status_code == 200
        response = client.get(f"/api/properties/{prop['id']}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Property not found"


class TestOwnershipIsolation:
    """Tests that owners never see each other's properties."""

    def test_other_owner_gets_not_found(self, client: TestClient, auth_headers, other_headers):
        """Test that foreign properties look missing."""
        prop = create_property(client, auth_headers)

        assert client.get(f"/api/properties/{prop['id']}", headers=other_headers).status_code == 404
        assert client.put(
            f"/api/properties/{prop['id']}", json={"city": "Elsewhere"}, headers=other_headers
        ).status_code == 404
        response = client.delete(f"/api/properties/{prop['id']}", headers=other_headers)
        assert response.status_code == 404
        assert client.get("/api/properties", headers=other_headers).json() == []

    def test_cannot_assign_foreign_tenant(self, client: TestClient, auth_headers, other_headers):
        """Test that a tenant of another owner cannot be assigned."""
        prop = create_property(client, auth_headers)
        foreign = create_tenant(client, other_headers)

        response = client.post(
            f"/api/properties/{prop['id']}/assign-tenant",
            json={"tenant_id": foreign["id"]},
            headers=auth_headers,
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Tenant not found"


class TestAssignTenant:
    """Tests for the property-side assignment."""

    def test_assign_tenant(self, client: TestClient, auth_headers) -> None:
        """Test assignment occupies the property and reports generated entries."""
        prop = create_property(client, auth_headers)
        tenant = create_tenant(client, auth_headers)

        response = client.post(
            f"/api/properties/{prop['id']}/assign-tenant",
            json={"tenant_id": tenant["id"]},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["entries_generated"] == 4
        assert data["property"]["status"] == "occupied"
        assert data["property"]["current_tenant"]["name"] == tenant["name"]

    def test_assign_requires_move_in_date(self, client: TestClient, auth_headers) -> None:
        """Test the corrective message for a missing move-in date."""
        prop = create_property(client, auth_headers)
        tenant = create_tenant(client, auth_headers, move_in_date=None)

        response = client.post(
            f"/api/properties/{prop['id']}/assign-tenant",
            json={"tenant_id": tenant["id"]},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert "move-in date" in response.json()["message"]

    def test_status_edit_guarded_while_occupied(self, client: TestClient, auth_headers) -> None:
        """Test that occupancy can only change through assign and vacate."""
        prop = create_property(client, auth_headers)
        tenant = create_tenant(client, auth_headers)
        client.post(
            f"/api/properties/{prop['id']}/assign-tenant",
            json={"tenant_id": tenant["id"]},
            headers=auth_headers,
        )

        response = client.put(
            f"/api/properties/{prop['id']}", json={"status": "available"}, headers=auth_headers
        )
        assert response.status_code == 400

        response = client.post(f"/api/properties/{prop['id']}/vacate", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "available"
        assert response.json()["current_tenant"] is None

    def test_delete_guarded_by_unpaid_rent(self, client: TestClient, auth_headers) -> None:
        """Test that a property with unpaid entries cannot be deleted."""
        prop = create_property(client, auth_headers)
        tenant = create_tenant(client, auth_headers, move_in_date="2024-04-01")
        client.post(
            f"/api/properties/{prop['id']}/assign-tenant",
            json={"tenant_id": tenant["id"]},
            headers=auth_headers,
        )

        response = client.delete(f"/api/properties/{prop['id']}", headers=auth_headers)
        assert response.status_code == 400
        data = response.json()
        assert data["unpaid_count"] == 1
        assert data["unpaid_amount"] == 1000

    def test_delete_keeps_settled_entries(self, client: TestClient, auth_headers) -> None:
        """Test that paid rent survives deleting its property and still counts."""
        prop = create_property(client, auth_headers)
        tenant = create_tenant(client, auth_headers, move_in_date="2024-04-01")
        client.post(
            f"/api/properties/{prop['id']}/assign-tenant",
            json={"tenant_id": tenant["id"]},
            headers=auth_headers,
        )
        (entry,) = client.get("/api/rent", headers=auth_headers).json()
        client.patch(f"/api/rent/{entry['id']}/pay", json={}, headers=auth_headers)

        response = client.delete(f"/api/properties/{prop['id']}", headers=auth_headers)
        assert response.status_code == 200

        kept = client.get(f"/api/rent/{entry['id']}", headers=auth_headers)
        assert kept.status_code == 200
        assert kept.json()["property_id"] is None
        assert kept.json()["tenant_id"] == tenant["id"]
        assert kept.json()["status"] == "paid"

        stats = client.get("/api/rent/statistics", headers=auth_headers).json()
        assert Decimal(stats["total_paid"]) == Decimal("1000")
        assert (stats["total_entries"], stats["paid_count"]) == (1, 1)
