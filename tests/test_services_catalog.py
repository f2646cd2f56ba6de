"""Tests for the service catalogue."""

from autocare.seed import DEFAULT_SERVICES

from tests.conftest import API


class TestServiceCatalogue:
    def test_default_catalogue_is_seeded(self, client, auth_headers):
        services = client.get(f"{API}/services/", headers=auth_headers).json()
        assert [(s["name"], s["price"], s["category"]) for s in services] == [
            (name, price, category.value) for name, price, category in DEFAULT_SERVICES
        ]

    def test_filter_by_category(self, client, auth_headers):
        repairs = client.get(f"{API}/services/", params={"category": "repair"}, headers=auth_headers).json()
        assert [s["name"] for s in repairs] == ["Engine Diagnostic", "Battery Replacement", "AC Repair"]

    def test_create_and_reject_duplicate(self, client, auth_headers):
        payload = {"name": "Wheel Alignment", "price": 70, "category": "maintenance"}

        created = client.post(f"{API}/services/", json=payload, headers=auth_headers)
        assert created.status_code == 201
        assert created.json()["is_active"] is True

        duplicate = client.post(f"{API}/services/", json=payload, headers=auth_headers)
        assert duplicate.status_code == 400

    def test_price_change_does_not_touch_existing_bookings(self, client, auth_headers, make_booking, service_ids):
        booking = make_booking(services=("Oil Change",))["booking"]

        updated = client.put(
            f"{API}/services/{service_ids['Oil Change']}", json={"price": 75}, headers=auth_headers
        )
        assert updated.json()["price"] == 75

        stored = client.get(f"{API}/bookings/{booking['id']}", headers=auth_headers).json()
        assert stored["total_amount"] == 60.0
        assert stored["services"] == [{"name": "Oil Change", "price": 60.0}]

    def test_inactive_service_cannot_be_booked(self, client, auth_headers, service_ids):
        ac_repair = service_ids["AC Repair"]
        client.put(f"{API}/services/{ac_repair}", json={"is_active": False}, headers=auth_headers)

        listed = client.get(f"{API}/services/", headers=auth_headers).json()
        assert ac_repair not in [s["id"] for s in listed]

        response = client.post(f"{API}/bookings/", json={
            "customer_name": "Jane",
            "customer_phone": "+1555",
            "car": {"make": "Ford", "model": "Focus", "year": 2015, "license_plate": "F1"},
            "service_ids": [ac_repair],
            "scheduled_date": "2025-03-01T10:00:00",
        }, headers=auth_headers)
        assert response.status_code == 400

    def test_missing_service_is_404(self, client, auth_headers):
        assert client.get(f"{API}/services/999", headers=auth_headers).status_code == 404

    def test_only_admin_lists_inactive_services(self, client, auth_headers, service_ids):
        client.put(f"{API}/services/{service_ids['AC Repair']}", json={"is_active": False}, headers=auth_headers)
        client.post(
            f"{API}/staff/",
            json={"name": "Sam Mechanic", "role": "staff", "pin": "5678"},
            headers=auth_headers,
        )
        token = client.post(f"{API}/auth/login", json={"pin": "5678"}).json()["access_token"]
        staff_headers = {"Authorization": f"Bearer {token}"}

        denied = client.get(f"{API}/services/", params={"include_inactive": True}, headers=staff_headers)
        assert denied.status_code == 403
        assert len(client.get(f"{API}/services/", headers=staff_headers).json()) == 8

        everything = client.get(f"{API}/services/", params={"include_inactive": True}, headers=auth_headers)
        assert everything.status_code == 200
        assert service_ids["AC Repair"] in [s["id"] for s in everything.json()]
