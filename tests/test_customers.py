"""Tests for customer lookup and history."""

from tests.conftest import API


class TestCustomers:
    def test_list_is_newest_first(self, client, auth_headers, make_booking):
        make_booking(name="First", phone="+1000", plate="P1")
        make_booking(name="Second", phone="+2000", plate="P2")

        customers = client.get(f"{API}/customers/", headers=auth_headers).json()
        assert [c["name"] for c in customers] == ["Second", "First"]

    def test_search_by_partial_phone(self, client, auth_headers, make_booking):
        make_booking(name="Alice", phone="+15550001", plate="P1")
        make_booking(name="Bob", phone="+15559999", plate="P2")

        found = client.get(f"{API}/customers/search", params={"phone": "0001"}, headers=auth_headers).json()
        assert [c["name"] for c in found] == ["Alice"]

        none = client.get(f"{API}/customers/search", params={"phone": "4242"}, headers=auth_headers).json()
        assert none == []

    def test_search_requires_phone(self, client, auth_headers):
        response = client.get(f"{API}/customers/search", headers=auth_headers)
        assert response.status_code == 422

    def test_history_lists_bookings_and_vehicles(self, client, auth_headers, make_booking):
        first = make_booking(plate="CAR-1")["booking"]
        second = make_booking(plate="CAR-2", services=("Basic Car Wash",))["booking"]
        make_booking(name="Someone Else", phone="+19999", plate="CAR-3")

        history = client.get(f"{API}/customers/{first['customer_id']}/history", headers=auth_headers).json()

        assert history["customer"]["booking_count"] == 2
        assert [b["id"] for b in history["bookings"]] == [second["id"], first["id"]]
        assert sorted(v["license_plate"] for v in history["vehicles"]) == ["CAR-1", "CAR-2"]

    def test_vehicle_moves_to_new_owner(self, client, auth_headers, make_booking):
        old_owner = make_booking(name="Seller", phone="+1111", plate="SOLD-1")["booking"]
        new_owner = make_booking(name="Buyer", phone="+2222", plate="SOLD-1")["booking"]

        assert old_owner["vehicle_id"] == new_owner["vehicle_id"]
        seller = client.get(f"{API}/customers/{old_owner['customer_id']}/history", headers=auth_headers).json()
        assert seller["vehicles"] == []

    def test_update_name(self, client, auth_headers, make_booking):
        booking = make_booking()["booking"]
        response = client.put(
            f"{API}/customers/{booking['customer_id']}", json={"name": "Jane Doe"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Jane Doe"
        assert response.json()["booking_count"] == 1

    def test_missing_customer_is_404(self, client, auth_headers):
        assert client.get(f"{API}/customers/42", headers=auth_headers).status_code == 404
        assert client.get(f"{API}/customers/42/history", headers=auth_headers).status_code == 404
