"""End-to-end walk through a working day: log in, book, get paid, print a receipt."""

from tests.conftest import API


class TestWorkshopSystem:
    def test_1_health_check(self, client):
        """Health check reports the database"""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    def test_2_root(self, client):
        """Welcome page points at the docs"""
        data = client.get("/").json()
        assert data["docs"] == "/docs"

    def test_3_day_in_the_workshop(self, client, service_ids, gateway):
        """Book, pay, print and finish a job"""
        # 1. Log in with the shared PIN
        login = client.post(f"{API}/auth/login", json={"pin": "1234"})
        assert login.status_code == 200
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

        # 2. Book a car in; the payment link goes out
        created = client.post(f"{API}/bookings/", json={
            "customer_name": "John Doe",
            "customer_phone": "+254712345678",
            "car": {"make": "Toyota", "model": "Corolla", "year": 2020, "license_plate": "KDA 123A"},
            "service_ids": [service_ids["Premium Car Wash"], service_ids["Engine Diagnostic"]],
            "scheduled_date": "2030-01-15T09:30:00",
            "notes": "Customer will wait",
        }, headers=headers)
        assert created.status_code == 201
        booking = created.json()["booking"]
        assert created.json()["payment"]["sent"] is True
        assert len(gateway.calls) == 1

        # 3. Dashboard shows it awaiting payment
        dashboard = client.get(f"{API}/dashboard/", headers=headers).json()
        assert dashboard["pending_payments"] == 1

        # 4. Customer pays
        paid = client.patch(f"{API}/bookings/{booking['id']}/status", json={"status": "paid"}, headers=headers)
        assert paid.json()["paid_at"] is not None

        # 5. Customer history by phone
        customers = client.get(f"{API}/customers/search", params={"phone": "712345"}, headers=headers).json()
        assert customers[0]["total_spent"] == 165.0

        # 6. Print the receipt
        receipt = client.get(f"{API}/receipts/{booking['id']}", headers=headers)
        assert receipt.status_code == 200
        assert "Jan 15, 2030 - 09:30 AM" in receipt.text
        assert "Total Amount: $165.00" in receipt.text

        # 7. Job done
        done = client.patch(f"{API}/bookings/{booking['id']}/status", json={"status": "completed"}, headers=headers)
        assert done.json()["status"] == "completed"
        assert client.get(f"{API}/dashboard/", headers=headers).json()["total_revenue"] == 165.0

        # 8. Log out
        assert client.post(f"{API}/auth/logout", headers=headers).status_code == 200
