"""Shared fixtures: an isolated database per test and a fake payment gateway."""

import asyncio
from datetime import date, datetime, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from autocare.config import Settings, get_settings
from autocare.database import get_db, init_db
from autocare.exceptions import PaymentGatewayError
from autocare.main import app
from autocare.payments import PaymentGateway, get_payment_gateway

API = "/api/v1"


class FakeGateway(PaymentGateway):
    """Records calls and either returns a link or fails like an unreachable gateway."""

    def __init__(self):
        super().__init__("https://payments.test")
        self.calls = []
        self.fail = False

    async def create_payment_link(self, booking_number, customer_phone, amount):
        self.calls.append((booking_number, customer_phone, amount))
        if self.fail:
            raise PaymentGatewayError("Payment gateway request failed")
        return f"https://pay.test/{booking_number}"


@pytest.fixture
def settings():
    return Settings(
        secret_key="test-secret",
        default_staff_pin="1234",
        workshop_name="Test Garage",
        workshop_phone="+15550000",
        workshop_address="1 Test Lane",
        payment_demo_fallback=True,
    )


@pytest.fixture
def engine(tmp_path, settings):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    asyncio.run(init_db(engine, settings))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(session_factory, settings, gateway):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    response = client.post(f"{API}/auth/login", json={"pin": "1234"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def service_ids(client, auth_headers):
    response = client.get(f"{API}/services/", headers=auth_headers)
    return {service["name"]: service["id"] for service in response.json()}


@pytest.fixture
def make_booking(client, auth_headers, service_ids):
    """Create a booking through the API and return the response body."""

    def _make(name="Jane Roe", phone="+15551234", plate="ABC-123",
              services=("Oil Change", "Tire Rotation"), scheduled=None, **extra):
        payload = {
            "customer_name": name,
            "customer_phone": phone,
            "car": {"make": "Toyota", "model": "Camry", "year": 2020, "license_plate": plate},
            "service_ids": [service_ids[s] for s in services],
            "scheduled_date": (scheduled or datetime.combine(date.today(), time(12, 0))).isoformat(),
            "send_payment_link": False,
        }
        payload.update(extra)
        response = client.post(f"{API}/bookings/", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
