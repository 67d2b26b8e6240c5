import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from appointment_widget.main import create_app
from appointment_widget.services.sql_store import SqlBookingStore


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}"


@pytest_asyncio.fixture
async def store(database_url):
    store = SqlBookingStore(database_url)
    await store.open()
    yield store
    await store.close()


@pytest.fixture
def client(database_url):
    app = create_app(store=SqlBookingStore(database_url))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def jane():
    return {
        "fullName": "Jane Doe",
        "contactNumber": "555-123-4567",
        "email": "jane@example.com",
        "service": "Pet Grooming",
        "date": "2025-06-01",
        "time": "09:00",
    }
