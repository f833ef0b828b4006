"""Shared test fixtures."""

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from clinic.api.dependencies import get_gift_client, get_patient_store
from clinic.clients.gifts import GiftClient
from clinic.main import app
from clinic.services.patient_store import FilePatientStore
from clinic.services.patients import PatientService

GIFTS_URL = "https://gifts.test/objects"


@pytest.fixture
def patients_file(tmp_path):
    """Path to a patients file inside a not-yet-existing directory."""
    return tmp_path / "data" / "patients.txt"


@pytest.fixture
def store(patients_file):
    """File store over a fresh, empty patients file."""
    return FilePatientStore(patients_file)


@pytest.fixture
def service(store):
    """Patient service over the temporary store."""
    return PatientService(store)


@pytest_asyncio.fixture
async def http_clients():
    """Async HTTP clients opened during a test; closed on teardown."""
    opened: list[httpx.AsyncClient] = []
    yield opened
    for http_client in opened:
        await http_client.aclose()


@pytest.fixture
def make_gift_client(http_clients):
    """Factory for gift clients whose HTTP traffic is answered by a handler."""

    def make(handler) -> GiftClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        http_clients.append(http_client)
        return GiftClient(GIFTS_URL, http_client)

    return make


@pytest.fixture
def client(store):
    """Test client with the patient store pointed at a temporary file."""
    app.dependency_overrides[get_patient_store] = lambda: store
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_gift_handler(make_gift_client):
    """Route the gifts endpoint to a mock upstream handler."""

    def install(handler) -> None:
        gift_client = make_gift_client(handler)
        app.dependency_overrides[get_gift_client] = lambda: gift_client

    yield install
    app.dependency_overrides.pop(get_gift_client, None)
