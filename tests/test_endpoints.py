"""Tests for API endpoints."""

from unittest.mock import patch

import httpx

from clinic import __version__
from clinic.api.dependencies import get_patient_store
from clinic.main import app
from clinic.models.patient import BLOOD_GROUPS

ANA = {"name": "Ana", "lastName": "Diaz", "ci": "123"}


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, client):
        """Test that health check returns status and version."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert "timestamp" in data


class TestPatientEndpoints:
    """Tests for the patient CRUD endpoints."""

    def test_list_empty(self, client):
        """Test an empty store lists no patients."""
        response = client.get("/api/patients")

        assert response.status_code == 200
        assert response.json() == []

    def test_create_get_delete_scenario(self, client):
        """Test the full create, read, delete lifecycle of one patient."""
        response = client.post("/api/patients", json=ANA)
        assert response.status_code == 201
        created = response.json()
        assert {key: created[key] for key in ANA} == ANA
        assert created["bloodGroup"] in BLOOD_GROUPS
        assert response.headers["location"] == "/api/patients/123"

        response = client.get("/api/patients/123")
        assert response.status_code == 200
        assert response.json() == created

        response = client.delete("/api/patients/123")
        assert response.status_code == 204
        assert response.content == b""

        response = client.get("/api/patients/123")
        assert response.status_code == 404
        assert response.json() == {"message": "Patient not found"}

    def test_create_duplicate_ci(self, client):
        """Test posting the same CI twice is a conflict."""
        assert client.post("/api/patients", json=ANA).status_code == 201

        response = client.post("/api/patients", json={**ANA, "name": "Luis"})

        assert response.status_code == 409
        assert response.json() == {"message": "Patient with CI 123 already exists"}
        assert [p["name"] for p in client.get("/api/patients").json()] == ["Ana"]

    def test_create_missing_field(self, client):
        """Test a missing field is a bad request naming the field."""
        response = client.post("/api/patients", json={"name": "Ana", "ci": "123"})

        assert response.status_code == 400
        assert response.json() == {"message": "Last name is required"}

    def test_create_blank_field(self, client):
        """Test a blank CI is a bad request."""
        response = client.post("/api/patients", json={**ANA, "ci": "  "})

        assert response.status_code == 400
        assert response.json() == {"message": "CI is required"}

    def test_create_non_object_body(self, client):
        """Test a body that is not an object fails request validation."""
        response = client.post("/api/patients", json=["Ana"])
        assert response.status_code == 422

    def test_list_after_creates(self, client):
        """Test listing returns every created patient in insertion order."""
        client.post("/api/patients", json=ANA)
        client.post("/api/patients", json={"name": "Luis", "lastName": "Perez", "ci": "456"})

        response = client.get("/api/patients")

        assert response.status_code == 200
        assert [p["ci"] for p in response.json()] == ["123", "456"]

    def test_update(self, client):
        """Test updating changes names and keeps CI and blood group."""
        created = client.post("/api/patients", json=ANA).json()

        response = client.put("/api/patients/123", json={"name": "Luisa", "lastName": "Gomez"})

        assert response.status_code == 200
        assert response.json() == {**created, "name": "Luisa", "lastName": "Gomez"}
        assert client.get("/api/patients/123").json() == response.json()

    def test_update_ignores_ci_in_body(self, client):
        """Test the CI in the path is authoritative."""
        client.post("/api/patients", json=ANA)

        response = client.put("/api/patients/123", json={"name": "Luisa", "lastName": "Gomez", "ci": "999"})

        assert response.status_code == 200
        assert response.json()["ci"] == "123"

    def test_update_missing_patient(self, client):
        """Test updating an unknown CI is not found."""
        response = client.put("/api/patients/999", json={"name": "Luisa", "lastName": "Gomez"})

        assert response.status_code == 404
        assert response.json() == {"message": "Patient not found"}

    def test_update_missing_field(self, client):
        """Test an update without a name is a bad request."""
        client.post("/api/patients", json=ANA)

        response = client.put("/api/patients/123", json={"lastName": "Gomez"})

        assert response.status_code == 400
        assert response.json() == {"message": "Name is required"}

    def test_delete_missing_patient(self, client):
        """Test deleting an unknown CI is not found."""
        response = client.delete("/api/patients/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Patient not found"}

    def test_patients_are_persisted_to_file(self, client, patients_file):
        """Test created patients are written to the configured file."""
        created = client.post("/api/patients", json=ANA).json()

        assert patients_file.read_text() == f"Ana,Diaz,123,{created['bloodGroup']}\n"

    def test_storage_failure_is_internal_error(self, client, store):
        """Test unexpected storage errors map to a generic 500."""
        with patch.object(store, "list_all", side_effect=OSError("disk unavailable")):
            response = client.get("/api/patients")

        assert response.status_code == 500
        assert response.json() == {"statusCode": 500, "message": "An unexpected error occurred"}

    def test_value_error_is_internal_error(self, client):
        """Test a stray ValueError reaching the boundary is a generic 500 without its detail."""

        class BrokenStore:
            def list_all(self):
                raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        app.dependency_overrides[get_patient_store] = BrokenStore

        response = client.get("/api/patients")

        assert response.status_code == 500
        assert response.json() == {"statusCode": 500, "message": "An unexpected error occurred"}

    def test_undecodable_line_is_skipped(self, client, patients_file):
        """Test a line that is not valid UTF-8 does not abort the listing."""
        patients_file.write_bytes(b"Ana,Diaz,123,O+\n\xff\xfe,bad,line,X\nLuis,Perez,456,A-\n")

        response = client.get("/api/patients")

        assert response.status_code == 200
        assert [p["ci"] for p in response.json()] == ["123", "456"]

    def test_create_with_padded_ci_is_duplicate(self, client):
        """Test a CI differing only in surrounding whitespace is a conflict."""
        assert client.post("/api/patients", json=ANA).status_code == 201

        response = client.post("/api/patients", json={**ANA, "ci": " 123 "})

        assert response.status_code == 409
        assert [p["ci"] for p in client.get("/api/patients").json()] == ["123"]

    def test_created_patient_matches_stored(self, client):
        """Test padded names are returned as they will read back from storage."""
        response = client.post("/api/patients", json={"name": " Ana ", "lastName": "Diaz  ", "ci": " 123"})

        assert response.status_code == 201
        created = response.json()
        assert (created["name"], created["lastName"], created["ci"]) == ("Ana", "Diaz", "123")
        assert response.headers["location"] == "/api/patients/123"
        assert client.get("/api/patients/123").json() == created

    def test_update_with_padded_names(self, client):
        """Test updated names are stored and returned stripped."""
        client.post("/api/patients", json=ANA)

        response = client.put("/api/patients/123", json={"name": " Luisa", "lastName": "Gomez "})

        assert response.status_code == 200
        assert (response.json()["name"], response.json()["lastName"]) == ("Luisa", "Gomez")
        assert client.get("/api/patients/123").json() == response.json()

    def test_location_header_escapes_slash(self, client, store):
        """Test a CI containing a slash still yields 201 with an escaped Location."""
        response = client.post("/api/patients", json={**ANA, "ci": "12/3"})

        assert response.status_code == 201
        assert response.headers["location"] == "/api/patients/12%2F3"
        assert [p.ci for p in store.list_all()] == ["12/3"]

    def test_location_header_escapes_non_ascii(self, client, store):
        """Test a non-ASCII CI yields 201 with a percent-encoded Location."""
        response = client.post("/api/patients", json={**ANA, "ci": "身份"})

        assert response.status_code == 201
        assert response.headers["location"] == "/api/patients/%E8%BA%AB%E4%BB%BD"
        assert response.json()["ci"] == "身份"
        assert [p.ci for p in store.list_all()] == ["身份"]


class TestGiftEndpoint:
    """Tests for the gifts passthrough endpoint."""

    def test_list_gifts(self, client, use_gift_handler):
        """Test upstream gifts are reshaped."""
        use_gift_handler(
            lambda request: httpx.Response(
                200, json=[{"id": "1", "name": "Box", "data": {"description": "a box", "color": "red", "weight": 2.5}}]
            )
        )

        response = client.get("/api/gifts")

        assert response.status_code == 200
        assert response.json() == [
            {"id": "1", "name": "Box", "description": "a box", "data": {"color": "red", "weight": 2.5}}
        ]

    def test_upstream_error(self, client, use_gift_handler):
        """Test an upstream failure returns the fixed gifts error message."""
        use_gift_handler(lambda request: httpx.Response(500, text="upstream down"))

        response = client.get("/api/gifts")

        assert response.status_code == 500
        assert response.json() == {"message": "Error retrieving gifts from external service"}

    def test_upstream_unreachable(self, client, use_gift_handler):
        """Test a transport failure returns the fixed gifts error message."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        use_gift_handler(handler)

        response = client.get("/api/gifts")

        assert response.status_code == 500
        assert response.json() == {"message": "Error retrieving gifts from external service"}


class TestAPIDocumentation:
    """Tests for API documentation endpoints."""

    def test_openapi_json_available(self, client):
        """Test that the OpenAPI document lists the patient routes."""
        response = client.get("/openapi.json")

        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/patients" in paths
        assert "/api/patients/{ci}" in paths
        assert "/api/gifts" in paths

    def test_swagger_ui_available(self, client):
        """Test that Swagger UI is available."""
        response = client.get("/docs")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
