"""Integration tests for user registration endpoints."""
import pytest

from tests.factories import registration_payload


@pytest.mark.asyncio
class TestUserRegistration:
    """Tests for user registration."""

    async def test_register_success(self, app_client):
        """Test successful registration."""
        response = await app_client.post("/users/register", json=registration_payload())

        assert response.status_code == 201
        data = response.json()
        assert data == {
            "id": 1,
            "email": "ana@example.com",
            "message": "User registered successfully",
            "requiresEmailConfirmation": True,
            "requiresGuardianAuthorization": False,
        }

    async def test_register_duplicate_email(self, app_client):
        """Test registration with a taken email returns 409."""
        await app_client.post("/users/register", json=registration_payload())

        response = await app_client.post(
            "/users/register", json=registration_payload(fullName="Other Person")
        )

        assert response.status_code == 409
        assert response.json()["detail"] == {
            "code": "CONFLICT",
            "message": "Email already registered",
        }

    async def test_register_rule_errors(self, app_client):
        """Test conditional rule failures list their field paths."""
        response = await app_client.post(
            "/users/register",
            json=registration_payload(userType="health_professional", password="weak"),
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["code"] == "VALIDATION_ERROR"
        assert [error["path"] for error in detail["details"]] == [
            ["password"],
            ["professionalData"],
        ]

    async def test_register_terms_not_accepted(self, app_client):
        """Test terms acceptance is a schema requirement."""
        response = await app_client.post(
            "/users/register", json=registration_payload(acceptTerms=False)
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "VALIDATION_ERROR"

    async def test_register_too_young(self, app_client):
        """Test users under 16 are rejected."""
        response = await app_client.post(
            "/users/register", json=registration_payload(age=15)
        )

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Age must be between 16 and 100 years"


@pytest.mark.asyncio
class TestHealth:
    """Tests for the health endpoints."""

    async def test_root(self, app_client):
        """Test the root endpoint."""
        response = await app_client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    async def test_health(self, app_client):
        """Test the health endpoint."""
        response = await app_client.get("/health")

        assert response.json() == {"status": "healthy"}
