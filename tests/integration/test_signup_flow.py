"""
Integration tests for the signup flow.

Tests the full signup flow through the HTTP interface with a real database.
Skipped when PostgreSQL is not reachable at DATABASE_URL.
"""

import logging

import bcrypt
import pytest
from fastapi.testclient import TestClient
from psycopg_pool import ConnectionPool

from src.api.main import app

pytestmark = [pytest.mark.integration, pytest.mark.usefixtures("clean_database")]


@pytest.fixture
def client(pool: ConnectionPool) -> TestClient:
    """Create test client with real database connection."""
    # Override the app's pool with our test pool
    app.state.pool = pool
    return TestClient(app)


def count_users(pool: ConnectionPool) -> int:
    with pool.connection() as conn, conn.cursor() as cursor:
        cursor.execute("SELECT COUNT(*) FROM users")
        return cursor.fetchone()[0]


def signup(client: TestClient, email: str, password: str, confirmation: str | None = None):
    data = {"email": email, "password": password}
    data["password_confirmation"] = password if confirmation is None else confirmation
    return client.post("/signup", data=data, follow_redirects=False)


class TestSignupFlow:
    """Integration tests for POST /signup."""

    def test_valid_signup_creates_user_and_session(
        self, client: TestClient, pool: ConnectionPool, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO):
            response = signup(client, "integration@example.com", "secure123")

        assert response.status_code == 303
        assert count_users(pool) == 1
        assert "signed up" in caplog.text

        home = client.get("/")
        assert "Thank you for signing up!" in home.text
        assert "Logged in as integration@example.com" in home.text

    def test_stored_credential_is_bcrypt_hash(
        self, client: TestClient, pool: ConnectionPool
    ) -> None:
        signup(client, "user@example.com", "secure123")

        with pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT password_hash FROM users WHERE email = %s", ("user@example.com",))
            (password_hash,) = cursor.fetchone()

        assert password_hash != "secure123"
        assert bcrypt.checkpw(b"secure123", password_hash.encode())

    def test_email_normalization_through_stack(
        self, client: TestClient, pool: ConnectionPool
    ) -> None:
        response = signup(client, "  USER@Example.COM  ", "secure123")

        assert response.status_code == 303
        with pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT email FROM users")
            assert cursor.fetchone()[0] == "user@example.com"

    def test_duplicate_email_creates_no_user(
        self, client: TestClient, pool: ConnectionPool
    ) -> None:
        assert signup(client, "duplicate@example.com", "secure123").status_code == 303

        response = signup(TestClient(client.app), "duplicate@example.com", "different456")

        assert response.status_code == 422
        assert "has already been taken" in response.text
        assert count_users(pool) == 1

    def test_duplicate_differing_only_in_case(
        self, client: TestClient, pool: ConnectionPool
    ) -> None:
        signup(client, "case@example.com", "secure123")

        response = signup(TestClient(client.app), "CASE@example.com", "secure123")

        assert response.status_code == 422
        assert count_users(pool) == 1

    def test_short_password_creates_no_user(
        self, client: TestClient, pool: ConnectionPool
    ) -> None:
        response = signup(client, "user@example.com", "short")

        assert response.status_code == 422
        assert count_users(pool) == 0

    def test_malformed_email_creates_no_user(
        self, client: TestClient, pool: ConnectionPool
    ) -> None:
        response = signup(client, "missing-at.example.com", "secure123")

        assert response.status_code == 422
        assert "is invalid" in response.text
        assert count_users(pool) == 0

    def test_mismatched_confirmation_creates_no_user(
        self, client: TestClient, pool: ConnectionPool
    ) -> None:
        response = signup(client, "user@example.com", "secure123", "secure124")

        assert response.status_code == 422
        assert count_users(pool) == 0

    def test_failed_signup_leaves_session_anonymous(self, client: TestClient) -> None:
        signup(client, "user@example.com", "short")

        home = client.get("/")
        assert "Logged in as" not in home.text


class TestHealth:
    """Integration tests for GET /health."""

    def test_health_with_live_database(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
