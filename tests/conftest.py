"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Database connection pool (skips when PostgreSQL is unreachable)
- Table cleanup between database tests
- User factories
"""

from collections.abc import Callable, Generator
from datetime import datetime, timezone

import bcrypt
import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings
from src.domain.user import User


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Connection pool against DATABASE_URL with migrations applied."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=5)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL not reachable at DATABASE_URL")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty the users table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM users")
        conn.commit()
    yield


@pytest.fixture
def make_user() -> Callable[..., User]:
    """Factory for Users with a real (cheap) bcrypt hash."""

    def _make_user(
        email: str = "user@example.com", password: str = "password123", user_id: int = 1
    ) -> User:
        password_hash = bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode()
        return User(
            id=user_id,
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )

    return _make_user
