"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness
----------
The users table carries a UNIQUE constraint on email. create_user inserts
with ON CONFLICT (email) DO NOTHING, so of several concurrent signups for
one address exactly one row is written and every other caller gets None.
The check happens inside the single INSERT statement; no row locks or
application-level mutexes are involved.
"""

import logging
from pathlib import Path

from psycopg.rows import class_row
from psycopg_pool import ConnectionPool

from src.domain.user import User

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, email, password_hash, created_at"


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def create_user(self, email: str, password_hash: str) -> User | None:
        """
        Atomically insert a user unless the email already exists.

        Args:
            email: Normalized email address (lowercase, stripped)
            password_hash: bcrypt-hashed password from domain layer

        Returns:
            The created User, or None if the email is already registered
        """
        sql = f"""
            INSERT INTO users (email, password_hash, created_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (email) DO NOTHING
            RETURNING {_USER_COLUMNS}
        """

        with self._pool.connection() as conn, conn.cursor(row_factory=class_row(User)) as cursor:
            cursor.execute(sql, (email, password_hash))
            user = cursor.fetchone()
            conn.commit()
            return user

    def email_taken(self, email: str) -> bool:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT 1 FROM users WHERE email = %s", (email,))
            return cursor.fetchone() is not None

    def get_by_email(self, email: str) -> User | None:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s"
        with self._pool.connection() as conn, conn.cursor(row_factory=class_row(User)) as cursor:
            cursor.execute(sql, (email,))
            return cursor.fetchone()

    def get_by_id(self, user_id: int) -> User | None:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s"
        with self._pool.connection() as conn, conn.cursor(row_factory=class_row(User)) as cursor:
            cursor.execute(sql, (user_id,))
            return cursor.fetchone()


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
