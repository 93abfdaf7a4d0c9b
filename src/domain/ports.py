"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Protocol

from .user import User


class UserRepository(Protocol):
    """Port interface for user persistence."""

    def create_user(self, email: str, password_hash: str) -> User | None:
        """
        Atomically insert a new user.

        The storage layer's unique constraint on email decides between
        concurrent signups for the same address; no application locking.

        Args:
            email: Normalized email address
            password_hash: bcrypt hashed password

        Returns:
            The created User, or None if the email already exists
        """
        ...

    def email_taken(self, email: str) -> bool:
        """Return True if a user with this normalized email exists."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by normalized email."""
        ...

    def get_by_id(self, user_id: int) -> User | None:
        """Fetch a user by id."""
        ...
