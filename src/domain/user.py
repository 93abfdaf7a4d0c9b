"""
User entity and the unsaved signup form.

A User only ever holds a bcrypt hash of the password. Authentication
compares the candidate password against that hash; the plaintext is
never stored or compared directly.
"""

from dataclasses import dataclass, field
from datetime import datetime

import bcrypt


@dataclass(frozen=True)
class User:
    """A persisted user account."""

    id: int
    email: str
    password_hash: str
    created_at: datetime | None = None

    def authenticate(self, password: str) -> bool:
        """
        Check a candidate password against the stored hash.

        Uses bcrypt.checkpw, which rehashes the candidate with the salt
        embedded in the stored hash and compares in constant time.
        """
        if not self.password_hash or not password:
            return False
        try:
            return bcrypt.checkpw(password.encode(), self.password_hash.encode())
        except ValueError:
            # Malformed stored hash, or candidate over bcrypt's 72-byte limit
            return False


@dataclass
class SignupForm:
    """
    Unsaved user as shown on the signup form.

    Carries the submitted email back to the page together with field
    errors. The password is deliberately absent.
    """

    email: str = ""
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)
