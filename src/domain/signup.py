"""
Signup domain service.

Orchestrates account registration: email normalization, rule
validation, the uniqueness check, password hashing and persistence.

A signup either persists exactly one user or raises SignupRejected with
every failed rule; there is no partial state. Two simultaneous signups
for the same email both pass the uniqueness pre-check, so the final
word belongs to the repository's unique constraint.
"""

import logging
from dataclasses import dataclass

import bcrypt

from .exceptions import SignupRejected
from .ports import UserRepository
from .user import SignupForm, User
from .validation import DEFAULT_PASSWORD_MIN_LENGTH, normalize_email, validate_signup

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "has already been taken"


@dataclass
class SignupService:
    """Domain service for user signup."""

    repository: UserRepository
    bcrypt_cost: int = 10
    password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH

    def new_user(self) -> SignupForm:
        """Return a blank form for rendering."""
        return SignupForm()

    def signup(
        self, email: str, password: str, password_confirmation: str | None = None
    ) -> User:
        """
        Create a user from the submitted fields.

        Args:
            email: User's email address (will be normalized)
            password: User's password (will be hashed)
            password_confirmation: Repeated password; None skips the check

        Returns:
            The persisted User

        Raises:
            SignupRejected: If any validation rule fails or the email is taken
        """
        normalized_email = normalize_email(email)
        form = SignupForm(
            email=normalized_email,
            errors=validate_signup(
                normalized_email,
                password,
                password_confirmation,
                password_min_length=self.password_min_length,
            ),
        )

        if "email" not in form.errors and self.repository.email_taken(normalized_email):
            form.add_error("email", EMAIL_TAKEN)

        if not form.is_valid:
            logger.info("Signup rejected: %s", ", ".join(sorted(form.errors)))
            raise SignupRejected(form)

        user = self.repository.create_user(normalized_email, self._hash_password(password))
        if user is None:
            # Lost a race with a concurrent signup for the same email
            form.add_error("email", EMAIL_TAKEN)
            logger.info("Signup rejected: email claimed concurrently")
            raise SignupRejected(form)

        logger.info("User %s signed up", user.id)
        return user

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user if the password matches the stored hash."""
        user = self.repository.get_by_email(normalize_email(email))
        if user is not None and user.authenticate(password):
            return user
        return None

    def find_user(self, user_id: int) -> User | None:
        return self.repository.get_by_id(user_id)

    def _hash_password(self, password: str) -> str:
        """Hash password using bcrypt with a fresh salt."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.bcrypt_cost)).decode()
