"""
Domain layer - Pure business logic with zero framework imports.

This package contains the user entity, the signup validation rules and
the signup service. It defines its own port interfaces for
infrastructure abstraction.
"""

from .exceptions import SignupError, SignupRejected
from .ports import UserRepository
from .signup import SignupService
from .user import SignupForm, User
from .validation import EMAIL_REGEX, normalize_email, validate_signup

__all__ = [
    "EMAIL_REGEX",
    "SignupError",
    "SignupForm",
    "SignupRejected",
    "SignupService",
    "User",
    "UserRepository",
    "normalize_email",
    "validate_signup",
]
