"""
Domain exceptions - Semantic error types for signup.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

from .user import SignupForm


class SignupError(Exception):
    """Base class for signup domain errors."""

    pass


class SignupRejected(SignupError):
    """One or more validation rules failed; nothing was persisted."""

    def __init__(self, form: SignupForm) -> None:
        super().__init__(", ".join(sorted(form.errors)))
        self.form = form
