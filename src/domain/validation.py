"""
Signup validation rules.

Pure functions with no storage access. Uniqueness of the email needs the
repository and is checked by SignupService on top of these rules.
"""

import re

EMAIL_REGEX = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,4}", re.IGNORECASE | re.ASCII)

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72
DEFAULT_PASSWORD_MIN_LENGTH = 8


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


def validate_email(email: str) -> list[str]:
    if not email:
        return ["can't be blank"]
    # fullmatch: the pattern must cover the whole value, not one line of it
    if EMAIL_REGEX.fullmatch(email) is None:
        return ["is invalid"]
    return []


def validate_password(
    password: str, min_length: int = DEFAULT_PASSWORD_MIN_LENGTH
) -> list[str]:
    if not password:
        return ["can't be blank"]
    errors = []
    if len(password) < min_length:
        errors.append(f"is too short (minimum is {min_length} characters)")
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        errors.append(f"is too long (maximum is {MAX_PASSWORD_BYTES} bytes)")
    return errors


def validate_signup(
    email: str,
    password: str,
    password_confirmation: str | None = None,
    *,
    password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
) -> dict[str, list[str]]:
    """
    Evaluate every signup rule and collect the failures per field.

    Args:
        email: Normalized email address
        password: Plaintext password
        password_confirmation: Repeated password, or None to skip the check
        password_min_length: Minimum number of characters for the password

    Returns:
        Mapping of field name to error messages; empty when all rules pass
    """
    errors: dict[str, list[str]] = {}

    email_errors = validate_email(email)
    if email_errors:
        errors["email"] = email_errors

    password_errors = validate_password(password, password_min_length)
    if password_errors:
        errors["password"] = password_errors

    if password_confirmation is not None and password_confirmation != password:
        errors["password_confirmation"] = ["doesn't match Password"]

    return errors
