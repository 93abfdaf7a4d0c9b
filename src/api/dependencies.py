"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresUserRepository
from src.config.settings import Settings
from src.domain.signup import SignupService
from src.domain.user import User

SESSION_USER_KEY = "user_id"
SESSION_NOTICE_KEY = "notice"


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresUserRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresUserRepository(pool)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with (see create_app)."""
    return request.app.state.settings


def get_signup_service(
    request: Request, settings: Settings = Depends(get_app_settings)
) -> SignupService:
    """Create signup service wired to the repository and credential settings."""
    return SignupService(
        repository=get_repository(request),
        bcrypt_cost=settings.bcrypt_cost,
        password_min_length=settings.password_min_length,
    )


def get_current_user(
    request: Request, service: SignupService = Depends(get_signup_service)
) -> User | None:
    """
    Resolve the signed-in user from the session cookie.

    A session pointing at a user that no longer exists is cleared.
    """
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        return None
    user = service.find_user(user_id)
    if user is None:
        request.session.pop(SESSION_USER_KEY, None)
    return user
