"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from dog_adoption.adapters.supabase_dog_repository import SupabaseDogRepository
from dog_adoption.adapters.supabase_user_repository import SupabaseUserRepository
from dog_adoption.config import Settings
from dog_adoption.services.auth import AuthService
from dog_adoption.services.dogs import DogRegistry
from dog_adoption.services.rate_limit import InMemoryRateLimiter, RateLimiter
from dog_adoption.services.tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_service: TokenService
    auth_service: AuthService
    dog_registry: DogRegistry
    rate_limiter: RateLimiter | None
    close_resources: Callable[[], Awaitable[None]]


def build_token_service(settings: Settings) -> TokenService:
    """Create the token service from settings."""
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiry=timedelta(hours=settings.jwt_expiry_hours),
    )


def build_rate_limiter(settings: Settings) -> RateLimiter | None:
    """Create the request rate limiter, or None when disabled."""
    if not settings.rate_limit_enabled:
        return None
    return InMemoryRateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    token_service = build_token_service(resolved_settings)
    auth_service = AuthService(
        repository=SupabaseUserRepository(supabase_client),
        tokens=token_service,
        bcrypt_rounds=resolved_settings.bcrypt_rounds,
    )
    dog_registry = DogRegistry(SupabaseDogRepository(supabase_client))

    async def close_resources() -> None:
        supabase_client.postgrest.session.close()
        logger.info("Released Supabase client")

    return AppContainer(
        settings=resolved_settings,
        token_service=token_service,
        auth_service=auth_service,
        dog_registry=dog_registry,
        rate_limiter=build_rate_limiter(resolved_settings),
        close_resources=close_resources,
    )
