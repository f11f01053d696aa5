"""FastAPI dependencies shared by the routers."""

from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from dog_adoption.containers import AppContainer
from dog_adoption.domain.errors import UnauthorizedError

MISSING_TOKEN = "No token provided"

_bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    container: AppContainer = Depends(get_container),
) -> UUID:
    """Verify the Bearer token and return the authenticated user id."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError(MISSING_TOKEN)
    return container.token_service.verify(credentials.credentials)
