"""Registration and login endpoints."""

from fastapi import APIRouter, Depends, status

from dog_adoption.api.dependencies import get_container
from dog_adoption.api.schemas import CredentialsRequest, MessageResponse, TokenResponse
from dog_adoption.containers import AppContainer

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
)
def register(
    body: CredentialsRequest, container: AppContainer = Depends(get_container)
) -> MessageResponse:
    """Create a user account. No token is issued."""
    container.auth_service.register(body.username, body.password)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=TokenResponse)
def login(
    body: CredentialsRequest, container: AppContainer = Depends(get_container)
) -> TokenResponse:
    """Exchange credentials for a signed token."""
    token = container.auth_service.login(body.username, body.password)
    return TokenResponse(token=token)
