"""Dog listing endpoints. Every route requires a Bearer token."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from dog_adoption.api.dependencies import get_container, get_current_user_id
from dog_adoption.api.schemas import (
    AdoptRequest,
    DogCreateRequest,
    DogPageResponse,
    DogResponse,
    MessageResponse,
)
from dog_adoption.containers import AppContainer
from dog_adoption.domain.dogs import PageRequest

router = APIRouter(prefix="/dogs", tags=["dogs"])


@router.get("", response_model=DogPageResponse)
def list_available(
    page: str | None = None,
    limit: str | None = None,
    user_id: UUID = Depends(get_current_user_id),
    container: AppContainer = Depends(get_container),
) -> DogPageResponse:
    """List dogs that can still be adopted."""
    result = container.dog_registry.list_available(PageRequest.from_query(page, limit))
    return DogPageResponse.from_page(result)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=DogResponse,
)
def register_dog(
    body: DogCreateRequest,
    user_id: UUID = Depends(get_current_user_id),
    container: AppContainer = Depends(get_container),
) -> DogResponse:
    """Register a dog owned by the caller."""
    dog = container.dog_registry.register(user_id, body.name, body.description)
    return DogResponse.from_record(dog)


@router.get("/registered", response_model=DogPageResponse)
def list_registered(
    status_filter: str | None = Query(default=None, alias="status"),
    page: str | None = None,
    limit: str | None = None,
    user_id: UUID = Depends(get_current_user_id),
    container: AppContainer = Depends(get_container),
) -> DogPageResponse:
    """List dogs registered by the caller."""
    result = container.dog_registry.list_by_owner(
        user_id, status_filter, PageRequest.from_query(page, limit)
    )
    return DogPageResponse.from_page(result)


@router.get("/adopted", response_model=DogPageResponse)
def list_adopted(
    page: str | None = None,
    limit: str | None = None,
    user_id: UUID = Depends(get_current_user_id),
    container: AppContainer = Depends(get_container),
) -> DogPageResponse:
    """List dogs adopted by the caller."""
    result = container.dog_registry.list_adopted_by(
        user_id, PageRequest.from_query(page, limit)
    )
    return DogPageResponse.from_page(result)


@router.post("/{dog_id}/adopt", response_model=DogResponse)
def adopt_dog(
    dog_id: UUID,
    body: AdoptRequest | None = None,
    user_id: UUID = Depends(get_current_user_id),
    container: AppContainer = Depends(get_container),
) -> DogResponse:
    """Adopt a dog registered by another user."""
    message = body.message if body else None
    dog = container.dog_registry.adopt(dog_id, user_id, message)
    return DogResponse.from_record(dog)


@router.delete("/{dog_id}", response_model=MessageResponse)
def remove_dog(
    dog_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    container: AppContainer = Depends(get_container),
) -> MessageResponse:
    """Remove one of the caller's dogs that has not been adopted."""
    container.dog_registry.remove(dog_id, user_id)
    return MessageResponse(message="Dog removed successfully")
