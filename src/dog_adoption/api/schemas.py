"""Request and response models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from dog_adoption.domain.dogs import DogPage, DogRecord, DogStatus


class CredentialsRequest(BaseModel):
    """Body for registration and login."""

    username: str | None = None
    password: str | None = None


class DogCreateRequest(BaseModel):
    """Body for registering a dog listing."""

    name: str | None = None
    description: str | None = None


class AdoptRequest(BaseModel):
    """Body for adopting a dog."""

    message: str | None = None


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DogResponse(_CamelModel):
    """Public representation of a dog listing."""

    id: UUID
    name: str
    description: str
    owner_id: UUID
    status: DogStatus
    adopted_by: UUID | None = None
    adopted_message: str | None = None
    created_at: datetime

    @classmethod
    def from_record(cls, dog: DogRecord) -> "DogResponse":
        return cls(
            id=dog.id,
            name=dog.name,
            description=dog.description,
            owner_id=dog.owner_id,
            status=dog.status,
            adopted_by=dog.adopted_by,
            adopted_message=dog.adopted_message,
            created_at=dog.created_at,
        )


class DogPageResponse(_CamelModel):
    """One page of dog listings."""

    dogs: list[DogResponse]
    total: int
    pages: int
    current_page: int

    @classmethod
    def from_page(cls, page: DogPage) -> "DogPageResponse":
        return cls(
            dogs=[DogResponse.from_record(dog) for dog in page.dogs],
            total=page.total,
            pages=page.pages,
            current_page=page.current_page,
        )
