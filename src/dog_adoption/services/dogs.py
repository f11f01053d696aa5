"""Dog registry: listing lifecycle and ownership rules."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from dog_adoption.domain.dogs import DogPage, DogRecord, DogStatus, PageRequest
from dog_adoption.domain.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

DOG_NOT_FOUND = "Dog not found"
ALREADY_ADOPTED = "Dog already adopted"
SELF_ADOPTION = "Cannot adopt a dog you have already adopted"
ADOPTED_NOT_REMOVABLE = "Cannot remove adopted dog"
NOT_AUTHORIZED = "Not authorized"


class DogRepository(Protocol):
    """Persistence interface for dog listings."""

    def create_dog(
        self, owner_id: UUID, name: str, description: str, created_at: datetime
    ) -> DogRecord:
        """Create an available listing and return it."""

    def get_dog(self, dog_id: UUID) -> DogRecord | None:
        """Return a listing by id, if present."""

    def list_dogs(  # noqa: PLR0913
        self,
        *,
        offset: int,
        limit: int,
        status: str | None = None,
        owner_id: UUID | None = None,
        adopted_by: UUID | None = None,
    ) -> tuple[list[DogRecord], int]:
        """Return a slice of matching listings in creation order and the total."""

    def mark_adopted(
        self, dog_id: UUID, adopter_id: UUID, message: str | None
    ) -> DogRecord | None:
        """Adopt the listing only if it is still available.

        Returns None when no available listing matched.
        """

    def delete_available(self, dog_id: UUID, owner_id: UUID) -> bool:
        """Delete the listing only if it is available and owned by owner_id."""


@dataclass
class DogRegistry:
    """Application service enforcing the adoption state machine."""

    repository: DogRepository

    def list_available(self, page: PageRequest | None = None) -> DogPage:
        """Return available listings in creation order."""
        return self._page(page or PageRequest(), status=DogStatus.AVAILABLE)

    def register(
        self, owner_id: UUID, name: str | None, description: str | None
    ) -> DogRecord:
        """Create a new available listing owned by owner_id."""
        missing = [
            field
            for field, value in (("name", name), ("description", description))
            if value is None or not value.strip()
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        dog = self.repository.create_dog(
            owner_id=owner_id,
            name=name,
            description=description,
            created_at=datetime.now(tz=UTC),
        )
        logger.info("Registered dog %s for owner %s", dog.id, owner_id)
        return dog

    def adopt(
        self, dog_id: UUID, adopter_id: UUID, message: str | None = None
    ) -> DogRecord:
        """Adopt an available listing owned by someone else.

        Checks run in a fixed order: existence, then adoption state, then
        ownership.
        """
        dog = self.repository.get_dog(dog_id)
        if dog is None:
            raise NotFoundError(DOG_NOT_FOUND)
        if dog.is_adopted:
            raise ConflictError(ALREADY_ADOPTED)
        if dog.owner_id == adopter_id:
            raise ConflictError(SELF_ADOPTION)

        adopted = self.repository.mark_adopted(dog_id, adopter_id, message)
        if adopted is None:
            logger.info("Adoption of dog %s lost to a concurrent adopter", dog_id)
            raise ConflictError(ALREADY_ADOPTED)
        logger.info("Dog %s adopted by %s", dog_id, adopter_id)
        return adopted

    def remove(self, dog_id: UUID, requester_id: UUID) -> None:
        """Permanently delete an available listing owned by the requester.

        The adoption state is checked before ownership, so adopted listings are
        reported as such to every requester.
        """
        dog = self.repository.get_dog(dog_id)
        if dog is None:
            raise NotFoundError(DOG_NOT_FOUND)
        if dog.is_adopted:
            raise ConflictError(ADOPTED_NOT_REMOVABLE)
        if dog.owner_id != requester_id:
            raise ForbiddenError(NOT_AUTHORIZED)

        if not self.repository.delete_available(dog_id, requester_id):
            if self.repository.get_dog(dog_id) is None:
                raise NotFoundError(DOG_NOT_FOUND)
            raise ConflictError(ADOPTED_NOT_REMOVABLE)
        logger.info("Dog %s removed by owner %s", dog_id, requester_id)

    def list_by_owner(
        self,
        owner_id: UUID,
        status: str | DogStatus | None = None,
        page: PageRequest | None = None,
    ) -> DogPage:
        """Return listings registered by owner_id, optionally by status.

        An unrecognised status matches no listings.
        """
        return self._page(
            page or PageRequest(),
            owner_id=owner_id,
            status=status or None,
        )

    def list_adopted_by(
        self, adopter_id: UUID, page: PageRequest | None = None
    ) -> DogPage:
        """Return listings adopted by adopter_id."""
        return self._page(page or PageRequest(), adopted_by=adopter_id)

    def _page(self, page: PageRequest, **filters: object) -> DogPage:
        dogs, total = self.repository.list_dogs(
            offset=page.offset, limit=page.limit, **filters
        )
        return DogPage.build(dogs, total, page)

