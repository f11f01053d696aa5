"""Supabase implementation for dog listings."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from dog_adoption.domain.dogs import DogRecord, DogStatus
from dog_adoption.services.dogs import DogRepository

_TABLE = "dogs"
_RANGE_NOT_SATISFIABLE = "PGRST103"


@dataclass
class SupabaseDogRepository(DogRepository):
    """Supabase-backed repository for dog listings."""

    client: Client

    def create_dog(
        self, owner_id: UUID, name: str, description: str, created_at: datetime
    ) -> DogRecord:
        """Create an available listing and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "owner_id": str(owner_id),
                    "name": name,
                    "description": description,
                    "status": DogStatus.AVAILABLE.value,
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create dog listing")
        return _parse_dog(response.data[0])

    def get_dog(self, dog_id: UUID) -> DogRecord | None:
        """Return a listing by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(dog_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_dog(response.data[0])

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
        filters = _filters(status=status, owner_id=owner_id, adopted_by=adopted_by)
        query = self.client.table(_TABLE).select("*", count="exact")
        for column, value in filters:
            query = query.eq(column, value)
        try:
            response = (
                query.order("created_at")
                .order("id")
                .range(offset, offset + limit - 1)
                .execute()
            )
        except APIError as exc:
            # Offsets past the last row are rejected by PostgREST.
            if exc.code != _RANGE_NOT_SATISFIABLE:
                raise
            return [], self._count(filters)
        dogs = [_parse_dog(row) for row in response.data or []]
        return dogs, int(response.count or 0)

    def mark_adopted(
        self, dog_id: UUID, adopter_id: UUID, message: str | None
    ) -> DogRecord | None:
        """Adopt the listing only while its stored status is still available."""
        response = (
            self.client.table(_TABLE)
            .update(
                {
                    "status": DogStatus.ADOPTED.value,
                    "adopted_by": str(adopter_id),
                    "adopted_message": message,
                }
            )
            .eq("id", str(dog_id))
            .eq("status", DogStatus.AVAILABLE.value)
            .neq("owner_id", str(adopter_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_dog(response.data[0])

    def delete_available(self, dog_id: UUID, owner_id: UUID) -> bool:
        """Delete the listing only if it is available and owned by owner_id."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(dog_id))
            .eq("status", DogStatus.AVAILABLE.value)
            .eq("owner_id", str(owner_id))
            .execute()
        )
        return bool(response.data)

    def _count(self, filters: list[tuple[str, str]]) -> int:
        query = self.client.table(_TABLE).select("id", count="exact", head=True)
        for column, value in filters:
            query = query.eq(column, value)
        return int(query.execute().count or 0)


def _filters(
    status: str | None, owner_id: UUID | None, adopted_by: UUID | None
) -> list[tuple[str, str]]:
    filters = []
    if status is not None:
        filters.append(("status", str(status)))
    if owner_id is not None:
        filters.append(("owner_id", str(owner_id)))
    if adopted_by is not None:
        filters.append(("adopted_by", str(adopted_by)))
    return filters


def _parse_dog(row: dict[str, object]) -> DogRecord:
    """Parse a dogs row into a domain model."""
    adopted_by = row.get("adopted_by")
    return DogRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        description=str(row.get("description", "")),
        owner_id=UUID(str(row["owner_id"])),
        status=DogStatus(str(row.get("status", DogStatus.AVAILABLE.value))),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        adopted_by=UUID(str(adopted_by)) if adopted_by else None,
        adopted_message=row.get("adopted_message"),
    )
