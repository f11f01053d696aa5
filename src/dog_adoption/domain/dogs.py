"""Domain models for dog adoption listings."""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from dog_adoption.domain.errors import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class DogStatus(StrEnum):
    """Lifecycle states of a listing."""

    AVAILABLE = "available"
    ADOPTED = "adopted"


@dataclass(frozen=True)
class DogRecord:
    """Represents a dog listing stored in the database."""

    id: UUID
    name: str
    description: str
    owner_id: UUID
    status: DogStatus
    created_at: datetime
    adopted_by: UUID | None = None
    adopted_message: str | None = None

    def __post_init__(self) -> None:
        if (self.status == DogStatus.ADOPTED) != (self.adopted_by is not None):
            raise ValueError("adopted_by must be set exactly when status is adopted")
        if self.adopted_by is not None and self.adopted_by == self.owner_id:
            raise ValueError("owner cannot be the adopter")

    @property
    def is_adopted(self) -> bool:
        return self.status == DogStatus.ADOPTED


@dataclass(frozen=True)
class PageRequest:
    """A 1-based page selection."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("page must be a positive integer")
        if self.limit < 1:
            raise ValidationError("limit must be a positive integer")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls, page: str | int | None = None, limit: str | int | None = None
    ) -> "PageRequest":
        """Build a page request from raw query values, truncating decimals."""
        return cls(
            page=_parse_int(page, "page", DEFAULT_PAGE),
            limit=_parse_int(limit, "limit", DEFAULT_LIMIT),
        )


@dataclass(frozen=True)
class DogPage:
    """One page of listings plus totals."""

    dogs: list[DogRecord]
    total: int
    pages: int
    current_page: int

    @classmethod
    def build(cls, dogs: list[DogRecord], total: int, page: PageRequest) -> "DogPage":
        return cls(
            dogs=dogs,
            total=total,
            pages=math.ceil(total / page.limit),
            current_page=page.page,
        )


def _parse_int(raw: str | int | None, field: str, default: int) -> int:
    if raw is None:
        return default
    if isinstance(raw, int):
        return raw
    cleaned = raw.strip()
    if not cleaned:
        return default
    try:
        return int(cleaned)
    except ValueError:
        pass
    try:
        value = float(cleaned)
    except ValueError as exc:
        raise ValidationError(f"{field} must be an integer") from exc
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be an integer")
    return math.trunc(value)
