"""Shared test fixtures."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from dog_adoption.api.app import create_app
from dog_adoption.config import Settings
from dog_adoption.containers import (
    AppContainer,
    build_rate_limiter,
    build_token_service,
)
from dog_adoption.domain.dogs import DogRecord, DogStatus
from dog_adoption.domain.models import UserRecord
from dog_adoption.services.auth import (
    AuthService,
    DuplicateUsernameError,
    UserRepository,
)
from dog_adoption.services.dogs import DogRegistry, DogRepository


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)

    def get_by_username(self, username: str) -> UserRecord | None:
        return self.users.get(username)

    def create_user(self, username: str, password_hash: str) -> UserRecord:
        if username in self.users:
            raise DuplicateUsernameError(username)
        user = UserRecord(id=uuid4(), username=username, password_hash=password_hash)
        self.users[username] = user
        return user


@dataclass
class InMemoryDogRepository(DogRepository):
    """In-memory dog repository with conditional writes for tests."""

    dogs: dict[UUID, DogRecord] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def create_dog(
        self, owner_id: UUID, name: str, description: str, created_at: datetime
    ) -> DogRecord:
        dog = DogRecord(
            id=uuid4(),
            name=name,
            description=description,
            owner_id=owner_id,
            status=DogStatus.AVAILABLE,
            created_at=created_at,
        )
        with self._lock:
            self.dogs[dog.id] = dog
        return dog

    def add(self, dog: DogRecord) -> DogRecord:
        with self._lock:
            self.dogs[dog.id] = dog
        return dog

    def get_dog(self, dog_id: UUID) -> DogRecord | None:
        return self.dogs.get(dog_id)

    def list_dogs(  # noqa: PLR0913
        self,
        *,
        offset: int,
        limit: int,
        status: str | None = None,
        owner_id: UUID | None = None,
        adopted_by: UUID | None = None,
    ) -> tuple[list[DogRecord], int]:
        matches = [
            dog
            for dog in self.dogs.values()
            if (status is None or dog.status == status)
            and (owner_id is None or dog.owner_id == owner_id)
            and (adopted_by is None or dog.adopted_by == adopted_by)
        ]
        matches.sort(key=lambda dog: dog.created_at)
        return matches[offset : offset + limit], len(matches)

    def mark_adopted(
        self, dog_id: UUID, adopter_id: UUID, message: str | None
    ) -> DogRecord | None:
        with self._lock:
            dog = self.dogs.get(dog_id)
            if (
                dog is None
                or dog.status != DogStatus.AVAILABLE
                or dog.owner_id == adopter_id
            ):
                return None
            adopted = replace(
                dog,
                status=DogStatus.ADOPTED,
                adopted_by=adopter_id,
                adopted_message=message,
            )
            self.dogs[dog_id] = adopted
            return adopted

    def delete_available(self, dog_id: UUID, owner_id: UUID) -> bool:
        with self._lock:
            dog = self.dogs.get(dog_id)
            if (
                dog is None
                or dog.status != DogStatus.AVAILABLE
                or dog.owner_id != owner_id
            ):
                return False
            del self.dogs[dog_id]
            return True


def make_dog(  # noqa: PLR0913
    owner_id: UUID,
    name: str = "Buddy",
    description: str = "Friendly golden retriever",
    adopted_by: UUID | None = None,
    adopted_message: str | None = None,
    created_at: datetime | None = None,
) -> DogRecord:
    """Build a dog record, adopted when adopted_by is given."""
    return DogRecord(
        id=uuid4(),
        name=name,
        description=description,
        owner_id=owner_id,
        status=DogStatus.ADOPTED if adopted_by else DogStatus.AVAILABLE,
        created_at=created_at or datetime.now(tz=UTC),
        adopted_by=adopted_by,
        adopted_message=adopted_message,
    )


def seed_dogs(
    repository: InMemoryDogRepository, owner_id: UUID, count: int
) -> list[DogRecord]:
    """Add count available dogs with increasing creation times."""
    start = datetime(2024, 1, 1, tzinfo=UTC)
    return [
        repository.add(
            make_dog(
                owner_id,
                name=f"Dog {index}",
                created_at=start + timedelta(minutes=index),
            )
        )
        for index in range(count)
    ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        jwt_secret="test-secret-key-for-signing-tokens",
        bcrypt_rounds=4,
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def dog_repository() -> InMemoryDogRepository:
    return InMemoryDogRepository()


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    dog_repository: InMemoryDogRepository,
) -> AppContainer:
    token_service = build_token_service(settings)
    auth_service = AuthService(
        repository=user_repository,
        tokens=token_service,
        bcrypt_rounds=settings.bcrypt_rounds,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        token_service=token_service,
        auth_service=auth_service,
        dog_registry=DogRegistry(dog_repository),
        rate_limiter=build_rate_limiter(settings),
        close_resources=close_resources,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def register_and_login(client: TestClient) -> Callable[[str], dict[str, str]]:
    """Return a helper that creates a user and returns auth headers."""

    def _register_and_login(
        username: str, password: str = "password123"
    ) -> dict[str, str]:
        client.post("/api/register", json={"username": username, "password": password})
        response = client.post(
            "/api/login", json={"username": username, "password": password}
        )
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register_and_login
