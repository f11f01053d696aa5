"""User registration and login."""

import logging
from dataclasses import dataclass
from typing import Protocol

import bcrypt

from dog_adoption.domain.errors import ConflictError, UnauthorizedError, ValidationError
from dog_adoption.domain.models import UserRecord
from dog_adoption.services.tokens import TokenService

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username already exists"
INVALID_CREDENTIALS = "Invalid credentials"
# bcrypt only hashes the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


class DuplicateUsernameError(Exception):
    """Raised by repositories when the username uniqueness constraint fires."""


class UserRepository(Protocol):
    """Persistence interface for user credentials."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with the given username, if present."""

    def create_user(self, username: str, password_hash: str) -> UserRecord:
        """Create and return a new user record.

        Raises DuplicateUsernameError when the username is taken.
        """


@dataclass
class AuthService:
    """Application service for credential lifecycle actions."""

    repository: UserRepository
    tokens: TokenService
    bcrypt_rounds: int = 12

    def register(self, username: str | None, password: str | None) -> UserRecord:
        """Store a new user with a bcrypt-hashed password."""
        if not username or not username.strip():
            raise ValidationError("username is required")
        if not password:
            raise ValidationError("password is required")
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"password must be at most {MAX_PASSWORD_BYTES} bytes"
            )
        if self.repository.get_by_username(username) is not None:
            raise ConflictError(USERNAME_TAKEN)
        try:
            user = self.repository.create_user(username, self._hash(password))
        except DuplicateUsernameError as exc:
            raise ConflictError(USERNAME_TAKEN) from exc
        logger.info("Registered user %s", user.id)
        return user

    def login(self, username: str | None, password: str | None) -> str:
        """Return a signed token for valid credentials."""
        if not username or not password:
            raise UnauthorizedError(INVALID_CREDENTIALS)
        user = self.repository.get_by_username(username)
        if user is None or not _verify(password, user.password_hash):
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return self.tokens.issue(user.id)

    def _hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode(), salt).decode()


def _verify(password: str, password_hash: str) -> bool:
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False
