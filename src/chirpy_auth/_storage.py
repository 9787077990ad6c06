from datetime import datetime
from typing import Any

from typing_extensions import Protocol


class User(Protocol):
    id: Any
    email: str
    hashed_password: str | None
    created_at: datetime
    updated_at: datetime


class AccountsStorage(Protocol):
    def find_user_by_email(self, email: str) -> User | None:
        """Get a user by email.

        Returns None only when no such user exists. Any other failure
        (connection lost, query error) must be raised, never mapped to None.
        """
        ...

    def create_user_with_password(
        self,
        *,
        email: str,
        hashed_password: str,
    ) -> User:
        """Create a new user with email and password digest.

        Args:
            email: The user's email address
            hashed_password: The Argon2id digest of the password

        Returns:
            The created user

        Raises:
            ValueError or similar if user with email already exists
        """
        ...
