import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest

from chirpy_auth._context import Context
from chirpy_auth._dummy import DummyCredential, initialize_auth
from chirpy_auth._login import CredentialVerifier
from chirpy_auth._password import hash_password, verify_password

# Test password constant
TEST_PASSWORD = "password123"


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass
class User:
    id: str
    email: str
    hashed_password: str | None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


class MemoryAccountsStorage:
    def __init__(self, test_password_hash: str):
        self.test_password_hash = test_password_hash
        self.data = {
            "test": User(
                id="test",
                email="test@example.com",
                hashed_password=test_password_hash,
            )
        }

    def find_user_by_email(self, email: str) -> User | None:
        return next((user for user in self.data.values() if user.email == email), None)

    def create_user_with_password(
        self,
        *,
        email: str,
        hashed_password: str,
    ) -> User:
        if self.find_user_by_email(email) is not None:
            raise ValueError("User already exists")

        user_id = str(uuid.uuid4())
        user = User(
            id=user_id,
            email=email,
            hashed_password=hashed_password,
        )

        self.data[user_id] = user

        return user


class UnavailableAccountsStorage:
    """Storage whose backend is down."""

    def find_user_by_email(self, email: str) -> User | None:
        raise ConnectionError("could not connect to server")

    def create_user_with_password(
        self,
        *,
        email: str,
        hashed_password: str,
    ) -> User:
        raise ConnectionError("could not connect to server")


class SpyVerifier:
    """Counts key derivations and records which digest each one used."""

    def __init__(self, verifier=verify_password):
        self.verifier = verifier
        self.digests: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.digests)

    def __call__(self, password: str, digest: str) -> None:
        self.digests.append(digest)
        self.verifier(password, digest)


@pytest.fixture(scope="session")
def test_password_hash() -> str:
    return hash_password(TEST_PASSWORD)


@pytest.fixture(scope="session")
def dummy_credential() -> DummyCredential:
    return initialize_auth()


@pytest.fixture
def accounts_storage(test_password_hash: str) -> MemoryAccountsStorage:
    return MemoryAccountsStorage(test_password_hash)


@pytest.fixture
def existing_user(accounts_storage: MemoryAccountsStorage) -> User:
    user = accounts_storage.find_user_by_email("test@example.com")
    assert user is not None
    return user


@pytest.fixture
def spy_verifier() -> SpyVerifier:
    return SpyVerifier()


@pytest.fixture
def credentials(
    accounts_storage: MemoryAccountsStorage,
    dummy_credential: DummyCredential,
    spy_verifier: SpyVerifier,
) -> CredentialVerifier:
    return CredentialVerifier(
        accounts_storage=accounts_storage,
        dummy_credential=dummy_credential,
        verifier=spy_verifier,
    )


@pytest.fixture
def context(
    accounts_storage: MemoryAccountsStorage,
    credentials: CredentialVerifier,
) -> Context:
    return Context(
        accounts_storage=accounts_storage,
        credentials=credentials,
    )
