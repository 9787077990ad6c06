"""Timing-uniform credential checks.

Login always performs exactly one key derivation: against the stored digest
when the account exists, against the dummy credential otherwise. Every
credential failure collapses into the same ``AuthOutcome.REJECTED``; only a
storage failure is reported separately.
"""

import contextlib
import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ._dummy import DummyCredential
from ._password import hash_password, verify_password
from ._storage import AccountsStorage, User
from .exceptions import (
    ChirpyAuthException,
    MalformedDigestError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)


class AuthOutcome(enum.Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class StoredDigest:
    digest: str
    user: User


@dataclass(frozen=True)
class AbsentDigest:
    pass


DigestLookup = StoredDigest | AbsentDigest


@dataclass(frozen=True)
class LoginResult:
    outcome: AuthOutcome
    # Only set when the outcome is ACCEPTED
    user: User | None = None

    @property
    def accepted(self) -> bool:
        return self.outcome is AuthOutcome.ACCEPTED


REJECTED = LoginResult(outcome=AuthOutcome.REJECTED)


class CredentialVerifier:
    """Registers and authenticates email/password credentials."""

    def __init__(
        self,
        accounts_storage: AccountsStorage,
        dummy_credential: DummyCredential,
        hasher: Callable[[str], str] = hash_password,
        verifier: Callable[[str, str], None] = verify_password,
    ):
        """Initialize the credential verifier.

        Args:
            accounts_storage: Where users and their digests live.
            dummy_credential: The value returned by ``initialize_auth()``.
                It is fixed for the lifetime of this object.
            hasher: Derives a digest from a plaintext password.
            verifier: Returns on match, raises on anything else.
        """
        self._accounts_storage = accounts_storage
        self._dummy_credential = dummy_credential
        self._hasher = hasher
        self._verifier = verifier

    @property
    def dummy_credential(self) -> DummyCredential:
        return self._dummy_credential

    def _lookup(self, email: str) -> DigestLookup:
        try:
            user = self._accounts_storage.find_user_by_email(email)
        except StoreUnavailableError:
            raise
        except Exception as e:
            logger.error("Failed to look up user: %s", type(e).__name__)
            raise StoreUnavailableError("Failed to look up user") from e

        # A user without a password can't log in with one
        if user is None or not user.hashed_password:
            return AbsentDigest()

        return StoredDigest(digest=user.hashed_password, user=user)

    def login(self, email: str, password: str) -> LoginResult:
        """Authenticate ``email`` with ``password``.

        Returns ACCEPTED with the user only if the account exists and the
        password matches its digest. Unknown email, wrong password and a
        corrupted digest all return the same REJECTED result after one key
        derivation.

        Raises:
            StoreUnavailableError: the user could not be looked up. No
                comparison is made in this case.
        """
        lookup = self._lookup(email)

        match lookup:
            case StoredDigest(digest=digest):
                selected = digest
            case AbsentDigest():
                selected = self._dummy_credential.digest

        try:
            self._verifier(password, selected)
        except MalformedDigestError as e:
            logger.debug("Login rejected: %s", e.error)
            # Parsing failed before any derivation, pay for one on the dummy
            with contextlib.suppress(ChirpyAuthException):
                self._verifier(password, self._dummy_credential.digest)
            return REJECTED
        except ChirpyAuthException as e:
            logger.debug("Login rejected: %s", e.error)
            return REJECTED

        if isinstance(lookup, AbsentDigest):
            # Matching the dummy is not a login
            logger.debug("Login rejected: account not found")
            return REJECTED

        return LoginResult(outcome=AuthOutcome.ACCEPTED, user=lookup.user)

    def register(self, email: str, password: str) -> User:
        """Hash ``password`` and store a new user.

        The digest is computed before anything is written, so a hashing
        failure never leaves a user behind.

        Raises:
            PasswordTooLongError: the password is too long to hash.
            KDFFailureError: hashing failed.
            StoreUnavailableError: the user could not be stored.
        """
        hashed_password = self._hasher(password)

        try:
            return self._accounts_storage.create_user_with_password(
                email=email,
                hashed_password=hashed_password,
            )
        except Exception as e:
            logger.error("Failed to create user: %s", type(e).__name__)
            raise StoreUnavailableError("Failed to create user") from e
