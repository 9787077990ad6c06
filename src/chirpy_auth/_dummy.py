import logging
import secrets
from dataclasses import dataclass

from ._password import hash_password
from .exceptions import KDFFailureError

logger = logging.getLogger(__name__)

DUMMY_SECRET_LENGTH = 32


@dataclass(frozen=True)
class DummyCredential:
    """Valid digest of a random secret nobody knows.

    Verified against when an email has no account, so a failed lookup costs
    the same key derivation as a wrong password.
    """

    digest: str


def initialize_auth() -> DummyCredential:
    """Build the dummy credential. Call once, before serving any request.

    Raises:
        KDFFailureError: the random source or the hasher failed. Startup must
            not continue without a dummy credential.
    """
    try:
        secret = secrets.token_bytes(DUMMY_SECRET_LENGTH)
    except Exception as e:
        logger.error("Random source unavailable, cannot build dummy credential")
        raise KDFFailureError("Failed to read from the random source") from e

    credential = DummyCredential(digest=hash_password(secret))

    logger.info("Dummy credential initialized")

    return credential
