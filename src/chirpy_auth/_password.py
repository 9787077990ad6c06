import logging
from dataclasses import dataclass

from passlib.context import CryptContext
from passlib.exc import PasswordSizeError
from passlib.utils import MAX_PASSWORD_SIZE

from .exceptions import (
    KDFFailureError,
    MalformedDigestError,
    PasswordMismatchError,
    PasswordTooLongError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KDFParameters:
    """Argon2id settings used for every new digest.

    Values follow the second Argon2id configuration of the OWASP password
    storage cheat sheet. Digests embed their own parameters, so bumping
    ``version`` never invalidates digests produced under older values.
    """

    version: int
    # Memory used, in kibibytes
    memory_cost_kib: int
    iterations: int
    # Number of lanes
    parallelism: int
    salt_length: int
    output_length: int


DEFAULT_KDF_PARAMETERS = KDFParameters(
    version=1,
    memory_cost_kib=19 * 1024,
    iterations=2,
    parallelism=1,
    salt_length=16,
    output_length=32,
)


def _make_context(parameters: KDFParameters) -> CryptContext:
    # A single scheme: there is nothing weaker to fall back to
    return CryptContext(
        schemes=["argon2"],
        argon2__type="ID",
        argon2__memory_cost=parameters.memory_cost_kib,
        argon2__rounds=parameters.iterations,
        argon2__parallelism=parameters.parallelism,
        argon2__salt_size=parameters.salt_length,
        argon2__digest_size=parameters.output_length,
    )


pwd_context = _make_context(DEFAULT_KDF_PARAMETERS)


def hash_password(password: str | bytes) -> str:
    """Derive a self-describing Argon2id digest from ``password``.

    Passwords longer than ``MAX_PASSWORD_SIZE`` bytes once encoded are
    refused by passlib.

    Raises:
        PasswordTooLongError: the password is over ``MAX_PASSWORD_SIZE`` bytes.
        KDFFailureError: the salt source or the argon2 backend failed.
    """
    try:
        return pwd_context.hash(password)
    except PasswordSizeError as e:
        raise PasswordTooLongError(MAX_PASSWORD_SIZE) from e
    except Exception as e:
        logger.error("Failed to hash password: %s", type(e).__name__)
        raise KDFFailureError("Failed to hash password") from e


def verify_password(password: str | bytes, digest: str) -> None:
    """Check ``password`` against ``digest``.

    The password is re-derived with the parameters embedded in ``digest`` and
    compared in constant time by the argon2 backend, so the cost depends on
    the digest and not on whether the password is right.

    Returns ``None`` on a match.

    Raises:
        PasswordMismatchError: the digest is well formed but does not match,
            or the password is too long to ever have been hashed.
        MalformedDigestError: the digest cannot be parsed.
        KDFFailureError: the argon2 backend failed to run.
    """
    if not isinstance(digest, (str, bytes)):
        raise MalformedDigestError("Stored digest is not a string")

    try:
        matched = pwd_context.verify(password, digest)
    except PasswordSizeError:
        # hash_password refuses these, no stored digest can match
        raise PasswordMismatchError() from None
    except (ValueError, TypeError) as e:
        # passlib reports unknown and corrupted hashes as ValueError subclasses
        raise MalformedDigestError("Stored digest could not be parsed") from e
    except Exception as e:
        logger.error("Failed to verify password: %s", type(e).__name__)
        raise KDFFailureError("Failed to verify password") from e

    if not matched:
        raise PasswordMismatchError()
