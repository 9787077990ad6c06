from chirpy_auth._config import AuthConfig
from chirpy_auth._dummy import DummyCredential, initialize_auth
from chirpy_auth._login import AuthOutcome, CredentialVerifier, LoginResult
from chirpy_auth._password import (
    DEFAULT_KDF_PARAMETERS,
    KDFParameters,
    hash_password,
    verify_password,
)
from chirpy_auth._storage import AccountsStorage, User

__all__ = [
    "DEFAULT_KDF_PARAMETERS",
    "AccountsStorage",
    "AuthConfig",
    "AuthOutcome",
    "CredentialVerifier",
    "DummyCredential",
    "KDFParameters",
    "LoginResult",
    "User",
    "hash_password",
    "initialize_auth",
    "verify_password",
]
