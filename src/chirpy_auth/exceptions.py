class ChirpyAuthException(Exception):
    def __init__(self, error: str, error_description: str | None = None) -> None:
        super().__init__(error_description or error)
        self.error = error
        self.error_description = error_description


class KDFFailureError(ChirpyAuthException):
    """The random source or the key derivation function failed to run."""

    def __init__(self, error_description: str | None = None) -> None:
        super().__init__("kdf_failure", error_description)


class MalformedDigestError(ChirpyAuthException):
    """A stored digest could not be parsed."""

    def __init__(self, error_description: str | None = None) -> None:
        super().__init__("malformed_digest", error_description)


class PasswordMismatchError(ChirpyAuthException):
    """A well-formed digest was not derived from the given password."""

    def __init__(self) -> None:
        super().__init__(
            "password_mismatch",
            "Given digest is not the digest of the given password",
        )


class StoreUnavailableError(ChirpyAuthException):
    """The accounts storage could not answer for reasons other than a missing row."""

    def __init__(self, error_description: str | None = None) -> None:
        super().__init__("store_unavailable", error_description)


class PasswordTooLongError(ChirpyAuthException):
    """The password is longer than the hasher accepts."""

    def __init__(self, max_size: int) -> None:
        super().__init__(
            "password_too_long",
            f"Password must be at most {max_size} bytes",
        )
        self.max_size = max_size
