from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AuthConfig:
    """Settings for the email/password routes."""

    # Expose POST /users?
    enable_signup: bool = True

    # Upper bound in seconds for a whole login, None = unbounded.
    # Applied the same way whichever digest is being verified.
    login_timeout: float | None = None

    api_prefix: str = "/api"
