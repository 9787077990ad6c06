"""Email/password routes for chirpy-auth.

Provides endpoints for email/password authentication:
- POST /users - Create account with email/password
- POST /login - Authenticate with email/password
- GET /healthz - Readiness probe

Login answers with one generic 401 whether the email is unknown or the
password is wrong; only storage failures are reported differently.
"""

import asyncio
import logging

from cross_web import AsyncHTTPRequest
from pydantic import BaseModel, EmailStr, Field, ValidationError

from ._context import Context
from ._login import LoginResult
from ._password import MAX_PASSWORD_SIZE
from ._route import Route
from .exceptions import KDFFailureError, PasswordTooLongError, StoreUnavailableError
from .models.user import UserResponse
from .utils._response import Response

logger = logging.getLogger(__name__)


class SignupRequest(BaseModel):
    """Request body for signup endpoint."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=MAX_PASSWORD_SIZE)


class LoginRequest(BaseModel):
    """Request body for login endpoint."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=MAX_PASSWORD_SIZE)


class AuthManager:
    """Manager for email/password authentication routes."""

    def __init__(self, enable_signup: bool = True):
        """Initialize the auth manager.

        Args:
            enable_signup: Whether to enable the signup endpoint.
                          Set to False to disable self-registration.
        """
        self.enable_signup = enable_signup

    def _user_response(self, user_response: UserResponse, status_code: int) -> Response:
        return Response(
            status_code=status_code,
            body=user_response.model_dump_json(),
            headers={
                "Content-Type": "application/json",
                "Cache-Control": "no-store",
                "Pragma": "no-cache",
            },
        )

    async def _authenticate(
        self, context: Context, email: str, password: str
    ) -> LoginResult:
        # The key derivation is CPU bound, keep it off the event loop
        call = asyncio.to_thread(context.credentials.login, email, password)

        timeout = context.config.login_timeout
        if timeout is None:
            return await call

        return await asyncio.wait_for(call, timeout)

    async def signup(self, request: AsyncHTTPRequest, context: Context) -> Response:
        """Create a new user account with email and password.

        Request body:
            - email: User's email address
            - password: User's password

        Returns:
            - On success: 201 with the public user record
            - On failure: Error response
        """
        if not self.enable_signup:
            return Response.error(
                "signup_disabled",
                error_description="Signup is disabled",
                status_code=403,
            )

        try:
            body = await request.get_body()
            signup_data = SignupRequest.model_validate_json(body)
        except ValidationError as e:
            logger.warning("Invalid signup request: %s", e.error_count())
            return Response.error(
                "invalid_request",
                error_description="User must provide email and password",
                status_code=400,
            )

        try:
            existing_user = context.accounts_storage.find_user_by_email(
                signup_data.email
            )
        except Exception as e:
            logger.error("Failed to look up user: %s", type(e).__name__)
            return Response.error(
                "server_error",
                error_description="Failed to create user",
                status_code=500,
            )

        if existing_user:
            return Response.error(
                "user_exists",
                error_description="A user with this email already exists",
                status_code=409,
            )

        try:
            user = await asyncio.to_thread(
                context.credentials.register,
                signup_data.email,
                signup_data.password,
            )
        except PasswordTooLongError as e:
            return Response.error(
                "invalid_request",
                error_description=e.error_description,
                status_code=400,
            )
        except KDFFailureError:
            return Response.error(
                "server_error",
                error_description="Failed to hash user's password",
                status_code=500,
            )
        except StoreUnavailableError:
            return Response.error(
                "server_error",
                error_description="Failed to create user",
                status_code=500,
            )

        return self._user_response(UserResponse.from_user(user), status_code=201)

    async def login(self, request: AsyncHTTPRequest, context: Context) -> Response:
        """Authenticate with email and password.

        Request body:
            - email: User's email address
            - password: User's password

        Returns:
            - On success: the public user record
            - On bad credentials: 401, identical for unknown email and
              wrong password
            - On storage failure: 500
        """
        try:
            body = await request.get_body()
            login_data = LoginRequest.model_validate_json(body)
        except ValidationError as e:
            logger.warning("Invalid login request: %s", e.error_count())
            return Response.error(
                "invalid_request",
                error_description="User must provide email and password",
                status_code=400,
            )

        try:
            result = await self._authenticate(
                context, login_data.email, login_data.password
            )
        except StoreUnavailableError:
            return Response.error(
                "server_error",
                error_description="Failed to look up user",
                status_code=500,
            )
        except TimeoutError:
            logger.warning("Login timed out")
            return Response.error(
                "temporarily_unavailable",
                error_description="Login timed out",
                status_code=503,
            )

        if not result.accepted or result.user is None:
            # Same error regardless of whether email exists
            return Response.error(
                "invalid_credentials",
                error_description="Incorrect email or password",
                status_code=401,
            )

        return self._user_response(UserResponse.from_user(result.user), status_code=200)

    async def healthz(self, request: AsyncHTTPRequest, context: Context) -> Response:
        """Readiness probe."""
        return Response(
            status_code=200,
            body="OK",
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )

    @property
    def routes(self) -> list[Route]:
        """Return the auth routes."""
        routes = [
            Route(
                path="/login",
                methods=["POST"],
                function=self.login,
                response_model=UserResponse,
                operation_id="login",
                summary="Login with email and password",
            ),
            Route(
                path="/healthz",
                methods=["GET"],
                function=self.healthz,
                operation_id="healthz",
                summary="Readiness probe",
            ),
        ]

        if self.enable_signup:
            routes.insert(
                0,
                Route(
                    path="/users",
                    methods=["POST"],
                    function=self.signup,
                    response_model=UserResponse,
                    operation_id="signup",
                    summary="Create account with email and password",
                ),
            )

        return routes
