import logging

from fastapi import APIRouter

from ._auth import AuthManager
from ._config import AuthConfig
from ._context import Context
from ._dummy import DummyCredential
from ._login import CredentialVerifier
from ._storage import AccountsStorage

logger = logging.getLogger(__name__)


class AuthRouter(APIRouter):
    _context: Context

    def __init__(
        self,
        accounts_storage: AccountsStorage,
        dummy_credential: DummyCredential,
        config: AuthConfig | None = None,
    ):
        """Mount the email/password routes.

        ``dummy_credential`` must come from ``initialize_auth()``, called
        before the application starts serving requests.
        """
        config = config or AuthConfig()

        super().__init__(prefix=config.api_prefix)

        self.auth_manager = AuthManager(enable_signup=config.enable_signup)

        self._context = Context(
            accounts_storage=accounts_storage,
            credentials=CredentialVerifier(
                accounts_storage=accounts_storage,
                dummy_credential=dummy_credential,
            ),
            config=config,
        )

        routes = self.auth_manager.routes

        for route in routes:
            self.add_api_route(
                route.path,
                route.to_fastapi_endpoint(self._context),
                methods=route.methods,
                response_model=route.response_model,
                operation_id=route.operation_id,
                summary=route.summary,
            )

        logger.debug(
            "Mounted %d auth routes under %s",
            len(routes),
            config.api_prefix,
        )

    @property
    def credentials(self) -> CredentialVerifier:
        return self._context.credentials
