from ._config import AuthConfig
from ._login import CredentialVerifier
from ._storage import AccountsStorage


class Context:
    def __init__(
        self,
        accounts_storage: AccountsStorage,
        credentials: CredentialVerifier,
        config: AuthConfig | None = None,
    ):
        self.accounts_storage = accounts_storage
        self.credentials = credentials
        self.config: AuthConfig = config or AuthConfig()

