from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from chirpy_auth._dummy import DummyCredential
from chirpy_auth._storage import AccountsStorage
from chirpy_auth.router import AuthRouter


@pytest.fixture
def auth_router(
    accounts_storage: AccountsStorage,
    dummy_credential: DummyCredential,
) -> AuthRouter:
    return AuthRouter(
        accounts_storage=accounts_storage,
        dummy_credential=dummy_credential,
    )


@pytest.fixture
def test_app(auth_router: AuthRouter) -> FastAPI:
    app = FastAPI()

    app.include_router(auth_router)

    return app


@pytest.fixture
def client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(test_app) as c:
        yield c
