import pytest
from fastapi.testclient import TestClient

from accounts import Account, AccountResolver
from config import Settings
from main import create_app


class RecordingDeleter:
    """Stands in for the Cloudinary call and remembers what it was asked to do."""

    def __init__(self, response=None, error=None):
        self.calls = []
        self.response = response if response is not None else {"deleted": {}}
        self.error = error

    def __call__(self, account, public_id, resource_type, type, invalidate):
        self.calls.append({
            "cloud_name": account.cloud_name,
            "api_key": account.api_key,
            "api_secret": account.api_secret,
            "public_id": public_id,
            "resource_type": resource_type,
            "type": type,
            "invalidate": invalidate,
        })
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def accounts() -> dict:
    return {"mycloud": Account(cloud_name="mycloud", api_key="K", api_secret="S")}


@pytest.fixture
def resolver(accounts) -> AccountResolver:
    return AccountResolver(accounts)


@pytest.fixture
def deleter() -> RecordingDeleter:
    return RecordingDeleter(response={"deleted": {"a/b": "deleted"}, "partial": False})


@pytest.fixture
def client(resolver, deleter):
    app = create_app(Settings(), resolver=resolver, deleter=deleter)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def empty_client(deleter):
    app = create_app(Settings(), resolver=AccountResolver(), deleter=deleter)
    with TestClient(app) as c:
        yield c
