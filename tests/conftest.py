import copy
import os
from typing import Any, Dict, List, Optional, Sequence

# Keep bcrypt cheap in tests; must be set before app.core.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from pymongo.errors import DuplicateKeyError, PyMongoError  # noqa: E402

from app.api.deps import get_credential_store, get_session_store  # noqa: E402
from app.main import app  # noqa: E402
from app.services.credential_store import CredentialStore  # noqa: E402
from app.services.session_service import SessionStore  # noqa: E402


class InsertOneResult:
    def __init__(self, inserted_id: int):
        self.inserted_id = inserted_id


class DeleteResult:
    def __init__(self, deleted_count: int):
        self.deleted_count = deleted_count


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, expected in query.items():
        if key == "$or":
            if not any(_matches(document, clause) for clause in expected):
                return False
        elif isinstance(expected, dict) and "$gt" in expected:
            if key not in document or not document[key] > expected["$gt"]:
                return False
        elif document.get(key) != expected:
            return False
    return True


class FakeCollection:
    """
    In-memory stand-in for the handful of Motor collection calls the
    stores make. Unique fields behave like unique indexes.
    """

    def __init__(self, unique_fields: Sequence[str] = ()):
        self.documents: List[Dict[str, Any]] = []
        self.unique_fields = tuple(unique_fields)
        self.fail_with: Optional[Exception] = None
        self._next_id = 1

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._maybe_fail()
        for document in self.documents:
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    async def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        self._maybe_fail()
        for field in self.unique_fields:
            if any(existing.get(field) == document.get(field) for existing in self.documents):
                raise DuplicateKeyError(f"E11000 duplicate key error index: {field}_unique")
        stored = copy.deepcopy(document)
        stored["_id"] = self._next_id
        self._next_id += 1
        self.documents.append(stored)
        return InsertOneResult(stored["_id"])

    async def delete_one(self, query: Dict[str, Any]) -> DeleteResult:
        self._maybe_fail()
        for index, document in enumerate(self.documents):
            if _matches(document, query):
                del self.documents[index]
                return DeleteResult(1)
        return DeleteResult(0)


@pytest.fixture
def users_collection() -> FakeCollection:
    return FakeCollection(unique_fields=("user_id", "email", "mobile"))


@pytest.fixture
def sessions_collection() -> FakeCollection:
    return FakeCollection(unique_fields=("session_id",))


@pytest.fixture
def credential_store(users_collection) -> CredentialStore:
    return CredentialStore(users_collection)


@pytest.fixture
def session_store(sessions_collection) -> SessionStore:
    return SessionStore(sessions_collection, ttl_minutes=30)


@pytest.fixture
def store_failure():
    return PyMongoError("connection reset by peer")


@pytest.fixture
def client(credential_store, session_store):
    app.dependency_overrides[get_credential_store] = lambda: credential_store
    app.dependency_overrides[get_session_store] = lambda: session_store

    # Not used as a context manager: the lifespan would connect to MongoDB
    test_client = TestClient(app, raise_server_exceptions=False)
    yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def new_user() -> Dict[str, str]:
    return {
        "email": "asha@example.com",
        "mobile": "9876543210",
        "password": "s3cret-Passw0rd",
    }
