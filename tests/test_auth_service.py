import pytest

from app.core.exceptions import AuthError, ConflictError, NotFoundError, ServerError, ValidationError
from app.schemas.auth import LoginRequest, RegisterRequest
from app.services.auth_service import AuthService
from app.services.session_service import SessionContext


@pytest.fixture
def service(credential_store, session_store) -> AuthService:
    return AuthService(credential_store, session_store)


async def _register(service, new_user) -> SessionContext:
    session = SessionContext()
    await service.register(RegisterRequest(**new_user), session)
    return session


@pytest.mark.asyncio
async def test_register_binds_session_to_new_user(service, new_user):
    session = SessionContext()

    result = await service.register(RegisterRequest(**new_user), session)

    assert session.issued
    assert session.user_id == result.user_id
    assert session.data == {
        "user_id": result.user_id,
        "email": new_user["email"],
        "mobile": new_user["mobile"],
    }


@pytest.mark.asyncio
async def test_register_user_ids_are_unique(service, new_user):
    first = await service.register(RegisterRequest(**new_user), SessionContext())
    second = await service.register(
        RegisterRequest(email="b@example.com", mobile="9000000001", password="pw"),
        SessionContext(),
    )

    assert first.user_id != second.user_id


@pytest.mark.asyncio
async def test_register_rejects_password_over_bcrypt_limit(service, users_collection, new_user):
    with pytest.raises(ValidationError):
        await service.register(RegisterRequest(**{**new_user, "password": "p" * 73}), SessionContext())

    assert users_collection.documents == []


@pytest.mark.asyncio
async def test_write_time_duplicate_is_a_conflict(service, credential_store, monkeypatch, new_user):
    await _register(service, new_user)

    async def precheck_misses(email, mobile):
        return None

    # Simulates a concurrent registration that passed the pre-check
    monkeypatch.setattr(credential_store, "find_by_email_or_mobile", precheck_misses)

    session = SessionContext()
    with pytest.raises(ConflictError):
        await service.register(RegisterRequest(**{**new_user, "mobile": "9000000000"}), session)

    assert not session.issued


@pytest.mark.asyncio
async def test_login_establishes_fresh_session(service, sessions_collection, new_user):
    registered = await _register(service, new_user)
    old_session_id = registered.session_id

    session = SessionContext(session_id=old_session_id)
    result = await service.login(LoginRequest(email=new_user["email"], password=new_user["password"]), session)

    assert result.message == "Login successful"
    assert session.session_id != old_session_id
    assert [doc["session_id"] for doc in sessions_collection.documents] == [session.session_id]


@pytest.mark.asyncio
async def test_login_unknown_email(service):
    with pytest.raises(AuthError) as exc_info:
        await service.login(LoginRequest(email="ghost@example.com", password="pw"), SessionContext())

    assert exc_info.value.message == "Invalid credentials"


@pytest.mark.asyncio
async def test_current_user_requires_authentication(service):
    with pytest.raises(AuthError) as exc_info:
        await service.current_user(SessionContext(session_id="abc"))

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_current_user_missing_record_destroys_session(service, users_collection, sessions_collection, new_user):
    session = await _register(service, new_user)
    users_collection.documents.clear()

    with pytest.raises(NotFoundError):
        await service.current_user(session)

    assert session.cleared
    assert not session.is_authenticated
    assert sessions_collection.documents == []


@pytest.mark.asyncio
async def test_store_errors_become_server_errors(service, users_collection, store_failure, new_user):
    users_collection.fail_with = store_failure

    with pytest.raises(ServerError) as exc_info:
        await service.register(RegisterRequest(**new_user), SessionContext())

    assert exc_info.value.message == "Server error"
    assert "connection reset" not in exc_info.value.message


@pytest.mark.asyncio
async def test_logout_clears_context(service, new_user):
    session = await _register(service, new_user)

    result = await service.logout(session)

    assert result.message == "Logout successful"
    assert session.session_id is None
    assert session.cleared


@pytest.mark.asyncio
async def test_logout_failure_message(service, sessions_collection, store_failure, new_user):
    session = await _register(service, new_user)
    sessions_collection.fail_with = store_failure

    with pytest.raises(ServerError) as exc_info:
        await service.logout(session)

    assert exc_info.value.message == "Logout failed"
