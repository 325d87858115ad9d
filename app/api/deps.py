"""
app/api/deps.py

Purpose: FastAPI dependency providers

- Builds the credential/session stores and the auth service per request
- Turns the session cookie into a SessionContext
- Every provider can be swapped via app.dependency_overrides
"""

from fastapi import Depends, Request

from app.core.config import settings
from app.core.exceptions import ServerError, StoreError
from app.core.logging import get_logger
from app.core.security import unsign_session_id
from app.db.mongo import get_sessions_collection, get_users_collection
from app.services.auth_service import AuthService
from app.services.credential_store import CredentialStore
from app.services.session_service import SessionContext, SessionStore

logger = get_logger(__name__)


def get_credential_store() -> CredentialStore:
    return CredentialStore(get_users_collection())


def get_session_store() -> SessionStore:
    return SessionStore(get_sessions_collection(), ttl_minutes=settings.SESSION_TIMEOUT_MINUTES)


def get_auth_service(
    users: CredentialStore = Depends(get_credential_store),
    sessions: SessionStore = Depends(get_session_store),
) -> AuthService:
    return AuthService(users, sessions)


def get_session_reference(request: Request) -> SessionContext:
    """
    SessionContext carrying only the cookie's session id, without
    reading the store. Enough for operations that replace or destroy
    the session.
    """
    session_id = unsign_session_id(request.cookies.get(settings.SESSION_COOKIE_NAME))
    return SessionContext(session_id=session_id)


async def get_session_context(
    reference: SessionContext = Depends(get_session_reference),
    sessions: SessionStore = Depends(get_session_store),
) -> SessionContext:
    """Fully resolved SessionContext (data loaded from the store)."""
    try:
        return await sessions.resolve(reference.session_id)
    except StoreError as e:
        logger.error(f"Session resolution failed: {e}", exc_info=True)
        raise ServerError() from e
