"""
app/services/session_service.py

Purpose: Server-side session management

- Session documents keyed by an opaque session id
- Fixed TTL measured from the last write (Mongo TTL index reaps them)
- Expired documents are treated as absent even before the reaper runs
- SessionContext is the per-request view handed to the auth service
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from app.core.exceptions import StoreError
from app.core.logging import get_logger, LogContext, mask_session_id
from app.core.security import generate_session_id

logger = get_logger(__name__)


@dataclass
class SessionContext:
    """
    Session state for a single request.

    session_id is the id presented by the client (or minted during the
    request); data holds user_id, email and mobile once authenticated.
    issued/cleared tell the HTTP layer whether to set or drop the cookie.
    """

    session_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    issued: bool = False
    cleared: bool = False

    @property
    def user_id(self) -> Optional[str]:
        return self.data.get("user_id")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)


class SessionStore:
    """
    MongoDB-backed session store.

    Args:
        collection: sessions collection
        ttl_minutes: Session lifetime after the last write
    """

    def __init__(self, collection: AsyncIOMotorCollection, ttl_minutes: int = 30):
        self._sessions = collection
        self._ttl = timedelta(minutes=ttl_minutes)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    async def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetches live session data.

        Returns:
            The session's data dict, or None if unknown or expired
        """
        try:
            document = await self._sessions.find_one(
                {"session_id": session_id, "expires_at": {"$gt": self._now()}}
            )
        except PyMongoError as e:
            raise StoreError(f"Session lookup failed: {e}") from e

        if document is None:
            return None
        return document.get("data") or {}

    async def resolve(self, session_id: Optional[str]) -> SessionContext:
        """
        Builds the request's SessionContext from a client-presented id.
        Unknown or expired ids resolve to an anonymous context.
        """
        if not session_id:
            return SessionContext()

        data = await self.load(session_id)
        if data is None:
            logger.debug(
                "Session id not found or expired",
                extra={"session_id": mask_session_id(session_id)}
            )
            return SessionContext()

        return SessionContext(session_id=session_id, data=data)

    async def establish(self, context: SessionContext, data: Dict[str, Any]) -> SessionContext:
        """
        Replaces whatever session the client had with a fresh one
        holding data. A new id is always minted so a pre-login id
        can never become an authenticated one.
        """
        if context.session_id:
            await self._delete(context.session_id)

        session_id = generate_session_id()
        now = self._now()

        try:
            await self._sessions.insert_one({
                "session_id": session_id,
                "data": data,
                "created_at": now,
                "updated_at": now,
                "expires_at": now + self._ttl,
            })
        except PyMongoError as e:
            raise StoreError(f"Session insert failed: {e}") from e

        context.session_id = session_id
        context.data = dict(data)
        context.issued = True
        context.cleared = False

        with LogContext(user_id=data.get("user_id"), session_id=mask_session_id(session_id)):
            logger.info("Session established")

        return context

    async def destroy(self, context: SessionContext) -> None:
        """
        Destroys the context's session. A context without a session,
        or an id the store no longer knows, is not an error.
        """
        if context.session_id:
            await self._delete(context.session_id)
            logger.info(
                "Session destroyed",
                extra={"session_id": mask_session_id(context.session_id)}
            )

        context.session_id = None
        context.data = {}
        context.issued = False
        context.cleared = True

    async def _delete(self, session_id: str) -> None:
        try:
            await self._sessions.delete_one({"session_id": session_id})
        except PyMongoError as e:
            raise StoreError(f"Session delete failed: {e}") from e
