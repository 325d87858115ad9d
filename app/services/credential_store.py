"""
app/services/credential_store.py

Purpose: User record persistence

- Lookups by email, by email-or-mobile, and by user_id
- Inserts new users
- Wraps driver failures in StoreError so callers never see pymongo types
- Unique index violations surface as DuplicateUserError
"""

from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.exceptions import DuplicateUserError, StoreError
from app.core.logging import get_logger, LogContext
from app.models.user import User

logger = get_logger(__name__)


class CredentialStore:
    """
    MongoDB-backed store for user records.

    Uniqueness of email and mobile is guaranteed by unique indexes
    (see app/db/indexes.py); find_by_email_or_mobile is only a pre-check.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self._users = collection

    async def _find_one(self, query: Dict[str, Any]) -> Optional[User]:
        try:
            document = await self._users.find_one(query)
        except PyMongoError as e:
            raise StoreError(f"User lookup failed: {e}") from e

        if document is None:
            return None
        return User.from_document(document)

    async def find_by_email_or_mobile(self, email: str, mobile: str) -> Optional[User]:
        """
        Returns any user whose email or mobile matches.

        Args:
            email: Exact email (case-sensitive)
            mobile: Exact mobile number

        Returns:
            Matching user or None
        """
        return await self._find_one({"$or": [{"email": email}, {"mobile": mobile}]})

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self._find_one({"email": email})

    async def find_by_user_id(self, user_id: str) -> Optional[User]:
        return await self._find_one({"user_id": user_id})

    async def create(self, user: User) -> User:
        """
        Persists a new user.

        Raises:
            DuplicateUserError: A unique index rejected the write
            StoreError: Any other driver failure
        """
        with LogContext(user_id=user.user_id):
            try:
                await self._users.insert_one(user.to_document())
            except DuplicateKeyError as e:
                logger.warning("User insert rejected by unique index")
                raise DuplicateUserError("User already exists") from e
            except PyMongoError as e:
                raise StoreError(f"User insert failed: {e}") from e

            logger.info("User created")
            return user
