"""
app/db/indexes.py

Purpose: Database index management

- Unique indexes that make duplicate users impossible at write time
- Session lookup and TTL expiry indexes
"""

from pymongo import ASCENDING

from app.db.mongo import get_users_collection, get_sessions_collection
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes():
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        users = get_users_collection()
        sessions = get_sessions_collection()

        logger.info("Creating database indexes...")

        # ==============================================
        # USERS COLLECTION INDEXES
        # ==============================================

        await users.create_index([("user_id", ASCENDING)], unique=True, name="user_id_unique")
        logger.debug("Created unique index on users.user_id")

        # Authoritative guards against concurrent duplicate registrations
        await users.create_index([("email", ASCENDING)], unique=True, name="email_unique")
        logger.debug("Created unique index on users.email")

        await users.create_index([("mobile", ASCENDING)], unique=True, name="mobile_unique")
        logger.debug("Created unique index on users.mobile")

        # ==============================================
        # SESSIONS COLLECTION INDEXES
        # ==============================================

        await sessions.create_index([("session_id", ASCENDING)], unique=True, name="session_id_unique")
        logger.debug("Created unique index on sessions.session_id")

        # Delete documents once expires_at has passed
        await sessions.create_index(
            [("expires_at", ASCENDING)],
            expireAfterSeconds=0,
            name="session_expiry_ttl_idx"
        )
        logger.debug("Created TTL index on sessions.expires_at")

        logger.info("✅ All database indexes created successfully")

        user_indexes = await users.index_information()
        session_indexes = await sessions.index_information()

        logger.info(
            f"Index summary: Users={len(user_indexes)}, "
            f"Sessions={len(session_indexes)}"
        )

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise
