"""
app/core/security.py

Purpose: Password hashing and session cookie signing

- bcrypt hashing with a configurable work factor
- Constant-time verification, including for unknown accounts
- Hashing runs in a worker thread so the event loop keeps serving requests
- Session ids are signed before they are handed to the browser
"""

import secrets
from typing import Optional

import bcrypt
from fastapi.concurrency import run_in_threadpool
from itsdangerous import BadSignature, Signer

from app.core.config import settings
from utils.validation_utils import password_fits_bcrypt

# Checked against when the account does not exist, so both login
# failure paths cost one bcrypt verification.
_DUMMY_HASH = bcrypt.hashpw(b"dummy", bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))

SESSION_SIGNER_SALT = "sessionauth.session-id"


def _hash_sync(password: str, rounds: int) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def _verify_sync(password: str, password_hash: bytes) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash)
    except ValueError:
        # Over-long input or a malformed stored hash never verifies
        return False


async def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hashes a plaintext password with bcrypt.

    Args:
        password: Plaintext password
        rounds: Work factor override (defaults to BCRYPT_ROUNDS)

    Returns:
        bcrypt hash as a str
    """
    return await run_in_threadpool(_hash_sync, password, rounds or settings.BCRYPT_ROUNDS)


async def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """
    Verifies a plaintext password against a stored bcrypt hash.

    When password_hash is None (no such account), or the password is
    longer than bcrypt can consume, a dummy hash is checked instead
    and False is returned. Some bcrypt releases truncate input at 72
    bytes, so an over-long password would otherwise match its prefix.
    """
    if password_hash is None or not password_fits_bcrypt(password):
        await run_in_threadpool(_verify_sync, password if password_fits_bcrypt(password) else "", _DUMMY_HASH)
        return False
    return await run_in_threadpool(_verify_sync, password, password_hash.encode("utf-8"))


def generate_session_id() -> str:
    """256 bits of randomness, url-safe."""
    return secrets.token_urlsafe(32)


def _signer() -> Signer:
    return Signer(settings.SECRET_KEY, salt=SESSION_SIGNER_SALT)


def sign_session_id(session_id: str) -> str:
    return _signer().sign(session_id).decode("utf-8")


def unsign_session_id(cookie_value: Optional[str]) -> Optional[str]:
    """
    Returns the session id carried by a cookie, or None when the
    cookie is missing or was not signed with our key.
    """
    if not cookie_value:
        return None
    try:
        return _signer().unsign(cookie_value).decode("utf-8")
    except BadSignature:
        return None
