"""
app/services/auth_service.py

Purpose: Authentication flow

- Register: validate, reject duplicates, hash, persist, start session
- Login: verify credentials without revealing which one was wrong
- Current user: re-resolve the session's user from the store
- Logout: destroy the session

Session state is passed in explicitly as a SessionContext; nothing here
reads the HTTP request.
"""

from app.core.exceptions import (
    AuthError,
    ConflictError,
    DuplicateUserError,
    NotFoundError,
    ServerError,
    StoreError,
    ValidationError,
)
from app.core.logging import get_logger, LogContext
from app.core.security import hash_password, verify_password
from app.models.user import User, new_user_id
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from app.schemas.response import MessageResponse
from app.services.credential_store import CredentialStore
from app.services.session_service import SessionContext, SessionStore
from utils.constants import (
    ALL_FIELDS_REQUIRED_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    INVALID_MOBILE_MESSAGE,
    LOGIN_FIELDS_REQUIRED_MESSAGE,
    LOGIN_SUCCESS_MESSAGE,
    LOGOUT_FAILED_MESSAGE,
    LOGOUT_SUCCESS_MESSAGE,
    NOT_AUTHENTICATED_MESSAGE,
    PASSWORD_TOO_LONG_MESSAGE,
    REGISTER_SUCCESS_MESSAGE,
    USER_EXISTS_MESSAGE,
    USER_NOT_FOUND_MESSAGE,
)
from utils.validation_utils import all_present, password_fits_bcrypt, validate_mobile

logger = get_logger(__name__)


class AuthService:
    """
    Register/login/current-user/logout over a credential store and a
    session store. Store failures become ServerError; the cause is
    logged and never returned.
    """

    def __init__(self, users: CredentialStore, sessions: SessionStore):
        self.users = users
        self.sessions = sessions

    async def register(self, payload: RegisterRequest, session: SessionContext) -> AuthResponse:
        """
        Creates a user and logs them in.

        Raises:
            ValidationError: Missing fields or malformed mobile
            ConflictError: Email or mobile already registered
            ServerError: Store failure
        """
        email, mobile, password = payload.email, payload.mobile, payload.password

        if not all_present(email, mobile, password):
            raise ValidationError(ALL_FIELDS_REQUIRED_MESSAGE)

        if not validate_mobile(mobile):
            raise ValidationError(INVALID_MOBILE_MESSAGE)

        if not password_fits_bcrypt(password):
            raise ValidationError(PASSWORD_TOO_LONG_MESSAGE)

        try:
            existing = await self.users.find_by_email_or_mobile(email, mobile)
            if existing is not None:
                logger.info("Registration rejected: identity already in use")
                raise ConflictError(USER_EXISTS_MESSAGE)

            user = User(
                user_id=new_user_id(),
                email=email,
                mobile=mobile,
                password_hash=await hash_password(password),
            )

            try:
                await self.users.create(user)
            except DuplicateUserError:
                # Lost a race with a concurrent registration
                raise ConflictError(USER_EXISTS_MESSAGE)

            await self.sessions.establish(session, user.session_payload())

        except StoreError as e:
            logger.error(f"Registration failed: {e}", exc_info=True)
            raise ServerError() from e

        with LogContext(user_id=user.user_id):
            logger.info("User registered")

        return AuthResponse.from_user(user, REGISTER_SUCCESS_MESSAGE)

    async def login(self, payload: LoginRequest, session: SessionContext) -> AuthResponse:
        """
        Verifies email/password and replaces the session.

        Unknown email and wrong password raise the same AuthError.
        """
        email, password = payload.email, payload.password

        if not all_present(email, password):
            raise ValidationError(LOGIN_FIELDS_REQUIRED_MESSAGE)

        try:
            user = await self.users.find_by_email(email)

            stored_hash = user.password_hash if user is not None else None
            if not await verify_password(password, stored_hash):
                logger.info("Login rejected")
                raise AuthError(INVALID_CREDENTIALS_MESSAGE)

            await self.sessions.establish(session, user.session_payload())

        except StoreError as e:
            logger.error(f"Login failed: {e}", exc_info=True)
            raise ServerError() from e

        with LogContext(user_id=user.user_id):
            logger.info("User logged in")

        return AuthResponse.from_user(user, LOGIN_SUCCESS_MESSAGE)

    async def current_user(self, session: SessionContext) -> UserResponse:
        """
        Returns the session's user, re-read from the store.

        A session whose user has disappeared is destroyed before
        NotFoundError is raised.
        """
        if not session.is_authenticated:
            raise AuthError(NOT_AUTHENTICATED_MESSAGE)

        try:
            user = await self.users.find_by_user_id(session.user_id)

            if user is None:
                with LogContext(user_id=session.user_id):
                    logger.warning("Session refers to a missing user; destroying session")
                await self.sessions.destroy(session)
                raise NotFoundError(USER_NOT_FOUND_MESSAGE)

        except StoreError as e:
            logger.error(f"Current user lookup failed: {e}", exc_info=True)
            raise ServerError() from e

        return UserResponse.from_user(user)

    async def logout(self, session: SessionContext) -> MessageResponse:
        """
        Destroys the session. Succeeds whether or not one existed.
        """
        try:
            await self.sessions.destroy(session)
        except StoreError as e:
            logger.error(f"Logout failed: {e}", exc_info=True)
            raise ServerError(LOGOUT_FAILED_MESSAGE) from e

        return MessageResponse(message=LOGOUT_SUCCESS_MESSAGE)
