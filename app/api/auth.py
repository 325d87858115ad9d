"""
app/api/auth.py

Purpose: /api/auth endpoints

- Accepts JSON or form-encoded bodies
- Resolves the session cookie into a SessionContext
- Delegates to AuthService and writes/clears the session cookie
"""

import json
from typing import Any, Dict, Type, TypeVar

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.api.deps import get_auth_service, get_session_context, get_session_reference
from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging import get_logger
from app.core.security import sign_session_id
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from app.schemas.response import ErrorResponse, MessageResponse
from app.services.auth_service import AuthService
from app.services.session_service import SessionContext
from utils.constants import INVALID_BODY_MESSAGE

logger = get_logger(__name__)
router = APIRouter()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

RequestModel = TypeVar("RequestModel", bound=BaseModel)


async def read_body(request: Request) -> Dict[str, Any]:
    """
    Reads a request body sent either as JSON or as an HTML form.
    An empty body reads as {}.

    Raises:
        ValidationError: Body is not a JSON object or a form
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw)
    except ValueError:
        logger.debug("Rejected non-JSON request body")
        raise ValidationError(INVALID_BODY_MESSAGE)

    if not isinstance(payload, dict):
        raise ValidationError(INVALID_BODY_MESSAGE)
    return payload


async def parse_body(request: Request, model: Type[RequestModel]) -> RequestModel:
    data = await read_body(request)
    try:
        return model.model_validate(data)
    except PydanticValidationError:
        raise ValidationError(INVALID_BODY_MESSAGE)


def apply_session_cookie(response: Response, session: SessionContext) -> None:
    """Mirrors session changes made during the request onto the cookie."""
    if session.issued and session.session_id:
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=sign_session_id(session.session_id),
            max_age=settings.session_max_age_seconds,
            path="/",
            httponly=True,
            samesite="lax",
            secure=settings.is_production,
        )
    elif session.cleared:
        response.delete_cookie(
            key=settings.SESSION_COOKIE_NAME,
            path="/",
            httponly=True,
            samesite="lax",
            secure=settings.is_production,
        )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: Request,
    response: Response,
    session: SessionContext = Depends(get_session_reference),
    auth: AuthService = Depends(get_auth_service),
):
    """Create an account and start a session for it."""
    payload = await parse_body(request, RegisterRequest)
    result = await auth.register(payload, session)
    apply_session_cookie(response, session)
    return result


@router.post("/login", response_model=AuthResponse)
async def login(
    request: Request,
    response: Response,
    session: SessionContext = Depends(get_session_reference),
    auth: AuthService = Depends(get_auth_service),
):
    """Check email/password and start a fresh session."""
    payload = await parse_body(request, LoginRequest)
    result = await auth.login(payload, session)
    apply_session_cookie(response, session)
    return result


@router.get("/user", response_model=UserResponse)
async def current_user(
    session: SessionContext = Depends(get_session_context),
    auth: AuthService = Depends(get_auth_service),
):
    try:
        return await auth.current_user(session)
    except NotFoundError as exc:
        # The service already destroyed the session; drop the cookie too
        response = JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(message=exc.message, code=exc.code).model_dump(),
        )
        apply_session_cookie(response, session)
        return response


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    session: SessionContext = Depends(get_session_reference),
    auth: AuthService = Depends(get_auth_service),
):
    result = await auth.logout(session)
    apply_session_cookie(response, session)
    return result
