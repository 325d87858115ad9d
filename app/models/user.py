"""
app/models/user.py

Purpose: User document model

- Opaque user_id (UUID4), the only identifier exposed outside the store
- Email and mobile, each unique
- bcrypt password hash (never serialized to clients)
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, Field


def new_user_id() -> str:
    """Random, non-sequential identifier (UUID version 4)."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    user_id: str = Field(default_factory=new_user_id)
    email: str
    mobile: str
    password_hash: str = Field(repr=False)
    created_at: datetime = Field(default_factory=utcnow)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "User":
        """Builds a User from a Mongo document, dropping the internal _id."""
        data = {key: value for key, value in document.items() if key != "_id"}
        return cls.model_validate(data)

    def session_payload(self) -> Dict[str, str]:
        """Fields copied into the session on register/login."""
        return {
            "user_id": self.user_id,
            "email": self.email,
            "mobile": self.mobile,
        }
