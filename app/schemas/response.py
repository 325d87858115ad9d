from pydantic import BaseModel
from typing import Optional


class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    message: str
    code: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
