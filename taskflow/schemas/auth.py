from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .base import CamelModel


class LoginRequest(BaseModel):
    # Both optional so a missing field is answered with 400, not a schema error
    username: Optional[str] = None
    password: Optional[str] = None


class UserRecord(CamelModel):
    """Stored user, including the credential hash. Never returned by the API."""
    id: str
    username: Optional[str] = None
    password_hash: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: str = "guest"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpsert(CamelModel):
    id: str
    username: Optional[str] = None
    password_hash: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: str = "guest"


class UserOut(CamelModel):
    id: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    role: str


class LoginResponse(BaseModel):
    user: UserOut


class MessageResponse(BaseModel):
    message: str
