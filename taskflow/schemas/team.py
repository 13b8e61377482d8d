from typing import Optional

from pydantic import EmailStr, Field, field_validator

from .base import CamelModel


DEFAULT_CATEGORY_COLOR = "#3b82f6"


class TeamMemberCreate(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    role: str = Field(min_length=1)
    avatar_url: Optional[str] = None


class TeamMemberUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    role: Optional[str] = Field(default=None, min_length=1)
    avatar_url: Optional[str] = None

    @field_validator("name", "email", "role")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class TeamMember(CamelModel):
    id: int
    name: str
    email: str
    role: str
    avatar_url: Optional[str] = None


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1)
    parent_id: Optional[int] = None
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, pattern=r"^#[0-9a-fA-F]{3,8}$")


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    parent_id: Optional[int] = None
    color: Optional[str] = Field(default=None, pattern=r"^#[0-9a-fA-F]{3,8}$")

    @field_validator("name", "color")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class Category(CamelModel):
    id: int
    name: str
    parent_id: Optional[int] = None
    color: str = DEFAULT_CATEGORY_COLOR
