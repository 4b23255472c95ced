"""
ProjectHub Backend — User and Token Schemas
=============================================

What:  API contract for /users and /user_tokens.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from projecthub.database import MAX_ID, MIN_ID


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    """
    Example:
        {
            "UserID": 1,
            "sub": "google-oauth2|1234567890",
            "email": "user@example.com",
            "name": "John Doe",
            "picture": "https://example.com/johndoe.jpg",
            "lastLogin": "2024-10-28T12:00:00Z"
        }
    """
    UserID: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("UserID", "id"),
        description="Store-assigned user ID",
    )
    sub: str = Field(description="Unique identifier from the OpenID provider")
    email: str
    name: str
    picture: str = Field(description="URL to the user's profile picture")
    lastLogin: datetime = Field(
        validation_alias=AliasChoices("lastLogin", "last_login"),
        description="Timestamp of the user's last login",
    )

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    TokenID: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("TokenID", "id"),
    )
    UserID: int = Field(validation_alias=AliasChoices("UserID", "user_id"))
    TTL: int = Field(
        validation_alias=AliasChoices("TTL", "ttl_seconds"),
        description="Lifetime in seconds, counted from CreationDate",
    )
    CreationDate: datetime = Field(
        validation_alias=AliasChoices("CreationDate", "creation_date"),
    )

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Request Bodies
# ══════════════════════════════════════════════════════════════════════════


class UserCreate(BaseModel):
    """POST /users: all four profile fields are required and non-empty."""
    sub: str = Field(min_length=1)
    email: str = Field(min_length=1)
    name: str = Field(min_length=1)
    picture: str = Field(min_length=1)


class UserUpdate(BaseModel):
    """PUT /users/{id}: omitted fields keep their current value."""
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None


class TokenCreate(BaseModel):
    UserID: int = Field(ge=MIN_ID, le=MAX_ID)
    TTL: Optional[int] = Field(default=None, gt=0, le=MAX_ID, description="Defaults to 3600 seconds")


class TokenUpdate(BaseModel):
    UserID: Optional[int] = Field(default=None, ge=MIN_ID, le=MAX_ID)
    TTL: Optional[int] = Field(default=None, gt=0, le=MAX_ID)
