"""
Pydantic models for user data.

``UserCreate`` is the request body for registering a user.  The
password is accepted and stored as given; it is never part of any
response model.  Search results use the narrower ``UserSearchResult``
which exposes only ``name`` and ``email``.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """Schema for registering a user.  All three fields are required."""

    name: str = Field(..., min_length=1, examples=["Anna"])
    email: str = Field(..., min_length=1, examples=["anna@example.com"])
    password: str = Field(..., min_length=1, examples=["secret"])

    @field_validator("name", "email", "password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        # Values are stored untouched; blank ones are rejected.
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class UserSummary(BaseModel):
    """Identity of a user as returned right after registration.

    The store hands back only the new id, so no timestamp is included.
    """

    id: int
    name: str
    email: str


class UserRead(UserSummary):
    """Schema for reading a user from the API."""

    created_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class UserCreated(BaseModel):
    """Response for a successful registration."""

    message: str
    user: UserSummary


class UserSearchResult(BaseModel):
    """Projection returned by the search endpoint."""

    name: str
    email: str


class MessageResponse(BaseModel):
    message: str
