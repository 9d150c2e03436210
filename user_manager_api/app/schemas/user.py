"""
Pydantic models for user data.

``UserPayload`` is the request body of the create and edit operations.
Both fields are optional at the schema level: presence, length and
uniqueness rules are applied by ``services.validation`` so that
failures are reported with the same messages regardless of whether a
field is missing or merely blank.

Response envelopes carry a ``success`` flag alongside the payload,
which is what clients inspect to decide whether a call succeeded.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class UserPayload(BaseModel):
    """Body of ``POST /createUser`` and ``PUT /editUser/{id}``."""

    name: Optional[str] = Field(None, examples=["Alice"])
    email: Optional[str] = Field(None, examples=["alice@example.com"])


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    name: str
    email: str


class UserResponse(BaseModel):
    success: bool = True
    user: UserRead


class UsersResponse(BaseModel):
    success: bool = True
    users: List[UserRead]


class DeleteResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    success: bool = False
    message: str
