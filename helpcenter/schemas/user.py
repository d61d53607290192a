"""
Help Center Backend — User Schemas
====================================

Request bodies declare every field Optional: a missing or blank required
field must produce the API's own 400 ValidationError with a localized message,
which UserService raises, instead of FastAPI's generic 422.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserCreateRequest(BaseModel):
    """Body of POST /api/users."""
    name: Optional[str] = Field(default=None, description="Display name (required)")
    email: Optional[str] = Field(default=None, description="Email address (required, unique)")


class UserUpdateRequest(BaseModel):
    """Body of PUT /api/users/{id}. Omitting phone clears it."""
    name: Optional[str] = Field(default=None, description="Display name (required)")
    email: Optional[str] = Field(default=None, description="Email address (required, unique)")
    phone: Optional[str] = Field(default=None, description="Contact phone")


class UserResponse(BaseModel):
    """Full user row as returned by GET /api/users/{id} and GET /auth/me."""
    user_id: int
    name: str
    email: str
    phone: Optional[str] = None

    model_config = {"from_attributes": True}


class UserCreatedResponse(BaseModel):
    """201 body of POST /api/users: {"message": ..., "userId": 1}."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    user_id: int
