"""Authentication request and response schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request schema for operator login."""

    username: str = Field(..., min_length=1, description="Operator username")
    password: str = Field(..., min_length=1, description="Operator password")

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {"example": {
            "username": "admin",
            "password": "securepassword123",
        }},
    }


class RegisterRequest(BaseModel):
    """Request schema for creating another operator account."""

    username: str = Field(..., min_length=3, max_length=100, description="Operator username")
    password: str = Field(..., min_length=8, description="Password (minimum 8 characters)")
    role: Optional[str] = Field(default="admin", max_length=50, description="Operator role")

    model_config = {"extra": "forbid"}


class UserResponse(BaseModel):
    """Response schema for operator information."""

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    role: str = Field(..., description="Role")

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    """Response schema for a successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse

    model_config = {"json_schema_extra": {"example": {
        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
        "token_type": "bearer",
        "expires_in": 86400,
        "user": {"id": 1, "username": "admin", "role": "admin"},
    }}}
