"""
Authentication Pydantic schemas.

Defines request and response schemas for authentication endpoints.
Field names use the dashboard's camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from datetime import datetime
from typing import List
from backend.app.models.enums import OfficerRole


class SignupRequest(BaseModel):
    """
    Schema for officer signup.

    Used by POST /auth/signup. Every field is required and role must be
    one of the four known roles.
    """
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(..., alias="fullName", min_length=1, max_length=255, description="Officer full name")
    email: EmailStr = Field(..., description="Officer email address (unique)")
    password: str = Field(..., min_length=6, max_length=128, description="Password (min 6 characters)")
    role: OfficerRole = Field(..., description="Officer role")

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("fullName must not be blank")
        return value.strip()


class LoginRequest(BaseModel):
    """
    Schema for officer login.

    Used by POST /auth/login.
    """
    email: str = Field(..., min_length=1, description="Officer email")
    password: str = Field(..., min_length=1, description="Password")


class OfficerResponse(BaseModel):
    """Officer summary. Never carries the password hash."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    full_name: str = Field(..., alias="fullName")
    email: str
    role: OfficerRole
    created_at: datetime = Field(..., alias="createdAt")


class SignupData(BaseModel):
    officer: OfficerResponse


class LoginUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    full_name: str = Field(..., alias="fullName")
    role: OfficerRole


class LoginData(BaseModel):
    """
    Schema for a successful login.

    The dashboard stores both token and user locally.
    """
    token: str = Field(..., description="JWT access token")
    user: LoginUser


class NavItemResponse(BaseModel):
    to: str
    label: str
    icon: str
    permission: str


class PermissionsData(BaseModel):
    """What the current role may do, for client-side gating."""
    role: str
    label: str
    permissions: List[str]
    navigation: List[NavItemResponse]


class OfficerListData(BaseModel):
    officers: List[OfficerResponse]
    total: int
    page: int
    page_size: int
