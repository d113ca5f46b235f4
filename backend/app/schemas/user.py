"""
Pydantic schemas for profiles and authentication.
"""
from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class SignupRequest(BaseModel):
    """Schema for registration. first/last name override full_name when both are set."""
    email: EmailStr
    password: str
    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    language: str = "en"


class LoginRequest(BaseModel):
    """Schema for login."""
    email: str
    password: str


class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"
    user_id: str
    is_admin: bool = False


class ProfileUpdate(BaseModel):
    """Schema for profile update."""
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    language: Optional[str] = None


class ProfileResponse(BaseModel):
    """Schema for profile response."""
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    language: str = "en"
    is_admin: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AuthorResponse(BaseModel):
    """Public view of a trip's author."""
    id: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None

    model_config = {"from_attributes": True}
