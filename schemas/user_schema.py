from pydantic import BaseModel, EmailStr, Field
from typing import Optional

class UserCreate(BaseModel):
    """Schema for user creation."""
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: str | None = None

class UserInfo(BaseModel):
    """Schema for returning authenticated user information."""
    uid: str
    email: EmailStr
    full_name: str | None = None

class UserProfile(BaseModel):
    """A user record as stored under `users/{id}`."""
    id: str
    email: str
    name: str
    created_at: Optional[str] = None
