"""Pydantic schemas for user data validation."""

from datetime import date

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    """Base user schema."""
    email: EmailStr


class UserCreate(UserBase):
    """Schema for user registration."""
    password: str = Field(..., min_length=6)


class User(UserBase):
    """Schema for user response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    registration_date: date


class UserWithToken(User):
    """Schema for user response after register/login."""
    access_token: str
    token_type: str = "bearer"
