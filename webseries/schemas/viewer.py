"""
Pydantic schemas for viewer accounts and authentication
"""
import re
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from webseries.models.viewer import Role

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


def check_password_strength(value: str) -> str:
    if not PASSWORD_PATTERN.match(value):
        raise ValueError("Password must contain uppercase, lowercase, and number")
    return value


class ViewerCreate(BaseModel):
    first_name: str = Field(..., min_length=2, max_length=30)
    last_name: Optional[str] = Field(None, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    series_id: int = Field(..., ge=1)
    country_id: int = Field(..., ge=1)
    monthly_fee: Optional[float] = Field(None, gt=0)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value):
        value = value.lower()
        if len(value) > 50:
            raise ValueError("Email must be at most 50 characters")
        return value

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def password_strength(cls, value):
        return check_password_strength(value)


class ViewerLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value):
        return value.lower()


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=2, max_length=30)
    last_name: Optional[str] = Field(None, max_length=30)
    billing_street: Optional[str] = Field(None, max_length=50)
    billing_city: Optional[str] = Field(None, max_length=30)
    billing_zipcode: Optional[int] = Field(None, ge=0)


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=100)

    @field_validator("new_password")
    @classmethod
    def password_strength(cls, value):
        return check_password_strength(value)


class ViewerSummary(BaseModel):
    id: int
    first_name: str
    last_name: Optional[str]
    email: str
    role: Role

    class Config:
        from_attributes = True


class ViewerResponse(ViewerSummary):
    monthly_fee: float
    billing_street: Optional[str]
    billing_city: Optional[str]
    billing_zipcode: Optional[int]
    series_id: Optional[int]
    country_id: Optional[int]
    created_at: datetime


class AuthResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    viewer: ViewerSummary


class MessageResponse(BaseModel):
    message: str
