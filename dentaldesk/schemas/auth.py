"""Schemas for login and self-registration."""

import re
from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from .records import CamelModel, User

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(value: str) -> bool:
    """Loose shape check: something@domain.tld."""
    return bool(EMAIL_PATTERN.match(value or ""))


class LoginRequest(CamelModel):
    email: str
    password: str


class RegistrationRequest(CamelModel):
    """
    Patient self-registration form.

    Validation messages match what the registration form shows.
    """

    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    date_of_birth: Optional[date] = None
    phone: str = ""
    address: str = ""
    emergency_contact: str = ""
    health_info: str = ""

    @field_validator("name")
    def name_required(cls, v):
        if not v.strip():
            raise ValueError("Full name is required")
        return v.strip()

    @field_validator("email")
    def email_valid(cls, v):
        if not validate_email(v):
            raise ValueError("Please enter a valid email address")
        return v

    @field_validator("password")
    def password_length(cls, v):
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return v

    @field_validator("date_of_birth", mode="before")
    def blank_date_as_missing(cls, v):
        return None if v == "" else v

    @field_validator("phone")
    def phone_required(cls, v):
        if not v.strip():
            raise ValueError("Phone number is required")
        return v

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if self.date_of_birth is None:
            raise ValueError("Date of birth is required")
        return self


class AuthSession(CamelModel):
    """Persisted login session."""

    user: User
    timestamp: datetime = Field(default_factory=datetime.now)
