"""
PostBoard Backend — Authentication Schemas
============================================

Request models for register/login and the user/token payloads returned in
the envelope. The password hash is never part of any response model.
"""

from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, StringConstraints, ValidationInfo, field_validator

from postboard.config import settings


class RegisterRequest(BaseModel):
    """
    Body of POST /register.

    Rules:
        name                   required, 1-255 chars after trimming
        email                  required, valid address, stored lowercased
        password               required, at least settings.password_min_length
        password_confirmation  required, must equal password
    """

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
    email: EmailStr
    password: str = Field(max_length=255)
    password_confirmation: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        if len(v) < settings.password_min_length:
            raise ValueError(
                f"The password must be at least {settings.password_min_length} characters."
            )
        return v

    @field_validator("password_confirmation")
    @classmethod
    def validate_password_confirmation(cls, v: str, info: ValidationInfo) -> str:
        # password is absent from info.data when it failed its own rules
        password = info.data.get("password")
        if password is not None and v != password:
            raise ValueError("The password confirmation does not match.")
        return v


class LoginRequest(BaseModel):
    """Body of POST /login."""

    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        # Addresses are stored lowercased at registration
        return v.lower()


class UserResponse(BaseModel):
    """Public view of a user: id, name and email only."""

    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class AuthPayload(BaseModel):
    """`data` member for register and login responses."""

    user: UserResponse
    token: str = Field(description="Plain-text bearer token, shown only once")
