from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator


def _bcrypt_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > 72:
        raise ValueError("password must be 72 bytes or fewer (bcrypt limit)")
    return v


class RegisterRequest(BaseModel):
    email: EmailStr
    full_name: str = Field(min_length=1, max_length=120)
    password: str = Field(min_length=6, max_length=128)  # allow chars, enforce bytes below

    @field_validator("password")
    @classmethod
    def password_bcrypt_bytes(cls, v: str) -> str:
        return _bcrypt_bytes(v)

    @field_validator("full_name")
    @classmethod
    def strip_full_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("full_name must not be blank")
        return v


class RegisterResponse(BaseModel):
    id: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("password")
    @classmethod
    def password_bcrypt_bytes(cls, v: str) -> str:
        return _bcrypt_bytes(v)


class LoginResponse(BaseModel):
    ok: bool


class LogoutResponse(BaseModel):
    ok: bool


class OnboardingRequest(BaseModel):
    full_name: str = Field(min_length=1, max_length=120)
    bio: str = Field(min_length=1, max_length=500)
    native_language: str = Field(min_length=1, max_length=60)
    learning_language: str = Field(min_length=1, max_length=60)
    location: str = Field(min_length=1, max_length=120)

    @field_validator("full_name", "bio", "native_language", "learning_language", "location")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v
