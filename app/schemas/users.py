from __future__ import annotations

from pydantic import BaseModel, EmailStr


class UserProfile(BaseModel):
    """Public profile; never carries email or credentials."""

    id: str
    full_name: str
    bio: str
    native_language: str
    learning_language: str
    location: str
    profile_pic_url: str | None = None

    @classmethod
    def from_user(cls, user) -> "UserProfile":
        return cls(
            id=str(user.id),
            full_name=user.full_name,
            bio=user.bio,
            native_language=user.native_language,
            learning_language=user.learning_language,
            location=user.location,
            profile_pic_url=user.profile_pic_url,
        )


class MeResponse(UserProfile):
    email: EmailStr
    is_onboarded: bool

    @classmethod
    def from_user(cls, user) -> "MeResponse":
        return cls(
            **UserProfile.from_user(user).model_dump(),
            email=user.email,
            is_onboarded=user.is_onboarded,
        )


class ProfilePictureResponse(BaseModel):
    profile_pic_url: str | None = None
