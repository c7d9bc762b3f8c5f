"""Schemas for authentication endpoints."""

from pydantic import BaseModel

from lingonotes.schemas.base import CamelModel


class GoogleSignInRequest(CamelModel):
    id_token: str


class AppleFullName(CamelModel):
    given_name: str | None = None
    family_name: str | None = None


class AppleUserInfo(CamelModel):
    """Optional profile Apple hands to the app on first sign-in only."""

    email: str | None = None
    full_name: AppleFullName | None = None

    def display_name(self) -> str | None:
        if self.full_name is None:
            return None
        parts = [p for p in (self.full_name.given_name, self.full_name.family_name) if p]
        return " ".join(parts) or None


class AppleSignInRequest(CamelModel):
    id_token: str
    user: AppleUserInfo | None = None


class AuthUser(BaseModel):
    id: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None


class AuthResponse(BaseModel):
    """Session token plus the signed-in user's public profile."""

    token: str
    user: AuthUser


class VerifiedUser(CamelModel):
    user_id: str
    email: str | None = None


class VerifyResponse(BaseModel):
    valid: bool
    user: VerifiedUser
