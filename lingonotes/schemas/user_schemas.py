"""Schemas for the client-side user profile."""

from lingonotes.constants import LanguageCode, SubscriptionStatus
from lingonotes.schemas.base import CamelModel


class User(CamelModel):
    """User profile as held by the client store."""

    id: str
    email: str
    native_language: LanguageCode = "en"
    has_completed_onboarding: bool = False
    subscription_status: SubscriptionStatus = "free"
    subscription_expires_at: int | None = None
    created_at: int
