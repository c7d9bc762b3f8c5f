"""Schemas for subscription endpoints."""

from typing import Literal

from pydantic import BaseModel

from lingonotes.constants import SubscriptionStatus
from lingonotes.schemas.base import CamelModel


class SubscriptionResponse(CamelModel):
    status: SubscriptionStatus
    expires_at: int | None = None
    plan: str | None = None


class VerifyPurchaseRequest(CamelModel):
    platform: Literal["ios", "android"]
    receipt: str
    product_id: str


class VerifyPurchaseResponse(BaseModel):
    success: bool
    subscription: SubscriptionResponse


class WebhookResponse(BaseModel):
    received: bool = True
