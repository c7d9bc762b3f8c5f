"""
Application constants.

Values shared by the API and the client core.
"""

from typing import Literal

# Languages the app ships sheets for
LanguageCode = Literal[
    "en", "es", "fr", "de", "it", "pt", "nl", "ru",
    "zh", "ja", "ko", "ar", "hi", "tr", "pl", "vi",
]  # fmt: skip

SubscriptionStatus = Literal["free", "premium"]

# Key the client store serializes its state under
STORAGE_KEY = "lingo-notes-storage"
AUTH_TOKEN_KEY = "authToken"

SUBSCRIPTION_REQUIRED_CODE = "SUBSCRIPTION_REQUIRED"

DAY_MS = 24 * 60 * 60 * 1000
