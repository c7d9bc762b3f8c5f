from .apple_identity_provider import AppleIdentityProvider
from .google_identity_provider import GoogleIdentityProvider

__all__ = [
    "AppleIdentityProvider",
    "GoogleIdentityProvider",
]
