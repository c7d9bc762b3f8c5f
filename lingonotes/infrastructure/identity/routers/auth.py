from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from lingonotes.application.identity.use_cases.authentication_use_case import (
    AuthenticationUseCase,
)
from lingonotes.config import get_settings
from lingonotes.core import container
from lingonotes.domain.identity.exceptions import InvalidIdentityTokenError
from lingonotes.exceptions import AuthenticationError
from lingonotes.infrastructure.common.di import inject_use_case
from lingonotes.infrastructure.identity.dependencies import CurrentPrincipal
from lingonotes.schemas.auth_schemas import (
    AppleSignInRequest,
    AuthResponse,
    AuthUser,
    GoogleSignInRequest,
    VerifiedUser,
    VerifyResponse,
)

logger = structlog.get_logger(__name__)
settings = get_settings()
router = APIRouter(prefix="/auth", tags=["auth"])
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

AuthUseCase = Annotated[
    AuthenticationUseCase, Depends(inject_use_case(container.authentication_use_case))
]


@router.post("/google")
@limiter.limit(settings.AUTH_RATE_LIMIT)  # type: ignore[misc]
async def sign_in_with_google(
    request: Request,
    body: GoogleSignInRequest,
    use_case: AuthUseCase,
) -> AuthResponse:
    """Exchange a Google ID token for a session token."""
    try:
        identity, token = await use_case.sign_in_with_google(body.id_token)
    except InvalidIdentityTokenError as e:
        logger.warning("google_auth_failed", reason=e.reason)
        raise AuthenticationError("Authentication failed") from None

    return AuthResponse(
        token=token,
        user=AuthUser(
            id=identity.subject,
            email=identity.email,
            name=identity.name,
            picture=identity.picture,
        ),
    )


@router.post("/apple")
@limiter.limit(settings.AUTH_RATE_LIMIT)  # type: ignore[misc]
async def sign_in_with_apple(
    request: Request,
    body: AppleSignInRequest,
    use_case: AuthUseCase,
) -> AuthResponse:
    """
    Exchange a Sign in with Apple identity token for a session token.

    Apple sends the user's name and email to the app only on first sign-in;
    the app forwards them in ``user``.
    """
    apple_user = body.user
    try:
        identity, token = await use_case.sign_in_with_apple(
            body.id_token,
            fallback_email=apple_user.email if apple_user else None,
            name=apple_user.display_name() if apple_user else None,
        )
    except InvalidIdentityTokenError as e:
        logger.warning("apple_auth_failed", reason=e.reason)
        raise AuthenticationError("Authentication failed") from None

    return AuthResponse(
        token=token,
        user=AuthUser(id=identity.subject, email=identity.email, name=identity.name),
    )


@router.get("/verify")
async def verify(principal: CurrentPrincipal) -> VerifyResponse:
    """Check that the bearer session token is still valid."""
    return VerifyResponse(
        valid=True,
        user=VerifiedUser(user_id=principal.user_id, email=principal.email),
    )
