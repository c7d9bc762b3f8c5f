"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lingonotes.application.identity.use_cases.authentication_use_case import (
    AuthenticationUseCase,
)
from lingonotes.core import container
from lingonotes.domain.identity.entities.principal import Principal
from lingonotes.domain.identity.exceptions import InvalidSessionTokenError
from lingonotes.exceptions import AuthenticationError
from lingonotes.infrastructure.common.di import inject_use_case

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    use_case: Annotated[
        AuthenticationUseCase, Depends(inject_use_case(container.authentication_use_case))
    ],
) -> Principal:
    """
    Get the authenticated caller from the bearer session token.

    Args:
        credentials: Parsed ``Authorization: Bearer`` header, if any
        use_case: Authentication use case

    Returns:
        Principal carrying the user id and email

    Raises:
        AuthenticationError: If the header is missing or the token is invalid or expired
    """
    if credentials is None:
        raise AuthenticationError("Unauthorized")

    try:
        return use_case.verify_session(credentials.credentials)
    except InvalidSessionTokenError:
        logger.debug("session_token_rejected")
        raise AuthenticationError("Invalid token") from None


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
