"""Premium gate for subscription-only routes."""

from typing import Annotated

import structlog
from fastapi import Depends

from lingonotes.application.subscription.use_cases.subscription_use_case import (
    SubscriptionUseCase,
)
from lingonotes.core import container
from lingonotes.domain.identity.entities.principal import Principal
from lingonotes.exceptions import SubscriptionRequiredError
from lingonotes.infrastructure.common.di import inject_use_case
from lingonotes.infrastructure.identity.dependencies import CurrentPrincipal

logger = structlog.get_logger(__name__)


def require_premium(
    principal: CurrentPrincipal,
    use_case: Annotated[
        SubscriptionUseCase, Depends(inject_use_case(container.subscription_use_case))
    ],
) -> Principal:
    """
    Allow the request only for callers with an active, unexpired premium subscription.

    Raises:
        SubscriptionRequiredError: 403 with code SUBSCRIPTION_REQUIRED otherwise
    """
    if not use_case.has_active_premium(principal.user_id):
        logger.info("premium_required", user_id=principal.user_id)
        raise SubscriptionRequiredError
    return principal


PremiumPrincipal = Annotated[Principal, Depends(require_premium)]
