from dependency_injector import containers, providers

from lingonotes.application.identity.use_cases.authentication_use_case import (
    AuthenticationUseCase,
)
from lingonotes.application.subscription.use_cases.subscription_use_case import (
    SubscriptionUseCase,
)
from lingonotes.application.sync.use_cases.sync_use_case import SyncUseCase
from lingonotes.application.translation.use_cases.translation_use_case import (
    TranslationUseCase,
)
from lingonotes.config import get_settings
from lingonotes.database import get_session_factory
from lingonotes.infrastructure.ai.ai_service import AIService
from lingonotes.infrastructure.identity.providers import (
    AppleIdentityProvider,
    GoogleIdentityProvider,
)
from lingonotes.infrastructure.identity.services import TokenServiceAdapter
from lingonotes.infrastructure.subscription.repositories import (
    InMemorySubscriptionRepository,
    SubscriptionRepository,
)
from lingonotes.infrastructure.sync.repositories import InMemorySyncRepository, SyncRepository
from lingonotes.utils import now_ms


def _storage_backend() -> str:
    return get_settings().STORAGE_BACKEND


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Callable(get_settings)
    clock = providers.Object(now_ms)
    session_factory = providers.Callable(get_session_factory)

    # Repositories: one instance per process, memory or database backed
    subscription_repository = providers.Selector(
        providers.Callable(_storage_backend),
        memory=providers.Singleton(InMemorySubscriptionRepository),
        database=providers.Singleton(SubscriptionRepository, session_factory=session_factory),
    )
    sync_repository = providers.Selector(
        providers.Callable(_storage_backend),
        memory=providers.Singleton(InMemorySyncRepository),
        database=providers.Singleton(SyncRepository, session_factory=session_factory),
    )

    # Identity services
    token_service = providers.Singleton(TokenServiceAdapter)
    google_identity_provider = providers.Singleton(
        GoogleIdentityProvider,
        tokeninfo_url=settings.provided.GOOGLE_TOKENINFO_URL,
        client_id=settings.provided.GOOGLE_CLIENT_ID,
        timeout=settings.provided.IDENTITY_PROVIDER_TIMEOUT,
    )
    apple_identity_provider = providers.Singleton(
        AppleIdentityProvider,
        keys_url=settings.provided.APPLE_KEYS_URL,
        issuer=settings.provided.APPLE_ISSUER,
        client_id=settings.provided.APPLE_CLIENT_ID,
        timeout=settings.provided.IDENTITY_PROVIDER_TIMEOUT,
    )

    # AI
    ai_service = providers.Singleton(AIService)

    # Use cases
    authentication_use_case = providers.Factory(
        AuthenticationUseCase,
        google_provider=google_identity_provider,
        apple_provider=apple_identity_provider,
        token_service=token_service,
    )

    subscription_use_case = providers.Factory(
        SubscriptionUseCase,
        repository=subscription_repository,
        clock=clock,
        grant_days=settings.provided.SUBSCRIPTION_GRANT_DAYS,
        allow_unverified_grants=settings.provided.allow_unverified_purchases,
    )

    sync_use_case = providers.Factory(
        SyncUseCase,
        repository=sync_repository,
        clock=clock,
    )

    translation_use_case = providers.Factory(
        TranslationUseCase,
        ai_service=ai_service,
    )


# Initialize container
container = Container()
