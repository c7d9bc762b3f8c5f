"""Wiring for the client core, driven by ClientSettings."""

from dependency_injector import containers, providers

from lingonotes.client.api_client import LingoNotesClient
from lingonotes.client.config import get_client_settings
from lingonotes.client.session import AuthSession
from lingonotes.client.storage import FileStorage
from lingonotes.client.store import LocalStore
from lingonotes.client.sync import SyncClient


class ClientContainer(containers.DeclarativeContainer):
    """Client dependency container; override ``storage`` for in-memory use."""

    settings = providers.Callable(get_client_settings)

    storage = providers.Singleton(FileStorage, directory=settings.provided.STORAGE_DIR)

    store = providers.Singleton(
        LocalStore,
        storage=storage,
        debounce_seconds=settings.provided.PERSIST_DEBOUNCE,
    )

    api = providers.Singleton(
        LingoNotesClient,
        base_url=settings.provided.API_URL,
        timeout=settings.provided.REQUEST_TIMEOUT,
    )

    session = providers.Singleton(AuthSession, store=store, storage=storage, api=api)

    sync_client = providers.Singleton(SyncClient, store=store, api=api)
