"""
Client core: the persisted state store, backend API client, session and sync.

The mobile app drives these objects from its UI event loop; store mutations
are synchronous, network calls are awaited.
"""

from .api_client import ApiRequestError, LingoNotesClient
from .core import ClientContainer
from .session import AuthSession
from .storage import FileStorage, KeyValueStorage, MemoryStorage
from .store import LocalStore, StoreState
from .sync import SyncClient, SyncResult

__all__ = [
    "ApiRequestError",
    "AuthSession",
    "ClientContainer",
    "FileStorage",
    "KeyValueStorage",
    "LingoNotesClient",
    "LocalStore",
    "MemoryStorage",
    "StoreState",
    "SyncClient",
    "SyncResult",
]
