from .memory_sync_repository import InMemorySyncRepository
from .sync_repository import SyncRepository

__all__ = [
    "InMemorySyncRepository",
    "SyncRepository",
]
