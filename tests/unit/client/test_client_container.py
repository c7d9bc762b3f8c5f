from pathlib import Path

from dependency_injector import providers

from lingonotes.client import ClientContainer, FileStorage, LocalStore, MemoryStorage
from lingonotes.client.config import ClientSettings


def test_wires_shared_store_and_api() -> None:
    """Test that session and sync client share one store and one API client."""
    container = ClientContainer()
    container.storage.override(providers.Object(MemoryStorage()))

    session = container.session()
    sync_client = container.sync_client()

    assert isinstance(container.store(), LocalStore)
    assert session.store is sync_client.store
    assert session.api is sync_client.api
    assert session.api.base_url == "http://localhost:3000"


def test_storage_directory_from_settings(tmp_path: Path) -> None:
    container = ClientContainer()
    container.settings.override(
        providers.Object(ClientSettings(STORAGE_DIR=tmp_path, API_URL="https://api.example.com/"))
    )

    storage = container.storage()

    assert isinstance(storage, FileStorage)
    assert storage.directory == tmp_path
    assert container.api().base_url == "https://api.example.com"
