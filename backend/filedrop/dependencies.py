"""Global FastAPI dependencies.

This module provides:
- get_storage_config: Validated upload directory configuration
- get_upload_manager: Process-wide UploadManager built from the configuration

Tests override these with app.dependency_overrides.
"""

from functools import lru_cache

from .domain.uploads import UploadManager
from .infrastructure.mime import MimetypesResolver
from .infrastructure.storage import LocalFileStore, StorageConfig, load_storage_config


@lru_cache()
def get_storage_config() -> StorageConfig:
    """Load storage configuration once per process."""
    return load_storage_config()


def build_upload_manager(config: StorageConfig) -> UploadManager:
    """Create an UploadManager backed by the local disk.

    Args:
        config: Storage configuration

    Returns:
        UploadManager: Manager with both roots initialized

    Raises:
        RootNotADirectoryError: If a configured root is not a directory
    """
    return UploadManager(
        file_store=LocalFileStore(),
        mime_resolver=MimetypesResolver(),
        temporary_root=config.temporary_dir,
        permanent_root=config.permanent_dir,
        path_prefixes=config.path_prefixes,
        file_mode=config.file_mode,
    )


@lru_cache()
def get_upload_manager() -> UploadManager:
    """Dependency returning the shared UploadManager.

    The manager is created on first use; the roots are created then if they
    don't exist yet.
    """
    return build_upload_manager(get_storage_config())
