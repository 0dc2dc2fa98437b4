from .local_file_store import LocalFileStore
from .storage_config import StorageConfig, load_storage_config, validate_storage_config

__all__ = [
    "LocalFileStore",
    "StorageConfig",
    "load_storage_config",
    "validate_storage_config",
]
