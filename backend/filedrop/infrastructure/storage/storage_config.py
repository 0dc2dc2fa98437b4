"""Storage configuration for the local upload directories.

Turns application settings into a validated StorageConfig used to build the
upload manager.
"""

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ...config import Settings, get_settings


@dataclass
class StorageConfig:
    """Configuration for the upload directory tree.

    Attributes:
        temporary_dir: Directory receiving new uploads
        permanent_dir: Default directory for promoted uploads
        path_prefixes: Absolute prefixes for display paths, in match order
        file_mode: Permission bits applied to stored files
        transport_dir: Spool directory for incoming multipart bodies
        max_upload_size: Maximum accepted upload size in bytes
    """
    temporary_dir: Path
    permanent_dir: Path
    path_prefixes: List[str] = field(default_factory=list)
    file_mode: int = 0o644
    transport_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    max_upload_size: int = 100 * 1024 * 1024


def load_storage_config(settings: Optional[Settings] = None) -> StorageConfig:
    """Load storage configuration from application settings.

    Relative directories are resolved against the working directory. When no
    prefixes are configured, the common parent of both roots is used so
    display paths read like 'tmp/photo.png'.

    Args:
        settings: Settings to read (default: cached application settings)

    Returns:
        StorageConfig: Validated storage configuration

    Raises:
        ValueError: If a setting is invalid

    Example:
        UPLOAD_TEMPORARY_DIR=/srv/uploads/tmp
        UPLOAD_PERMANENT_DIR=/srv/uploads/files
        UPLOAD_PATH_PREFIXES=/srv/uploads
        UPLOAD_FILE_MODE=644
    """
    if settings is None:
        settings = get_settings()

    temporary_dir = Path(os.path.abspath(settings.UPLOAD_TEMPORARY_DIR))
    permanent_dir = Path(os.path.abspath(settings.UPLOAD_PERMANENT_DIR))

    try:
        file_mode = int(settings.UPLOAD_FILE_MODE, 8)
    except ValueError:
        raise ValueError(
            f"Invalid UPLOAD_FILE_MODE: {settings.UPLOAD_FILE_MODE}. "
            "Use an octal permission string such as 644."
        )

    prefixes = [p.strip() for p in settings.UPLOAD_PATH_PREFIXES.split(",") if p.strip()]
    if not prefixes:
        prefixes = [os.path.commonpath([temporary_dir, permanent_dir])]

    transport_dir = Path(settings.UPLOAD_TRANSPORT_DIR or tempfile.gettempdir())

    config = StorageConfig(
        temporary_dir=temporary_dir,
        permanent_dir=permanent_dir,
        path_prefixes=prefixes,
        file_mode=file_mode,
        transport_dir=transport_dir,
        max_upload_size=settings.MAX_UPLOAD_SIZE_BYTES,
    )
    validate_storage_config(config)

    return config


def validate_storage_config(config: StorageConfig) -> None:
    """Validate storage configuration.

    Args:
        config: Storage configuration to validate

    Raises:
        ValueError: If configuration is invalid
    """
    if config.temporary_dir == config.permanent_dir:
        raise ValueError("Temporary and permanent upload directories must differ")

    for prefix in config.path_prefixes:
        if not os.path.isabs(prefix):
            raise ValueError(f"Invalid path prefix: {prefix}. Prefixes must be absolute paths")

    if not 0 <= config.file_mode <= 0o7777:
        raise ValueError(f"Invalid file mode: {oct(config.file_mode)}")

    if config.max_upload_size <= 0:
        raise ValueError("MAX_UPLOAD_SIZE_BYTES must be positive")
