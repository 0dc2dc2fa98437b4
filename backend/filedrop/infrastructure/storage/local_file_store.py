"""Local File Store - Implementation of FileStorePort on the local disk.

Architecture: Hexagonal - Adapter implementation in infrastructure layer
"""

import logging
import os
import shutil
from pathlib import Path

from ...domain.uploads.ports import FileStorePort

logger = logging.getLogger(__name__)


class LocalFileStore(FileStorePort):
    """FileStorePort adapter using pathlib, os and shutil.

    Moves use rename when source and destination share a filesystem and fall
    back to copy + delete otherwise (shutil.move semantics).

    Example:
        store = LocalFileStore()
        target = store.get_child(Path('/srv/uploads/tmp'), 'photo.png')
        store.create_exclusive(target)
        store.write(target, data)
    """

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def is_directory(self, path: Path) -> bool:
        return Path(path).is_dir()

    def create_directory(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)
        logger.debug(f"Created directory: {path}")

    def get_child(self, directory: Path, name: str) -> Path:
        return Path(directory) / name

    def create_exclusive(self, path: Path) -> None:
        """Create an empty placeholder, failing if anything exists at path."""
        fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o600)
        os.close(fd)

    def move(self, source: Path, destination: Path) -> None:
        """Move source onto destination, replacing an existing placeholder."""
        source = Path(source)
        if not source.exists():
            raise FileNotFoundError(f"No such file: {source}")

        shutil.move(os.fspath(source), os.fspath(destination))
        logger.debug(f"Moved file: {source} -> {destination}")

    def write(self, path: Path, data: bytes) -> None:
        with open(path, "wb") as f:
            f.write(data)

    def remove(self, path: Path) -> bool:
        """Remove a file; missing files are not an error.

        Returns:
            bool: True if the file was removed, False if it didn't exist
        """
        try:
            Path(path).unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Could not remove {path}: {e}")
            return False

        return True

    def set_permissions(self, path: Path, mode: int) -> None:
        os.chmod(path, mode)

    def get_absolute_path(self, path: Path) -> Path:
        return Path(os.path.abspath(path))

    def get_name(self, path: Path) -> str:
        return Path(path).name

    def get_size(self, path: Path) -> int:
        return Path(path).stat().st_size
