"""File Store Port - Domain interface for the filesystem used by uploads.

This port defines the filesystem primitives the upload manager relies on.
Adapters must implement this interface to provide local disk or other
POSIX-like storage backends.

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from pathlib import Path


class FileStorePort(ABC):
    """Port interface for filesystem operations used by upload intake.

    Handles are pathlib.Path objects. Implementations raise OSError (or a
    subclass) when an operation fails; the upload manager translates those
    into its own error types.

    Example Usage:
        store = LocalFileStore()

        directory = Path('/srv/uploads/tmp')
        if not store.exists(directory):
            store.create_directory(directory)

        target = store.get_child(directory, 'photo.png')
        store.create_exclusive(target)
        store.write(target, b'...')
        store.set_permissions(target, 0o644)
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check whether anything exists at path."""
        pass

    @abstractmethod
    def is_directory(self, path: Path) -> bool:
        """Check whether path is an existing directory."""
        pass

    @abstractmethod
    def create_directory(self, path: Path) -> None:
        """Create a directory, including missing parents.

        Raises:
            OSError: If the directory cannot be created
        """
        pass

    @abstractmethod
    def get_child(self, directory: Path, name: str) -> Path:
        """Resolve a child handle of directory (nothing is created)."""
        pass

    @abstractmethod
    def create_exclusive(self, path: Path) -> None:
        """Atomically create an empty file at path.

        Raises:
            FileExistsError: If something already exists at path
            OSError: If the file cannot be created
        """
        pass

    @abstractmethod
    def move(self, source: Path, destination: Path) -> None:
        """Move source to destination, replacing a placeholder at destination.

        Raises:
            FileNotFoundError: If source doesn't exist
            OSError: If the move fails
        """
        pass

    @abstractmethod
    def write(self, path: Path, data: bytes) -> None:
        """Write data to path, truncating existing content.

        Raises:
            OSError: If the write fails
        """
        pass

    @abstractmethod
    def remove(self, path: Path) -> bool:
        """Remove a file.

        Returns:
            bool: True if the file was removed, False if it didn't exist
        """
        pass

    @abstractmethod
    def set_permissions(self, path: Path, mode: int) -> None:
        """Set permission bits of path (e.g. 0o644)."""
        pass

    @abstractmethod
    def get_absolute_path(self, path: Path) -> Path:
        """Get the absolute path of a handle."""
        pass

    @abstractmethod
    def get_name(self, path: Path) -> str:
        """Get the final path component of a handle."""
        pass

    @abstractmethod
    def get_size(self, path: Path) -> int:
        """Get the size in bytes of an existing file."""
        pass
