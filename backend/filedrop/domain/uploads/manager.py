"""Upload manager - intake, promotion and directory lifecycle for uploads.

Accepts multipart transfers and data-URI payloads into a temporary root and
moves stored files into permanent directories on demand.

Architecture: Hexagonal - domain service, filesystem and mime lookups are
reached through FileStorePort and MimeResolverPort.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .data_uri import parse_data_uri
from .errors import (
    FileSystemError,
    MoveFailedError,
    RootNotADirectoryError,
    WriteFailedError,
)
from .models import StoredFile, UploadedFile, UploadRootKind
from .path_registry import AbsolutePathRegistry
from .ports import FileStorePort, MimeResolverPort
from .transfer_errors import classify_transfer_error
from .validation import MAX_FILENAME_LENGTH, safe_filename

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644

# Upper bound on "name-N.ext" probes before giving up on a directory
MAX_RESERVATION_ATTEMPTS = 10_000

RESERVATION_LOCK_STRIPES = 64


class UploadManager:
    """Service to process file uploads.

    Owns a temporary and a permanent upload root, both created on demand.
    New uploads land in the temporary root; promote() moves them to a
    permanent directory.

    Example:
        manager = UploadManager(
            file_store=LocalFileStore(),
            mime_resolver=MimetypesResolver(),
            temporary_root=Path('/srv/uploads/tmp'),
            permanent_root=Path('/srv/uploads/files'),
            path_prefixes=['/srv/uploads'],
        )

        stored = manager.accept_upload('invoice.pdf', Path('/tmp/php1234'), 0)
        promoted = manager.promote(stored)
        manager.to_display_path(promoted)  # 'files/invoice.pdf'
    """

    def __init__(
        self,
        file_store: FileStorePort,
        mime_resolver: MimeResolverPort,
        temporary_root: Union[str, Path],
        permanent_root: Union[str, Path],
        path_prefixes: Iterable[Union[str, Path]] = (),
        file_mode: int = DEFAULT_FILE_MODE,
    ):
        """Initialize the upload manager.

        Args:
            file_store: Filesystem adapter
            mime_resolver: Media type to extension lookup
            temporary_root: Directory receiving new uploads
            permanent_root: Default directory for promoted files
            path_prefixes: Absolute prefixes stripped by to_display_path(),
                matched in the given order
            file_mode: Permission bits applied to stored files

        Raises:
            RootNotADirectoryError: If a root exists but is not a directory
            FileSystemError: If a root cannot be created
        """
        self.file_store = file_store
        self.mime_resolver = mime_resolver
        self.path_registry = AbsolutePathRegistry(path_prefixes)
        self.file_mode = file_mode

        self._roots: Dict[UploadRootKind, Path] = {}
        self._reservation_locks = tuple(threading.Lock() for _ in range(RESERVATION_LOCK_STRIPES))

        self.set_root(UploadRootKind.TEMPORARY, temporary_root)
        self.set_root(UploadRootKind.PERMANENT, permanent_root)

    # ------------------------------------------------------------------
    # Directory lifecycle
    # ------------------------------------------------------------------

    def set_root(self, kind: UploadRootKind, path: Union[str, Path]) -> Path:
        """Set one of the upload roots, creating it when missing.

        Args:
            kind: Which root to set
            path: Directory path

        Returns:
            Path: Absolute path of the root

        Raises:
            RootNotADirectoryError: If path exists but is not a directory
            FileSystemError: If the directory cannot be created
        """
        directory = self.file_store.get_absolute_path(Path(path))
        self._ensure_directory(directory)

        self._roots[UploadRootKind(kind)] = directory
        logger.debug(f"Upload root set: kind={UploadRootKind(kind).value}, path={directory}")

        return directory

    def get_root(self, kind: UploadRootKind) -> Path:
        """Get the current directory of an upload root."""
        return self._roots[UploadRootKind(kind)]

    @property
    def temporary_root(self) -> Path:
        return self._roots[UploadRootKind.TEMPORARY]

    @property
    def permanent_root(self) -> Path:
        return self._roots[UploadRootKind.PERMANENT]

    def _ensure_directory(self, directory: Path) -> None:
        if not self.file_store.exists(directory):
            try:
                self.file_store.create_directory(directory)
            except OSError as e:
                raise FileSystemError(f"Could not create directory {directory}: {e}")
            logger.info(f"Created upload directory: {directory}")
        elif not self.file_store.is_directory(directory):
            raise RootNotADirectoryError(directory)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_file(self, name: str, kind: UploadRootKind = UploadRootKind.TEMPORARY) -> Optional[StoredFile]:
        """Get a previously stored file by name.

        Args:
            name: Name of the file inside the root
            kind: Root to look in (default: temporary)

        Returns:
            StoredFile, or None when no such file exists
        """
        # Names are looked up as stored, never as paths
        if name != os.path.basename(name) or name in ("", ".", ".."):
            return None

        path = self.file_store.get_child(self.get_root(kind), name)
        if not self.file_store.exists(path) or self.file_store.is_directory(path):
            return None

        return self._handle(path)

    # ------------------------------------------------------------------
    # Collision avoidance
    # ------------------------------------------------------------------

    def reserve(self, directory: Union[str, Path], name: str) -> Path:
        """Reserve a fresh, non-colliding file path in directory.

        The requested name is used when free. Otherwise '-1', '-2', ... is
        inserted before the extension until a free name is found. The
        reservation is an empty placeholder file created exclusively, so
        concurrent callers never receive the same path.

        Args:
            directory: Target directory (must exist)
            name: Requested (already sanitized) filename

        Returns:
            Path: Reserved path

        Raises:
            FileSystemError: If no placeholder could be created
        """
        directory = Path(directory)
        stem, extension = _split_extension(name)

        with self._lock_for(directory):
            for attempt in range(MAX_RESERVATION_ATTEMPTS):
                candidate_name = _candidate_name(stem, extension, f"-{attempt}" if attempt else "")
                candidate = self.file_store.get_child(directory, candidate_name)
                try:
                    if self.file_store.exists(candidate):
                        continue
                    self.file_store.create_exclusive(candidate)
                except FileExistsError:
                    continue
                except OSError as e:
                    raise FileSystemError(f"Could not reserve {candidate}: {e}")

                if attempt:
                    logger.debug(f"Name collision avoided: requested={name}, reserved={candidate_name}")
                return candidate

        raise FileSystemError(f"Could not reserve a free file name for {name} in {directory}")

    def _lock_for(self, directory: Path) -> threading.Lock:
        # Striped: directories sharing a stripe also share the lock
        return self._reservation_locks[hash(directory) % RESERVATION_LOCK_STRIPES]

    # ------------------------------------------------------------------
    # Intake
    # ------------------------------------------------------------------

    def accept_upload(
        self,
        original_name: str,
        transport_temp_path: Union[str, Path],
        transport_error_code: int,
    ) -> StoredFile:
        """Handle a multipart file upload.

        Processing:
        1. Classify the transport error code (no filesystem access on failure)
        2. Sanitize the original filename
        3. Reserve a collision free path in the temporary root
        4. Move the transport's temporary file onto the reserved path
        5. Apply the configured permissions

        Args:
            original_name: Client supplied filename
            transport_temp_path: Path of the transport's temporary copy
            transport_error_code: Transport error code (see UploadErrorCode)

        Returns:
            StoredFile: Handle to the stored file

        Raises:
            TransferError: If the transport reported a failed transfer
            MoveFailedError: If the temporary file could not be moved
            FileSystemError: If no path could be reserved
        """
        classify_transfer_error(transport_error_code)

        source = Path(transport_temp_path)
        target = self.reserve(self.temporary_root, safe_filename(original_name))

        try:
            self.file_store.move(source, target)
        except OSError as e:
            self.file_store.remove(target)
            logger.warning(f"Upload move failed: source={source}, destination={target}, error={e}")
            raise MoveFailedError(source, target, str(e))

        self._set_permissions(target)

        stored = self._handle(target)
        logger.info(
            f"Upload stored: name={stored.name}, size={stored.size_bytes}, "
            f"path={self.to_display_path(stored)}"
        )
        return stored

    def accept_upload_structure(self, structure: Mapping[str, Any]) -> StoredFile:
        """Handle a file upload described by an untyped structure.

        Args:
            structure: Mapping with 'name', 'tmp_name' and 'error' keys

        Returns:
            StoredFile: Handle to the stored file

        Raises:
            InvalidUploadStructureError: If a required key is missing
            TransferError, MoveFailedError: See accept_upload()
        """
        upload = UploadedFile.from_mapping(structure)
        return self.accept_upload(
            upload.original_name,
            upload.transport_temp_path,
            upload.transport_error_code,
        )

    def accept_data_uri(self, base_name: str, data_uri_text: str) -> Optional[StoredFile]:
        """Store the payload of a data URI in the temporary root.

        The extension is derived from the media type when it is known.
        Undecodable input is not an error: nothing is written and None is
        returned.

        Args:
            base_name: Filename without extension
            data_uri_text: Data URI text

        Returns:
            StoredFile, or None when data_uri_text is not a valid data URI

        Raises:
            WriteFailedError: If the decoded bytes could not be written
            FileSystemError: If no path could be reserved
        """
        data_uri = parse_data_uri(data_uri_text)
        if data_uri is None:
            logger.info(f"Ignoring undecodable data URI for {base_name}")
            return None

        name = base_name
        extension = self.mime_resolver.extension_for_media_type(data_uri.media_type)
        if extension:
            name = f"{base_name}.{extension}"

        target = self.reserve(self.temporary_root, safe_filename(name))

        try:
            self.file_store.write(target, data_uri.data)
        except OSError as e:
            self.file_store.remove(target)
            logger.warning(f"Data URI write failed: path={target}, error={e}")
            raise WriteFailedError(target, str(e))

        self._set_permissions(target)

        stored = self._handle(target)
        logger.info(
            f"Data URI stored: name={stored.name}, media_type={data_uri.media_type}, "
            f"size={stored.size_bytes}"
        )
        return stored

    # ------------------------------------------------------------------
    # Promotion
    # ------------------------------------------------------------------

    def promote(self, file: StoredFile, permanent_dir: Optional[Union[str, Path]] = None) -> StoredFile:
        """Move a stored file into a permanent directory.

        The file keeps its name unless that name is already taken in the
        target directory, in which case a '-N' suffix is added.

        Args:
            file: Handle of the file to move
            permanent_dir: Target directory (default: the permanent root),
                created when missing

        Returns:
            StoredFile: Handle at the new location; the old handle is invalid

        Raises:
            MoveFailedError: If the source is gone, or the destination cannot
                be created, reserved or written
            RootNotADirectoryError: If permanent_dir exists but is not a directory
        """
        source = file.path
        if permanent_dir is None:
            directory = self.permanent_root
        else:
            directory = self.file_store.get_absolute_path(Path(permanent_dir))
        destination = self.file_store.get_child(directory, file.name)

        try:
            if permanent_dir is not None:
                self._ensure_directory(directory)

            if not self.file_store.exists(source):
                raise MoveFailedError(source, destination, "source does not exist")

            target = self.reserve(directory, file.name)
        except (RootNotADirectoryError, MoveFailedError):
            raise
        except FileSystemError as e:
            logger.warning(f"Promotion failed: source={source}, destination={destination}, error={e}")
            raise MoveFailedError(source, destination, str(e)) from e

        try:
            self.file_store.move(source, target)
        except OSError as e:
            self.file_store.remove(target)
            logger.warning(f"Promotion failed: source={source}, destination={target}, error={e}")
            raise MoveFailedError(source, target, str(e))

        promoted = self._handle(target)
        logger.info(
            f"File promoted: {self.to_display_path(file)} -> {self.to_display_path(promoted)}"
        )
        return promoted

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def to_display_path(self, file: Union[StoredFile, str, Path]) -> str:
        """Get the path of a file relative to the first registered prefix.

        Args:
            file: StoredFile or absolute path

        Returns:
            str: Relative path, or the absolute path when no prefix matches
        """
        path = file.path if isinstance(file, StoredFile) else file
        return self.path_registry.relativize(path)

    # ------------------------------------------------------------------

    def _set_permissions(self, path: Path) -> None:
        """Apply the file mode, removing the file when that fails."""
        try:
            self.file_store.set_permissions(path, self.file_mode)
        except OSError as e:
            self.file_store.remove(path)
            logger.warning(f"Setting permissions failed, file removed: path={path}, error={e}")
            raise FileSystemError(f"Could not set permissions on {path}: {e}")

    def _handle(self, path: Path) -> StoredFile:
        absolute = self.file_store.get_absolute_path(path)
        return StoredFile(
            path=absolute,
            name=self.file_store.get_name(absolute),
            size_bytes=self.file_store.get_size(absolute),
        )


def _split_extension(name: str):
    """Split 'archive.tar.gz' into ('archive.tar', '.gz'); '.env' has no extension."""
    return os.path.splitext(name)


def _candidate_name(stem: str, extension: str, suffix: str) -> str:
    """Join stem, suffix and extension, shortening the stem to stay within
    MAX_FILENAME_LENGTH. The extension is cut only when no stem would fit.
    """
    room = MAX_FILENAME_LENGTH - len(suffix) - len(extension)
    if room < 1:
        extension = extension[:MAX_FILENAME_LENGTH - len(suffix) - 1]
        room = 1
    return f"{stem[:room]}{suffix}{extension}"
