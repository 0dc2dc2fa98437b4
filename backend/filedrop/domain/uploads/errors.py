"""Exceptions raised by upload intake, promotion and directory management.

Every failure surfaced to callers derives from FileSystemError so the HTTP
layer can translate the whole family into a single error response.
"""

from pathlib import Path
from typing import Union


class FileSystemError(Exception):
    """Base exception for upload and storage operations."""
    pass


class InvalidUploadStructureError(FileSystemError):
    """Raised when an untyped upload structure lacks a required field."""

    def __init__(self, missing: str):
        self.missing = missing
        super().__init__(f"Invalid file structure provided: missing '{missing}'")


class TransferError(FileSystemError):
    """Raised when the transport reports a failed upload.

    Attributes:
        kind: Classified TransferErrorKind
        message: Human-readable description of the failure
    """

    def __init__(self, kind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(message)


class MoveFailedError(FileSystemError):
    """Raised when a file cannot be moved to its destination."""

    def __init__(self, source: Union[str, Path], destination: Union[str, Path], reason: str = ""):
        self.source = str(source)
        self.destination = str(destination)
        message = f"Could not move the file {self.source} to {self.destination}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class WriteFailedError(FileSystemError):
    """Raised when decoded content cannot be written to disk."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = str(path)
        message = f"Could not write the file {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RootNotADirectoryError(FileSystemError):
    """Raised when an upload root exists but is not a directory."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"Could not set upload directory: {self.path} is not a directory")


class DecodeFailedError(FileSystemError):
    """Raised when a data URI cannot be decoded."""
    pass
