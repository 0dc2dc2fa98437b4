"""Uploads domain module - intake, sanitization, promotion and display paths"""

from .data_uri import decode_data_uri, parse_data_uri
from .errors import (
    DecodeFailedError,
    FileSystemError,
    InvalidUploadStructureError,
    MoveFailedError,
    RootNotADirectoryError,
    TransferError,
    WriteFailedError,
)
from .manager import DEFAULT_FILE_MODE, UploadManager
from .models import DataUri, StoredFile, UploadedFile, UploadRootKind
from .path_registry import AbsolutePathRegistry
from .transfer_errors import (
    TransferErrorKind,
    UploadErrorCode,
    classify_transfer_error,
)
from .validation import safe_filename, validate_file_size

__all__ = [
    "UploadManager",
    "DEFAULT_FILE_MODE",
    "UploadRootKind",
    "StoredFile",
    "UploadedFile",
    "DataUri",
    "AbsolutePathRegistry",
    "UploadErrorCode",
    "TransferErrorKind",
    "classify_transfer_error",
    "parse_data_uri",
    "decode_data_uri",
    "safe_filename",
    "validate_file_size",
    "FileSystemError",
    "InvalidUploadStructureError",
    "TransferError",
    "MoveFailedError",
    "WriteFailedError",
    "RootNotADirectoryError",
    "DecodeFailedError",
]
