"""Classification of transport-level upload error codes

The transport layer reports the outcome of a multipart transfer as a small
integer. This module maps those codes to TransferErrorKind values and
human-readable messages.
"""

from enum import Enum, IntEnum
from typing import Dict, Tuple, Union

from .errors import TransferError


class UploadErrorCode(IntEnum):
    """Transport error codes for a multipart transfer"""
    OK = 0
    INI_SIZE = 1      # Exceeds the server-wide size limit
    FORM_SIZE = 2     # Exceeds the form-level size limit
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8     # Stopped by a transport extension/hook


class TransferErrorKind(str, Enum):
    """Classified kinds of failed transfers"""
    NO_FILE = "NO_FILE"
    SIZE_EXCEEDED = "SIZE_EXCEEDED"
    PARTIAL_UPLOAD = "PARTIAL_UPLOAD"
    NO_TEMP_DIR = "NO_TEMP_DIR"
    WRITE_FAILED = "WRITE_FAILED"
    EXTENSION_STOPPED = "EXTENSION_STOPPED"
    UNKNOWN = "UNKNOWN"


UNKNOWN_ERROR_MESSAGE = "The upload was stopped by an unknown error"

TRANSFER_ERRORS: Dict[UploadErrorCode, Tuple[TransferErrorKind, str]] = {
    UploadErrorCode.NO_FILE: (
        TransferErrorKind.NO_FILE,
        "No file uploaded",
    ),
    UploadErrorCode.INI_SIZE: (
        TransferErrorKind.SIZE_EXCEEDED,
        "The uploaded file exceeds the maximum upload size",
    ),
    UploadErrorCode.FORM_SIZE: (
        TransferErrorKind.SIZE_EXCEEDED,
        "The uploaded file exceeds the maximum upload size",
    ),
    UploadErrorCode.PARTIAL: (
        TransferErrorKind.PARTIAL_UPLOAD,
        "The uploaded file was only partially uploaded",
    ),
    UploadErrorCode.NO_TMP_DIR: (
        TransferErrorKind.NO_TEMP_DIR,
        "No temporary directory to upload the file to",
    ),
    UploadErrorCode.CANT_WRITE: (
        TransferErrorKind.WRITE_FAILED,
        "Failed to write file to disk",
    ),
    UploadErrorCode.EXTENSION: (
        TransferErrorKind.EXTENSION_STOPPED,
        UNKNOWN_ERROR_MESSAGE,
    ),
}


def classify_transfer_error(code: Union[int, UploadErrorCode]) -> None:
    """Raise a TransferError unless the transport reported success

    Args:
        code: Transport error code (any integer is accepted)

    Raises:
        TransferError: For every code other than UploadErrorCode.OK

    Example:
        >>> classify_transfer_error(UploadErrorCode.OK)
        >>> classify_transfer_error(4)
        Traceback (most recent call last):
        ...
        filedrop.domain.uploads.errors.TransferError: No file uploaded
    """
    if code == UploadErrorCode.OK:
        return

    try:
        kind, message = TRANSFER_ERRORS[UploadErrorCode(code)]
    except (ValueError, KeyError):
        kind, message = TransferErrorKind.UNKNOWN, UNKNOWN_ERROR_MESSAGE

    raise TransferError(kind, message)
