"""Value objects for upload intake"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping

from .errors import InvalidUploadStructureError


class UploadRootKind(str, Enum):
    """The two directory roots managed by the upload service"""
    TEMPORARY = "temporary"
    PERMANENT = "permanent"


@dataclass(frozen=True)
class StoredFile:
    """Handle to a file persisted under one of the upload roots.

    Attributes:
        path: Absolute path of the file
        name: Display name (final path component)
        size_bytes: File size in bytes at the time the handle was created
    """
    path: Path
    name: str
    size_bytes: int


@dataclass(frozen=True)
class UploadedFile:
    """One multipart transfer as handed over by the transport layer.

    Attributes:
        original_name: Client supplied filename
        transport_temp_path: Path of the transport's temporary copy
        transport_error_code: Transport error code (see UploadErrorCode)
    """
    original_name: str
    transport_temp_path: Path
    transport_error_code: int

    REQUIRED_KEYS = ("name", "tmp_name", "error")

    @classmethod
    def from_mapping(cls, structure: Mapping[str, Any]) -> "UploadedFile":
        """Build an UploadedFile from an untyped upload structure

        Args:
            structure: Mapping with 'name', 'tmp_name' and 'error' keys

        Returns:
            UploadedFile record

        Raises:
            InvalidUploadStructureError: If a required key is missing, if
                'name' or 'tmp_name' is None, or if 'error' is not an integer
        """
        for key in cls.REQUIRED_KEYS:
            if key not in structure:
                raise InvalidUploadStructureError(key)
        if structure["name"] is None:
            raise InvalidUploadStructureError("name")
        if structure["tmp_name"] is None:
            raise InvalidUploadStructureError("tmp_name")

        try:
            error_code = int(structure["error"] or 0)
        except (TypeError, ValueError):
            raise InvalidUploadStructureError("error")

        return cls(
            original_name=str(structure["name"]),
            transport_temp_path=Path(structure["tmp_name"]),
            transport_error_code=error_code,
        )


@dataclass(frozen=True)
class DataUri:
    """Decoded data URI payload.

    Attributes:
        media_type: Lowercased media type (e.g. 'image/png')
        data: Decoded bytes
        parameters: Media type parameters other than 'base64' (e.g. charset)
    """
    media_type: str
    data: bytes
    parameters: Dict[str, str] = field(default_factory=dict)
