"""Multipart transport: spools an incoming UploadFile to the transport
directory and reports the outcome as an UploadErrorCode.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from ..domain.uploads import UploadedFile, UploadErrorCode, validate_file_size

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024  # 64KB chunks


def spool_upload(upload: Optional[UploadFile], transport_dir: Path, max_size: int) -> UploadedFile:
    """Copy an incoming upload into a transport-local temporary file.

    Failures are not raised; they are reported through the error code of the
    returned record so the upload manager can classify them.

    Args:
        upload: Uploaded multipart field (None when the field is absent)
        transport_dir: Directory for transport temporary files
        max_size: Maximum accepted size in bytes

    Returns:
        UploadedFile: Original name, spool path and transport error code
    """
    if upload is None or not upload.filename:
        return UploadedFile("", Path(), UploadErrorCode.NO_FILE)

    name = upload.filename
    if not transport_dir.is_dir():
        logger.error(f"Transport directory missing: {transport_dir}")
        return UploadedFile(name, Path(), UploadErrorCode.NO_TMP_DIR)

    try:
        fd, spool_name = tempfile.mkstemp(prefix="upload-", dir=transport_dir)
    except OSError as e:
        logger.error(f"Could not create transport file in {transport_dir}: {e}")
        return UploadedFile(name, Path(), UploadErrorCode.CANT_WRITE)

    spool_path = Path(spool_name)
    size_bytes = 0
    try:
        with os.fdopen(fd, "wb") as spool:
            while True:
                chunk = upload.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size_bytes += len(chunk)
                is_valid, error = validate_file_size(size_bytes, max_size)
                if not is_valid:
                    logger.warning(f"Upload rejected: {name}: {error}")
                    discard(spool_path)
                    return UploadedFile(name, spool_path, UploadErrorCode.FORM_SIZE)
                spool.write(chunk)
    except OSError as e:
        logger.error(f"Could not spool upload {name}: {e}")
        discard(spool_path)
        return UploadedFile(name, spool_path, UploadErrorCode.CANT_WRITE)

    return UploadedFile(name, spool_path, UploadErrorCode.OK)


def discard(path: Path) -> None:
    """Remove a leftover transport file."""
    if path == Path():
        return
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove transport file {path}: {e}")
