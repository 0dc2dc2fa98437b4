"""Upload API endpoints for FileDrop

Provides:
- POST /uploads            multipart upload (field 'file')
- POST /uploads/data-uri   inline data URI upload
- GET  /uploads/{name}     metadata of a file in the temporary root
- POST /uploads/{name}/promote  move a file into the permanent root

Successful responses and errors are JSON:API documents.
"""

import logging
import mimetypes
import os
from pathlib import Path
from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse

from ..dependencies import get_storage_config, get_upload_manager
from ..domain.uploads import (
    FileSystemError,
    StoredFile,
    TransferError,
    UploadManager,
)
from ..infrastructure.storage import StorageConfig
from ..observability.metrics import (
    promotions_total,
    transfer_errors_total,
    upload_size_bytes,
    uploads_total,
)
from .schemas import (
    JSONAPI_CONTENT_TYPE,
    DataUriUploadRequest,
    ErrorDocument,
    ErrorObject,
    PromoteRequest,
    UploadAttributes,
    UploadDocument,
    UploadResource,
)
from .transport import discard, spool_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads", tags=["Uploads"])

UPLOAD_ERROR_TITLE = "Error occurred while processing the file upload"


def _document_response(document, status_code: int) -> JSONResponse:
    return JSONResponse(
        content=document.model_dump(exclude_none=True),
        status_code=status_code,
        media_type=JSONAPI_CONTENT_TYPE,
    )


def _error_response(status_code: int, code: str, title: str, detail: Optional[str] = None) -> JSONResponse:
    document = ErrorDocument(errors=[
        ErrorObject(status=str(status_code), code=code, title=title, detail=detail)
    ])
    return _document_response(document, status_code)


def _upload_resource(manager: UploadManager, stored: StoredFile, mime: Optional[str]) -> UploadDocument:
    if not mime:
        mime = mimetypes.guess_type(stored.name)[0]

    return UploadDocument(data=UploadResource(
        id=stored.name,
        attributes=UploadAttributes(
            name=stored.name,
            path=manager.to_display_path(stored),
            mime=mime,
            size=stored.size_bytes,
        ),
    ))


@router.post(
    "",
    response_model=UploadDocument,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorDocument}},
)
def upload_file(
    manager: Annotated[UploadManager, Depends(get_upload_manager)],
    config: Annotated[StorageConfig, Depends(get_storage_config)],
    file: Annotated[Optional[UploadFile], File()] = None,
):
    """Upload a single file into the temporary upload directory

    The file is spooled to the transport directory, checked against the
    size limit and moved into the temporary root under a sanitized,
    collision free name.

    Returns:
        201 with the stored upload resource, 400 with a JSON:API error

    Example:
        curl -X POST https://files.example.com/api/v1/uploads \\
             -F "file=@photo.png"
    """
    if file is None or not file.filename:
        uploads_total.labels(source="multipart", status="rejected").inc()
        return _error_response(
            status.HTTP_400_BAD_REQUEST, "file.upload.none", "No file uploaded"
        )

    uploaded = spool_upload(file, config.transport_dir, config.max_upload_size)
    try:
        stored = manager.accept_upload(
            uploaded.original_name,
            uploaded.transport_temp_path,
            uploaded.transport_error_code,
        )
    except TransferError as e:
        transfer_errors_total.labels(kind=e.kind.value).inc()
        uploads_total.labels(source="multipart", status="rejected").inc()
        logger.info(
            f"Upload rejected: {e.message}",
            extra={"upload_name": uploaded.original_name, "error_kind": e.kind.value},
        )
        return _error_response(
            status.HTTP_400_BAD_REQUEST, "file.upload.error", UPLOAD_ERROR_TITLE, e.message
        )
    except FileSystemError as e:
        uploads_total.labels(source="multipart", status="error").inc()
        logger.error(
            f"Upload failed: {e}",
            extra={"upload_name": uploaded.original_name, "error_type": type(e).__name__},
        )
        return _error_response(
            status.HTTP_400_BAD_REQUEST, "file.upload.error", UPLOAD_ERROR_TITLE, str(e)
        )
    finally:
        discard(uploaded.transport_temp_path)

    uploads_total.labels(source="multipart", status="stored").inc()
    upload_size_bytes.labels(source="multipart").observe(stored.size_bytes)

    document = _upload_resource(manager, stored, file.content_type)
    return _document_response(document, status.HTTP_201_CREATED)


@router.post(
    "/data-uri",
    response_model=UploadDocument,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorDocument}},
)
def upload_data_uri(
    request: DataUriUploadRequest,
    manager: Annotated[UploadManager, Depends(get_upload_manager)],
    config: Annotated[StorageConfig, Depends(get_storage_config)],
):
    """Store the payload of a data URI in the temporary upload directory

    The extension is derived from the media type of the data URI.

    Returns:
        201 with the stored upload resource, 400 when the payload is not a
        valid data URI or is too large

    Example:
        curl -X POST https://files.example.com/api/v1/uploads/data-uri \\
             -H "Content-Type: application/json" \\
             -d '{"name": "avatar", "data": "data:image/png;base64,iVBORw0..."}'
    """
    # Base64 inflates by 4/3, anything longer can't decode under the limit
    if len(request.data) > config.max_upload_size * 4 // 3 + 1024:
        uploads_total.labels(source="data_uri", status="rejected").inc()
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "file.upload.error",
            UPLOAD_ERROR_TITLE,
            "The uploaded file exceeds the maximum upload size",
        )

    try:
        stored = manager.accept_data_uri(request.name, request.data)
    except FileSystemError as e:
        uploads_total.labels(source="data_uri", status="error").inc()
        logger.error(
            f"Data URI upload failed: {e}",
            extra={"upload_name": request.name, "error_type": type(e).__name__},
        )
        return _error_response(
            status.HTTP_400_BAD_REQUEST, "file.upload.error", UPLOAD_ERROR_TITLE, str(e)
        )

    if stored is None:
        uploads_total.labels(source="data_uri", status="rejected").inc()
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "file.upload.none",
            "No file uploaded",
            "The provided data is not a valid data URI",
        )

    uploads_total.labels(source="data_uri", status="stored").inc()
    upload_size_bytes.labels(source="data_uri").observe(stored.size_bytes)

    document = _upload_resource(manager, stored, None)
    return _document_response(document, status.HTTP_201_CREATED)


@router.get(
    "/{name}",
    response_model=UploadDocument,
    responses={404: {"model": ErrorDocument}},
)
def get_upload(
    name: str,
    manager: Annotated[UploadManager, Depends(get_upload_manager)],
):
    """Get metadata of a file waiting in the temporary upload directory"""
    stored = manager.get_file(name)
    if stored is None:
        return _error_response(
            status.HTTP_404_NOT_FOUND, "file.upload.unknown", "Upload not found", name
        )

    return _document_response(_upload_resource(manager, stored, None), status.HTTP_200_OK)


@router.post(
    "/{name}/promote",
    response_model=UploadDocument,
    responses={400: {"model": ErrorDocument}, 404: {"model": ErrorDocument}},
)
def promote_upload(
    name: str,
    manager: Annotated[UploadManager, Depends(get_upload_manager)],
    request: Annotated[Optional[PromoteRequest], Body()] = None,
):
    """Move a file from the temporary upload directory into the permanent one

    An optional 'directory' selects a subdirectory of the permanent root;
    it is created when missing.
    """
    stored = manager.get_file(name)
    if stored is None:
        return _error_response(
            status.HTTP_404_NOT_FOUND, "file.upload.unknown", "Upload not found", name
        )

    directory = None
    if request is not None and request.directory:
        directory = resolve_permanent_subdirectory(manager.permanent_root, request.directory)
        if directory is None:
            return _error_response(
                status.HTTP_400_BAD_REQUEST,
                "file.promote.invalid",
                "Invalid target directory",
                request.directory,
            )

    try:
        promoted = manager.promote(stored, directory)
    except FileSystemError as e:
        promotions_total.labels(status="error").inc()
        logger.error(f"Promotion failed: {e}", extra={"upload_name": name})
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "file.promote.error",
            "Error occurred while promoting the file",
            str(e),
        )

    promotions_total.labels(status="success").inc()
    return _document_response(_upload_resource(manager, promoted, None), status.HTTP_200_OK)


def resolve_permanent_subdirectory(root: Path, directory: str) -> Optional[Path]:
    """Resolve a client supplied subdirectory inside the permanent root

    Args:
        root: Permanent root (absolute)
        directory: Relative subdirectory, e.g. 'avatars/2024'

    Returns:
        Absolute directory, or None if it is absolute or escapes the root

    Example:
        >>> resolve_permanent_subdirectory(Path('/srv/files'), 'avatars')
        PosixPath('/srv/files/avatars')
        >>> resolve_permanent_subdirectory(Path('/srv/files'), '../etc') is None
        True
    """
    if os.path.isabs(directory) or "\\" in directory:
        return None

    target = Path(os.path.normpath(root / directory))
    if target != root and root not in target.parents:
        return None

    return target
