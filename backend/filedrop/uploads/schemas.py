"""Upload API request/response schemas

Responses follow the JSON:API document layout: a 'data' resource on
success, an 'errors' list otherwise.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

JSONAPI_CONTENT_TYPE = "application/vnd.api+json"


class UploadAttributes(BaseModel):
    """Attributes of a stored upload"""
    name: str = Field(..., description="Stored (sanitized) filename")
    path: str = Field(..., description="Path relative to the upload mount root")
    mime: Optional[str] = Field(None, description="Media type reported or inferred for the file")
    size: int = Field(..., description="File size in bytes")


class UploadResource(BaseModel):
    """JSON:API resource for a stored upload"""
    type: str = Field("uploads", description="Resource type")
    id: str = Field(..., description="Resource id (the stored filename)")
    attributes: UploadAttributes

    class Config:
        from_attributes = True


class UploadDocument(BaseModel):
    """Successful response document"""
    data: UploadResource


class ErrorObject(BaseModel):
    """JSON:API error object"""
    status: str = Field(..., description="HTTP status code as a string")
    code: str = Field(..., description="Error code (e.g. file.upload.none, file.upload.error)")
    title: str = Field(..., description="Short human-readable summary")
    detail: Optional[str] = Field(None, description="Human-readable explanation of this occurrence")


class ErrorDocument(BaseModel):
    """Error response document"""
    errors: List[ErrorObject]


class DataUriUploadRequest(BaseModel):
    """Request body for data URI uploads"""
    name: str = Field(..., min_length=1, description="Filename without extension")
    data: str = Field(..., description="Data URI, e.g. data:image/png;base64,...")


class PromoteRequest(BaseModel):
    """Request body for promoting an upload"""
    directory: Optional[str] = Field(
        None,
        description="Subdirectory of the permanent root (default: the permanent root itself)",
    )
