"""Mimetypes Resolver - MimeResolverPort backed by the mimetypes table.

Architecture: Hexagonal - Adapter implementation in infrastructure layer
"""

import mimetypes
from typing import Dict, Optional

from ...domain.uploads.ports import MimeResolverPort

# Preferred extensions where mimetypes.guess_extension() picks an unusual one
PREFERRED_EXTENSIONS: Dict[str, str] = {
    "image/jpeg": "jpg",
    "image/pjpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/svg+xml": "svg",
    "image/webp": "webp",
    "image/tiff": "tiff",
    "image/x-icon": "ico",
    "text/plain": "txt",
    "text/csv": "csv",
    "text/html": "html",
    "application/json": "json",
    "application/pdf": "pdf",
    "application/zip": "zip",
    "application/octet-stream": "bin",
    "audio/mpeg": "mp3",
    "video/mp4": "mp4",
}


class MimetypesResolver(MimeResolverPort):
    """Resolve extensions from a preferred map, then the mimetypes table.

    Example:
        >>> MimetypesResolver().extension_for_media_type('image/png')
        'png'
        >>> MimetypesResolver().extension_for_media_type('application/x-unknown') is None
        True
    """

    def __init__(self, overrides: Optional[Dict[str, str]] = None):
        self.extensions = dict(PREFERRED_EXTENSIONS)
        if overrides:
            self.extensions.update({k.lower(): v.lstrip(".") for k, v in overrides.items()})

    def extension_for_media_type(self, media_type: str) -> Optional[str]:
        if not media_type:
            return None

        media_type = media_type.split(";", 1)[0].strip().lower()

        extension = self.extensions.get(media_type)
        if extension:
            return extension

        guessed = mimetypes.guess_extension(media_type, strict=False)
        if guessed:
            return guessed.lstrip(".")

        return None
