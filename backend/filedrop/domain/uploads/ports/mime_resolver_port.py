"""Mime Resolver Port - maps media types to file extensions.

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from typing import Optional


class MimeResolverPort(ABC):
    """Port interface for media type to file extension lookups."""

    @abstractmethod
    def extension_for_media_type(self, media_type: str) -> Optional[str]:
        """Resolve the preferred file extension for a media type.

        Args:
            media_type: Media type such as 'image/png' (parameters allowed)

        Returns:
            Extension without the leading dot (e.g. 'png'), or None when
            the media type is unknown
        """
        pass
