from .mimetypes_resolver import MimetypesResolver, PREFERRED_EXTENSIONS

__all__ = [
    "MimetypesResolver",
    "PREFERRED_EXTENSIONS",
]
