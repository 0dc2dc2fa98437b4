from .file_store_port import FileStorePort
from .mime_resolver_port import MimeResolverPort

__all__ = [
    "FileStorePort",
    "MimeResolverPort",
]
