"""Pytest fixtures for upload testing.

Provides reusable test fixtures for:
- Upload roots under pytest's tmp_path
- UploadManager wired to the local disk
- A FastAPI TestClient with the storage dependencies overridden

Usage:
    def test_upload(client, storage_config):
        response = client.post("/api/v1/uploads", files={"file": ("a.txt", b"x")})
        assert response.status_code == 201
"""

import os
from pathlib import Path
from typing import Dict, Generator, Optional

# Keep settings deterministic regardless of the developer's environment
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from filedrop.dependencies import build_upload_manager, get_storage_config, get_upload_manager
from filedrop.domain.uploads import UploadManager
from filedrop.domain.uploads.ports import MimeResolverPort
from filedrop.infrastructure.mime import MimetypesResolver
from filedrop.infrastructure.storage import LocalFileStore, StorageConfig


class StaticMimeResolver(MimeResolverPort):
    """Mime resolver with a fixed table."""

    def __init__(self, extensions: Dict[str, str]):
        self.extensions = extensions

    def extension_for_media_type(self, media_type: str) -> Optional[str]:
        return self.extensions.get(media_type)


@pytest.fixture
def upload_base(tmp_path: Path) -> Path:
    """Mount root holding both upload roots"""
    return tmp_path / "uploads"


@pytest.fixture
def temporary_root(upload_base: Path) -> Path:
    return upload_base / "tmp"


@pytest.fixture
def permanent_root(upload_base: Path) -> Path:
    return upload_base / "files"


@pytest.fixture
def transport_dir(tmp_path: Path) -> Path:
    """Directory standing in for the transport's temporary files"""
    directory = tmp_path / "transport"
    directory.mkdir()
    return directory


@pytest.fixture
def make_transport_file(transport_dir: Path):
    """Factory writing a transport temporary file"""
    counter = {"n": 0}

    def _make(content: bytes = b"uploaded content") -> Path:
        counter["n"] += 1
        path = transport_dir / f"upload-{counter['n']}"
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def manager(upload_base: Path, temporary_root: Path, permanent_root: Path) -> UploadManager:
    """UploadManager on the local disk with png/jpg/txt known"""
    return UploadManager(
        file_store=LocalFileStore(),
        mime_resolver=StaticMimeResolver({
            "image/png": "png",
            "image/jpeg": "jpg",
            "text/plain": "txt",
        }),
        temporary_root=temporary_root,
        permanent_root=permanent_root,
        path_prefixes=[upload_base],
    )


@pytest.fixture
def storage_config(upload_base: Path, temporary_root: Path, permanent_root: Path, transport_dir: Path) -> StorageConfig:
    return StorageConfig(
        temporary_dir=temporary_root,
        permanent_dir=permanent_root,
        path_prefixes=[str(upload_base)],
        file_mode=0o644,
        transport_dir=transport_dir,
        max_upload_size=1024,
    )


@pytest.fixture
def api_manager(storage_config: StorageConfig) -> UploadManager:
    """UploadManager as built by the application"""
    return build_upload_manager(storage_config)


@pytest.fixture
def client(storage_config: StorageConfig, api_manager: UploadManager) -> Generator[TestClient, None, None]:
    """TestClient with storage dependencies pointing at tmp_path"""
    from filedrop.main import app

    app.dependency_overrides[get_storage_config] = lambda: storage_config
    app.dependency_overrides[get_upload_manager] = lambda: api_manager

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def mimetypes_resolver() -> MimetypesResolver:
    return MimetypesResolver()
