"""Integration tests for the upload API

Tests the complete upload workflow over HTTP:
- Multipart upload with sanitization and collision avoidance
- Size limit enforcement by the transport layer
- Data URI uploads
- Lookup and promotion
- JSON:API error documents
"""

import base64

import pytest

from filedrop.uploads.router import resolve_permanent_subdirectory
from filedrop.uploads.schemas import JSONAPI_CONTENT_TYPE

UPLOADS_URL = "/api/v1/uploads"

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01"


def upload(client, name="order.pdf", content=b"%PDF-1.4\ntest content\n", mime="application/pdf"):
    return client.post(UPLOADS_URL, files={"file": (name, content, mime)})


class TestMultipartUpload:
    """Integration tests for POST /api/v1/uploads"""

    def test_upload_single_file(self, client, temporary_root, transport_dir):
        content = b"%PDF-1.4\ntest content\n"

        response = upload(client, content=content)

        assert response.status_code == 201
        assert response.headers["content-type"].startswith(JSONAPI_CONTENT_TYPE)

        data = response.json()["data"]
        assert data["type"] == "uploads"
        assert data["id"] == "order.pdf"
        assert data["attributes"] == {
            "name": "order.pdf",
            "path": "tmp/order.pdf",
            "mime": "application/pdf",
            "size": len(content),
        }

        assert (temporary_root / "order.pdf").read_bytes() == content
        # Transport spool cleaned up
        assert list(transport_dir.iterdir()) == []

    def test_filename_sanitized(self, client, temporary_root):
        response = upload(client, name="my order (1).pdf")

        assert response.status_code == 201
        assert response.json()["data"]["id"] == "my_order__1_.pdf"
        assert (temporary_root / "my_order__1_.pdf").exists()

    def test_duplicate_name_gets_suffix(self, client, temporary_root):
        first = upload(client, content=b"first")
        second = upload(client, content=b"second")

        assert first.json()["data"]["id"] == "order.pdf"
        assert second.json()["data"]["id"] == "order-1.pdf"
        assert (temporary_root / "order.pdf").read_bytes() == b"first"
        assert (temporary_root / "order-1.pdf").read_bytes() == b"second"

    def test_no_file(self, client, temporary_root):
        response = client.post(UPLOADS_URL, data={"other": "value"})

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["status"] == "400"
        assert error["code"] == "file.upload.none"
        assert error["title"] == "No file uploaded"
        assert list(temporary_root.iterdir()) == []

    def test_file_too_large(self, client, temporary_root, transport_dir, storage_config):
        response = upload(client, content=b"x" * (storage_config.max_upload_size + 1))

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["code"] == "file.upload.error"
        assert error["detail"] == "The uploaded file exceeds the maximum upload size"
        assert list(temporary_root.iterdir()) == []
        assert list(transport_dir.iterdir()) == []

    def test_file_at_size_limit(self, client, storage_config):
        response = upload(client, content=b"x" * storage_config.max_upload_size)

        assert response.status_code == 201
        assert response.json()["data"]["attributes"]["size"] == storage_config.max_upload_size

    def test_missing_transport_directory(self, client, transport_dir, temporary_root):
        transport_dir.rmdir()

        response = upload(client)

        assert response.status_code == 400
        assert response.json()["errors"][0]["detail"] == "No temporary directory to upload the file to"
        assert list(temporary_root.iterdir()) == []

    def test_request_id_header(self, client):
        response = client.post(
            UPLOADS_URL,
            files={"file": ("a.txt", b"x", "text/plain")},
            headers={"X-Request-ID": "test-request-id"},
        )

        assert response.headers["X-Request-ID"] == "test-request-id"


class TestDataUriUpload:
    """Integration tests for POST /api/v1/uploads/data-uri"""

    def test_png_data_uri(self, client, temporary_root):
        data = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()

        response = client.post(f"{UPLOADS_URL}/data-uri", json={"name": "photo", "data": data})

        assert response.status_code == 201
        attributes = response.json()["data"]["attributes"]
        assert attributes["name"] == "photo.png"
        assert attributes["mime"] == "image/png"
        assert attributes["size"] == len(PNG_BYTES)
        assert (temporary_root / "photo.png").read_bytes() == PNG_BYTES

    def test_invalid_data_uri(self, client, temporary_root):
        response = client.post(f"{UPLOADS_URL}/data-uri", json={"name": "photo", "data": "garbage"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "file.upload.none"
        assert list(temporary_root.iterdir()) == []

    def test_oversized_data_uri(self, client, storage_config, temporary_root):
        payload = base64.b64encode(b"x" * (storage_config.max_upload_size * 2)).decode()

        response = client.post(
            f"{UPLOADS_URL}/data-uri",
            json={"name": "big", "data": f"data:text/plain;base64,{payload}"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "file.upload.error"
        assert list(temporary_root.iterdir()) == []

    def test_missing_name(self, client):
        response = client.post(f"{UPLOADS_URL}/data-uri", json={"data": "data:,hi"})

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"


class TestLookupAndPromotion:
    """Integration tests for GET /uploads/{name} and POST /uploads/{name}/promote"""

    def test_get_upload(self, client):
        upload(client, name="a.txt", content=b"abc", mime="text/plain")

        response = client.get(f"{UPLOADS_URL}/a.txt")

        assert response.status_code == 200
        assert response.json()["data"]["attributes"]["size"] == 3

    def test_get_unknown_upload(self, client):
        response = client.get(f"{UPLOADS_URL}/missing.txt")

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "file.upload.unknown"

    def test_promote_to_permanent_root(self, client, temporary_root, permanent_root):
        upload(client)

        response = client.post(f"{UPLOADS_URL}/order.pdf/promote")

        assert response.status_code == 200
        assert response.json()["data"]["attributes"]["path"] == "files/order.pdf"
        assert (permanent_root / "order.pdf").exists()
        assert not (temporary_root / "order.pdf").exists()

    def test_promote_to_subdirectory(self, client, permanent_root):
        upload(client)

        response = client.post(f"{UPLOADS_URL}/order.pdf/promote", json={"directory": "orders/2024"})

        assert response.status_code == 200
        assert response.json()["data"]["attributes"]["path"] == "files/orders/2024/order.pdf"
        assert (permanent_root / "orders" / "2024" / "order.pdf").exists()

    @pytest.mark.parametrize("directory", ["../escape", "/etc", "a/../../b"])
    def test_promote_outside_permanent_root(self, client, temporary_root, directory):
        upload(client)

        response = client.post(f"{UPLOADS_URL}/order.pdf/promote", json={"directory": directory})

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "file.promote.invalid"
        assert (temporary_root / "order.pdf").exists()

    def test_promote_unknown_upload(self, client):
        response = client.post(f"{UPLOADS_URL}/missing.pdf/promote")

        assert response.status_code == 404


class TestObservability:
    """Integration tests for health and metrics endpoints"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert set(body["components"]) == {"temporary_root", "permanent_root"}

    def test_health_unhealthy_when_root_removed(self, client, permanent_root):
        permanent_root.rmdir()

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["components"]["permanent_root"]["status"] == "unhealthy"

    def test_metrics(self, client):
        upload(client)

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "filedrop_uploads_total" in response.text


class TestResolvePermanentSubdirectory:
    """Unit tests for the promotion target guard"""

    def test_nested(self, tmp_path):
        assert resolve_permanent_subdirectory(tmp_path, "a/b") == tmp_path / "a" / "b"

    def test_dot_is_root(self, tmp_path):
        assert resolve_permanent_subdirectory(tmp_path, ".") == tmp_path

    @pytest.mark.parametrize("directory", ["..", "../x", "/abs", "a\\b"])
    def test_rejected(self, tmp_path, directory):
        assert resolve_permanent_subdirectory(tmp_path, directory) is None
