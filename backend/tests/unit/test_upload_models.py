"""Unit tests for upload value objects"""

from pathlib import Path

import pytest

from filedrop.domain.uploads import InvalidUploadStructureError, UploadedFile


class TestUploadedFileFromMapping:
    """Test validation of untyped upload structures"""

    def test_valid_structure(self):
        upload = UploadedFile.from_mapping({
            "name": "order.pdf",
            "tmp_name": "/tmp/upload-123",
            "error": 0,
            "type": "application/pdf",
        })

        assert upload.original_name == "order.pdf"
        assert upload.transport_temp_path == Path("/tmp/upload-123")
        assert upload.transport_error_code == 0

    @pytest.mark.parametrize("missing", ["name", "tmp_name", "error"])
    def test_missing_key(self, missing):
        structure = {"name": "order.pdf", "tmp_name": "/tmp/upload-123", "error": 0}
        del structure[missing]

        with pytest.raises(InvalidUploadStructureError) as exc_info:
            UploadedFile.from_mapping(structure)

        assert exc_info.value.missing == missing
        assert "Invalid file structure" in str(exc_info.value)

    @pytest.mark.parametrize("key", ["name", "tmp_name"])
    def test_none_value(self, key):
        structure = {"name": "order.pdf", "tmp_name": "/tmp/upload-123", "error": 0}
        structure[key] = None

        with pytest.raises(InvalidUploadStructureError):
            UploadedFile.from_mapping(structure)

    def test_none_error_means_success(self):
        upload = UploadedFile.from_mapping({"name": "a", "tmp_name": "/tmp/a", "error": None})
        assert upload.transport_error_code == 0

    def test_non_integer_error(self):
        with pytest.raises(InvalidUploadStructureError) as exc_info:
            UploadedFile.from_mapping({"name": "a", "tmp_name": "/tmp/a", "error": "broken"})

        assert exc_info.value.missing == "error"

    def test_string_error_code(self):
        upload = UploadedFile.from_mapping({"name": "a", "tmp_name": "/tmp/a", "error": "4"})
        assert upload.transport_error_code == 4
