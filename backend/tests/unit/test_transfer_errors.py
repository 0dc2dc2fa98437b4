"""Unit tests for transport error classification"""

import pytest

from filedrop.domain.uploads import (
    TransferError,
    TransferErrorKind,
    UploadErrorCode,
    classify_transfer_error,
)


class TestSuccessfulTransfer:
    """Test that success codes never raise"""

    def test_ok_enum_member(self):
        """Test UploadErrorCode.OK is accepted"""
        assert classify_transfer_error(UploadErrorCode.OK) is None

    def test_ok_plain_integer(self):
        """Test the raw integer 0 is accepted"""
        assert classify_transfer_error(0) is None


class TestFailedTransfer:
    """Test the fixed code -> kind/message table"""

    @pytest.mark.parametrize("code,kind,message", [
        (UploadErrorCode.NO_FILE, TransferErrorKind.NO_FILE, "No file uploaded"),
        (UploadErrorCode.INI_SIZE, TransferErrorKind.SIZE_EXCEEDED,
         "The uploaded file exceeds the maximum upload size"),
        (UploadErrorCode.FORM_SIZE, TransferErrorKind.SIZE_EXCEEDED,
         "The uploaded file exceeds the maximum upload size"),
        (UploadErrorCode.PARTIAL, TransferErrorKind.PARTIAL_UPLOAD,
         "The uploaded file was only partially uploaded"),
        (UploadErrorCode.NO_TMP_DIR, TransferErrorKind.NO_TEMP_DIR,
         "No temporary directory to upload the file to"),
        (UploadErrorCode.CANT_WRITE, TransferErrorKind.WRITE_FAILED,
         "Failed to write file to disk"),
        (UploadErrorCode.EXTENSION, TransferErrorKind.EXTENSION_STOPPED,
         "The upload was stopped by an unknown error"),
    ])
    def test_known_codes(self, code, kind, message):
        """Test each known code raises its kind and message"""
        with pytest.raises(TransferError) as exc_info:
            classify_transfer_error(code)

        assert exc_info.value.kind == kind
        assert exc_info.value.message == message
        assert str(exc_info.value) == message

    def test_partial_upload_is_reachable_with_raw_code(self):
        """Test partially uploaded files have their own kind (code 3)"""
        with pytest.raises(TransferError) as exc_info:
            classify_transfer_error(3)
        assert exc_info.value.kind == TransferErrorKind.PARTIAL_UPLOAD

    @pytest.mark.parametrize("code", [5, 9, 42, -1])
    def test_unknown_codes(self, code):
        """Test codes outside the table are classified as UNKNOWN"""
        with pytest.raises(TransferError) as exc_info:
            classify_transfer_error(code)

        assert exc_info.value.kind == TransferErrorKind.UNKNOWN
        assert exc_info.value.message == "The upload was stopped by an unknown error"
