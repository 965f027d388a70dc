"""Tests for the exception hierarchy."""

from pdfrearrange.services.cropper import CropRegion
from pdfrearrange.utils.exceptions import (
    CropError,
    ExportError,
    LoadError,
    PdfRearrangeError,
    ValidationError,
)


class TestExceptions:
    def test_hierarchy(self):
        for exc in (
            LoadError("a.pdf"),
            ExportError("boom"),
            CropError(CropRegion(0, 0, 1, 1), (10, 10)),
            ValidationError("order"),
        ):
            assert isinstance(exc, PdfRearrangeError)

    def test_load_error_message(self):
        exc = LoadError("a.pdf", "damaged")
        assert exc.message == "Could not load PDF: a.pdf - damaged"
        assert str(exc) == "Could not load PDF: a.pdf - damaged (source=a.pdf)"

    def test_export_error_page_id(self):
        exc = ExportError("missing", page_id=3)
        assert exc.page_id == 3
        assert "page_id=3" in str(exc)

    def test_export_error_without_page(self):
        assert str(ExportError("disk full")) == "Export failed: disk full"

    def test_validation_error_message(self):
        exc = ValidationError("order", "1,1", "duplicate page")
        assert exc.message == "Validation error for 'order': duplicate page"
