"""Tests for pdf_loader module."""

import io

import pikepdf
import pytest

from pdfrearrange.services.pdf_loader import count_pages, load_document
from pdfrearrange.utils.exceptions import LoadError


class TestCountPages:
    def test_counts_pages(self, make_pdf):
        assert count_pages(make_pdf(4)) == 4

    def test_garbage_raises(self):
        with pytest.raises(LoadError) as exc_info:
            count_pages(b"%PDF-broken", source_name="broken.pdf")
        assert exc_info.value.source == "broken.pdf"

    def test_empty_document_raises(self):
        pdf = pikepdf.Pdf.new()
        out = io.BytesIO()
        pdf.save(out)
        with pytest.raises(LoadError, match="no pages"):
            count_pages(out.getvalue())

    def test_password_protected_raises(self, make_pdf):
        with pikepdf.open(io.BytesIO(make_pdf(1))) as pdf:
            out = io.BytesIO()
            pdf.save(out, encryption=pikepdf.Encryption(owner="owner", user="secret"))
        with pytest.raises(LoadError, match="password"):
            count_pages(out.getvalue())


class TestLoadDocument:
    def test_load_from_bytes(self, make_pdf, renderer):
        loaded = load_document(make_pdf(3), renderer)
        assert loaded.page_count == 3
        assert len(loaded.rasters) == 3
        assert loaded.source_name == "<memory>"

    def test_load_from_path(self, make_pdf, renderer, tmp_path):
        path = tmp_path / "input.pdf"
        path.write_bytes(make_pdf(2))
        loaded = load_document(path, renderer)
        assert loaded.source_name == "input.pdf"
        assert [r.size for r in loaded.rasters] == [(100, 200), (110, 210)]

    def test_renderer_receives_staged_file(self, make_pdf, renderer):
        load_document(make_pdf(2), renderer)
        staged_path, count = renderer.calls[0]
        assert staged_path.endswith(".pdf")
        assert count == 2

    def test_missing_file_raises(self, renderer, tmp_path):
        with pytest.raises(LoadError):
            load_document(tmp_path / "missing.pdf", renderer)
        assert renderer.calls == []

    def test_short_render_raises(self, make_pdf):
        class ShortRenderer:
            scale = 1.0

            def render_pages(self, pdf_path, page_count):
                return []

        with pytest.raises(LoadError, match="rendered 0 of 2"):
            load_document(make_pdf(2), ShortRenderer())

    def test_render_error_names_source(self, make_pdf):
        class FailingRenderer:
            scale = 1.0

            def render_pages(self, pdf_path, page_count):
                raise LoadError(pdf_path, "pdftoppm is not installed")

        with pytest.raises(LoadError) as exc_info:
            load_document(make_pdf(1), FailingRenderer(), source_name="scan.pdf")
        assert exc_info.value.source == "scan.pdf"
        assert exc_info.value.reason == "pdftoppm is not installed"
