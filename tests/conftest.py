"""Pytest configuration for pdfrearrange tests.

Provides fixture PDFs built with pikepdf and a fake renderer that stands
in for pdftoppm. The fake renders page i as a solid image of
(100 + 10*i) x (200 + 10*i) pixels so page identity can be read back
from an exported page's size.
"""

import io
import threading

import pikepdf
import pytest
from PIL import Image

from pdfrearrange.editor.session import EditorSession


def page_size(page_id: int) -> tuple[int, int]:
    return 100 + 10 * page_id, 200 + 10 * page_id


class FakeRenderer:
    """In-memory renderer with an optional gate to hold rendering."""

    def __init__(self, scale: float = 1.5) -> None:
        self.scale = scale
        self.calls: list[tuple[str, int]] = []
        self.gate: threading.Event | None = None
        self.started = threading.Event()

    def render_pages(self, pdf_path: str, page_count: int) -> list[Image.Image]:
        self.calls.append((pdf_path, page_count))
        self.started.set()
        if self.gate is not None:
            self.gate.wait(5)
        return [
            Image.new("RGB", page_size(i), color=(i * 40 % 256, 80, 160))
            for i in range(page_count)
        ]


def _create_pdf_bytes(num_pages: int = 3) -> bytes:
    """Create a minimal valid PDF with blank pages."""
    pdf = pikepdf.Pdf.new()
    for _ in range(num_pages):
        page = pikepdf.Page(
            pikepdf.Dictionary(
                Type=pikepdf.Name.Page,
                MediaBox=[0, 0, 612, 792],
            )
        )
        pdf.pages.append(page)
    output = io.BytesIO()
    pdf.save(output)
    return output.getvalue()


@pytest.fixture
def make_pdf():
    """Factory for PDF bytes with the given number of pages."""
    return _create_pdf_bytes


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def session(renderer):
    return EditorSession(renderer)


@pytest.fixture
def loaded_session(session, make_pdf):
    """Session with a 3-page document loaded."""
    session.load(make_pdf(3), source_name="three.pdf")
    return session


def read_pages(data: bytes) -> list[tuple[float, float, int]]:
    """(width, height, rotation) of every page in a serialized PDF."""
    with pikepdf.open(io.BytesIO(data)) as pdf:
        return [
            (
                float(page.mediabox[2]) - float(page.mediabox[0]),
                float(page.mediabox[3]) - float(page.mediabox[1]),
                int(page.obj.get("/Rotate", 0)),
            )
            for page in pdf.pages
        ]


@pytest.fixture
def pdf_pages():
    """Helper that reads back (width, height, rotation) per page."""
    return read_pages
