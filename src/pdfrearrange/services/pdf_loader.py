"""
PdfRearrange - PDF Loader Service

Validates an input PDF with pikepdf and renders its pages to rasters.
No GTK dependencies - can be used from CLI, GUI, or scripts.
"""

import io
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

import pikepdf
from PIL import Image

from pdfrearrange.services.page_renderer import RasterRenderer
from pdfrearrange.utils.exceptions import LoadError
from pdfrearrange.utils.i18n import _
from pdfrearrange.utils.logger import logger


@dataclass
class LoadedDocument:
    """Result of a successful load.

    Attributes:
        source_name: File name (or label) the document was loaded from
        page_count: Number of pages in the document
        rasters: Rendered page images, index i holding page i
    """

    source_name: str
    page_count: int
    rasters: list[Image.Image] = field(default_factory=list)


def _friendly_reason(e: Exception) -> str:
    """Map pikepdf and I/O failures to user-facing reasons."""
    if isinstance(e, FileNotFoundError):
        return _("Could not find the file. Was it moved or deleted?")
    if isinstance(e, PermissionError):
        return _("Permission denied while reading the file.")
    if isinstance(e, pikepdf.PasswordError):
        return _("This PDF is password-protected. Remove the password first.")
    if isinstance(e, pikepdf.PdfError):
        return _("The PDF file appears to be damaged or invalid: {error}").format(error=e)
    return str(e)


def count_pages(data: bytes, source_name: str = "<memory>") -> int:
    """Parse PDF bytes and return the page count.

    Raises:
        LoadError: If the data is not a readable PDF with at least one page
    """
    try:
        with pikepdf.open(io.BytesIO(data)) as pdf:
            page_count = len(pdf.pages)
    except (pikepdf.PasswordError, pikepdf.PdfError, OSError, ValueError) as e:
        logger.error(f"Failed to parse {source_name}: {e}")
        raise LoadError(source_name, _friendly_reason(e)) from e

    if page_count == 0:
        raise LoadError(source_name, _("The document has no pages."))
    return page_count


def read_pdf_file(path: str | Path) -> bytes:
    """Read a PDF file from disk, translating I/O failures into LoadError."""
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        raise LoadError(path.name, _friendly_reason(e)) from e


def load_document(
    source: bytes | str | Path,
    renderer: RasterRenderer,
    source_name: str | None = None,
) -> LoadedDocument:
    """Load a PDF and render every page.

    Args:
        source: PDF bytes or a path to a PDF file
        renderer: Renderer used to rasterize the pages
        source_name: Optional label used in messages; derived from the path
            when not given

    Returns:
        LoadedDocument with one raster per page

    Raises:
        LoadError: If parsing or rendering fails
    """
    if isinstance(source, (str, Path)):
        source_name = source_name or os.path.basename(str(source))
        data = read_pdf_file(source)
    else:
        source_name = source_name or "<memory>"
        data = bytes(source)

    page_count = count_pages(data, source_name)

    # pdftoppm reads from a file, so stage the bytes on disk
    with tempfile.TemporaryDirectory(prefix="pdfrearrange_") as tmpdir:
        staged = os.path.join(tmpdir, "source.pdf")
        with open(staged, "wb") as f:
            f.write(data)
        try:
            rasters = renderer.render_pages(staged, page_count)
        except LoadError as e:
            raise LoadError(source_name, e.reason) from e

    if len(rasters) != page_count:
        raise LoadError(
            source_name,
            f"rendered {len(rasters)} of {page_count} pages",
        )

    logger.info(f"Loaded {source_name}: {page_count} page(s)")
    return LoadedDocument(source_name=source_name, page_count=page_count, rasters=rasters)
