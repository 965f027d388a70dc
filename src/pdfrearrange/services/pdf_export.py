"""
PdfRearrange - PDF Export Service

Assembles page rasters into a new PDF and writes it to disk.
Uses Pillow to embed each raster as a one-page PDF and pikepdf to
stitch the pages together and apply rotation.
"""

import io
import os
import shutil
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import pikepdf
from PIL import Image

from pdfrearrange.utils.exceptions import ExportError
from pdfrearrange.utils.logger import logger

# Embedding at 72 DPI makes one raster pixel one PDF point
EMBED_RESOLUTION = 72.0

_PDF_IMAGE_MODES = ("1", "L", "RGB", "CMYK")


@dataclass
class ExportPage:
    """One output page: the raster to draw and the rotation to apply.

    Attributes:
        page_id: Original page identifier, used in error reports
        raster: Image drawn at the page origin, or None if unavailable
        rotation: Clockwise rotation in degrees (multiple of 90)
    """

    page_id: int
    raster: Image.Image | None
    rotation: int = 0


def _raster_to_pdf(raster: Image.Image) -> pikepdf.Pdf:
    """Embed a raster as a single page sized to its pixel dimensions."""
    if raster.mode not in _PDF_IMAGE_MODES:
        raster = raster.convert("RGB")

    buffer = io.BytesIO()
    raster.save(buffer, format="PDF", resolution=EMBED_RESOLUTION)
    buffer.seek(0)
    return pikepdf.Pdf.open(buffer)


def build_pdf(pages: Sequence[ExportPage]) -> bytes:
    """Build a PDF with one page per entry, in the given order.

    Args:
        pages: Output pages in final order

    Returns:
        The serialized PDF

    Raises:
        ExportError: If there is nothing to export, a raster is missing,
            or embedding/serialization fails
    """
    if not pages:
        raise ExportError("there are no pages to export")

    # Source documents must stay open until the destination is saved
    opened: list[pikepdf.Pdf] = []
    new_pdf = pikepdf.Pdf.new()
    try:
        for page in pages:
            if page.raster is None:
                raise ExportError("page image is missing", page_id=page.page_id)

            try:
                single = _raster_to_pdf(page.raster)
            except (OSError, ValueError, pikepdf.PdfError) as e:
                raise ExportError(f"could not embed page image: {e}", page_id=page.page_id) from e
            opened.append(single)

            new_pdf.pages.append(single.pages[0])
            rotation = page.rotation % 360
            if rotation:
                new_pdf.pages[-1].rotate(rotation, relative=False)

        output = io.BytesIO()
        new_pdf.save(output)
        logger.info(f"Assembled PDF with {len(pages)} page(s)")
        return output.getvalue()

    except (OSError, pikepdf.PdfError) as e:
        logger.error(f"Failed to assemble PDF: {e}")
        raise ExportError(str(e)) from e
    finally:
        new_pdf.close()
        for handle in opened:
            handle.close()


def save_pdf_bytes(data: bytes, output_path: str | Path) -> Path:
    """Write PDF bytes to output_path atomically.

    The bytes go to a temporary file next to the destination which is
    then moved into place, so a failed write never leaves a partial file.

    Raises:
        ExportError: If the destination cannot be written
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(
            suffix=".pdf", prefix=".pdfrearrange_", dir=str(output_path.parent)
        )
    except OSError as e:
        logger.error(f"Cannot write to {output_path.parent}: {e}")
        raise ExportError(f"cannot write to {output_path.parent}: {e}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        shutil.move(tmp, output_path)
    except OSError as e:
        logger.error(f"Failed to save {output_path}: {e}")
        raise ExportError(f"could not save {output_path.name}: {e}") from e
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)

    logger.info(f"Saved PDF to {output_path}")
    return output_path
