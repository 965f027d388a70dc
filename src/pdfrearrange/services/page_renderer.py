"""
PdfRearrange - Page Renderer

Renders PDF pages to Pillow images using pdftoppm (poppler-utils).
Pages are rendered by a bounded thread pool; results always come back
in page order.
"""

import io
import subprocess
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from PIL import Image, UnidentifiedImageError

from pdfrearrange.config import (
    DEFAULT_RENDER_SCALE,
    DEFAULT_RENDER_WORKERS,
    RENDER_TIMEOUT_SECONDS,
)
from pdfrearrange.utils.exceptions import LoadError
from pdfrearrange.utils.logger import logger

# pdftoppm resolution for scale 1.0
BASE_DPI = 72


class RasterRenderer(Protocol):
    """Anything that can turn the pages of a PDF file into images."""

    scale: float

    def render_pages(self, pdf_path: str, page_count: int) -> list[Image.Image]: ...


class PdftoppmRenderer:
    """Renders pages by invoking pdftoppm once per page.

    Attributes:
        scale: Multiple of 72 DPI used for rendering
        workers: Maximum number of concurrent pdftoppm processes
    """

    def __init__(
        self,
        scale: float = DEFAULT_RENDER_SCALE,
        workers: int = DEFAULT_RENDER_WORKERS,
        executable: str = "pdftoppm",
    ) -> None:
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.scale = scale
        self.workers = max(1, workers)
        self.executable = executable

    @property
    def dpi(self) -> int:
        return max(1, round(BASE_DPI * self.scale))

    def render_page(self, pdf_path: str, page_index: int) -> Image.Image:
        """Render a single page (0-indexed) to an RGB image.

        Raises:
            LoadError: If pdftoppm fails or produces no decodable image
        """
        page_1based = page_index + 1
        cmd = [
            self.executable,
            "-png",
            "-r",
            str(self.dpi),
            "-f",
            str(page_1based),
            "-l",
            str(page_1based),
            "-singlefile",
            pdf_path,
        ]
        try:
            result = subprocess.run(cmd, capture_output=True, timeout=RENDER_TIMEOUT_SECONDS)
        except FileNotFoundError:
            raise LoadError(pdf_path, f"{self.executable} is not installed") from None
        except subprocess.TimeoutExpired:
            raise LoadError(
                pdf_path, f"rendering page {page_1based} timed out"
            ) from None

        if result.returncode != 0 or not result.stdout:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            logger.error(f"pdftoppm failed on page {page_1based} ({result.returncode}): {stderr}")
            raise LoadError(pdf_path, f"could not render page {page_1based}")

        try:
            image = Image.open(io.BytesIO(result.stdout))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise LoadError(pdf_path, f"page {page_1based} produced an invalid image: {e}") from e

        if image.mode != "RGB":
            image = image.convert("RGB")
        return image

    def render_pages(self, pdf_path: str, page_count: int) -> list[Image.Image]:
        """Render every page of a document.

        Returns:
            One image per page, index i holding page i
        """
        if page_count <= 0:
            return []

        workers = min(self.workers, page_count)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map() yields results in submission order
            images = list(pool.map(lambda i: self.render_page(pdf_path, i), range(page_count)))

        logger.info(f"Rendered {page_count} page(s) at {self.dpi} DPI with {workers} worker(s)")
        return images
