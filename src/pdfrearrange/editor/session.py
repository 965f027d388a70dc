"""
PdfRearrange - Editor Session

Owns all state of one editing session: page order, per-page transforms,
page rasters, selection and preview zoom. Every front-end drives the
document through this object.
"""

import threading
from enum import Enum, auto
from pathlib import Path

from PIL import Image

from pdfrearrange.config import ZOOM_MAX, ZOOM_MIN, ZOOM_STEP
from pdfrearrange.editor.page_model import PageState
from pdfrearrange.services.cropper import CropRegion, crop_raster
from pdfrearrange.services.page_renderer import RasterRenderer
from pdfrearrange.services.pdf_export import ExportPage, build_pdf, save_pdf_bytes
from pdfrearrange.services.pdf_loader import LoadedDocument, load_document
from pdfrearrange.utils.exceptions import ExportError, ValidationError
from pdfrearrange.utils.logger import logger


class SessionState(Enum):
    """Lifecycle of an editing session."""

    EMPTY = auto()
    LOADED = auto()
    EXPORTED = auto()


class EditorSession:
    """A single document being rearranged.

    Mutations and exports are serialized by a re-entrant lock, so an
    export started while a load or crop is running waits for it and then
    reads the finished rasters.

    Attributes:
        source_name: Name of the loaded document
        page_order: Page identifiers in display order
        pages: PageState for each page identifier
        selected: Identifier of the page being edited, or None
        zoom: Preview magnification of the selected page
        state: Current SessionState
        modified: Whether there are edits since the last load or export
    """

    def __init__(self, renderer: RasterRenderer) -> None:
        self._renderer = renderer
        self._lock = threading.RLock()
        self._rasters: dict[int, Image.Image] = {}

        self.source_name = ""
        self.page_order: list[int] = []
        self.pages: dict[int, PageState] = {}
        self.selected: int | None = None
        self.zoom = 1.0
        self.state = SessionState.EMPTY
        self.modified = False

    # --- Loading ---

    @property
    def page_count(self) -> int:
        return len(self.page_order)

    @property
    def is_loaded(self) -> bool:
        return self.state is not SessionState.EMPTY

    def load(self, source: bytes | str | Path, source_name: str | None = None) -> LoadedDocument:
        """Load a document, replacing the current one.

        On failure the previous document stays untouched.

        Raises:
            LoadError: If the document cannot be parsed or rendered
        """
        with self._lock:
            loaded = load_document(source, self._renderer, source_name=source_name)
            self._reset(loaded)
            return loaded

    def _reset(self, loaded: LoadedDocument) -> None:
        count = loaded.page_count
        self.source_name = loaded.source_name
        self._rasters = dict(enumerate(loaded.rasters))
        self.page_order = list(range(count))
        self.pages = {page_id: PageState(page_id=page_id) for page_id in range(count)}
        self.selected = None
        self.zoom = 1.0
        self.state = SessionState.LOADED
        self.modified = False

    def _mark_modified(self) -> None:
        self.modified = True
        if self.state is SessionState.EXPORTED:
            self.state = SessionState.LOADED

    # --- Page access ---

    def get_page(self, page_id: int) -> PageState | None:
        return self.pages.get(page_id)

    def get_page_by_position(self, position: int) -> PageState | None:
        """Get the page displayed at position (0-indexed)."""
        if 0 <= position < len(self.page_order):
            return self.pages[self.page_order[position]]
        return None

    def position_of(self, page_id: int) -> int:
        """Current display position of a page identifier."""
        return self.page_order.index(page_id)

    def original_raster(self, page_id: int) -> Image.Image | None:
        return self._rasters.get(page_id)

    def raster(self, page_id: int) -> Image.Image | None:
        """Raster used for display and export: the crop override if present."""
        page = self.pages.get(page_id)
        if page is not None and page.crop_override is not None:
            return page.crop_override
        return self._rasters.get(page_id)

    # --- Reordering ---

    def move_page(self, from_position: int, to_position: int | None) -> bool:
        """Move the page at from_position so it ends up at to_position.

        A None target (drag cancelled outside the list) is ignored.

        Returns:
            True if the order changed
        """
        if to_position is None:
            logger.debug("Move ignored: no drop target")
            return False

        with self._lock:
            count = len(self.page_order)
            if not (0 <= from_position < count and 0 <= to_position < count):
                logger.warning(
                    f"Move rejected: positions {from_position} -> {to_position} "
                    f"outside 0..{count - 1}"
                )
                return False
            if from_position == to_position:
                return False

            page_id = self.page_order.pop(from_position)
            self.page_order.insert(to_position, page_id)
            self._mark_modified()

        logger.info(f"Page {page_id + 1} moved from {from_position} to {to_position}")
        return True

    def reverse_pages(self) -> None:
        """Reverse the display order."""
        with self._lock:
            self.page_order.reverse()
            self._mark_modified()

    def set_order(self, order: list[int]) -> None:
        """Replace the display order with a permutation of page identifiers.

        Raises:
            ValidationError: If order is not a permutation of the loaded pages
        """
        with self._lock:
            if sorted(order) != list(range(len(self.page_order))):
                raise ValidationError(
                    "order",
                    ",".join(str(p) for p in order),
                    f"must list every page 0..{len(self.page_order) - 1} exactly once",
                )
            self.page_order = list(order)
            self._mark_modified()

    # --- Selection and transforms ---

    def select(self, page_id: int | None) -> bool:
        """Select a page for editing, or clear the selection with None."""
        if page_id is not None and page_id not in self.pages:
            logger.warning(f"Cannot select unknown page {page_id}")
            return False
        self.selected = page_id
        return True

    def rotate(self, delta: int) -> bool:
        """Rotate the selected page by delta degrees.

        Returns:
            False if no page is selected
        """
        with self._lock:
            page = self.get_page(self.selected) if self.selected is not None else None
            if page is None:
                return False
            page.rotate(delta)
            self._mark_modified()

        logger.info(f"Page {page.label} rotation is now {page.rotation}°")
        return True

    def rotate_left(self) -> bool:
        return self.rotate(-90)

    def rotate_right(self) -> bool:
        return self.rotate(90)

    def crop(self, region: CropRegion, page_id: int | None = None) -> bool:
        """Crop a page's current raster to region.

        The result replaces any earlier crop of the same page.

        Args:
            region: Box in raster pixels
            page_id: Page to crop; defaults to the selected page

        Returns:
            False if there is no such page

        Raises:
            CropError: If region does not overlap the raster
        """
        with self._lock:
            target = self.selected if page_id is None else page_id
            page = self.pages.get(target) if target is not None else None
            if page is None:
                return False
            current = self.raster(page.page_id)
            if current is None:
                return False

            page.crop_override = crop_raster(current, region)
            self._mark_modified()

        width, height = page.crop_override.size
        logger.info(f"Page {page.label} cropped to {width}x{height}")
        return True

    def reset_crop(self) -> bool:
        """Drop the selected page's crop so the rendered raster is used again."""
        with self._lock:
            if self.selected is None:
                return False
            page = self.pages[self.selected]
            if page.crop_override is None:
                return False
            page.crop_override = None
            self._mark_modified()
        return True

    def set_zoom(self, delta: float) -> float:
        """Adjust the preview zoom by delta, clamped to [ZOOM_MIN, ZOOM_MAX]."""
        self.zoom = round(min(ZOOM_MAX, max(ZOOM_MIN, self.zoom + delta)), 2)
        return self.zoom

    def zoom_in(self) -> float:
        return self.set_zoom(ZOOM_STEP)

    def zoom_out(self) -> float:
        return self.set_zoom(-ZOOM_STEP)

    # --- Export ---

    def export_pages(self) -> list[ExportPage]:
        """Pages in display order with the raster and rotation to export."""
        with self._lock:
            return [
                ExportPage(
                    page_id=page_id,
                    raster=self.raster(page_id),
                    rotation=self.pages[page_id].rotation,
                )
                for page_id in self.page_order
            ]

    def export(self) -> bytes:
        """Build the rearranged PDF.

        Raises:
            ExportError: If no document is loaded or assembly fails
        """
        with self._lock:
            if not self.is_loaded:
                raise ExportError("no document is loaded")
            return build_pdf(self.export_pages())

    def save(self, output_path: str | Path) -> Path:
        """Export and write the document to output_path.

        Nothing is written unless the whole document was built.

        Raises:
            ExportError: If building or writing fails
        """
        with self._lock:
            data = self.export()
            path = save_pdf_bytes(data, output_path)
            self.state = SessionState.EXPORTED
            self.modified = False
            return path
