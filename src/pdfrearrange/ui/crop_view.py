"""
PdfRearrange - Crop View Widget

Shows the selected page at the current zoom and lets the user drag a
crop rectangle over it.
"""

import cairo
import gi

gi.require_version("Gtk", "4.0")
from gi.repository import GObject, Gtk
from PIL import Image

from pdfrearrange.services.cropper import CropRegion, fit_transform, widget_to_image_region
from pdfrearrange.ui.imaging import image_to_surface


class CropView(Gtk.DrawingArea):
    """Preview of one page raster with a rubber-band crop box.

    Signals:
        selection-changed: Emitted when a crop box is drawn or cleared
    """

    __gsignals__ = {
        "selection-changed": (GObject.SignalFlags.RUN_FIRST, None, ()),
    }

    def __init__(self) -> None:
        super().__init__()
        self.set_hexpand(True)
        self.set_vexpand(True)
        self.set_draw_func(self._draw)

        self._image: Image.Image | None = None
        self._surface = None
        self._zoom = 1.0
        self._drag_start: tuple[float, float] | None = None
        self._drag_end: tuple[float, float] | None = None

        drag = Gtk.GestureDrag()
        drag.connect("drag-begin", self._on_drag_begin)
        drag.connect("drag-update", self._on_drag_update)
        drag.connect("drag-end", self._on_drag_end)
        self.add_controller(drag)

    def set_image(self, image: Image.Image | None) -> None:
        """Show image, discarding any crop box drawn on the previous one."""
        self._image = image
        self._surface = image_to_surface(image) if image is not None else None
        self.clear_selection()

    def set_zoom(self, zoom: float) -> None:
        self._zoom = zoom
        self.clear_selection()

    def clear_selection(self) -> None:
        self._drag_start = None
        self._drag_end = None
        self.queue_draw()
        self.emit("selection-changed")

    def get_selection(self) -> CropRegion | None:
        """The dragged box in raster pixels, or None if nothing usable is drawn."""
        if self._image is None or self._drag_start is None or self._drag_end is None:
            return None
        region = widget_to_image_region(
            self._drag_start,
            self._drag_end,
            self._image.size,
            (self.get_width(), self.get_height()),
            self._zoom,
        )
        return None if region.is_empty else region

    # --- Gestures ---

    def _on_drag_begin(self, _gesture: Gtk.GestureDrag, x: float, y: float) -> None:
        if self._image is None:
            return
        self._drag_start = (x, y)
        self._drag_end = (x, y)

    def _on_drag_update(self, _gesture: Gtk.GestureDrag, offset_x: float, offset_y: float) -> None:
        if self._drag_start is None:
            return
        self._drag_end = (self._drag_start[0] + offset_x, self._drag_start[1] + offset_y)
        self.queue_draw()

    def _on_drag_end(self, gesture: Gtk.GestureDrag, offset_x: float, offset_y: float) -> None:
        self._on_drag_update(gesture, offset_x, offset_y)
        self.emit("selection-changed")

    # --- Drawing ---

    def _draw(self, _area: Gtk.DrawingArea, cr, width: int, height: int) -> None:
        if self._image is None or self._surface is None:
            return

        scale, offset_x, offset_y = fit_transform(self._image.size, (width, height), self._zoom)
        cr.save()
        cr.translate(offset_x, offset_y)
        cr.scale(scale, scale)
        cr.set_source_surface(self._surface, 0, 0)
        cr.paint()
        cr.restore()

        region = self.get_selection()
        if region is None:
            return

        x = offset_x + region.x * scale
        y = offset_y + region.y * scale
        w = region.width * scale
        h = region.height * scale

        # Dim everything outside the crop box
        cr.set_source_rgba(0, 0, 0, 0.45)
        cr.rectangle(0, 0, width, height)
        cr.rectangle(x, y, w, h)
        cr.set_fill_rule(cairo.FILL_RULE_EVEN_ODD)
        cr.fill()

        cr.set_source_rgb(0.21, 0.52, 0.89)
        cr.set_line_width(2)
        cr.rectangle(x, y, w, h)
        cr.stroke()
