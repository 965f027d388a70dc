"""
PdfRearrange - Page List Widget

Vertical list of page thumbnails. Rows can be dragged onto each other
to reorder pages; clicking a row selects the page for editing.
"""

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Gdk", "4.0")
from gi.repository import Gdk, GObject, Gtk

from pdfrearrange.editor.session import EditorSession
from pdfrearrange.ui.imaging import image_to_texture, rotated_preview
from pdfrearrange.utils.i18n import _
from pdfrearrange.utils.logger import logger

THUMBNAIL_SIZE = 120


class PageRow(Gtk.ListBoxRow):
    """One page: thumbnail, page number and rotation badge."""

    def __init__(self, page_id: int) -> None:
        super().__init__()
        self.page_id = page_id

        box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=12)
        box.set_margin_top(6)
        box.set_margin_bottom(6)
        box.set_margin_start(6)
        box.set_margin_end(6)

        self._picture = Gtk.Picture()
        self._picture.set_size_request(THUMBNAIL_SIZE, THUMBNAIL_SIZE)
        self._picture.set_content_fit(Gtk.ContentFit.CONTAIN)
        box.append(self._picture)

        labels = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=4)
        labels.set_valign(Gtk.Align.CENTER)
        self._title = Gtk.Label(label=_("Page {}").format(page_id + 1), xalign=0)
        self._title.add_css_class("heading")
        self._badge = Gtk.Label(xalign=0)
        self._badge.add_css_class("dim-label")
        labels.append(self._title)
        labels.append(self._badge)
        box.append(labels)

        self.set_child(box)
        self.set_cursor(Gdk.Cursor.new_from_name("grab", None))

    def update(self, session: EditorSession) -> None:
        """Refresh thumbnail and badge from the session state."""
        page = session.get_page(self.page_id)
        raster = session.raster(self.page_id)
        if page is None or raster is None:
            return

        preview = rotated_preview(raster, page.rotation, THUMBNAIL_SIZE)
        self._picture.set_paintable(image_to_texture(preview))

        notes = []
        if page.rotation:
            notes.append(f"{page.rotation}°")
        if page.is_cropped:
            notes.append(_("cropped"))
        self._badge.set_text(" · ".join(notes))


class PageList(Gtk.Box):
    """Reorderable list of pages.

    Signals:
        page-selected: Emitted with the page identifier of a clicked row
        page-moved: Emitted with (source position, target position) on drop
    """

    __gsignals__ = {
        "page-selected": (GObject.SignalFlags.RUN_FIRST, None, (int,)),
        "page-moved": (GObject.SignalFlags.RUN_FIRST, None, (int, int)),
    }

    def __init__(self) -> None:
        super().__init__(orientation=Gtk.Orientation.VERTICAL)
        self._rows: dict[int, PageRow] = {}
        self._updating = False

        self._list_box = Gtk.ListBox()
        self._list_box.set_selection_mode(Gtk.SelectionMode.SINGLE)
        self._list_box.add_css_class("navigation-sidebar")
        self._list_box.connect("row-selected", self._on_row_selected)

        scrolled = Gtk.ScrolledWindow()
        scrolled.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)
        scrolled.set_vexpand(True)
        scrolled.set_child(self._list_box)
        self.append(scrolled)

    def load(self, session: EditorSession) -> None:
        """Rebuild all rows for a newly loaded document."""
        self._updating = True
        try:
            self._list_box.remove_all()
            self._rows.clear()
            for page_id in session.page_order:
                row = PageRow(page_id)
                self._add_drag_and_drop(row)
                row.update(session)
                self._rows[page_id] = row
                self._list_box.append(row)
        finally:
            self._updating = False

    def reorder(self, session: EditorSession) -> None:
        """Re-sequence rows to match the session page order."""
        self._updating = True
        try:
            for position, page_id in enumerate(session.page_order):
                row = self._rows[page_id]
                if row.get_index() != position:
                    self._list_box.remove(row)
                    self._list_box.insert(row, position)
            if session.selected is not None:
                self._list_box.select_row(self._rows[session.selected])
        finally:
            self._updating = False

    def refresh_page(self, session: EditorSession, page_id: int) -> None:
        row = self._rows.get(page_id)
        if row is not None:
            row.update(session)

    # --- Drag and Drop ---

    def _add_drag_and_drop(self, row: PageRow) -> None:
        drag_source = Gtk.DragSource.new()
        drag_source.set_actions(Gdk.DragAction.MOVE)
        drag_source.connect("prepare", self._on_drag_prepare, row)
        row.add_controller(drag_source)

        drop_target = Gtk.DropTarget.new(GObject.TYPE_INT, Gdk.DragAction.MOVE)
        drop_target.connect("drop", self._on_drop, row)
        row.add_controller(drop_target)

    def _on_drag_prepare(
        self, _source: Gtk.DragSource, _x: float, _y: float, row: PageRow
    ) -> Gdk.ContentProvider:
        value = GObject.Value()
        value.init(GObject.TYPE_INT)
        value.set_int(row.get_index())
        return Gdk.ContentProvider.new_for_value(value)

    def _on_drop(
        self, _target: Gtk.DropTarget, value: int, _x: float, _y: float, row: PageRow
    ) -> bool:
        source_pos = int(value)
        target_pos = row.get_index()
        if source_pos == target_pos:
            return False
        logger.debug(f"Drop: {source_pos} -> {target_pos}")
        self.emit("page-moved", source_pos, target_pos)
        return True

    def _on_row_selected(self, _list_box: Gtk.ListBox, row: PageRow | None) -> None:
        if self._updating or row is None:
            return
        self.emit("page-selected", row.page_id)
