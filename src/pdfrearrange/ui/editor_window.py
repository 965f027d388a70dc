"""
PdfRearrange - Editor Window

Main window: page list on the left, crop preview with page tools on the
right. Loading, cropping and export run on a background worker and
report back on the main loop.
"""

import os
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, Gio, GLib, Gtk

from pdfrearrange.config import APP_NAME
from pdfrearrange.editor.session import EditorSession
from pdfrearrange.services.page_renderer import PdftoppmRenderer
from pdfrearrange.ui.crop_view import CropView
from pdfrearrange.ui.page_list import PageList
from pdfrearrange.utils.config_manager import ConfigManager, get_config_manager
from pdfrearrange.utils.exceptions import PdfRearrangeError
from pdfrearrange.utils.i18n import _
from pdfrearrange.utils.logger import logger


class PdfRearrangeWindow(Adw.ApplicationWindow):
    """Editor window for one document at a time.

    UI Layout:
    - Header bar: Open | title | Export
    - Sidebar: reorderable page list
    - Content: crop preview and tool bar (rotate, crop, zoom)
    - Toasts for errors and confirmations
    """

    def __init__(
        self,
        application: Adw.Application,
        config: ConfigManager | None = None,
    ) -> None:
        super().__init__(application=application)

        self._config = config or get_config_manager()
        self._session = EditorSession(
            PdftoppmRenderer(
                scale=self._config.render_scale,
                workers=self._config.render_workers,
            )
        )
        # One worker keeps background jobs in submission order
        self._worker = ThreadPoolExecutor(max_workers=1)
        self._busy = False

        self.set_title(APP_NAME)
        self.set_default_size(*self._config.get_window_size())

        self._setup_ui()
        self._update_sensitivity()
        self.connect("close-request", self._on_close_request)

    # --- UI construction ---

    def _setup_ui(self) -> None:
        toolbar_view = Adw.ToolbarView()

        header = Adw.HeaderBar()
        self._open_btn = Gtk.Button(icon_name="document-open-symbolic")
        self._open_btn.set_tooltip_text(_("Open PDF"))
        self._open_btn.connect("clicked", self._on_open_clicked)
        header.pack_start(self._open_btn)

        self._export_btn = Gtk.Button(label=_("Export"))
        self._export_btn.add_css_class("suggested-action")
        self._export_btn.set_tooltip_text(_("Save the rearranged PDF"))
        self._export_btn.connect("clicked", self._on_export_clicked)
        header.pack_end(self._export_btn)

        self._spinner = Gtk.Spinner()
        header.pack_end(self._spinner)
        toolbar_view.add_top_bar(header)

        self._stack = Gtk.Stack()
        empty = Adw.StatusPage(
            icon_name="x-office-document-symbolic",
            title=_("No Document"),
            description=_("Open a PDF to reorder, rotate and crop its pages"),
        )
        self._stack.add_named(empty, "empty")
        self._stack.add_named(self._create_editor(), "editor")
        self._stack.set_visible_child_name("empty")

        self._toast_overlay = Adw.ToastOverlay()
        self._toast_overlay.set_child(self._stack)
        toolbar_view.set_content(self._toast_overlay)
        self.set_content(toolbar_view)

    def _create_editor(self) -> Gtk.Widget:
        paned = Gtk.Paned(orientation=Gtk.Orientation.HORIZONTAL)
        paned.set_position(260)

        self._page_list = PageList()
        self._page_list.set_size_request(220, -1)
        self._page_list.connect("page-selected", self._on_page_selected)
        self._page_list.connect("page-moved", self._on_page_moved)
        paned.set_start_child(self._page_list)

        content = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        self._crop_view = CropView()
        self._crop_view.connect("selection-changed", lambda *_: self._update_sensitivity())
        content.append(self._crop_view)
        content.append(self._create_action_bar())
        paned.set_end_child(content)
        return paned

    def _create_action_bar(self) -> Gtk.ActionBar:
        bar = Gtk.ActionBar()

        self._rotate_left_btn = self._tool_button(
            "object-rotate-left-symbolic",
            _("Rotate -90°"),
            self._on_rotate,
            self._session.rotate_left,
        )
        self._rotate_right_btn = self._tool_button(
            "object-rotate-right-symbolic",
            _("Rotate 90°"),
            self._on_rotate,
            self._session.rotate_right,
        )
        self._crop_btn = self._tool_button("edit-cut-symbolic", _("Crop"), self._on_crop)
        self._reset_crop_btn = self._tool_button(
            "edit-undo-symbolic", _("Remove crop"), self._on_reset_crop
        )
        for btn in (
            self._rotate_left_btn,
            self._rotate_right_btn,
            self._crop_btn,
            self._reset_crop_btn,
        ):
            bar.pack_start(btn)

        self._zoom_out_btn = self._tool_button("zoom-out-symbolic", _("Zoom out"), self._on_zoom, -1)
        self._zoom_label = Gtk.Label(label="100%")
        self._zoom_label.set_width_chars(5)
        self._zoom_in_btn = self._tool_button("zoom-in-symbolic", _("Zoom in"), self._on_zoom, 1)
        bar.pack_end(self._zoom_in_btn)
        bar.pack_end(self._zoom_label)
        bar.pack_end(self._zoom_out_btn)
        return bar

    def _tool_button(
        self, icon_name: str, tooltip: str, handler: Callable[..., None], *args: Any
    ) -> Gtk.Button:
        btn = Gtk.Button(icon_name=icon_name)
        btn.set_tooltip_text(tooltip)
        btn.connect("clicked", lambda _btn: handler(*args))
        return btn

    def _update_sensitivity(self) -> None:
        loaded = self._session.is_loaded and not self._busy
        has_page = loaded and self._session.selected is not None
        page = self._session.get_page(self._session.selected) if has_page else None

        self._open_btn.set_sensitive(not self._busy)
        self._page_list.set_sensitive(not self._busy)
        self._export_btn.set_sensitive(loaded)
        for btn in (
            self._rotate_left_btn,
            self._rotate_right_btn,
            self._zoom_in_btn,
            self._zoom_out_btn,
        ):
            btn.set_sensitive(has_page)
        self._crop_btn.set_sensitive(has_page and self._crop_view.get_selection() is not None)
        self._reset_crop_btn.set_sensitive(page is not None and page.is_cropped)

    # --- Background work ---

    def _run_in_background(
        self,
        func: Callable[[], Any],
        on_done: Callable[[Any], None],
        description: str,
    ) -> None:
        """Run func on the worker and deliver its result on the main loop."""
        self._busy = True
        self._spinner.start()
        self._update_sensitivity()

        future = self._worker.submit(func)
        future.add_done_callback(
            lambda f: GLib.idle_add(self._finish_background, f, on_done, description)
        )

    def _finish_background(
        self, future: Future, on_done: Callable[[Any], None], description: str
    ) -> bool:
        self._busy = False
        self._spinner.stop()
        try:
            on_done(future.result())
        except PdfRearrangeError as e:
            logger.error(f"{description} failed: {e}")
            self._show_toast(e.message)
        except Exception as e:
            logger.exception(f"{description} failed unexpectedly")
            self._show_toast(_("{action} failed: {error}").format(action=description, error=e))
        finally:
            self._update_sensitivity()
        return GLib.SOURCE_REMOVE

    def _show_toast(self, message: str) -> None:
        self._toast_overlay.add_toast(Adw.Toast.new(message))

    # --- Loading ---

    def open_file(self, path: str) -> None:
        """Load a PDF into the editor, keeping the current one on failure."""
        logger.info(f"Opening {path}")
        self._config.set("paths.last_directory", os.path.dirname(path))
        self._run_in_background(
            lambda: self._session.load(path),
            self._on_document_loaded,
            "Load",
        )

    def _on_document_loaded(self, _loaded) -> None:
        self.set_title(_("{app} - {name}").format(app=APP_NAME, name=self._session.source_name))
        self._page_list.load(self._session)
        self._crop_view.set_image(None)
        self._zoom_label.set_text("100%")
        self._stack.set_visible_child_name("editor")

    def _on_open_clicked(self, _button: Gtk.Button) -> None:
        dialog = Gtk.FileDialog()
        dialog.set_title(_("Open PDF"))
        dialog.set_filters(self._pdf_filters())
        last_dir = self._config.get("paths.last_directory", "")
        if last_dir and os.path.isdir(last_dir):
            dialog.set_initial_folder(Gio.File.new_for_path(last_dir))
        dialog.open(self, None, self._on_open_response)

    def _on_open_response(self, dialog: Gtk.FileDialog, result: Gio.AsyncResult) -> None:
        try:
            gfile = dialog.open_finish(result)
        except GLib.Error as e:
            if "dismissed" not in str(e).lower():
                logger.error(f"Open dialog error: {e}")
            return
        if gfile and gfile.get_path():
            self.open_file(gfile.get_path())

    def _pdf_filters(self) -> Gio.ListStore:
        pdf_filter = Gtk.FileFilter()
        pdf_filter.set_name(_("PDF Files"))
        pdf_filter.add_mime_type("application/pdf")
        filters = Gio.ListStore.new(Gtk.FileFilter)
        filters.append(pdf_filter)
        return filters

    # --- Page actions ---

    def _on_page_selected(self, _list: PageList, page_id: int) -> None:
        self._session.select(page_id)
        self._show_selected_page()

    def _show_selected_page(self) -> None:
        selected = self._session.selected
        self._crop_view.set_image(self._session.raster(selected) if selected is not None else None)
        self._crop_view.set_zoom(self._session.zoom)
        self._update_sensitivity()

    def _on_page_moved(self, _list: PageList, source_pos: int, target_pos: int) -> None:
        if self._session.move_page(source_pos, target_pos):
            self._page_list.reorder(self._session)

    def _on_rotate(self, rotate: Callable[[], bool]) -> None:
        if rotate():
            self._page_list.refresh_page(self._session, self._session.selected)

    def _on_crop(self) -> None:
        region = self._crop_view.get_selection()
        page_id = self._session.selected
        if region is None or page_id is None:
            return

        def on_cropped(changed: bool) -> None:
            if changed:
                self._page_list.refresh_page(self._session, page_id)
                self._show_selected_page()

        self._run_in_background(lambda: self._session.crop(region, page_id), on_cropped, "Crop")

    def _on_reset_crop(self) -> None:
        if self._session.reset_crop():
            self._page_list.refresh_page(self._session, self._session.selected)
            self._show_selected_page()

    def _on_zoom(self, direction: int) -> None:
        zoom = self._session.zoom_in() if direction > 0 else self._session.zoom_out()
        self._zoom_label.set_text(f"{round(zoom * 100)}%")
        self._crop_view.set_zoom(zoom)

    # --- Export ---

    def _on_export_clicked(self, _button: Gtk.Button) -> None:
        dialog = Gtk.FileDialog()
        dialog.set_title(_("Save PDF As"))
        dialog.set_filters(self._pdf_filters())
        dialog.set_initial_name(self._config.export_file_name)
        last_dir = self._config.get("paths.last_directory", "")
        if last_dir and os.path.isdir(last_dir):
            dialog.set_initial_folder(Gio.File.new_for_path(last_dir))
        dialog.save(self, None, self._on_save_response)

    def _on_save_response(self, dialog: Gtk.FileDialog, result: Gio.AsyncResult) -> None:
        try:
            gfile = dialog.save_finish(result)
        except GLib.Error as e:
            if "dismissed" not in str(e).lower():
                logger.error(f"Save As error: {e}")
            return
        if not gfile or not gfile.get_path():
            return

        dest_path = gfile.get_path()
        self._run_in_background(
            lambda: self._session.save(dest_path),
            lambda path: self._show_toast(_("Saved: {}").format(os.path.basename(str(path)))),
            "Export",
        )

    # --- Lifecycle ---

    def _on_close_request(self, _window: Gtk.Window) -> bool:
        width, height = self.get_default_size()
        self._config.set("window.width", width, save_immediately=False)
        self._config.set("window.height", height)
        self._worker.shutdown(wait=False, cancel_futures=True)
        return False
