"""
PdfRearrange - Application Module

This module contains the main application class.
"""

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, Gio, Gtk

from pdfrearrange.config import APP_ICON_NAME, APP_ID, APP_NAME, APP_VERSION, get_app_description
from pdfrearrange.ui.editor_window import PdfRearrangeWindow
from pdfrearrange.utils.logger import logger


class PdfRearrangeApp(Adw.Application):
    """Application class for PdfRearrange."""

    def __init__(self) -> None:
        super().__init__(application_id=APP_ID, flags=Gio.ApplicationFlags.HANDLES_OPEN)

        self.connect("activate", self.on_activate)
        self.connect("open", self.on_open)

        self._setup_actions()

    def _setup_actions(self) -> None:
        """Set up application actions."""
        about_action = Gio.SimpleAction.new("about", None)
        about_action.connect("activate", self.on_about_action)
        self.add_action(about_action)

        quit_action = Gio.SimpleAction.new("quit", None)
        quit_action.connect("activate", lambda *_: self.quit())
        self.add_action(quit_action)

        self.set_accels_for_action("app.quit", ["<Control>q"])
        self.set_accels_for_action("app.about", ["F1"])

    def _get_window(self) -> PdfRearrangeWindow:
        window = self.get_active_window()
        if window is None:
            window = PdfRearrangeWindow(application=self)
        return window

    def on_activate(self, _app: Gtk.Application) -> None:
        self._get_window().present()

    def on_open(self, _app: Gtk.Application, files: list[Gio.File], _n_files: int, _hint: str) -> None:
        window = self._get_window()
        window.present()
        paths = [f.get_path() for f in files if f.get_path()]
        if len(paths) > 1:
            logger.warning(f"Only the first of {len(paths)} files is opened")
        if paths:
            window.open_file(paths[0])

    def on_about_action(self, _action: Gio.SimpleAction, _param) -> None:
        about = Adw.AboutWindow(
            transient_for=self.get_active_window(),
            application_name=APP_NAME,
            application_icon=APP_ICON_NAME,
            version=APP_VERSION,
            comments=get_app_description(),
            license_type=Gtk.License.GPL_3_0,
        )
        about.present()
