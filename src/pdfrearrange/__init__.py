"""
PdfRearrange - reorder, rotate and crop PDF pages

This package provides a GTK4 application and a command line tool for
rearranging the pages of a PDF document and exporting the result.
"""

import sys

__version__ = "1.0.0"
__license__ = "GPL-3.0"


def _check_gtk_dependencies() -> bool:
    """Check if GTK dependencies are available.

    Returns:
        True if dependencies are met, False otherwise
    """
    try:
        import gi

        gi.require_version("Gtk", "4.0")
        gi.require_version("Adw", "1")

        from gi.repository import (
            Adw,  # noqa: F401
            Gtk,  # noqa: F401
        )

        return True
    except (ImportError, ValueError) as e:
        # We can't use translations yet as dependencies are missing
        print(f"Error: Missing dependencies: {e}", file=sys.stderr)
        print("Please make sure GTK4, libadwaita and PyGObject are installed", file=sys.stderr)
        return False


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the graphical editor.

    Args:
        argv: Files to open; defaults to the process arguments

    Returns:
        The application exit code.
    """
    if not _check_gtk_dependencies():
        return 1

    from pdfrearrange.application import PdfRearrangeApp
    from pdfrearrange.utils.logger import logger

    args = sys.argv[1:] if argv is None else argv

    try:
        app = PdfRearrangeApp()
        return app.run([sys.argv[0], *args])
    except Exception as e:
        logger.error(f"Critical error starting application: {e}")
        return 1


__all__ = ["main", "__version__", "__license__"]
