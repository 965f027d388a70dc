"""Tests for background job completion in the editor window."""

from concurrent.futures import Future
from unittest.mock import MagicMock

import pytest

from pdfrearrange.utils.exceptions import LoadError


@pytest.fixture
def window_class():
    try:
        from pdfrearrange.ui.editor_window import PdfRearrangeWindow
    except (ImportError, ValueError) as e:
        pytest.skip(f"GTK4/libadwaita not available: {e}")
    return PdfRearrangeWindow


def _failed_future(exc: BaseException) -> Future:
    future = Future()
    future.set_exception(exc)
    return future


class TestFinishBackground:
    def test_typed_error_shows_message(self, window_class):
        window = MagicMock()
        on_done = MagicMock()
        window_class._finish_background(
            window, _failed_future(LoadError("a.pdf", "damaged")), on_done, "Load"
        )

        on_done.assert_not_called()
        window._show_toast.assert_called_once_with("Could not load PDF: a.pdf - damaged")
        window._update_sensitivity.assert_called_once()
        assert window._busy is False

    def test_unexpected_error_still_restores_controls(self, window_class):
        window = MagicMock()
        window_class._finish_background(
            window, _failed_future(RuntimeError("boom")), MagicMock(), "Load"
        )

        window._show_toast.assert_called_once()
        assert "boom" in window._show_toast.call_args[0][0]
        window._update_sensitivity.assert_called_once()

    def test_result_delivered(self, window_class):
        window = MagicMock()
        on_done = MagicMock()
        future = Future()
        future.set_result(3)
        window_class._finish_background(window, future, on_done, "Load")

        on_done.assert_called_once_with(3)
        window._show_toast.assert_not_called()
        window._update_sensitivity.assert_called_once()
