"""
PdfRearrange - Editor Module

Session state for reordering, rotating and cropping pages.
"""

from pdfrearrange.editor.page_model import PageState, normalize_rotation
from pdfrearrange.editor.session import EditorSession, SessionState

__all__ = [
    "EditorSession",
    "PageState",
    "SessionState",
    "normalize_rotation",
]
