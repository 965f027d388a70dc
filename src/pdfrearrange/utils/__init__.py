"""
PdfRearrange - Utils Package

Utility modules for the application.
"""

from pdfrearrange.utils.i18n import _, setup_i18n
from pdfrearrange.utils.logger import logger

__all__ = [
    "logger",
    "_",
    "setup_i18n",
]
