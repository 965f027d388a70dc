#!/usr/bin/env python3
"""
PdfRearrange - Configuration Module

This module contains all configuration constants and paths used by the application.
"""

import logging
import os
from typing import Final

# ============================================================================
# Application Constants
# ============================================================================

APP_NAME: Final[str] = "PDF Rearrange"
APP_ID: Final[str] = "io.github.pdfrearrange"
APP_VERSION: Final[str] = "1.0.0"
APP_ICON_NAME: Final[str] = "pdfrearrange"


# ============================================================================
# Rendering and Editing
# ============================================================================

# Page rasters are rendered at this multiple of 72 DPI
DEFAULT_RENDER_SCALE: Final[float] = 1.5
DEFAULT_RENDER_WORKERS: Final[int] = 4
RENDER_TIMEOUT_SECONDS: Final[int] = 60

ZOOM_MIN: Final[float] = 0.1
ZOOM_MAX: Final[float] = 5.0
ZOOM_STEP: Final[float] = 0.1

DEFAULT_EXPORT_NAME: Final[str] = "rearranged.pdf"


# ============================================================================
# Configuration Directory
# ============================================================================

CONFIG_DIR: Final[str] = os.path.expanduser("~/.config/pdfrearrange")


# ============================================================================
# Logging Configuration
# ============================================================================

LOG_LEVEL: int = logging.INFO
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME: Final[str] = "PdfRearrange"


def get_app_description() -> str:
    """Application description, translated at call time."""
    from pdfrearrange.utils.i18n import _

    return _("Reorder, rotate and crop the pages of a PDF document")
