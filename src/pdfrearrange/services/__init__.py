"""
PdfRearrange - Services Package

Loading, rendering, cropping and export. No GTK dependencies.
"""

from pdfrearrange.services.cropper import CropRegion, crop_raster
from pdfrearrange.services.page_renderer import PdftoppmRenderer, RasterRenderer
from pdfrearrange.services.pdf_export import ExportPage, build_pdf, save_pdf_bytes
from pdfrearrange.services.pdf_loader import LoadedDocument, load_document

__all__ = [
    "CropRegion",
    "crop_raster",
    "PdftoppmRenderer",
    "RasterRenderer",
    "ExportPage",
    "build_pdf",
    "save_pdf_bytes",
    "LoadedDocument",
    "load_document",
]
