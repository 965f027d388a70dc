"""
PdfRearrange - Image Conversion Helpers

Converts Pillow images into GDK textures and cairo surfaces.
"""

import io

import cairo
import gi

gi.require_version("Gdk", "4.0")
from gi.repository import Gdk, GLib
from PIL import Image


def _png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def rotated_preview(image: Image.Image, rotation: int, max_size: int | None = None) -> Image.Image:
    """Copy of image shrunk to max_size and rotated clockwise by rotation degrees."""
    preview = image.copy()
    if max_size is not None:
        preview.thumbnail((max_size, max_size))
    if rotation % 360:
        # Pillow rotates counter-clockwise
        preview = preview.rotate(-rotation, expand=True)
    return preview


def image_to_texture(image: Image.Image) -> Gdk.Texture:
    """Create a GDK texture from a Pillow image."""
    return Gdk.Texture.new_from_bytes(GLib.Bytes.new(_png_bytes(image)))


def image_to_surface(image: Image.Image) -> cairo.ImageSurface:
    """Create a cairo image surface from a Pillow image."""
    return cairo.ImageSurface.create_from_png(io.BytesIO(_png_bytes(image)))
