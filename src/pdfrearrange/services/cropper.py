"""
PdfRearrange - Crop Helpers

Crop region type, bounds clamping and the mapping between the preview
widget and raster pixel coordinates.
"""

from dataclasses import dataclass

from PIL import Image

from pdfrearrange.utils.exceptions import CropError, ValidationError


@dataclass(frozen=True)
class CropRegion:
    """Rectangle in raster pixel coordinates, origin at the top-left corner."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_points(cls, x1: float, y1: float, x2: float, y2: float) -> "CropRegion":
        """Build a region from two opposite corners in any order."""
        left, right = sorted((x1, x2))
        top, bottom = sorted((y1, y2))
        return cls(
            x=int(round(left)),
            y=int(round(top)),
            width=int(round(right - left)),
            height=int(round(bottom - top)),
        )

    @classmethod
    def parse(cls, text: str) -> "CropRegion":
        """Parse an "X,Y,W,H" specification.

        Raises:
            ValidationError: If the text is not four integers with positive size
        """
        parts = [p.strip() for p in text.split(",")]
        if len(parts) != 4:
            raise ValidationError("crop", text, "expected X,Y,WIDTH,HEIGHT")
        try:
            x, y, width, height = (int(p) for p in parts)
        except ValueError:
            raise ValidationError("crop", text, "values must be integers") from None
        if width <= 0 or height <= 0:
            raise ValidationError("crop", text, "width and height must be positive")
        return cls(x, y, width, height)

    @property
    def box(self) -> tuple[int, int, int, int]:
        """The region as a Pillow (left, upper, right, lower) box."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def clamp(self, image_size: tuple[int, int]) -> "CropRegion":
        """Intersect the region with an image of the given (width, height).

        The result may have zero width or height when the region lies
        outside the image.
        """
        img_w, img_h = image_size
        left = min(max(self.x, 0), img_w)
        top = min(max(self.y, 0), img_h)
        right = min(max(self.x + self.width, 0), img_w)
        bottom = min(max(self.y + self.height, 0), img_h)
        return CropRegion(left, top, max(0, right - left), max(0, bottom - top))

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


def crop_raster(image: Image.Image, region: CropRegion) -> Image.Image:
    """Return a new image cropped to region, clamped to the image bounds.

    Raises:
        CropError: If nothing of the image remains after clamping
    """
    clamped = region.clamp(image.size)
    if clamped.is_empty:
        raise CropError(region, image.size)
    return image.crop(clamped.box)


def fit_transform(
    image_size: tuple[int, int],
    widget_size: tuple[int, int],
    zoom: float = 1.0,
) -> tuple[float, float, float]:
    """Compute how an image is drawn centered inside a widget.

    The image is scaled to fit the widget, multiplied by zoom.

    Returns:
        (scale, offset_x, offset_y) so that widget = offset + image * scale
    """
    img_w, img_h = image_size
    widget_w, widget_h = widget_size
    if img_w <= 0 or img_h <= 0 or widget_w <= 0 or widget_h <= 0:
        return 1.0, 0.0, 0.0

    scale = min(widget_w / img_w, widget_h / img_h) * zoom
    offset_x = (widget_w - img_w * scale) / 2
    offset_y = (widget_h - img_h * scale) / 2
    return scale, offset_x, offset_y


def widget_to_image_region(
    start: tuple[float, float],
    end: tuple[float, float],
    image_size: tuple[int, int],
    widget_size: tuple[int, int],
    zoom: float = 1.0,
) -> CropRegion:
    """Convert a rectangle dragged in the preview widget to raster pixels."""
    scale, offset_x, offset_y = fit_transform(image_size, widget_size, zoom)
    x1 = (start[0] - offset_x) / scale
    y1 = (start[1] - offset_y) / scale
    x2 = (end[0] - offset_x) / scale
    y2 = (end[1] - offset_y) / scale
    return CropRegion.from_points(x1, y1, x2, y2).clamp(image_size)
