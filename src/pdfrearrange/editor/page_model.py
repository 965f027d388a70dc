"""
PdfRearrange - Page Model

Per-page transform state for the editor.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PIL import Image

QUARTER_TURNS = (0, 90, 180, 270)


def normalize_rotation(degrees: int) -> int:
    """Reduce an angle to [0, 360), snapped to the nearest quarter turn.

    Angles exactly between two quarter turns snap clockwise.
    """
    rotation = degrees % 360
    if rotation not in QUARTER_TURNS:
        rotation = (rotation + 45) // 90 * 90 % 360
    return rotation


@dataclass
class PageState:
    """State of a single page.

    Attributes:
        page_id: Original page index (0-indexed), fixed at load time
        rotation: Rotation angle in degrees (0, 90, 180, 270)
        crop_override: Cropped raster replacing the rendered one, if any
    """

    page_id: int
    rotation: int = 0
    crop_override: "Image.Image | None" = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate and normalize rotation angle."""
        self.rotation = normalize_rotation(self.rotation)

    @property
    def is_cropped(self) -> bool:
        return self.crop_override is not None

    @property
    def label(self) -> str:
        """1-indexed page number as shown to the user."""
        return str(self.page_id + 1)

    def rotate(self, degrees: int) -> None:
        """Rotate page by specified degrees."""
        self.rotation = normalize_rotation(self.rotation + degrees)

