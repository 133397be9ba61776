"""
Orientation geometry for placing JPEG images on PDF pages.

EXIF orientation records how the camera was held, not how the pixels are
stored. Instead of transcoding pixels, the image is placed on the page with a
transform derived from the orientation code, so the compressed stream can be
embedded byte-for-byte.

Provides:
- Orientation value object (display size, translation, rotation, mirroring)
- Pixel to point conversion
"""

from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_ORIENTATION, POINTS_PER_INCH


# Orientation codes whose display size swaps width and height
TRANSPOSED_CODES = (5, 6, 7, 8)

# Orientation codes that need a horizontal flip
MIRRORED_CODES = (2, 4, 5, 7)


def px_to_pt(pixels: float, dpi: float) -> float:
    """Convert a length in pixels to PDF points at the given resolution."""
    return pixels * POINTS_PER_INCH / dpi


@dataclass(frozen=True)
class Orientation:
    """
    EXIF orientation of an image together with its stored pixel size.

    Any code outside 1-8 behaves like the identity orientation. Properties
    that have no effect for a code return ``None``; consumers treat that as
    no offset, no rotation and a scale of 1.0 respectively.

    The placement transform is applied as: scale the unit image square to
    ``(mirror_factor * width, height)``, rotate counter-clockwise by
    ``rotate_angle`` degrees, then translate by ``(translate_x, translate_y)``.
    """
    code: int
    width: int
    height: int

    @property
    def effective_code(self) -> int:
        if 1 <= self.code <= 8:
            return self.code
        return DEFAULT_ORIENTATION

    @property
    def is_transposed(self) -> bool:
        return self.effective_code in TRANSPOSED_CODES

    @property
    def display_width(self) -> int:
        return self.height if self.is_transposed else self.width

    @property
    def display_height(self) -> int:
        return self.width if self.is_transposed else self.height

    @property
    def translate_x(self) -> Optional[int]:
        code = self.effective_code
        if code in (2, 3):
            return self.width
        if code in (5, 8):
            return self.height
        return None

    @property
    def translate_y(self) -> Optional[int]:
        code = self.effective_code
        if code in (3, 4):
            return self.height
        if code in (5, 6):
            return self.width
        return None

    @property
    def rotate_angle(self) -> Optional[float]:
        """Rotation in degrees, counter-clockwise in PDF user space."""
        code = self.effective_code
        if code in (3, 4):
            return 180.0
        if code in (5, 8):
            return 90.0
        if code in (6, 7):
            return 270.0
        return None

    @property
    def mirror_factor(self) -> Optional[float]:
        if self.effective_code in MIRRORED_CODES:
            return -1.0
        return None

    def to_dict(self):
        return {
            "code": self.code,
            "width": self.width,
            "height": self.height,
            "display_width": self.display_width,
            "display_height": self.display_height,
            "translate_x": self.translate_x,
            "translate_y": self.translate_y,
            "rotate_angle": self.rotate_angle,
            "mirror_factor": self.mirror_factor,
        }
