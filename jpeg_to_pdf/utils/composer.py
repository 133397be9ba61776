"""
Page composition for the JPEG to PDF converter.

Turns one JPEG input into one PDF page:

1. Decode the header (size, color format)
2. Parse the container and find the EXIF segment
3. Resolve the EXIF orientation
4. Derive the placement geometry
5. Optionally strip EXIF from the embedded data
6. Size the page and place the untouched JPEG stream on it

Steps 1-5 finish before the page is created, so an image that fails leaves
the document unchanged.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict

from ..config import DEFAULT_DPI
from .export import ImagePlacement, PdfDocumentWriter
from .geometry import Orientation, px_to_pt
from .images import ImageDescriptor, decode_image_info, resolve_orientation
from .sections import ImageSections

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class PageSpec:
    """Page size in points."""
    width: float
    height: float

    @classmethod
    def from_orientation(cls, orientation: Orientation, dpi: float) -> "PageSpec":
        return cls(
            width=px_to_pt(orientation.display_width, dpi),
            height=px_to_pt(orientation.display_height, dpi),
        )


@dataclass
class ComposedPage:
    """A page that was added to the document."""
    index: int
    orientation: Orientation
    page: PageSpec
    placement: ImagePlacement

    @property
    def payload(self) -> bytes:
        return self.placement.data

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "orientation": self.orientation.to_dict(),
            "page_width": round(self.page.width, 4),
            "page_height": round(self.page.height, 4),
            "color_space": self.placement.color_format.color_space,
            "payload_bytes": len(self.placement.data),
        }


# ============================================================================
# Page Composer
# ============================================================================

class PageComposer:
    """
    Adds JPEG images to a document, one page per image.

    Args:
        writer: Document under construction
        dpi: Pixel density used to convert pixels to points
        strip_exif: If True, embed the JPEG without its EXIF segment
    """

    def __init__(
        self,
        writer: PdfDocumentWriter,
        dpi: float = DEFAULT_DPI,
        strip_exif: bool = False
    ):
        self.writer = writer
        self.dpi = dpi
        self.strip_exif = strip_exif

    def inspect(self, data: bytes) -> ImageDescriptor:
        """Decode the header and attach the EXIF segment, if any."""
        info = decode_image_info(data)
        sections = ImageSections.from_bytes(data)

        payload = data
        if self.strip_exif:
            payload = sections.without_exif().to_bytes()

        return ImageDescriptor(
            width=info.width,
            height=info.height,
            color_format=info.color_format,
            data=payload,
            exif=sections.exif,
        )

    def placement_for(self, image: ImageDescriptor, orientation: Orientation) -> ImagePlacement:
        """Build the embedded image and its transform from the orientation."""
        translate_x = orientation.translate_x or 0
        translate_y = orientation.translate_y or 0
        return ImagePlacement(
            width=image.width,
            height=image.height,
            color_format=image.color_format,
            data=image.data,
            translate_x=px_to_pt(translate_x, self.dpi),
            translate_y=px_to_pt(translate_y, self.dpi),
            rotate=orientation.rotate_angle or 0.0,
            scale_x=orientation.mirror_factor or 1.0,
            scale_y=1.0,
            dpi=self.dpi,
        )

    def compose(self, index: int, data: bytes) -> ComposedPage:
        """
        Add one JPEG to the document as a new page.

        Args:
            index: Position of the image in the input list
            data: Complete JPEG file contents

        Returns:
            ComposedPage describing the new page

        Raises:
            Cause: One of the errors.Cause subclasses if the image is unusable
        """
        image = self.inspect(data)

        code = resolve_orientation(image.exif)
        orientation = Orientation(code=code, width=image.width, height=image.height)
        logger.debug(
            f"Image {index}: {image.width}x{image.height} "
            f"{image.color_format.name}, orientation {code}"
        )

        page = PageSpec.from_orientation(orientation, self.dpi)
        placement = self.placement_for(image, orientation)
        self.writer.add_page(page.width, page.height, placement)

        return ComposedPage(
            index=index,
            orientation=orientation,
            page=page,
            placement=placement,
        )
