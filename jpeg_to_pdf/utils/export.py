"""
PDF export module.

Provides:
- Image placement requests (embedded JPEG plus its page transform)
- A document writer that serializes pages with PyPDF2

JPEG data is embedded as an image XObject with the ``/DCTDecode`` filter, so
the compressed stream is copied into the PDF without re-encoding.
"""

import io
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import BinaryIO, List, Optional

from PyPDF2 import PdfWriter, PageObject
from PyPDF2.errors import PyPdfError
from PyPDF2.generic import (
    DecodedStreamObject,
    DictionaryObject,
    NameObject,
    NumberObject,
)

from ..config import DEFAULT_DPI
from ..errors import PdfWriteFailure
from .geometry import px_to_pt
from .images import ColorFormat

logger = logging.getLogger(__name__)


IMAGE_NAME = "/Im0"
BITS_PER_COMPONENT = 8


def datetime_to_pdfdate(dt: datetime) -> str:
    """Format a datetime as a PDF date string (``D:YYYYMMDDHHmmSS``)."""
    date = dt.strftime("D:%Y%m%d%H%M%S")
    offset = dt.utcoffset()
    if offset is None:
        return date
    if offset == timedelta(0):
        return date + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = int(abs(offset).total_seconds()) // 60
    return f"{date}{sign}{minutes // 60:02d}'{minutes % 60:02d}'"


def _num(value: float) -> str:
    # avoid "-0.0000" and float noise from trig functions
    if abs(value) < 0.00005:
        value = 0.0
    return "%0.4f" % value


# ============================================================================
# Image Placement
# ============================================================================

@dataclass
class ImagePlacement:
    """
    An embedded JPEG and where it goes on its page.

    ``width``/``height`` are the stored pixel dimensions; translation is in
    points, rotation in degrees counter-clockwise.
    """
    width: int
    height: int
    color_format: ColorFormat
    data: bytes
    translate_x: float = 0.0
    translate_y: float = 0.0
    rotate: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    dpi: float = DEFAULT_DPI

    @property
    def image_width_pt(self) -> float:
        return px_to_pt(self.width, self.dpi)

    @property
    def image_height_pt(self) -> float:
        return px_to_pt(self.height, self.dpi)

    def content_stream(self, name: str = IMAGE_NAME) -> bytes:
        """
        Build the page content stream that draws the image.

        PDF maps an image to the unit square, so the last matrix scales it to
        its size in points; mirroring is a negative x scale. Each ``cm``
        applies to what follows it, so the image is scaled, then rotated,
        then translated.
        """
        ops = ["q"]

        if self.translate_x or self.translate_y:
            ops.append(f"1 0 0 1 {_num(self.translate_x)} {_num(self.translate_y)} cm")

        if self.rotate:
            angle = math.radians(self.rotate)
            cos, sin = math.cos(angle), math.sin(angle)
            ops.append(f"{_num(cos)} {_num(sin)} {_num(-sin)} {_num(cos)} 0 0 cm")

        width = self.image_width_pt * self.scale_x
        height = self.image_height_pt * self.scale_y
        ops.append(f"{_num(width)} 0 0 {_num(height)} 0 0 cm")

        ops.append(f"{name} Do")
        ops.append("Q")
        return "\n".join(ops).encode("ascii")

    def to_xobject(self) -> DecodedStreamObject:
        """Image XObject carrying the JPEG data unchanged."""
        image = DecodedStreamObject()
        image.set_data(self.data)
        image.update({
            NameObject("/Type"): NameObject("/XObject"),
            NameObject("/Subtype"): NameObject("/Image"),
            NameObject("/Width"): NumberObject(self.width),
            NameObject("/Height"): NumberObject(self.height),
            NameObject("/ColorSpace"): NameObject(self.color_format.color_space),
            NameObject("/BitsPerComponent"): NumberObject(BITS_PER_COMPONENT),
            NameObject("/Filter"): NameObject("/DCTDecode"),
        })
        return image


# ============================================================================
# Document Writer
# ============================================================================

class PdfDocumentWriter:
    """
    Collects pages and serializes them into a PDF document.

    Each page holds exactly one image placement.
    """

    def __init__(
        self,
        title: str = "",
        creation_date: Optional[datetime] = None,
        modification_date: Optional[datetime] = None
    ):
        now = datetime.now()
        self.title = title
        self.creation_date = creation_date or now
        self.modification_date = modification_date or now

        self._writer = PdfWriter()
        self._page_sizes: List[tuple] = []

    @property
    def page_count(self) -> int:
        return len(self._page_sizes)

    def add_page(self, width: float, height: float, placement: ImagePlacement) -> int:
        """
        Append a page of ``width`` x ``height`` points showing one image.

        Returns:
            Zero-based index of the new page
        """
        # PyPDF2 3.x only exposes _add_object for registering indirect objects
        image_ref = self._writer._add_object(placement.to_xobject())

        content = DecodedStreamObject()
        content.set_data(placement.content_stream(IMAGE_NAME))
        content_ref = self._writer._add_object(content)

        page = PageObject.create_blank_page(None, width, height)
        page[NameObject("/Resources")] = DictionaryObject({
            NameObject("/XObject"): DictionaryObject({
                NameObject(IMAGE_NAME): image_ref,
            }),
        })
        page[NameObject("/Contents")] = content_ref
        self._writer.add_page(page)

        self._page_sizes.append((width, height))
        logger.debug(f"Added page {self.page_count}: {width:.2f} x {height:.2f} pt")
        return self.page_count - 1

    def write(self, stream: BinaryIO) -> None:
        """
        Serialize the document to a binary stream.

        Raises:
            PdfWriteFailure: If serialization or the write fails
        """
        data = self.to_bytes()
        try:
            stream.write(data)
        except (OSError, ValueError) as e:
            raise PdfWriteFailure(str(e)) from e

    def to_bytes(self) -> bytes:
        """Serialize the document and return the PDF bytes."""
        self._writer.add_metadata({
            "/Title": self.title,
            "/CreationDate": datetime_to_pdfdate(self.creation_date),
            "/ModDate": datetime_to_pdfdate(self.modification_date),
        })

        buffer = io.BytesIO()
        try:
            self._writer.write(buffer)
        except (PyPdfError, OSError, ValueError, TypeError) as e:
            raise PdfWriteFailure(str(e) or type(e).__name__) from e

        return buffer.getvalue()
