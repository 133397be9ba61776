"""
JPEG image inspection utilities.

Provides:
- Header decoding (pixel size and color format) without decoding pixels
- EXIF orientation lookup with a fallback to the default orientation

Pillow reads only the JPEG header when an image is opened, so decoding the
image info never touches the compressed scan data. Files with an MPF
multi-picture index (MPO) are read as their first frame, which is an
ordinary JPEG. EXIF tags are decoded with Pillow's TIFF directory reader,
which keeps the field type of every tag.
"""

import io
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from PIL import Image, JpegImagePlugin, TiffImagePlugin, TiffTags

from ..config import DEFAULT_ORIENTATION, EXIF_ORIENTATION_TAG
from ..errors import ImageInfoDecodeFailure, MissingImageInfo

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes and Enums
# ============================================================================

class ColorFormat(Enum):
    """Color formats a baseline JPEG can carry, with their PDF color spaces."""
    GRAYSCALE = "/DeviceGray"
    RGB = "/DeviceRGB"
    CMYK = "/DeviceCMYK"

    @property
    def color_space(self) -> str:
        return self.value


# Pillow image modes for JPEG files
PIL_MODES = {
    "L": ColorFormat.GRAYSCALE,
    "RGB": ColorFormat.RGB,
    "CMYK": ColorFormat.CMYK,
}


@dataclass(frozen=True)
class ImageDescriptor:
    """Decoded header information of one JPEG input."""
    width: int
    height: int
    color_format: ColorFormat
    data: bytes
    exif: Optional[bytes] = None

    @property
    def size(self):
        return (self.width, self.height)


# ============================================================================
# Header Decoding
# ============================================================================

@contextmanager
def unlimited_image_size():
    """Open images without Pillow's decompression bomb pixel limit."""
    limit = Image.MAX_IMAGE_PIXELS
    Image.MAX_IMAGE_PIXELS = None
    try:
        yield
    finally:
        Image.MAX_IMAGE_PIXELS = limit


def decode_image_info(data: bytes) -> ImageDescriptor:
    """
    Read pixel size and color format from a JPEG header.

    Args:
        data: Complete JPEG file contents (not modified)

    Returns:
        ImageDescriptor with ``exif`` left unset

    Raises:
        ImageInfoDecodeFailure: If the data is not a readable JPEG
        MissingImageInfo: If the header decodes but yields no usable info
    """
    try:
        with unlimited_image_size(), Image.open(io.BytesIO(data)) as img:
            is_jpeg = isinstance(img, JpegImagePlugin.JpegImageFile)
            img_format = img.format
            width, height = img.size
            mode = img.mode
    except (OSError, SyntaxError, ValueError) as e:
        raise ImageInfoDecodeFailure(str(e) or type(e).__name__) from e

    # MpoImageFile is a JpegImageFile
    if not is_jpeg:
        raise ImageInfoDecodeFailure(f"not a JPEG image ({img_format})")

    color_format = PIL_MODES.get(mode)
    if color_format is None or width <= 0 or height <= 0:
        logger.debug(f"Unusable JPEG header: mode={mode}, size={width}x{height}")
        raise MissingImageInfo()

    return ImageDescriptor(
        width=width,
        height=height,
        color_format=color_format,
        data=data,
    )


# ============================================================================
# Orientation Lookup
# ============================================================================

EXIF_HEADER = b"Exif\x00\x00"

# TIFF field types that hold unsigned integers
UNSIGNED_INT_TYPES = (TiffTags.SHORT, TiffTags.LONG)


def read_primary_ifd(exif: bytes) -> TiffImagePlugin.ImageFileDirectory_v2:
    """
    Load the primary IFD (IFD0) of an EXIF payload.

    Args:
        exif: Raw EXIF payload, with or without the ``Exif\\0\\0`` header

    Returns:
        Tag directory that keeps the TIFF field type of every tag

    Raises:
        SyntaxError: If the payload is not a TIFF structure
    """
    if exif.startswith(EXIF_HEADER):
        exif = exif[len(EXIF_HEADER):]

    fp = io.BytesIO(exif)
    ifd = TiffImagePlugin.ImageFileDirectory_v2(fp.read(8))
    fp.seek(ifd.next)
    ifd.load(fp)
    return ifd


def resolve_orientation(exif: Optional[bytes]) -> int:
    """
    Get the EXIF orientation code, falling back to the default orientation.

    Never raises. A missing segment, unparseable EXIF data, a missing tag or
    a tag that is not stored as an unsigned integer (SHORT or LONG) all yield
    ``DEFAULT_ORIENTATION``. Values outside 1-8 are returned unchanged.

    Args:
        exif: Raw EXIF payload (``Exif\\0\\0`` followed by a TIFF structure)

    Returns:
        Orientation code
    """
    if not exif:
        return DEFAULT_ORIENTATION

    try:
        ifd = read_primary_ifd(exif)
        field_type = ifd.tagtype.get(EXIF_ORIENTATION_TAG)
        value = ifd[EXIF_ORIENTATION_TAG] if field_type is not None else None
    except Exception as e:
        logger.debug(f"Could not parse EXIF data, using default orientation: {e}")
        return DEFAULT_ORIENTATION

    if value is None:
        return DEFAULT_ORIENTATION

    if field_type not in UNSIGNED_INT_TYPES:
        logger.debug(f"Ignoring orientation stored as TIFF type {field_type}: {value!r}")
        return DEFAULT_ORIENTATION

    # fields with more than one value come back as tuples
    if isinstance(value, tuple):
        value = value[0] if value else None

    if not isinstance(value, int):
        logger.debug(f"Ignoring non-integer orientation value: {value!r}")
        return DEFAULT_ORIENTATION

    return value
