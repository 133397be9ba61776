"""
Shared fixtures for the JPEG to PDF tests.
"""

import io
import struct
import sys
from pathlib import Path

import numpy as np
import piexif
import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def make_jpeg(width=64, height=48, orientation=None, mode="RGB", exif=None):
    """Encode a small gradient image as JPEG, optionally with EXIF orientation."""
    x = np.linspace(0, 255, width, dtype=np.uint8)
    y = np.linspace(0, 255, height, dtype=np.uint8)
    gray = np.add.outer(y // 2, x // 2).astype(np.uint8)

    if mode == "L":
        img = Image.fromarray(gray)
    else:
        rgb = np.dstack([gray, np.flipud(gray), np.full_like(gray, 128)])
        img = Image.fromarray(rgb)
        if mode == "CMYK":
            img = img.convert("CMYK")

    if exif is None and orientation is not None:
        exif = piexif.dump({"0th": {piexif.ImageIFD.Orientation: orientation}})

    buffer = io.BytesIO()
    if exif is not None:
        img.save(buffer, format="JPEG", quality=90, exif=exif)
    else:
        img.save(buffer, format="JPEG", quality=90)
    return buffer.getvalue()


def exif_with_orientation_entry(field_type, count, value):
    """Build a big-endian EXIF payload whose only IFD0 entry is Orientation."""
    header = b"Exif\x00\x00" + b"MM\x00\x2a" + struct.pack(">L", 8)
    extra = b""
    if len(value) > 4:
        # value lives after the IFD: header(8) + count(2) + entry(12) + next(4)
        extra = value
        value = struct.pack(">L", 8 + 2 + 12 + 4)
    ifd = (
        struct.pack(">H", 1)
        + struct.pack(">HHL", 0x0112, field_type, count)
        + value.ljust(4, b"\x00")
        + struct.pack(">L", 0)
    )
    return header + ifd + extra


@pytest.fixture
def jpeg_factory():
    """Factory for synthetic JPEG files."""
    return make_jpeg


@pytest.fixture
def exif_entry_factory():
    """Factory for hand-built EXIF payloads."""
    return exif_with_orientation_entry


def with_frame_size(data, width, height):
    """Rewrite the baseline frame header (SOF0) to claim another size."""
    sof = data.index(b"\xff\xc0")
    # marker(2) + length(2) + precision(1), then height and width
    return data[:sof + 5] + struct.pack(">HH", height, width) + data[sof + 9:]


@pytest.fixture
def frame_size_patcher():
    """Factory for JPEGs whose header claims a different pixel size."""
    return with_frame_size
