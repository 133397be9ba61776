"""
JPEG container handling.

Splits a JPEG byte stream into its marker segments so the EXIF (APP1)
segment can be located or dropped. Everything from the start-of-scan marker
onwards is kept as a single opaque segment, so the compressed pixel data is
never touched.

Segment splitting is done by piexif.
"""

import logging
import struct
from dataclasses import dataclass
from typing import List, Optional

import piexif
# not re-exported by piexif; the version is pinned in pyproject.toml
from piexif._common import split_into_segments

from ..errors import ImageSectionsFailure

logger = logging.getLogger(__name__)


APP1_MARKER = b"\xff\xe1"
SOS_MARKER = b"\xff\xda"
EXIF_HEADER = b"Exif\x00\x00"


def is_exif_segment(segment: bytes) -> bool:
    """Check whether a marker segment is an APP1 segment holding EXIF data."""
    return segment[0:2] == APP1_MARKER and segment[4:10] == EXIF_HEADER


@dataclass
class ImageSections:
    """Marker segments of a JPEG file, in file order."""
    segments: List[bytes]

    @classmethod
    def from_bytes(cls, data: bytes) -> "ImageSections":
        """
        Parse a JPEG container.

        Args:
            data: Complete JPEG file contents

        Returns:
            ImageSections with one entry per segment

        Raises:
            ImageSectionsFailure: If the segment structure is malformed
        """
        try:
            segments = split_into_segments(data)
        except (piexif.InvalidImageDataError, struct.error, ValueError) as e:
            raise ImageSectionsFailure(str(e) or type(e).__name__) from e

        for segment in segments[1:]:
            if segment[0:1] != b"\xff":
                raise ImageSectionsFailure("invalid segment marker")

        if not segments[-1].startswith(SOS_MARKER):
            raise ImageSectionsFailure("missing start of scan")

        return cls(segments)

    @property
    def exif(self) -> Optional[bytes]:
        """Payload of the first EXIF segment, starting at ``Exif\\0\\0``."""
        for segment in self.segments:
            if is_exif_segment(segment):
                return segment[4:]
        return None

    @property
    def scan_data(self) -> bytes:
        """Start-of-scan segment through end of file."""
        return self.segments[-1]

    def without_exif(self) -> "ImageSections":
        removed = [s for s in self.segments if is_exif_segment(s)]
        if removed:
            logger.debug(f"Removing {len(removed)} EXIF segment(s)")
        return ImageSections([s for s in self.segments if not is_exif_segment(s)])

    def to_bytes(self) -> bytes:
        return b"".join(self.segments)
