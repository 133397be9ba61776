"""
JPEG to PDF
===========

Creates PDFs from JPEG images.

Images are embedded directly in the PDF, without any re-encoding. The EXIF
orientation of each image is honoured by rotating and mirroring the image on
its page instead of transforming the pixels.

Example::

    from pathlib import Path
    from jpeg_to_pdf import JpegToPdf

    job = JpegToPdf()
    for name in ("one.jpg", "two.jpg", "three.jpg"):
        job.add_image(Path(name).read_bytes())

    with open("out.pdf", "wb") as out:
        job.set_dpi(300).strip_exif(True).create_pdf(out)
"""

__version__ = "0.2.0"

from .config import DocumentConfig, DEFAULT_DPI, DEFAULT_ORIENTATION, get_config
from .errors import (
    Cause,
    ImageInfoDecodeFailure,
    MissingImageInfo,
    ImageSectionsFailure,
    PdfWriteFailure,
    JpegToPdfError,
)
from .utils.geometry import Orientation
from .utils.assembler import JpegToPdf, create_pdf_from_jpegs

__all__ = [
    "DocumentConfig", "DEFAULT_DPI", "DEFAULT_ORIENTATION", "get_config",
    "Cause", "ImageInfoDecodeFailure", "MissingImageInfo",
    "ImageSectionsFailure", "PdfWriteFailure", "JpegToPdfError",
    "Orientation", "JpegToPdf", "create_pdf_from_jpegs",
]
