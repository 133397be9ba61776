"""
Document assembly for the JPEG to PDF converter.

Provides:
- JpegToPdf, a builder that collects images and settings and writes the PDF
- create_pdf_from_jpegs, the older single-call entry point

Images become pages in the order they were added. The first image that
cannot be used aborts the build and nothing is written to the output.
"""

import logging
import warnings
from datetime import datetime
from typing import BinaryIO, Iterable, List, Optional, Tuple

from ..config import DEFAULT_DPI, DocumentConfig, validate_dpi
from ..errors import Cause, JpegToPdfError, PdfWriteFailure
from .composer import ComposedPage, PageComposer
from .export import PdfDocumentWriter

logger = logging.getLogger(__name__)


class JpegToPdf:
    """
    Creates a PDF file from JPEG data.

    Setters return the builder so calls can be chained::

        JpegToPdf().add_image(one).add_image(two).set_dpi(150).create_pdf(out)
    """

    def __init__(self, config: Optional[DocumentConfig] = None):
        config = config or DocumentConfig()
        self.images: List[bytes] = list(config.images)
        self.dpi = config.dpi
        self.strip = config.strip_exif
        self.title = config.title
        self.creation_date = config.creation_date
        self.modification_date = config.modification_date

    @classmethod
    def from_config(cls, config: DocumentConfig) -> "JpegToPdf":
        return cls(config)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def add_image(self, image: bytes) -> "JpegToPdf":
        """Add an image to the end of the page list."""
        self.images.append(bytes(image))
        return self

    def add_images(self, images: Iterable[bytes]) -> "JpegToPdf":
        for image in images:
            self.add_image(image)
        return self

    def set_dpi(self, dpi: float) -> "JpegToPdf":
        """Set the DPI scaling of the PDF. Defaults to 300."""
        self.dpi = validate_dpi(dpi)
        return self

    def strip_exif(self, strip_exif: bool = True) -> "JpegToPdf":
        """Remove EXIF metadata from the embedded images."""
        self.strip = bool(strip_exif)
        return self

    def set_title(self, title: str) -> "JpegToPdf":
        self.title = title
        return self

    def set_creation_date(self, date: datetime) -> "JpegToPdf":
        self.creation_date = date
        return self

    def set_modification_date(self, date: datetime) -> "JpegToPdf":
        self.modification_date = date
        return self

    def to_config(self) -> DocumentConfig:
        return DocumentConfig(
            images=list(self.images),
            dpi=self.dpi,
            strip_exif=self.strip,
            title=self.title,
            creation_date=self.creation_date,
            modification_date=self.modification_date,
        )

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def _compose(self) -> Tuple[PdfDocumentWriter, List[ComposedPage]]:
        now = datetime.now()
        writer = PdfDocumentWriter(
            title=self.title,
            creation_date=self.creation_date or now,
            modification_date=self.modification_date or now,
        )
        composer = PageComposer(writer, dpi=self.dpi, strip_exif=self.strip)

        if not self.images:
            logger.warning("No images given, creating an empty PDF")

        pages = []
        for index, image in enumerate(self.images):
            try:
                pages.append(composer.compose(index, image))
            except Cause as cause:
                error = JpegToPdfError(index, cause)
                logger.debug(str(error))
                raise error from cause

        return writer, pages

    def create_pdf_bytes(self) -> bytes:
        """Build the PDF and return it as bytes."""
        writer, pages = self._compose()
        try:
            data = writer.to_bytes()
        except PdfWriteFailure as cause:
            raise JpegToPdfError(0, cause) from cause

        logger.info(f"Created PDF with {len(pages)} page(s) at {self.dpi:g} DPI")
        return data

    def create_pdf(self, out: BinaryIO) -> List[ComposedPage]:
        """
        Write the PDF to ``out``.

        The document is serialized in full before ``out`` receives it in a
        single ``write`` call.

        Args:
            out: Binary stream to receive the PDF data

        Returns:
            One ComposedPage per input image, in page order

        Raises:
            JpegToPdfError: If an image cannot be used or the PDF cannot be
                written. Nothing is written to ``out`` if an image fails.
        """
        writer, pages = self._compose()
        try:
            writer.write(out)
        except PdfWriteFailure as cause:
            raise JpegToPdfError(0, cause) from cause

        logger.info(f"Created PDF with {len(pages)} page(s) at {self.dpi:g} DPI")
        return pages


def create_pdf_from_jpegs(
    jpegs: List[bytes],
    out: BinaryIO,
    dpi: Optional[float] = None
) -> None:
    """
    Creates a PDF file from the provided JPEG data.

    Deprecated: use ``JpegToPdf().add_images(jpegs).create_pdf(out)``.

    ``dpi`` defaults to ``300.0``.
    """
    warnings.warn(
        "create_pdf_from_jpegs is deprecated, use JpegToPdf instead",
        DeprecationWarning,
        stacklevel=2,
    )
    job = JpegToPdf().add_images(jpegs)
    job.set_dpi(DEFAULT_DPI if dpi is None else dpi)
    job.create_pdf(out)
