"""
Errors raised while creating a PDF from JPEGs.

Every failure is reported as a :class:`JpegToPdfError` that names the index
of the offending image and carries one of the :class:`Cause` subclasses.
The library exception that triggered the cause, if any, is chained as
``__cause__``.
"""

from typing import Optional


class Cause(Exception):
    """Things that might go wrong while creating a PDF from JPEGs."""

    message = "failed to create PDF"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(self.describe())

    def describe(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class ImageInfoDecodeFailure(Cause):
    """The JPEG header could not be decoded."""
    message = "failed to read image info"


class MissingImageInfo(Cause):
    """The decoder succeeded but reported no usable image info."""
    message = "unexpectedly failed to read image info"


class ImageSectionsFailure(Cause):
    """The JPEG container (segment structure) is malformed."""
    message = "failed to read image sections"


class PdfWriteFailure(Cause):
    """The finished document could not be serialized."""
    message = "failed to write PDF"


class JpegToPdfError(Exception):
    """An error that might occur while creating a PDF from JPEGs."""

    def __init__(self, index: int, cause: Cause):
        self.index = index
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        # no image is to blame once every page has been composed
        if isinstance(self.cause, PdfWriteFailure):
            return self.cause.describe()
        return f"error with JPEG index {self.index}: {self.cause.describe()}"

    def __repr__(self) -> str:
        return f"JpegToPdfError(index={self.index}, cause={self.cause!r})"
