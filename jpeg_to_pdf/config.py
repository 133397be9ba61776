"""
Configuration and constants for the JPEG to PDF converter.

This module provides:
- Global constants (default DPI, default orientation, PDF units)
- The document configuration record
- Environment variable overrides
- Logging setup for command-line use
"""

import os
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

logger = logging.getLogger("jpeg_to_pdf")


# ============================================================================
# Constants
# ============================================================================

DEFAULT_DPI = 300.0

# EXIF orientation "top-left": pixels are stored the way they are displayed
DEFAULT_ORIENTATION = 1

# EXIF tag id of the Orientation field in the primary IFD
EXIF_ORIENTATION_TAG = 0x0112

# PDF user space unit is 1/72 inch
POINTS_PER_INCH = 72.0

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

JPEG_EXTENSIONS = ('.jpg', '.jpeg', '.jpe', '.jfif')


# ============================================================================
# Document Configuration
# ============================================================================

@dataclass
class DocumentConfig:
    """Settings for one PDF build.

    The order of ``images`` is the page order of the output document.
    Timestamps left as ``None`` are filled in when the document is built.
    """
    images: List[bytes] = field(default_factory=list)
    dpi: float = DEFAULT_DPI
    strip_exif: bool = False
    title: str = ""
    creation_date: Optional[datetime] = None
    modification_date: Optional[datetime] = None

    def __post_init__(self):
        self.dpi = validate_dpi(self.dpi)


def validate_dpi(dpi) -> float:
    """Return ``dpi`` as a float, rejecting non-positive values."""
    try:
        value = float(dpi)
    except (TypeError, ValueError):
        raise ValueError(f"DPI must be a number, got {dpi!r}")
    if not value > 0:
        raise ValueError(f"DPI must be positive, got {value}")
    return value


def get_config() -> DocumentConfig:
    """Get the default document configuration with environment overrides."""
    config = DocumentConfig()

    dpi = os.environ.get("JPEG_TO_PDF_DPI")
    if dpi:
        config.dpi = validate_dpi(dpi)

    if os.environ.get("JPEG_TO_PDF_STRIP_EXIF", "").lower() == "true":
        config.strip_exif = True

    title = os.environ.get("JPEG_TO_PDF_TITLE")
    if title is not None:
        config.title = title

    return config


# ============================================================================
# Logging
# ============================================================================

def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging for command-line use."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
