"""
Utility modules for the JPEG to PDF converter.
"""

from .io import load_jpeg, list_jpegs_in_folder, collect_inputs, save_pdf, ensure_dir
from .geometry import Orientation, px_to_pt
from .images import ColorFormat, ImageDescriptor, decode_image_info, resolve_orientation
from .sections import ImageSections
from .export import ImagePlacement, PdfDocumentWriter
from .composer import PageComposer, PageSpec, ComposedPage
from .assembler import JpegToPdf, create_pdf_from_jpegs

__all__ = [
    # IO
    "load_jpeg", "list_jpegs_in_folder", "collect_inputs", "save_pdf", "ensure_dir",
    # Geometry
    "Orientation", "px_to_pt",
    # Images
    "ColorFormat", "ImageDescriptor", "decode_image_info", "resolve_orientation",
    "ImageSections",
    # Export
    "ImagePlacement", "PdfDocumentWriter",
    # Assembly
    "PageComposer", "PageSpec", "ComposedPage",
    "JpegToPdf", "create_pdf_from_jpegs",
]
