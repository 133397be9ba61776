#!/usr/bin/env python
"""
Command-line interface for the JPEG to PDF converter.

Usage:
    jpeg-to-pdf --output <output.pdf> <image_or_folder> [...] [options]

Examples:
    # Three photos, one page each
    jpeg-to-pdf -o album.pdf one.jpg two.jpg three.jpg

    # Every JPEG in a folder at 150 DPI, without EXIF metadata
    jpeg-to-pdf -o scans.pdf ./scans --dpi 150 --strip-exif
"""

import argparse
import logging
import sys
import time

from . import __version__
from .config import get_config, setup_logging
from .errors import JpegToPdfError, PdfWriteFailure
from .utils.assembler import JpegToPdf
from .utils.io import collect_inputs, load_jpeg, save_pdf

logger = logging.getLogger("jpeg_to_pdf")


def setup_argparser() -> argparse.ArgumentParser:
    """Create argument parser."""
    defaults = get_config()

    parser = argparse.ArgumentParser(
        prog="jpeg-to-pdf",
        description="Create a PDF from JPEG images without re-encoding them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Convert photos into a PDF, one page per image:
    jpeg-to-pdf -o album.pdf one.jpg two.jpg three.jpg

  Convert a folder of scans at 150 DPI and drop EXIF metadata:
    jpeg-to-pdf -o scans.pdf ./scans --dpi 150 --strip-exif
        """
    )

    parser.add_argument(
        "images",
        nargs="+",
        help="JPEG files or folders of JPEG files, in page order"
    )

    parser.add_argument(
        "--output", "-o",
        required=True,
        help="Output PDF file"
    )

    parser.add_argument(
        "--dpi",
        type=float,
        default=defaults.dpi,
        help=f"Pixel density used to size pages (default: {defaults.dpi:g})"
    )

    parser.add_argument(
        "--strip-exif",
        action="store_true",
        default=defaults.strip_exif,
        help="Remove EXIF metadata from the embedded images"
    )

    parser.add_argument(
        "--title",
        default=defaults.title,
        help="Document title"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-error output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def run(args) -> int:
    """Convert the images named in ``args`` into a PDF."""
    start_time = time.time()

    try:
        files = collect_inputs(args.images)
    except (FileNotFoundError, NotADirectoryError) as e:
        logger.error(str(e))
        return 1

    if not files:
        logger.error("No JPEG images to convert")
        return 1

    logger.info(f"Converting {len(files)} image(s)")

    job = JpegToPdf()
    for path in files:
        job.add_image(load_jpeg(path))

    try:
        job.set_dpi(args.dpi)
    except ValueError as e:
        logger.error(str(e))
        return 1

    job.strip_exif(args.strip_exif).set_title(args.title)

    try:
        data = job.create_pdf_bytes()
    except JpegToPdfError as e:
        if not isinstance(e.cause, PdfWriteFailure):
            logger.error(f"{e} ({files[e.index]})")
        else:
            logger.error(str(e))
        return 1

    output_path = save_pdf(data, args.output)

    if not args.quiet:
        elapsed = time.time() - start_time
        print(f"Wrote {output_path} ({len(files)} page(s), {len(data)} bytes) "
              f"in {elapsed:.2f}s")

    return 0


def main():
    """Main entry point."""
    parser = setup_argparser()
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        exit_code = run(args)
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
    except OSError as e:
        logger.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
