"""
I/O utilities for the JPEG to PDF converter.

Handles:
- Reading JPEG files and folders of JPEG files
- Writing the finished PDF
- Directory management
"""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from ..config import JPEG_EXTENSIONS

logger = logging.getLogger(__name__)


# ============================================================================
# Image Loading
# ============================================================================

def load_jpeg(image_path: Union[str, Path]) -> bytes:
    """
    Read a JPEG file as raw bytes.

    The data is returned unmodified; it is not checked to be a valid JPEG.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    image_path = Path(image_path)
    if not image_path.is_file():
        raise FileNotFoundError(f"Image file not found: {image_path}")

    data = image_path.read_bytes()
    logger.debug(f"Loaded image: {image_path}, {len(data)} bytes")
    return data


def list_jpegs_in_folder(folder_path: Union[str, Path]) -> List[Path]:
    """List the JPEG files in a folder, sorted by name."""
    folder_path = Path(folder_path)
    if not folder_path.is_dir():
        raise NotADirectoryError(f"Not a directory: {folder_path}")

    return sorted(
        f for f in folder_path.iterdir()
        if f.is_file() and f.suffix.lower() in JPEG_EXTENSIONS
    )


def collect_inputs(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """
    Expand input paths into an ordered list of JPEG files.

    Files are kept in the given order; folders are replaced by their JPEG
    files in name order.

    Raises:
        FileNotFoundError: If a path doesn't exist
    """
    files = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            files.extend(list_jpegs_in_folder(path))
        elif path.is_file():
            files.append(path)
        else:
            raise FileNotFoundError(f"Input not found: {path}")
    return files


# ============================================================================
# Output
# ============================================================================

def ensure_dir(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to the directory

    Returns:
        Path object for the directory
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_pdf(data: bytes, output_path: Union[str, Path]) -> Path:
    """
    Write PDF data to a file, creating parent directories.

    Returns:
        Path to the saved file
    """
    output_path = Path(output_path)
    ensure_dir(output_path.parent)
    output_path.write_bytes(data)
    logger.debug(f"Saved PDF: {output_path}")
    return output_path
