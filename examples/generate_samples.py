#!/usr/bin/env python
"""
Generate sample JPEGs covering every EXIF orientation.

Each sample stores its pixels transformed so that a viewer honouring the
EXIF orientation tag shows the same upright picture: an "F" shaped marker
in the top-left corner on a gradient background. Converting the samples
folder should give eight identical-looking pages.

Usage:
    python examples/generate_samples.py
    jpeg-to-pdf -o orientations.pdf examples/sample_images
"""

import json
from pathlib import Path

import numpy as np
import piexif
from PIL import Image

# Transposition applied to the upright picture to get the stored pixels.
# Inverse of what a viewer applies for each orientation code.
STORE_TRANSPOSE = {
    1: None,
    2: Image.Transpose.FLIP_LEFT_RIGHT,
    3: Image.Transpose.ROTATE_180,
    4: Image.Transpose.FLIP_TOP_BOTTOM,
    5: Image.Transpose.TRANSPOSE,
    6: Image.Transpose.ROTATE_90,
    7: Image.Transpose.TRANSVERSE,
    8: Image.Transpose.ROTATE_270,
}


def create_upright_image(width: int = 600, height: int = 400) -> Image.Image:
    """Create the picture as it should appear on the page."""
    x = np.linspace(60, 220, width, dtype=np.uint8)
    y = np.linspace(60, 220, height, dtype=np.uint8)
    background = np.add.outer(y // 2, x // 2).astype(np.uint8)
    img = np.dstack([background, background, np.full_like(background, 200)])

    # "F" marker: a stem plus two bars, asymmetric under every flip and turn
    img[40:240, 40:80] = (200, 30, 30)
    img[40:80, 40:200] = (200, 30, 30)
    img[120:160, 40:160] = (200, 30, 30)

    return Image.fromarray(img)


def create_sample(upright: Image.Image, orientation: int) -> Image.Image:
    """Store the upright picture as a camera with ``orientation`` would."""
    transpose = STORE_TRANSPOSE[orientation]
    return upright.transpose(transpose) if transpose is not None else upright.copy()


def create_expected_output(name: str, orientation: int, stored: Image.Image) -> dict:
    """Describe the page a sample should produce at 72 DPI."""
    width, height = stored.size
    transposed = orientation in (5, 6, 7, 8)
    return {
        "source_file": f"{name}.jpg",
        "orientation": orientation,
        "stored_size": [width, height],
        "page_size_pt": [height, width] if transposed else [width, height],
    }


def main():
    samples_dir = Path(__file__).parent / "sample_images"
    expected_dir = Path(__file__).parent / "expected_outputs"
    samples_dir.mkdir(exist_ok=True)
    expected_dir.mkdir(exist_ok=True)

    upright = create_upright_image()

    for orientation in sorted(STORE_TRANSPOSE):
        name = f"orientation_{orientation}"
        stored = create_sample(upright, orientation)
        exif = piexif.dump({"0th": {piexif.ImageIFD.Orientation: orientation}})

        img_path = samples_dir / f"{name}.jpg"
        stored.save(img_path, format="JPEG", quality=90, exif=exif)
        print(f"Created: {img_path}")

        expected_path = expected_dir / f"{name}.json"
        with open(expected_path, 'w') as f:
            json.dump(create_expected_output(name, orientation, stored), f, indent=2)
        print(f"Created: {expected_path}")

    print("\nSample generation complete!")


if __name__ == "__main__":
    main()
