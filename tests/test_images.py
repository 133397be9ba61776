"""
Tests for JPEG header decoding, container parsing and orientation lookup.
"""

import io
import struct

import piexif
import pytest
from PIL import Image


class TestDecodeImageInfo:
    """Test JPEG header decoding."""

    def test_rgb(self, jpeg_factory):
        from jpeg_to_pdf.utils.images import ColorFormat, decode_image_info

        data = jpeg_factory(width=64, height=48)
        info = decode_image_info(data)

        assert info.size == (64, 48)
        assert info.color_format is ColorFormat.RGB
        assert info.data is data
        assert info.exif is None

    def test_grayscale(self, jpeg_factory):
        from jpeg_to_pdf.utils.images import ColorFormat, decode_image_info

        info = decode_image_info(jpeg_factory(width=32, height=16, mode="L"))

        assert info.color_format is ColorFormat.GRAYSCALE
        assert info.color_format.color_space == "/DeviceGray"

    def test_cmyk(self, jpeg_factory):
        from jpeg_to_pdf.utils.images import ColorFormat, decode_image_info

        info = decode_image_info(jpeg_factory(width=32, height=16, mode="CMYK"))

        assert info.color_format is ColorFormat.CMYK
        assert info.color_format.color_space == "/DeviceCMYK"

    def test_not_an_image(self):
        from jpeg_to_pdf.errors import ImageInfoDecodeFailure
        from jpeg_to_pdf.utils.images import decode_image_info

        with pytest.raises(ImageInfoDecodeFailure) as exc_info:
            decode_image_info(b"definitely not a jpeg")

        assert str(exc_info.value).startswith("failed to read image info")

    def test_png_is_rejected(self):
        """Only JPEG streams can be embedded without re-encoding."""
        from jpeg_to_pdf.errors import ImageInfoDecodeFailure
        from jpeg_to_pdf.utils.images import decode_image_info

        buffer = io.BytesIO()
        Image.new("RGB", (8, 8), "white").save(buffer, format="PNG")

        with pytest.raises(ImageInfoDecodeFailure):
            decode_image_info(buffer.getvalue())

    def test_truncated_header(self, jpeg_factory):
        from jpeg_to_pdf.errors import ImageInfoDecodeFailure
        from jpeg_to_pdf.utils.images import decode_image_info

        with pytest.raises(ImageInfoDecodeFailure):
            decode_image_info(jpeg_factory()[:20])

    def test_multi_picture_jpeg(self):
        """A JPEG with an MPF index is read as its first frame."""
        from jpeg_to_pdf.utils.images import ColorFormat, decode_image_info

        first = Image.new("RGB", (64, 48), "white")
        preview = Image.new("RGB", (16, 12), "gray")
        buffer = io.BytesIO()
        first.save(buffer, format="MPO", save_all=True, append_images=[preview])

        with Image.open(io.BytesIO(buffer.getvalue())) as check:
            assert check.format == "MPO"

        info = decode_image_info(buffer.getvalue())

        assert info.size == (64, 48)
        assert info.color_format is ColorFormat.RGB

    def test_very_large_header(self, jpeg_factory, frame_size_patcher):
        """Only the header is read, so no pixel count limit applies."""
        from jpeg_to_pdf.utils.images import decode_image_info

        data = frame_size_patcher(jpeg_factory(), 20000, 20000)
        limit = Image.MAX_IMAGE_PIXELS

        info = decode_image_info(data)

        assert info.size == (20000, 20000)
        assert Image.MAX_IMAGE_PIXELS == limit


class TestImageSections:
    """Test JPEG container parsing."""

    def test_finds_exif(self, jpeg_factory):
        from jpeg_to_pdf.utils.sections import ImageSections

        exif = piexif.dump({"0th": {piexif.ImageIFD.Orientation: 6}})
        sections = ImageSections.from_bytes(jpeg_factory(exif=exif))

        assert sections.exif == exif

    def test_no_exif(self, jpeg_factory):
        from jpeg_to_pdf.utils.sections import ImageSections

        sections = ImageSections.from_bytes(jpeg_factory())

        assert sections.exif is None

    def test_round_trip_is_identical(self, jpeg_factory):
        from jpeg_to_pdf.utils.sections import ImageSections

        data = jpeg_factory(orientation=3)

        assert ImageSections.from_bytes(data).to_bytes() == data

    def test_without_exif_keeps_scan_data(self, jpeg_factory):
        from jpeg_to_pdf.utils.sections import ImageSections

        data = jpeg_factory(orientation=6)
        sections = ImageSections.from_bytes(data)
        stripped = sections.without_exif()

        assert stripped.exif is None
        assert stripped.scan_data == sections.scan_data
        assert len(stripped.to_bytes()) < len(data)
        assert ImageSections.from_bytes(stripped.to_bytes()).exif is None

    def test_not_a_jpeg(self):
        from jpeg_to_pdf.errors import ImageSectionsFailure
        from jpeg_to_pdf.utils.sections import ImageSections

        with pytest.raises(ImageSectionsFailure):
            ImageSections.from_bytes(b"GIF89a....")

    def test_segment_runs_past_end(self, jpeg_factory):
        from jpeg_to_pdf.errors import ImageSectionsFailure
        from jpeg_to_pdf.utils.sections import ImageSections

        data = jpeg_factory()
        # SOI followed by an APP0 segment claiming to be longer than the file
        broken = data[:4] + struct.pack(">H", 0xFFF0) + data[6:40]

        with pytest.raises(ImageSectionsFailure):
            ImageSections.from_bytes(broken)

    def test_missing_scan(self):
        from jpeg_to_pdf.errors import ImageSectionsFailure
        from jpeg_to_pdf.utils.sections import ImageSections

        with pytest.raises(ImageSectionsFailure):
            ImageSections.from_bytes(b"\xff\xd8\xff\xfe\x00\x04ab")

    def test_segments_in_file_order(self, jpeg_factory):
        from jpeg_to_pdf.utils.sections import ImageSections

        data = jpeg_factory(orientation=6)
        segments = ImageSections.from_bytes(data).segments

        assert segments[0] == b"\xff\xd8"
        assert all(s.startswith(b"\xff") for s in segments)
        assert sum(1 for s in segments if s.startswith(b"\xff\xe1")) == 1
        assert segments[-1].startswith(b"\xff\xda")


class TestResolveOrientation:
    """Test the orientation fallback chain."""

    def test_no_exif(self):
        from jpeg_to_pdf.utils.images import resolve_orientation

        assert resolve_orientation(None) == 1
        assert resolve_orientation(b"") == 1

    @pytest.mark.parametrize("code", range(1, 9))
    def test_reads_orientation(self, code):
        from jpeg_to_pdf.utils.images import resolve_orientation

        exif = piexif.dump({"0th": {piexif.ImageIFD.Orientation: code}})

        assert resolve_orientation(exif) == code

    def test_out_of_range_value_is_returned(self):
        """Range checking is left to the geometry."""
        from jpeg_to_pdf.utils.images import resolve_orientation

        exif = piexif.dump({"0th": {piexif.ImageIFD.Orientation: 9}})

        assert resolve_orientation(exif) == 9

    def test_tag_missing(self):
        from jpeg_to_pdf.utils.images import resolve_orientation

        exif = piexif.dump({"0th": {piexif.ImageIFD.Make: b"Camera"}})

        assert resolve_orientation(exif) == 1

    def test_unparseable_exif(self):
        from jpeg_to_pdf.utils.images import resolve_orientation

        assert resolve_orientation(b"Exif\x00\x00garbage that is not tiff") == 1
        assert resolve_orientation(b"Exif\x00\x00") == 1

    def test_short_entry(self, exif_entry_factory):
        from jpeg_to_pdf.utils.images import resolve_orientation

        exif = exif_entry_factory(3, 1, struct.pack(">H", 8))

        assert resolve_orientation(exif) == 8

    def test_ascii_entry(self, exif_entry_factory):
        from jpeg_to_pdf.utils.images import resolve_orientation

        exif = exif_entry_factory(2, 2, b"6\x00")

        assert resolve_orientation(exif) == 1

    def test_rational_entry(self, exif_entry_factory):
        from jpeg_to_pdf.utils.images import resolve_orientation

        exif = exif_entry_factory(5, 1, struct.pack(">LL", 6, 1))

        assert resolve_orientation(exif) == 1

    def test_long_entry(self, exif_entry_factory):
        from jpeg_to_pdf.utils.images import resolve_orientation

        exif = exif_entry_factory(4, 1, struct.pack(">L", 6))

        assert resolve_orientation(exif) == 6

    def test_signed_short_entry(self, exif_entry_factory):
        from jpeg_to_pdf.utils.images import resolve_orientation

        exif = exif_entry_factory(8, 1, struct.pack(">h", 6))

        assert resolve_orientation(exif) == 1

    def test_signed_long_entry(self, exif_entry_factory):
        from jpeg_to_pdf.utils.images import resolve_orientation

        exif = exif_entry_factory(9, 1, struct.pack(">l", 6))

        assert resolve_orientation(exif) == 1

    def test_multi_valued_short_entry(self, exif_entry_factory):
        from jpeg_to_pdf.utils.images import resolve_orientation

        exif = exif_entry_factory(3, 2, struct.pack(">HH", 3, 6))

        assert resolve_orientation(exif) == 3

    def test_from_jpeg_container(self, jpeg_factory):
        """The EXIF payload found in the container resolves directly."""
        from jpeg_to_pdf.utils.images import resolve_orientation
        from jpeg_to_pdf.utils.sections import ImageSections

        sections = ImageSections.from_bytes(jpeg_factory(orientation=5))

        assert resolve_orientation(sections.exif) == 5
