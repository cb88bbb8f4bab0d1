"""Tests for upload validation and half-block rendering."""

from __future__ import annotations

import io
from pathlib import Path
import tempfile
import unittest

from PIL import Image

from lumina_design.exceptions import InvalidInputError
from lumina_design.imaging import (
    DIVIDER_RGB,
    HALF_BLOCK,
    compose_wipe,
    decode_upload,
    decoded_mime_type,
    fit_to_grid,
    read_image_file,
    render_image,
    render_wipe,
    to_halfblock_text,
    validate_image_path,
)
from lumina_design.models import ImageRef

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def _encoded(color: tuple[int, int, int], size: tuple[int, int] = (20, 10), fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


class DecodeUploadTests(unittest.TestCase):
    """Validate byte-level upload checks."""

    def test_png_mime_type_detected(self) -> None:
        ref = decode_upload(_encoded(RED))
        self.assertEqual(ref.mime_type, "image/png")

    def test_jpeg_mime_type_detected(self) -> None:
        ref = decode_upload(_encoded(RED, fmt="JPEG"))
        self.assertEqual(ref.mime_type, "image/jpeg")

    def test_bytes_kept_verbatim(self) -> None:
        raw = _encoded(BLUE)
        self.assertEqual(decode_upload(raw).data, raw)

    def test_empty_bytes_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            decode_upload(b"")

    def test_garbage_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            decode_upload(b"\x00\x01not-an-image")

    def test_truncated_jpeg_rejected(self) -> None:
        buffer = io.BytesIO()
        Image.effect_noise((256, 256), 64).convert("RGB").save(
            buffer, format="JPEG", quality=95
        )
        data = buffer.getvalue()
        with self.assertRaises(InvalidInputError):
            decode_upload(data[: int(len(data) * 0.6)])

    def test_decoded_mime_type_reports_format(self) -> None:
        self.assertEqual(decoded_mime_type(_encoded(BLUE, fmt="GIF")), "image/gif")
        with self.assertRaises(InvalidInputError):
            decoded_mime_type(b"not-an-image")

    def test_oversized_upload_rejected(self) -> None:
        raw = _encoded(RED)
        with self.assertRaises(InvalidInputError) as ctx:
            decode_upload(raw, max_bytes=len(raw) - 1)
        self.assertIn("too large", str(ctx.exception))


class ImagePathTests(unittest.TestCase):
    """Validate path resolution and file reads."""

    def test_missing_file_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            validate_image_path("/definitely/not/here.png")

    def test_directory_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            folder = Path(temp_dir) / "photos.png"
            folder.mkdir()
            with self.assertRaises(InvalidInputError):
                validate_image_path(str(folder))

    def test_unsupported_extension_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "notes.txt"
            path.write_text("hello", encoding="utf-8")
            with self.assertRaises(InvalidInputError):
                validate_image_path(str(path))

    def test_read_image_file_returns_bytes(self) -> None:
        raw = _encoded(RED)
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "room.PNG"
            path.write_bytes(raw)
            self.assertEqual(read_image_file(str(path)), raw)

    def test_read_image_file_enforces_size(self) -> None:
        raw = _encoded(RED)
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "room.png"
            path.write_bytes(raw)
            with self.assertRaises(InvalidInputError):
                read_image_file(str(path), max_bytes=10)


class RenderingTests(unittest.TestCase):
    """Validate compositing and terminal rendering."""

    def test_fit_to_grid_doubles_rows(self) -> None:
        image = Image.new("RGB", (100, 50), RED)
        self.assertEqual(fit_to_grid(image, 10, 4).size, (10, 8))

    def test_compose_wipe_places_before_on_the_left(self) -> None:
        before = Image.new("RGB", (40, 20), RED)
        after = Image.new("RGB", (40, 20), BLUE)
        composite = compose_wipe(before, after, 25.0, (40, 20), draw_divider=False)
        self.assertEqual(composite.getpixel((0, 0)), RED)
        self.assertEqual(composite.getpixel((9, 10)), RED)
        self.assertEqual(composite.getpixel((10, 10)), BLUE)
        self.assertEqual(composite.getpixel((39, 19)), BLUE)

    def test_compose_wipe_extremes(self) -> None:
        before = Image.new("RGB", (10, 4), RED)
        after = Image.new("RGB", (10, 4), BLUE)
        all_after = compose_wipe(before, after, 0.0, (10, 4), draw_divider=False)
        all_before = compose_wipe(before, after, 100.0, (10, 4), draw_divider=False)
        self.assertEqual(set(all_after.getdata()), {BLUE})
        self.assertEqual(set(all_before.getdata()), {RED})

    def test_compose_wipe_draws_divider(self) -> None:
        before = Image.new("RGB", (10, 4), RED)
        after = Image.new("RGB", (10, 4), BLUE)
        composite = compose_wipe(before, after, 50.0, (10, 4))
        self.assertEqual(composite.getpixel((5, 0)), DIVIDER_RGB)
        self.assertEqual(composite.getpixel((5, 3)), DIVIDER_RGB)

    def test_halfblock_text_shape(self) -> None:
        text = to_halfblock_text(Image.new("RGB", (6, 4), RED))
        lines = text.plain.split("\n")
        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[0], HALF_BLOCK * 6)

    def test_render_image_fills_grid(self) -> None:
        ref = ImageRef(_encoded(RED), "image/png")
        lines = render_image(ref, 12, 3).plain.split("\n")
        self.assertEqual(len(lines), 3)
        self.assertTrue(all(len(line) == 12 for line in lines))

    def test_render_wipe_fills_grid(self) -> None:
        before = ImageRef(_encoded(RED), "image/png")
        after = ImageRef(_encoded(BLUE, size=(30, 30)), "image/png")
        lines = render_wipe(before, after, 50.0, 8, 2).plain.split("\n")
        self.assertEqual(len(lines), 2)
        self.assertEqual(len(lines[0]), 8)


if __name__ == "__main__":
    unittest.main()
