"""Image decoding, validation and terminal rendering helpers built on Pillow."""

from __future__ import annotations

from functools import lru_cache
import io
import logging
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError
from rich.color import Color
from rich.style import Style as RichStyle
from rich.text import Text

from .exceptions import InvalidInputError
from .models import ImageRef

LOGGER = logging.getLogger(__name__)

IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".tiff", ".tif"}
)
DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024
HALF_BLOCK = "▀"
DIVIDER_RGB = (255, 255, 255)


def decoded_mime_type(data: bytes) -> str:
    """Fully decode ``data`` with Pillow and return its MIME type.

    ``verify()`` only checks structure, so the pixels are loaded from a
    second handle to catch truncated files.
    """
    try:
        with Image.open(io.BytesIO(data)) as header:
            image_format = header.format
            header.verify()
        with Image.open(io.BytesIO(data)) as decoded:
            decoded.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise InvalidInputError("The selected file is not a readable image.") from exc
    return Image.MIME.get(image_format or "", "") or "image/jpeg"


def decode_upload(file_bytes: bytes, *, max_bytes: int = DEFAULT_MAX_IMAGE_BYTES) -> ImageRef:
    """Validate raw upload bytes and wrap them as an ImageRef.

    The bytes are kept as-is; Pillow is only used to prove they decode
    and to learn the MIME type.
    """
    if not file_bytes:
        raise InvalidInputError("The selected file is empty.")
    if len(file_bytes) > max_bytes:
        max_mb = max_bytes / (1024 * 1024)
        raise InvalidInputError(f"Image too large (max {max_mb:.1f}MB).")
    mime_type = decoded_mime_type(file_bytes)
    return ImageRef(data=bytes(file_bytes), mime_type=mime_type)


def validate_image_path(
    raw_path: str, *, max_bytes: int = DEFAULT_MAX_IMAGE_BYTES
) -> Path:
    """Resolve ``raw_path`` and check existence, extension and size."""
    try:
        resolved = Path(raw_path).expanduser().resolve()
    except (OSError, RuntimeError) as exc:
        raise InvalidInputError(f"Invalid image path: {raw_path}") from exc

    if not resolved.exists():
        raise InvalidInputError(f"Image not found: {raw_path}")
    if not resolved.is_file():
        raise InvalidInputError(f"Not a file: {raw_path}")
    if resolved.suffix.lower() not in IMAGE_EXTENSIONS:
        exts = ", ".join(sorted(IMAGE_EXTENSIONS))
        raise InvalidInputError(f"Invalid image type. Allowed: {exts}")
    try:
        size = resolved.stat().st_size
    except OSError as exc:
        raise InvalidInputError(f"Unable to read image size: {raw_path}") from exc
    if size > max_bytes:
        max_mb = max_bytes / (1024 * 1024)
        raise InvalidInputError(f"Image too large (max {max_mb:.1f}MB).")
    return resolved


def read_image_file(raw_path: str, *, max_bytes: int = DEFAULT_MAX_IMAGE_BYTES) -> bytes:
    """Read a validated image file fully into memory."""
    path = validate_image_path(raw_path, max_bytes=max_bytes)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise InvalidInputError(f"Unable to read image: {raw_path}") from exc


@lru_cache(maxsize=8)
def open_image(ref: ImageRef) -> Image.Image:
    """Decode an ImageRef into an RGB Pillow image (cached by value)."""
    with Image.open(io.BytesIO(ref.data)) as raw:
        return ImageOps.exif_transpose(raw).convert("RGB")


def fit_to_grid(image: Image.Image, columns: int, rows: int) -> Image.Image:
    """Cover-fit an image to a cell grid where each cell holds two pixel rows."""
    return ImageOps.fit(image, (max(1, columns), max(1, rows * 2)))


def compose_wipe(
    before: Image.Image,
    after: Image.Image,
    divider_percent: float,
    size: tuple[int, int],
    *,
    draw_divider: bool = True,
) -> Image.Image:
    """Return ``after`` with the left ``divider_percent`` replaced by ``before``."""
    width, height = size
    composite = ImageOps.fit(after, (width, height)).copy()
    fitted_before = ImageOps.fit(before, (width, height))
    split_x = int(round(width * max(0.0, min(100.0, divider_percent)) / 100.0))
    if split_x > 0:
        composite.paste(fitted_before.crop((0, 0, split_x, height)), (0, 0))
    if draw_divider:
        line_x = min(max(split_x, 0), width - 1)
        for y in range(height):
            composite.putpixel((line_x, y), DIVIDER_RGB)
    return composite


def to_halfblock_text(image: Image.Image) -> Text:
    """Render an RGB image as rows of upper-half blocks, two pixels per cell."""
    rgb = image.convert("RGB")
    width, height = rgb.size
    pixels = rgb.load()
    text = Text(no_wrap=True, overflow="crop")
    for y in range(0, height - 1, 2):
        for x in range(width):
            top = pixels[x, y]
            bottom = pixels[x, y + 1]
            text.append(
                HALF_BLOCK,
                RichStyle(
                    color=Color.from_rgb(*top[:3]),
                    bgcolor=Color.from_rgb(*bottom[:3]),
                ),
            )
        if y + 2 < height - 1:
            text.append("\n")
    return text


def render_image(ref: ImageRef, columns: int, rows: int) -> Text:
    """Render a single image to fill a ``columns`` x ``rows`` cell grid."""
    return to_halfblock_text(fit_to_grid(open_image(ref), columns, rows))


def render_wipe(
    before: ImageRef, after: ImageRef, divider_percent: float, columns: int, rows: int
) -> Text:
    """Render the before/after wipe composite for a cell grid."""
    size = (max(1, columns), max(1, rows * 2))
    composite = compose_wipe(open_image(before), open_image(after), divider_percent, size)
    return to_halfblock_text(composite)
