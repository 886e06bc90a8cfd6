"""Upload validation, previews and best-effort compression before images go to Gemini."""

import base64
import io
from dataclasses import dataclass

from PIL import Image

from autofit.config import (
    ALLOWED_IMAGE_TYPES,
    COMPRESSION_MIN_WIDTH,
    COMPRESSION_TARGET,
    COMPRESSION_THRESHOLD,
    MAX_FILE_SIZE,
)
from autofit.errors import RequestError
from autofit.logging import get_logger

logger = get_logger(__name__)

QUALITY_STEP = 10
QUALITY_FLOOR = 20
RESIZED_QUALITY_FLOOR = 60
SCALE = 0.8


@dataclass(frozen=True)
class ImageBuffer:
    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class CompressionResult:
    buffer: ImageBuffer
    original_size: int
    compressed_size: int
    # still over the target after reaching the quality/width floors
    degraded: bool = False


def validate_upload(
    data: bytes | None,
    mime_type: str | None,
    max_size: int = MAX_FILE_SIZE,
) -> ImageBuffer:
    """Check an uploaded file before anything else touches it."""
    if not data:
        raise RequestError("MISSING_FILE", "No image data uploaded")
    if mime_type not in ALLOWED_IMAGE_TYPES:
        raise RequestError("INVALID_FILE_TYPE", f"Unsupported content type: {mime_type}")
    if len(data) > max_size:
        raise RequestError("FILE_TOO_LARGE", f"{len(data)} bytes exceeds limit of {max_size}")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise RequestError("INVALID_FILE_TYPE", f"Not a readable image: {e}") from e

    return ImageBuffer(data=data, mime_type=mime_type)


def data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def preview_data_url(buffer: ImageBuffer) -> str:
    """Inline preview of an accepted upload."""
    return data_url(buffer.data, buffer.mime_type)


def _encode_webp(img: Image.Image, quality: int, size: tuple[int, int] | None = None) -> bytes:
    if size is not None:
        img = img.copy()
        # thumbnail() fits inside the box and never enlarges
        img.thumbnail(size, Image.LANCZOS)
    buf = io.BytesIO()
    img.save(buf, format="WEBP", quality=quality)
    return buf.getvalue()


def _scaled(width: int, height: int) -> tuple[int, int]:
    return max(1, int(width * SCALE)), max(1, int(height * SCALE))


def compress_image(
    buffer: ImageBuffer,
    max_size_bytes: int = COMPRESSION_TARGET,
    quality: int = 80,
) -> CompressionResult:
    """
    Shrink images of 1MB or more to roughly max_size_bytes as WebP.

    Quality drops in steps of 10 down to 20 first. If that is not enough the
    image is scaled to 80% repeatedly (quality at least 60) until it fits or the
    width reaches 400px. Smaller inputs, and any input Pillow chokes on, are
    returned untouched.
    """
    original_size = buffer.size
    if original_size < COMPRESSION_THRESHOLD:
        return CompressionResult(buffer=buffer, original_size=original_size, compressed_size=original_size)

    try:
        with Image.open(io.BytesIO(buffer.data)) as opened:
            has_alpha = "A" in opened.getbands() or "transparency" in opened.info
            img = opened.convert("RGBA" if has_alpha else "RGB")

        width, height = img.size
        current_quality = quality
        encoded = _encode_webp(img, current_quality)

        while len(encoded) > max_size_bytes and current_quality > QUALITY_FLOOR:
            current_quality -= QUALITY_STEP
            encoded = _encode_webp(img, current_quality)

        if len(encoded) > max_size_bytes:
            width, height = _scaled(width, height)
            encoded = _encode_webp(img, current_quality, (width, height))

            while len(encoded) > max_size_bytes and width > COMPRESSION_MIN_WIDTH:
                width, height = _scaled(width, height)
                encoded = _encode_webp(img, max(current_quality, RESIZED_QUALITY_FLOOR), (width, height))
    except Exception:
        logger.warning("image_compression_failed", original_size=original_size, exc_info=True)
        return CompressionResult(buffer=buffer, original_size=original_size, compressed_size=original_size)

    compressed_size = len(encoded)
    logger.info(
        "image_compressed",
        original_size=original_size,
        compressed_size=compressed_size,
        ratio=round(compressed_size / original_size, 3),
        quality=current_quality,
        width=width,
    )
    return CompressionResult(
        buffer=ImageBuffer(data=encoded, mime_type="image/webp"),
        original_size=original_size,
        compressed_size=compressed_size,
        degraded=compressed_size > max_size_bytes,
    )
