"""Image preprocessing to bound the cost of vision analysis."""

import hashlib
import io
import logging
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

_logger = logging.getLogger(__name__)

MAX_DIMENSION = 512
QUALITY = 70
MAX_FILE_SIZE = 150 * 1024
FALLBACK_DIMENSION = 400
FALLBACK_QUALITY = 50


class InvalidImageError(ValueError):
    """Raised when uploaded bytes are not a decodable image."""


@dataclass(frozen=True)
class OptimizationResult:
    """Outcome of preprocessing an image."""

    optimized_image: bytes
    original_size: int
    optimized_size: int
    compression_ratio: float
    decoded: bool = True

    @property
    def savings(self) -> str:
        """Size reduction as a percentage string."""
        if not self.original_size:
            return "0.0%"
        saved = (self.original_size - self.optimized_size) / self.original_size
        return f"{saved * 100:.1f}%"


def content_hash(image_bytes: bytes) -> str:
    """Stable fingerprint of the original upload."""
    return hashlib.sha256(image_bytes).hexdigest()[:16]


@dataclass
class ImagePreprocessor:
    """Downsamples and re-encodes images as progressive JPEG."""

    max_dimension: int = MAX_DIMENSION
    quality: int = QUALITY
    max_file_size: int = MAX_FILE_SIZE
    fallback_dimension: int = FALLBACK_DIMENSION
    fallback_quality: int = FALLBACK_QUALITY

    def optimize(self, image_bytes: bytes) -> OptimizationResult:
        """Shrink an image, passing the original through on any failure."""
        original_size = len(image_bytes)
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                image.load()
                source = image.copy()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
        ):
            _logger.warning("Image could not be decoded (%s bytes)", original_size)
            return _passthrough(image_bytes, decoded=False)

        try:
            optimized = _encode(source, self.max_dimension, self.quality)
            if len(optimized) > self.max_file_size:
                optimized = _encode(
                    source, self.fallback_dimension, self.fallback_quality
                )
        except (OSError, ValueError):
            _logger.exception("Image optimization failed; using original bytes")
            return _passthrough(image_bytes, decoded=True)

        result = OptimizationResult(
            optimized_image=optimized,
            original_size=original_size,
            optimized_size=len(optimized),
            compression_ratio=original_size / len(optimized),
        )
        _logger.info(
            "Image optimized: %s -> %s bytes (%s saved)",
            original_size,
            result.optimized_size,
            result.savings,
        )
        return result


def _encode(image: Image.Image, max_dimension: int, quality: int) -> bytes:
    resized = image.convert("RGB") if image.mode != "RGB" else image.copy()
    # thumbnail() keeps aspect ratio and never enlarges
    resized.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)
    buffer = io.BytesIO()
    resized.save(
        buffer, format="JPEG", quality=quality, progressive=True, optimize=True
    )
    return buffer.getvalue()


def _passthrough(image_bytes: bytes, *, decoded: bool) -> OptimizationResult:
    return OptimizationResult(
        optimized_image=image_bytes,
        original_size=len(image_bytes),
        optimized_size=len(image_bytes),
        compression_ratio=1.0,
        decoded=decoded,
    )
