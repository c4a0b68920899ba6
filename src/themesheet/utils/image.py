"""Raster image loading and resizing utilities."""

from PIL import Image
import numpy as np
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

RESAMPLE = Image.Resampling.BILINEAR


class ImageLoader:
    """Handle loading and validation of raster icon sources."""

    SUPPORTED_FORMATS = {".png"}

    def __init__(self, path: Path):
        self.path = Path(path)
        self._validate_format()

    def _validate_format(self) -> None:
        """Validate image format is supported."""
        if not self.path.exists():
            raise FileNotFoundError(f"Image file not found: {self.path}")

        if not self.path.is_file():
            raise ValueError(f"Path is not a file: {self.path}")

        suffix = self.path.suffix.lower()
        if suffix not in self.SUPPORTED_FORMATS:
            supported = ", ".join(sorted(self.SUPPORTED_FORMATS))
            raise ValueError(
                f"Unsupported format '{suffix}'. Supported formats: {supported}"
            )

    def load(self) -> Image.Image:
        """Load image as a detached RGBA image."""
        try:
            with Image.open(self.path) as img:
                logger.debug(f"Loaded image: {img.format} {img.mode} {img.size}")

                # Verify the image is not corrupted
                img.verify()

            # Reopen for actual processing (verify() invalidates the image)
            with Image.open(self.path) as img:
                rgba = img.convert("RGBA")
                rgba.load()
                return rgba

        except Image.DecompressionBombError as e:
            raise RuntimeError(f"Refusing oversized image {self.path}: {e}")
        except (OSError, SyntaxError) as e:
            raise RuntimeError(f"Failed to load image {self.path}: {e}")

    def load_resized(self, size: int) -> Image.Image:
        """Load image and resample it to a ``size`` x ``size`` square."""
        if size <= 0:
            raise ValueError(f"Target size must be positive, got {size}")

        image = self.load()
        if image.size != (size, size):
            logger.debug(f"Resizing {self.path.name} from {image.size} to {size}x{size}")
            image = image.resize((size, size), RESAMPLE)
        return image


def load_raster(path: Path, size: int) -> Image.Image:
    """Convenience function to load a raster source at a square size."""
    return ImageLoader(path).load_resized(size)


def to_rgba_array(image: Image.Image) -> np.ndarray:
    """Convert a PIL image to an (H, W, 4) uint8 array."""
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return np.array(image, dtype=np.uint8)


def from_rgba_array(array: np.ndarray) -> Image.Image:
    """Convert an (H, W, 4) uint8 array back to a PIL image."""
    if array.ndim != 3 or array.shape[2] != 4:
        raise RuntimeError(f"Expected RGBA array, got shape {array.shape}")

    if array.dtype != np.uint8:
        raise RuntimeError(f"Expected uint8 array, got {array.dtype}")

    return Image.fromarray(array)

