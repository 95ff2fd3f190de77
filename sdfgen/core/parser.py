"""
Image Parser - Reads image files into pixel arrays for SDF generation
Supports: PNG, GIF, BMP, TIFF, JPEG, WebP
"""

from PIL import Image, UnidentifiedImageError
import numpy as np
from pathlib import Path
from typing import Union

from .errors import ImageFormatError, ImageIOError


class ImageParser:
    """Parses image files into numpy arrays"""

    SUPPORTED_FORMATS = {'.png', '.gif', '.jpg', '.jpeg', '.bmp', '.webp', '.tif', '.tiff'}

    # Modes whose array channel 0 is already the red/luminance value
    DIRECT_MODES = {'L', 'LA', 'RGB', 'RGBA', 'I', 'I;16', 'F'}

    @classmethod
    def parse(cls, path: Union[str, Path]) -> np.ndarray:
        """Parse an image file into an (H, W) or (H, W, C) array

        Args:
            path: Path to the image file

        Returns:
            Pixel array; 8-bit sources give uint8, 16-bit grayscale gives uint16
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in cls.SUPPORTED_FORMATS:
            raise ImageFormatError(f"Unsupported format: {suffix}")

        try:
            img = Image.open(path)
        except UnidentifiedImageError as e:
            raise ImageIOError('decode', path, e) from e
        except OSError as e:
            raise ImageIOError('open', path, e) from e

        with img:
            try:
                img.load()
            except OSError as e:
                raise ImageIOError('decode', path, e) from e
            return cls.to_array(img)

    @classmethod
    def to_array(cls, img: Image.Image) -> np.ndarray:
        """Convert a decoded PIL image into a pixel array"""
        if img.mode not in cls.DIRECT_MODES:
            # Palette, bilevel, CMYK, ... : resolve to real colors first
            img = img.convert('RGBA')

        pixels = np.array(img)

        if img.mode == 'F':
            # 32-bit float images carry 0-255 values
            pixels = pixels / 255.0
        return pixels
