"""
Image Exporter - Writes generated distance fields to disk
"""

from PIL import Image
import numpy as np
import io
from contextlib import suppress
from pathlib import Path
from typing import Union

from .errors import ImageIOError


class ImageExporter:
    """Exports grayscale fields as image files"""

    @classmethod
    def to_png(cls, pixels: Union[np.ndarray, Image.Image], path: Union[str, Path]) -> Path:
        """Export a single-channel field to an 8-bit grayscale PNG

        The PNG is encoded in memory first, so a failed encode leaves no file
        behind. Write-out and flush failures are reported as 'flush'.
        """
        path = Path(path)

        if isinstance(pixels, Image.Image):
            img = pixels if pixels.mode == 'L' else pixels.convert('L')
        else:
            pixels = np.asarray(pixels)
            if pixels.ndim != 2:
                raise ValueError(f"Field must be an HxW array, got shape {pixels.shape}")
            img = Image.fromarray(pixels.astype(np.uint8))

        buffer = io.BytesIO()
        try:
            img.save(buffer, 'PNG')
        except (OSError, ValueError) as e:
            raise ImageIOError('encode', path, e) from e

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            f = open(path, 'wb')
        except OSError as e:
            raise ImageIOError('create', path, e) from e

        try:
            f.write(buffer.getvalue())
            f.flush()
            f.close()
        except OSError as e:
            # close() retries the failed flush; the first error is the one to report
            with suppress(OSError):
                f.close()
            raise ImageIOError('flush', path, e) from e

        return path
