"""
SDF Generator - Signed distance fields from thresholded bitmaps
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .core import (
    SDFConfig, DistanceFieldGenerator, ImageParser, ImageExporter,
    ImageIOError, ImageFormatError, generate_sdf, get_preset, load_config,
)

__version__ = "0.1.0"
__all__ = [
    'SDFConfig',
    'DistanceFieldGenerator',
    'ImageParser',
    'ImageExporter',
    'ImageIOError',
    'ImageFormatError',
    'generate_sdf',
    'get_preset',
    'load_config',
    'generate',
]

logger = logging.getLogger(__name__)


def generate(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    config: Optional[SDFConfig] = None
) -> Path:
    """
    Generate the distance field of an image file and save it as PNG.

    Args:
        input_path: Source bitmap; pixels with a dark red channel are ink
        output_path: Destination PNG (parent directories are created)
        config: Threshold and encoding settings (contract defaults if None)

    Returns:
        Path to the written PNG
    """
    pixels = ImageParser.parse(input_path)
    logger.debug("loaded %s: shape=%s dtype=%s", input_path, pixels.shape, pixels.dtype)

    field = DistanceFieldGenerator(config).generate(pixels)

    return ImageExporter.to_png(field, output_path)
