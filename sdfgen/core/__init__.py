"""
SDF Generator - Core
"""

from .config import (
    SDFConfig, PRESETS, get_preset, list_presets, load_config, save_config,
)
from .errors import ImageIOError, ImageFormatError
from .parser import ImageParser
from .exporter import ImageExporter
from .sdf import (
    # Data model
    Offset, Grid, SENTINEL, SENTINEL_COORD,
    # Passes
    intensity_16bit, classify, seed_grids, combine_distances, generate_sdf,
    # Generator
    DistanceFieldGenerator,
)
