"""
Signed Distance Fields (SDF)

Bitmap to distance field conversion using the "8-points" propagation
approximation (8SSEDT):
- Pixels are classified once into ink (foreground) and background
- Two offset grids are propagated, one seeded at ink, one at background
- Each grid converges in two raster sweeps, no priority queue needed
- The two distances are combined into an 8-bit encoded field

Encoding:
- 128 (the bias) sits on the ink/background boundary
- Background pixels encode above the bias, ink pixels at or below it
- Each gray level is 1/scale pixel of distance (scale=3 by default)
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image

from .config import SDFConfig
from .parser import ImageParser

logger = logging.getLogger(__name__)


# =============================================================================
# Offsets and Grids
# =============================================================================

# Placeholder coordinate for "no seed found yet"
SENTINEL_COORD = 9999


@dataclass(frozen=True)
class Offset:
    """Displacement from a grid cell to its nearest known seed"""
    dx: int
    dy: int

    @property
    def dist_sq(self) -> int:
        """Squared euclidean length (no sqrt during propagation)"""
        return self.dx * self.dx + self.dy * self.dy


SENTINEL = Offset(SENTINEL_COORD, SENTINEL_COORD)

# Neighbor directions, in the order they are compared
FORWARD_NEIGHBORS = ((-1, 0), (0, -1), (-1, -1), (1, -1))
FORWARD_ROW_FIXUP = ((1, 0),)
BACKWARD_NEIGHBORS = ((1, 0), (0, 1), (1, 1), (-1, 1))
BACKWARD_ROW_FIXUP = ((-1, 0),)


class Grid:
    """
    Intermediate distance field: one Offset per pixel.

    Stored row-major as an (H, W, 2) int64 array holding (dx, dy).
    """

    def __init__(self, width: int, height: int, pts: Optional[np.ndarray] = None):
        self.width = width
        self.height = height
        if pts is None:
            pts = np.full((height, width, 2), SENTINEL_COORD, dtype=np.int64)
        self.pts = pts

    @classmethod
    def seeded(cls, seeds: np.ndarray) -> 'Grid':
        """Grid with (0, 0) at every True cell of seeds, SENTINEL elsewhere"""
        height, width = seeds.shape
        pts = np.full((height, width, 2), SENTINEL_COORD, dtype=np.int64)
        pts[seeds] = 0
        return cls(width, height, pts)

    def __getitem__(self, xy: Tuple[int, int]) -> Offset:
        x, y = xy
        dx, dy = self.pts[y, x]
        return Offset(int(dx), int(dy))

    def __setitem__(self, xy: Tuple[int, int], offset: Offset) -> None:
        x, y = xy
        self.pts[y, x] = (offset.dx, offset.dy)

    def dist_sq(self) -> np.ndarray:
        """Squared length of every offset, shape (H, W)"""
        return (self.pts * self.pts).sum(axis=2)

    def generate(self) -> None:
        """
        Propagate nearest-seed offsets in place.

        Forward sweep runs top to bottom, each row left to right against the
        four already-visited neighbors, then right to left against the right
        neighbor. The backward sweep mirrors it from the bottom up.
        """
        w, h = self.width, self.height
        sentinel_sq = SENTINEL.dist_sq

        # Plain lists: element access on numpy scalars is far slower
        dx = self.pts[:, :, 0].ravel().tolist()
        dy = self.pts[:, :, 1].ravel().tolist()

        def relax(i: int, x: int, y: int, neighbors) -> None:
            px, py = dx[i], dy[i]
            best = px * px + py * py
            for ox, oy in neighbors:
                nx, ny = x + ox, y + oy
                if 0 <= nx < w and 0 <= ny < h:
                    j = ny * w + nx
                    cx, cy = dx[j] + ox, dy[j] + oy
                    d = cx * cx + cy * cy
                else:
                    # Out of bounds: compare against an unreachable seed
                    cx, cy, d = SENTINEL_COORD, SENTINEL_COORD, sentinel_sq
                if d < best:
                    px, py, best = cx, cy, d
            dx[i], dy[i] = px, py

        for y in range(h):
            row = y * w
            for x in range(w):
                relax(row + x, x, y, FORWARD_NEIGHBORS)
            for x in range(w - 1, -1, -1):
                relax(row + x, x, y, FORWARD_ROW_FIXUP)

        for y in range(h - 1, -1, -1):
            row = y * w
            for x in range(w - 1, -1, -1):
                relax(row + x, x, y, BACKWARD_NEIGHBORS)
            for x in range(w):
                relax(row + x, x, y, BACKWARD_ROW_FIXUP)

        self.pts[:, :, 0] = np.asarray(dx, dtype=np.int64).reshape(h, w)
        self.pts[:, :, 1] = np.asarray(dy, dtype=np.int64).reshape(h, w)


# =============================================================================
# Passes
# =============================================================================

def intensity_16bit(pixels: np.ndarray) -> np.ndarray:
    """
    Red/luminance channel normalized to the 16-bit range 0-65535.

    8-bit values are widened by 257 (0xFF -> 0xFFFF), floats are read as 0-1.
    """
    channel = pixels[:, :, 0] if pixels.ndim == 3 else pixels

    if channel.dtype == np.bool_:
        return np.where(channel, 65535, 0).astype(np.int64)
    if np.issubdtype(channel.dtype, np.floating):
        return np.round(np.clip(channel, 0.0, 1.0) * 65535).astype(np.int64)
    if channel.dtype.itemsize == 1:
        return channel.astype(np.int64) * 257
    return channel.astype(np.int64)


def classify(pixels: np.ndarray, threshold: int = 128) -> np.ndarray:
    """
    Ink mask of an image.

    Args:
        pixels: (H, W) or (H, W, C) array, channel 0 is read
        threshold: 16-bit intensity; anything strictly below it is ink

    Returns:
        Boolean (H, W) array, True where the pixel is ink
    """
    return intensity_16bit(pixels) < threshold


def seed_grids(ink: np.ndarray) -> Tuple[Grid, Grid]:
    """
    Build both propagation grids from one classification.

    Returns:
        (grid1, grid2): grid1 measures distance to the nearest ink pixel,
        grid2 distance to the nearest background pixel
    """
    return Grid.seeded(ink), Grid.seeded(~ink)


def combine_distances(
    dist_sq_ink: np.ndarray,
    dist_sq_background: np.ndarray,
    scale: int = 3,
    bias: int = 128
) -> np.ndarray:
    """
    Encode two squared-distance grids as an 8-bit field.

    Distances are truncated toward zero after the square root, then
    clamp((dist_ink - dist_background) * scale + bias, 0, 255).
    """
    dist1 = np.sqrt(np.asarray(dist_sq_ink, dtype=np.float64)).astype(np.int64)
    dist2 = np.sqrt(np.asarray(dist_sq_background, dtype=np.float64)).astype(np.int64)
    signed = dist1 - dist2
    return np.clip(signed * scale + bias, 0, 255).astype(np.uint8)


def generate_sdf(pixels: np.ndarray, config: Optional[SDFConfig] = None) -> np.ndarray:
    """
    Generate an encoded Signed Distance Field from a bitmap.

    Args:
        pixels: (H, W) or (H, W, C) array; only channel 0 is classified
        config: threshold / scale / bias (contract defaults if None)

    Returns:
        (H, W) uint8 array, a fresh allocation; pixels is left untouched
    """
    config = config or SDFConfig()
    pixels = np.asarray(pixels)

    if pixels.ndim not in (2, 3):
        raise ValueError(f"Pixels must be HxW or HxWxC array, got shape {pixels.shape}")
    if pixels.shape[0] < 1 or pixels.shape[1] < 1 or (pixels.ndim == 3 and pixels.shape[2] < 1):
        raise ValueError(f"Cannot generate SDF for empty image of shape {pixels.shape}")

    height, width = pixels.shape[:2]
    started = time.perf_counter()

    ink = classify(pixels, config.threshold)
    grid1, grid2 = seed_grids(ink)
    logger.debug("classified %dx%d image: %d ink pixels", width, height, int(ink.sum()))

    grid1.generate()
    grid2.generate()
    logger.debug("propagated grids in %.3fs", time.perf_counter() - started)

    return combine_distances(grid1.dist_sq(), grid2.dist_sq(), config.scale, config.bias)


# =============================================================================
# Generator
# =============================================================================

class DistanceFieldGenerator:
    """
    Converts bitmaps into encoded distance fields.

    Stateless apart from its config, so one instance can serve any number
    of independent calls.
    """

    def __init__(self, config: Optional[SDFConfig] = None):
        self.config = config or SDFConfig()
        self.config.validate()

    def generate(
        self,
        image: Union[Image.Image, np.ndarray]
    ) -> Union[Image.Image, np.ndarray]:
        """
        Generate the SDF of an image.

        A PIL image yields a mode 'L' PIL image, an array yields a uint8 array.
        """
        if isinstance(image, Image.Image):
            field = generate_sdf(ImageParser.to_array(image), self.config)
            return Image.fromarray(field)
        return generate_sdf(image, self.config)
