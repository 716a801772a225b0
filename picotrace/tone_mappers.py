"""Luminance and Reinhard tone mapping for linear HDR images."""

from __future__ import annotations

from typing import Any

import numpy as np

from picotrace.tiler import Tiler

_LUMINANCE_WEIGHTS = np.array([0.2126, 0.587, 0.114])


def get_luminance(colour: Any) -> Any:
    """Weighted luminance of an RGB colour, or of each colour in an array."""
    values = np.asarray(colour, dtype=float) @ _LUMINANCE_WEIGHTS
    return float(values) if np.ndim(values) == 0 else values


def _apply_tonemap(
    start: tuple[int, int],
    tile_size: tuple[int, int],
    resolution: tuple[int, int],
    seed: int,
    grid: np.ndarray,
    white_point: float,
) -> bool:
    x0, y0 = start
    tile_w, tile_h = tile_size
    tile = grid[y0 : y0 + tile_h, x0 : x0 + tile_w]
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        tile[...] = tile * (1.0 + tile / (white_point * white_point)) / (1.0 + tile)
    return True


def reinhard_tone_mapping(pixels: np.ndarray, resolution: tuple[int, int], tiler: Tiler) -> None:
    """Tone map ``pixels`` in place with the extended Reinhard operator.

    ``pixels`` holds width * height RGB values in row-major order, either flat
    as (width * height, 3) or as (height, width, 3). The white point is the
    largest luminance in the image.
    """
    if not isinstance(pixels, np.ndarray):
        raise TypeError("pixels must be a numpy array")
    width, height = int(resolution[0]), int(resolution[1])
    grid = pixels.reshape(height, width, 3)
    if not np.shares_memory(grid, pixels):
        raise ValueError("pixels must be a contiguous array so it can be updated in place")
    if width == 0 or height == 0:
        return
    white_point = max(0.0, float(np.max(get_luminance(grid))))
    tiler.execute_over_surface(_apply_tonemap, grid, white_point)