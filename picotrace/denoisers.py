"""Edge-aware a-trous wavelet denoising."""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from picotrace.tiler import Tiler
from picotrace.tone_mappers import get_luminance

# 5x5 gaussian kernel indexed [dy + 2, dx + 2].
_KERNEL = np.array(
    [
        [0.00292, 0.01306, 0.02154, 0.01306, 0.00292],
        [0.01306, 0.05855, 0.09653, 0.05855, 0.01306],
        [0.02154, 0.09653, 0.15915, 0.09653, 0.02154],
        [0.01306, 0.05855, 0.09563, 0.05855, 0.01306],
        [0.00292, 0.01306, 0.02154, 0.01306, 0.00292],
    ]
)

_TAPS = [(dx, dy, float(_KERNEL[dy + 2, dx + 2])) for dy in range(-2, 3) for dx in range(-2, 3)]

_LEVELS = 5


def _squared_distance(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    diff = a - b
    return np.sum(diff * diff, axis=-1)


def _blend_tile(
    start: tuple[int, int],
    tile_size: tuple[int, int],
    resolution: tuple[int, int],
    seed: int,
    level: int,
    src: np.ndarray,
    normals: np.ndarray,
    positions: np.ndarray,
    diffuse: np.ndarray,
    dst: np.ndarray,
) -> bool:
    x0, y0 = start
    tile_w, tile_h = tile_size
    width, height = resolution
    scale = 2**level

    xs = np.arange(x0, x0 + tile_w)
    ys = np.arange(y0, y0 + tile_h)
    taps = [
        (
            weight,
            np.clip(ys + dy * scale, 0, height - 1)[:, None],
            np.clip(xs + dx * scale, 0, width - 1)[None, :],
        )
        for dx, dy, weight in _TAPS
    ]

    white_point = 0.0
    min_distance = math.inf
    max_distance = -math.inf
    for _, ty, tx in taps:
        white_point = max(white_point, float(np.max(get_luminance(src[ty, tx]))))
        lengths = np.linalg.norm(positions[ty, tx], axis=-1)
        min_distance = min(min_distance, float(lengths.min()))
        max_distance = max(max_distance, float(lengths.max()))
    position_range = max_distance - min_distance

    centre = (slice(y0, y0 + tile_h), slice(x0, x0 + tile_w))
    centre_normals = normals[centre]
    centre_positions = positions[centre]
    centre_diffuse = diffuse[centre]

    result = np.zeros((tile_h, tile_w, 3))
    total_weight = np.zeros((tile_h, tile_w))
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for weight, ty, tx in taps:
            normal_weight = np.minimum(
                np.exp(-_squared_distance(centre_normals, normals[ty, tx]) / 0.25), 1.0
            )
            position_weight = np.minimum(
                np.exp(
                    -_squared_distance(centre_positions, positions[ty, tx])
                    / np.float64(position_range * position_range)
                ),
                1.0,
            )
            diffuse_weight = np.minimum(
                np.exp(
                    -_squared_distance(centre_diffuse, diffuse[ty, tx])
                    / np.float64(white_point * white_point)
                ),
                1.0,
            )
            tap_weight = weight * normal_weight * position_weight * diffuse_weight
            result += src[ty, tx] * tap_weight[..., None]
            total_weight += tap_weight
        dst[centre] = result / total_weight[..., None]
    return True


def atrous_denoise(
    pixels: Any, normals: Any, positions: Any, diffuse: Any, tiler: Tiler
) -> np.ndarray:
    """Denoise an RGB image guided by normal, position and diffuse buffers.

    All buffers hold width * height RGB/XYZ values in row-major order for the
    tiler's resolution. Returns a new array shaped like ``pixels``.
    """
    width, height = tiler.resolution

    def as_grid(buffer: Any, name: str) -> np.ndarray:
        array = np.asarray(buffer, dtype=float)
        if array.size != width * height * 3:
            raise ValueError(f"{name} must hold {width * height} three-component values")
        return array.reshape(height, width, 3)

    shape = np.shape(pixels)
    source = as_grid(pixels, "pixels").copy()
    normal_grid = as_grid(normals, "normals")
    position_grid = as_grid(positions, "positions")
    diffuse_grid = as_grid(diffuse, "diffuse")

    buffers = [source, np.empty_like(source)]
    for level in range(_LEVELS):
        src = buffers[level % 2]
        dst = buffers[(level + 1) % 2]
        tiler.execute_over_surface(
            _blend_tile, level, src, normal_grid, position_grid, diffuse_grid, dst
        )
    return buffers[1].reshape(shape)