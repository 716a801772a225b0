"""Split an image surface into tiles and process them on a thread pool."""

from __future__ import annotations

import random
from typing import Any, Callable

from picotrace.thread_pool import ThreadPool


class Tiler:
    """Runs a per-tile function over every tile of a surface."""

    def __init__(
        self,
        pool: ThreadPool,
        rng: random.Random,
        resolution: tuple[int, int],
        tile_size: tuple[int, int],
    ) -> None:
        if tile_size[0] <= 0 or tile_size[1] <= 0:
            raise ValueError("tile size must be positive")
        self._pool = pool
        self._rng = rng
        self._resolution = (int(resolution[0]), int(resolution[1]))
        self._tile_size = (int(tile_size[0]), int(tile_size[1]))

    @property
    def resolution(self) -> tuple[int, int]:
        return self._resolution

    @property
    def tile_size(self) -> tuple[int, int]:
        return self._tile_size

    def execute_over_surface(self, func: Callable[..., Any], *args: Any) -> list[Any]:
        """Call ``func(start, tile_size, resolution, seed, *args)`` for each tile.

        Tiles at the right and bottom edges are clamped to the surface. Blocks
        until every tile is done and returns the per-tile results in
        column-major tile order; a failure in any tile is raised here.
        """
        width, height = self._resolution
        tile_w, tile_h = self._tile_size
        handles = []
        for x in range(0, width, tile_w):
            for y in range(0, height, tile_h):
                clamped = (min(tile_w, width - x), min(tile_h, height - y))
                seed = self._rng.getrandbits(32)
                handles.append(
                    self._pool.add_task(func, (x, y), clamped, self._resolution, seed, *args)
                )
        self._pool.wait_for_work_to_finish(handles)
        return [handle.result() for handle in handles]