# picotrace

Building blocks for a Monte Carlo path tracer, written with numpy.

## What is inside

- `picotrace.options`: `Options.from_argv(argv)` reads renderer flags from a
  list of arguments. Leave the program name out of the list. The flags are
  `-Scene`, `-OutputFile`, `-Resolution W H`, `-SampleCount N`,
  `-CameraPosition X Y Z`, `-CameraDirection X Y Z`, `-Camera NAME`,
  `-Skybox NAME`, `-SunDirection X Y Z`, `-SunColour R G B`, `-Denoise` and
  `-Tonemap`. Numbers are read leniently: the leading numeric part is used,
  and text that does not start with a number gives 0. Unknown arguments are
  printed and skipped. A flag given without its values raises `ValueError`.
  `has_option(Option.SAMPLE_COUNT)` and the other `Option` flags report
  whether a flag was given explicitly.
- `picotrace.thread_pool`: `ThreadPool(thread_count=None)` starts a fixed set
  of worker threads, one per CPU by default. Each worker has its own queue,
  and tasks go to the queues in turn. `add_task(func, *args, **kwargs)`
  returns a `concurrent.futures.Future`. `wait_for_work_to_finish(handles)`
  blocks until the given futures are done. `shutdown()` lets the workers
  finish the queued work and then joins them. The pool can be used as a
  context manager.
- `picotrace.tiler`: `Tiler(pool, rng, resolution, tile_size)` splits a
  surface into tiles. `rng` is a `random.Random`. `execute_over_surface(func,
  *args)` calls `func(start, tile_size, resolution, seed, *args)` for each
  tile on the pool. Tiles at the edges are clamped to the surface. It returns
  the per-tile results in column-major tile order, and re-raises any error
  from a tile.
- `picotrace.alias_table`: `AliasTable(weights)` samples indices in
  proportion to the weights. `sample(rng)` returns `(index, pdf)`.
  `build_table(weights)` rebuilds the table.
- `picotrace.tone_mappers`: `get_luminance(colour)` works on one colour or an
  array of colours. `reinhard_tone_mapping(pixels, resolution, tiler)` applies
  the extended Reinhard operator in place to a numpy array. The white point is
  the brightest luminance in the image.
- `picotrace.denoisers`: `atrous_denoise(pixels, normals, positions, diffuse,
  tiler)` is a five-level edge-aware à-trous filter. The normal, position and
  diffuse buffers guide it. It returns a new array.
- `picotrace.solid_angle`: `solid_angle(pos, intersect_point,
  intersect_normal, area)` and `solid_angle_from_bounds(centre, side_lengths,
  pos)`.
- `picotrace.distributions`: `CosWeightedHemisphereDistribution` and
  `BeckmannDistribution` map a 2D sample to a direction in tangent space, with
  z as the normal. Each also gives the matching `pdf`.
- `picotrace.materials`: constant materials (`SmoothMetalMaterial`,
  `RoughMetalMaterial`, `MattPlasticMaterial`, `EmissiveMaterial`,
  `ConstantMetalnessRoughnessMaterial`, `ConstantDiffuseSpecularMaterial` and
  the transparent variants) and textured materials
  (`MetalnessRoughnessMaterial`, `MetalnessRoughnessMaterial.combined`,
  `SpecularGlossMaterial`). `evaluate_material(uv)` returns an
  `EvaluatedMaterial`. Textures are any objects with `sample`, `sample3`,
  `sample4`, `residence_size`, `is_resident`, `make_resident` and
  `make_nonresident`.

## Installation

```
pip install .
```

## Example

```python
import random

import numpy as np

from picotrace.alias_table import AliasTable
from picotrace.distributions import BeckmannDistribution
from picotrace.options import Options
from picotrace.thread_pool import ThreadPool
from picotrace.tiler import Tiler
from picotrace.tone_mappers import reinhard_tone_mapping

options = Options.from_argv(["-Resolution", "64", "32", "-Tonemap"])
width, height = options.resolution

pixels = np.random.default_rng(1).random((height * width, 3))

with ThreadPool(4) as pool:
    tiler = Tiler(pool, random.Random(7), (width, height), (16, 16))
    if options.tonemap:
        reinhard_tone_mapping(pixels, (width, height), tiler)

index, pdf = AliasTable([1.0, 2.0, 3.0]).sample(random.Random(0))
half_vector = BeckmannDistribution().sample((0.3, 0.6), (0.0, 0.0, 1.0), 0.5)
```

## What it does not do

The package contains no complete renderer. It does not load scenes or
meshes, build acceleration structures, trace rays, or run an integrator. It
does not read or write image files and does not show a window. There is no
command to run. The options are parsed, but nothing in the package acts on
them.

## Running the tests

```
pip install .[test]
pytest
```