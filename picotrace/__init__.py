"""Path-tracer building blocks: options, thread pool, tiler, alias table, distributions, materials, tone mapping and denoising."""

__version__ = "0.1.0"