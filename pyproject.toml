[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "picotrace"
version = "0.1.0"
description = "Building blocks for a Monte Carlo path tracer: option parsing, a thread pool and tiler, alias tables, sampling distributions, materials, tone mapping and denoising."
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["path tracing", "rendering", "monte carlo", "brdf", "denoising", "tone mapping"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["picotrace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
