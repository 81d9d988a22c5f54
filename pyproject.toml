[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rwtxd"
version = "0.1.0"
description = "Read and write RenderWare binary stream chunks: texture dictionaries, native textures, texture and material extensions, and geometry skins"
requires-python = ">=3.10"
dependencies = []
keywords = ["renderware", "txd", "texture", "binary-stream", "d3d9", "dxt"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: File Formats",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rwtxd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
