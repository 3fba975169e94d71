[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "livewall"
version = "0.1.0"
description = "Read video track metadata (dimensions, timescale, duration) from MP4 files"
requires-python = ">=3.10"
keywords = ["mp4", "quicktime", "video", "metadata", "atoms"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
live-wallpaper = "livewall.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["livewall"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
