[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termvideo"
version = "0.1.0"
description = "Play videos in a true-colour terminal as coloured ASCII glyphs"
requires-python = ">=3.10"
keywords = ["terminal", "video", "ascii-art", "ffmpeg", "ansi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Display",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
termvideo = "termvideo.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["termvideo"]

[tool.pytest.ini_options]
addopts = "-ra"
