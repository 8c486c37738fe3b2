[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "frustoz"
version = "0.1.0"
description = "Fractal flame renderer with XML flame parsing and PNG output"
requires-python = ">=3.10"
keywords = ["fractal", "flame", "ifs", "chaos-game", "rendering", "png"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "pillow",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
frustoz = "frustoz.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["frustoz"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
