[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixelwin"
version = "0.1.0"
description = "A small windowing and pixel-image library: images, instances, PNG and XPM42 textures, and a depth-sorted render loop"
requires-python = ">=3.10"
keywords = ["graphics", "pixels", "window", "image", "xpm", "png", "render", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pygame",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pixelwin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
