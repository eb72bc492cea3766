"""Windows, RGBA pixel images, PNG and XPM42 textures, and a depth-sorted render loop."""

__version__ = "0.1.0"

__all__ = [
    "constants",
    "context",
    "errors",
    "image",
    "renderqueue",
    "texture",
    "utils",
    "window",
    "xpm42",
]