"""A Phong ray tracer that renders .rt scene descriptions to image files."""

__version__ = "1.0.0"
__all__ = [
    "errors",
    "vector",
    "values",
    "elements",
    "images",
    "scene",
    "texture",
    "geometry",
    "shading",
    "render",
]