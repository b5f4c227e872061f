"""
Output backends for lollipop diagrams

This package contains the renderers that paint a computed Layout:
- DiagramRenderer: Common interface and shared drawing helpers
- SVGRenderer: Vector output built with svgwrite
- RasterRenderer: PNG output painted on a numpy-backed RasterCanvas
"""

from .base import DiagramRenderer
from .raster_canvas import RasterCanvas
from .raster_renderer import RasterRenderer
from .svg_renderer import SVGRenderer

__all__ = [
    "DiagramRenderer",
    "RasterCanvas",
    "RasterRenderer",
    "SVGRenderer",
]
