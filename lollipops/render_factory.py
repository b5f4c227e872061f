"""
Renderer factory

This module provides a factory function for instantiating the renderer for an
output format, and the file-extension rule callers use to pick a format.
"""

from pathlib import Path

from .constants import OutputFormat
from .fonts import TextMeasurer, create_measurer
from .rendering.base import DiagramRenderer
from .rendering.raster_renderer import RasterRenderer
from .rendering.svg_renderer import SVGRenderer


def create_renderer(
    output_format: OutputFormat, measurer: TextMeasurer | None = None
) -> DiagramRenderer:
    """
    Factory function to create the renderer for an output format

    Args:
        output_format: OutputFormat enum (SVG or PNG)
        measurer: Text measurement capability (default: :func:`create_measurer`)

    Returns:
        DiagramRenderer instance for the format

    Raises:
        ValueError: If output_format is not recognized

    Examples:
        >>> from lollipops.render_factory import create_renderer
        >>> from lollipops.constants import OutputFormat
        >>>
        >>> renderer = create_renderer(OutputFormat.PNG)
        >>> png_bytes = renderer.render(layout, settings)
    """
    renderer_map = {
        OutputFormat.SVG: SVGRenderer,
        OutputFormat.PNG: RasterRenderer,
    }

    renderer_class = renderer_map.get(output_format)
    if renderer_class is None:
        valid_formats = ", ".join(f.value for f in OutputFormat)
        raise ValueError(
            f"Unknown output format: {output_format}. Valid formats: {valid_formats}"
        )

    return renderer_class(measurer if measurer is not None else create_measurer())


def format_from_path(path: str | Path) -> OutputFormat:
    """
    Output format implied by a file name

    ``.png`` selects raster output; anything else is written as SVG.

    Examples:
        >>> format_from_path("TP53.png")
        <OutputFormat.PNG: 'png'>
        >>> format_from_path("TP53.svg")
        <OutputFormat.SVG: 'svg'>
    """
    if Path(path).suffix.lower() == ".png":
        return OutputFormat.PNG
    return OutputFormat.SVG
