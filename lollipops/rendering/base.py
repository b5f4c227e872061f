"""
Base class for diagram renderers

A renderer paints a resolved :class:`~lollipops.models.Layout` into output
bytes. Both backends draw in the same fixed order so that vector and raster
output look alike:

1. lollipop stems and markers (with optional labels)
2. backbone
3. motifs
4. curated domains with their labels
5. axis with thinned tick labels
6. legend
"""

from abc import ABC, abstractmethod

from ..constants import MOTIF_NAMES, DISORDER_TYPE, OutputFormat
from ..fonts import TextMeasurer
from ..layout import axis_spacing, thin_axis_ticks
from ..models import Layout, Tick
from ..settings import Settings

DISORDER_LEGEND_KEY = MOTIF_NAMES[DISORDER_TYPE]


class DiagramRenderer(ABC):
    """
    Abstract base class for output backends

    Attributes:
        measurer: Text measurement capability, also used for glyphs and the
            font family of vector text
        format: OutputFormat produced by the backend

    Examples:
        >>> from lollipops.render_factory import create_renderer
        >>> renderer = create_renderer(OutputFormat.SVG, measurer)
        >>> settings = renderer.resolve_settings(Settings())
        >>> layout = compute_layout(features, ticks, settings, renderer.measurer)
        >>> svg_bytes = renderer.render(layout, settings)
    """

    format: OutputFormat

    def __init__(self, measurer: TextMeasurer):
        self.measurer = measurer

    def resolve_settings(self, settings: Settings, dpi: float | None = None) -> Settings:
        """
        Settings to lay out with for this backend

        Called once per render, before the layout is computed. The default
        ignores ``dpi``; raster output overrides this to scale pixel
        constants.
        """
        return settings

    @abstractmethod
    def render(self, layout: Layout, settings: Settings) -> bytes:
        """
        Paint the layout

        Args:
            layout: Geometry from :func:`~lollipops.layout.compute_layout`
            settings: The settings the layout was computed with

        Returns:
            Complete encoded document or image
        """
        pass

    def axis_ticks(self, layout: Layout, settings: Settings) -> list[Tick]:
        """Ticks that receive an axis label, identical for every backend"""
        return thin_axis_ticks(layout.ticks, axis_spacing(layout, settings))


def mutation_caption(tick: Tick) -> str:
    """Text shown for a lollipop, with the count when it was merged"""
    if tick.count > 1:
        return f"{tick.label} ({tick.count})"
    return tick.label


def domain_baseline(settings: Settings) -> float:
    """Baseline of domain label text relative to the block top"""
    return settings.domain_height / 2 + settings.domain_font_size / 3


def legend_text_x(settings: Settings) -> float:
    return settings.legend_x * 2 + settings.legend_swatch_size
