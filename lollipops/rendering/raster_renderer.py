"""
PNG backend

Paints the layout onto a :class:`RasterCanvas` and encodes it with Pillow.
Pixel constants are scaled to the requested DPI once, in
:meth:`RasterRenderer.resolve_settings`, before the layout is computed.
"""

import io

from ..constants import (
    AXIS_COLOR,
    AXIS_TEXT_COLOR,
    BACKBONE_COLOR,
    BACKGROUND_COLOR,
    DISORDER_OPACITY,
    DOMAIN_TEXT_COLOR,
    LABEL_ANGLE,
    LABEL_TEXT_COLOR,
    LEGEND_TEXT_COLOR,
    OutputFormat,
)
from ..logging_config import get_logger
from ..models import Layout
from ..settings import Settings
from .base import (
    DISORDER_LEGEND_KEY,
    DiagramRenderer,
    domain_baseline,
    legend_text_x,
    mutation_caption,
)
from .raster_canvas import RasterCanvas, rotate_point

logger = get_logger(__name__)

DISORDER_RGBA = (0, 0, 0, round(255 * DISORDER_OPACITY))


class RasterRenderer(DiagramRenderer):
    """
    Render layouts as RGBA PNG images

    The image is ``round(canvas_width) x round(canvas_height)`` pixels and
    carries the rendering DPI in its metadata.
    """

    format = OutputFormat.PNG

    def resolve_settings(self, settings: Settings, dpi: float | None = None) -> Settings:
        if dpi is None:
            return settings
        return settings.with_dpi(dpi)

    def render(self, layout: Layout, settings: Settings) -> bytes:
        canvas = RasterCanvas(
            round(layout.canvas_width), round(layout.canvas_height), BACKGROUND_COLOR
        )
        logger.debug(
            f"Rasterizing {canvas.width}x{canvas.height} px at {settings.dpi:g} dpi"
        )

        self._draw_lollipops(canvas, layout, settings)
        self._draw_backbone(canvas, layout, settings)
        self._draw_motifs(canvas, layout, settings)
        self._draw_regions(canvas, layout, settings)
        if not settings.hide_axis:
            self._draw_axis(canvas, layout, settings)
        if layout.legend:
            self._draw_legend(canvas, layout, settings)

        buffer = io.BytesIO()
        canvas.to_image().save(buffer, format="PNG", dpi=(settings.dpi, settings.dpi))
        return buffer.getvalue()

    def _draw_lollipops(self, canvas: RasterCanvas, layout: Layout, settings: Settings) -> None:
        font = self.measurer.font(settings.label_font_size)
        for pop in layout.lollipops:
            canvas.thick_vline(
                int(pop.x - settings.stem_width / 2),
                int(pop.y),
                int(layout.stem_bottom),
                settings.stem_width,
                BACKBONE_COLOR,
            )
            canvas.circle(int(pop.x), int(pop.y), int(pop.radius), pop.color)

            if settings.show_labels:
                dx, dy = rotate_point(0, pop.radius * -1.5, LABEL_ANGLE)
                canvas.draw_text(
                    mutation_caption(pop),
                    pop.x + dx,
                    pop.y + dy,
                    font,
                    LABEL_TEXT_COLOR,
                    anchor="middle",
                    angle=LABEL_ANGLE,
                )

    def _draw_backbone(self, canvas: RasterCanvas, layout: Layout, settings: Settings) -> None:
        canvas.fill_rect(
            layout.padding,
            layout.backbone_y,
            layout.canvas_width - layout.padding * 2,
            settings.backbone_height,
            BACKBONE_COLOR,
        )

    def _draw_motifs(self, canvas: RasterCanvas, layout: Layout, settings: Settings) -> None:
        for block in layout.motifs:
            if block.feature.is_disorder:
                canvas.fill_rect(block.x, block.y, block.width, block.height, DISORDER_RGBA)
            else:
                canvas.shadow_rect(
                    block.x,
                    block.y,
                    block.width,
                    block.height,
                    block.fill,
                    settings.shadow_offset,
                    radius=settings.motif_corner_radius,
                )

    def _draw_regions(self, canvas: RasterCanvas, layout: Layout, settings: Settings) -> None:
        font = self.measurer.font(settings.domain_font_size)
        for block, label in zip(layout.regions, layout.domain_labels):
            canvas.shadow_rect(
                block.x, block.y, block.width, block.height, block.fill, settings.shadow_offset
            )
            if label and block.width > settings.min_label_box_width:
                canvas.draw_text(
                    label,
                    block.x + block.width / 2,
                    block.y + domain_baseline(settings),
                    font,
                    DOMAIN_TEXT_COLOR,
                    anchor="middle",
                )

    def _draw_axis(self, canvas: RasterCanvas, layout: Layout, settings: Settings) -> None:
        font = self.measurer.font(settings.axis_font_size)
        y = int(layout.axis_y)
        tick_bottom = int(layout.axis_y + settings.axis_height / 3)
        canvas.thick_hline(
            int(layout.padding),
            int(layout.canvas_width - layout.padding),
            y,
            settings.line_width,
            AXIS_COLOR,
        )
        canvas.thick_vline(int(layout.padding), y, tick_bottom, settings.line_width, AXIS_COLOR)

        for tick in self.axis_ticks(layout, settings):
            x = layout.x_for(tick.position)
            canvas.thick_vline(int(x), y, tick_bottom, settings.line_width, AXIS_COLOR)
            canvas.draw_text(
                str(tick.position),
                x,
                layout.axis_y + settings.axis_height,
                font,
                AXIS_TEXT_COLOR,
                anchor="middle",
            )

    def _draw_legend(self, canvas: RasterCanvas, layout: Layout, settings: Settings) -> None:
        font = self.measurer.font(settings.legend_font_size)
        swatch = settings.legend_swatch_size
        y = layout.legend_y
        for key, color in layout.legend.items():
            y += settings.legend_row_height
            if key == DISORDER_LEGEND_KEY:
                canvas.fill_rect(settings.legend_x, y, swatch, swatch, DISORDER_RGBA)
            else:
                canvas.shadow_rect(
                    settings.legend_x, y, swatch, swatch, color, settings.shadow_offset
                )
            canvas.draw_text(
                key,
                legend_text_x(settings),
                y + settings.legend_font_size,
                font,
                LEGEND_TEXT_COLOR,
            )
