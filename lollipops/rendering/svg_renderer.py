"""
SVG backend

Builds the document with svgwrite. Shadow and hatch effects are shared
definitions referenced by id; every drawn element carries a ``<title>`` so
viewers show a tooltip.
"""

import io

import svgwrite
import svgwrite.base

from ..constants import (
    AXIS_COLOR,
    AXIS_TEXT_COLOR,
    BACKBONE_COLOR,
    DISORDER_OPACITY,
    DOMAIN_TEXT_COLOR,
    LABEL_TEXT_COLOR,
    LEGEND_TEXT_COLOR,
    LABEL_ANGLE,
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

logger = get_logger(__name__)

SHADOW_FILTER_ID = "ds"
HATCH_PATTERN_ID = "disordered-hatch"
HATCH_PATH = "M-1,1 l2,-2 M0,4 l4,-4 M3,5 l2,-2"


class Tag(svgwrite.base.BaseElement):
    """Element with plain text content, used for ``<title>`` tooltips"""

    def __init__(self, elementname, content="", **kwargs):
        self.elementname = elementname
        super().__init__(**kwargs)
        self.content = content

    def get_xml(self):
        xml = super().get_xml()
        xml.text = self.content
        return xml


class SVGRenderer(DiagramRenderer):
    """
    Render layouts as standalone SVG documents

    Output starts with an XML declaration and is byte-identical for identical
    inputs.
    """

    format = OutputFormat.SVG

    def resolve_settings(self, settings: Settings, dpi: float | None = None) -> Settings:
        if dpi is not None and dpi != settings.dpi:
            logger.debug(f"Ignoring dpi={dpi} for vector output")
        return settings

    def render(self, layout: Layout, settings: Settings) -> bytes:
        dwg = svgwrite.Drawing(
            size=(layout.canvas_width, layout.canvas_height),
            profile="full",
            debug=False,
        )
        self._add_definitions(dwg)

        self._draw_lollipops(dwg, layout, settings)
        self._draw_backbone(dwg, layout, settings)
        self._draw_motifs(dwg, layout, settings)
        self._draw_regions(dwg, layout, settings)
        if not settings.hide_axis:
            self._draw_axis(dwg, layout, settings)
        if layout.legend:
            self._draw_legend(dwg, layout, settings)

        buffer = io.StringIO()
        dwg.write(buffer)
        return buffer.getvalue().encode("utf-8")

    def _font_style(self, size: float, fill: str) -> str:
        return f"font-size:{size}px;font-family:{self.measurer.family};fill:{fill};"

    def _disorder_fill(self, settings: Settings) -> dict:
        if settings.solid_fill_only:
            return {"fill": "#000000", "opacity": DISORDER_OPACITY}
        return {"fill": f"url(#{HATCH_PATTERN_ID})"}

    def _add_definitions(self, dwg: svgwrite.Drawing) -> None:
        """Drop shadow filter and diagonal hatch pattern"""
        shadow = dwg.filter(id=SHADOW_FILTER_ID, x=0, y=0)
        shadow.feOffset(in_="SourceAlpha", dx=2, dy=2, result="offsetOut")
        fade = shadow.feComponentTransfer(in_="offsetOut", result="fadeOut")
        fade.feFuncA(type_="linear", slope=0.2)
        shadow.feGaussianBlur(in_="fadeOut", result="blurOut", stdDeviation=1)
        shadow.feBlend(in_="SourceGraphic", in2="blurOut", mode="normal")
        dwg.defs.add(shadow)

        hatch = dwg.pattern(id=HATCH_PATTERN_ID, patternUnits="userSpaceOnUse", size=(4, 4))
        hatch.add(dwg.path(d=HATCH_PATH, stroke="#000000", opacity=0.3))
        dwg.defs.add(hatch)

    def _draw_lollipops(self, dwg, layout: Layout, settings: Settings) -> None:
        for pop in layout.lollipops:
            caption = mutation_caption(pop)
            group = dwg.g(class_="lollipop")
            group.add(Tag("title", caption))
            group.add(
                dwg.line(
                    start=(pop.x, pop.y),
                    end=(pop.x, layout.stem_bottom),
                    stroke=BACKBONE_COLOR,
                    stroke_width=settings.stem_width,
                )
            )
            group.add(dwg.circle(center=(pop.x, pop.y), r=pop.radius, fill=pop.color))

            if settings.show_labels:
                label = dwg.g()
                label.translate(pop.x, pop.y)
                label.rotate(LABEL_ANGLE)
                label.add(
                    dwg.text(
                        caption,
                        insert=(0, pop.radius * -1.5),
                        style=self._font_style(settings.label_font_size, LABEL_TEXT_COLOR),
                        text_anchor="middle",
                    )
                )
                group.add(label)
            dwg.add(group)

    def _draw_backbone(self, dwg, layout: Layout, settings: Settings) -> None:
        backbone = dwg.rect(
            insert=(layout.padding, layout.backbone_y),
            size=(layout.canvas_width - layout.padding * 2, settings.backbone_height),
            fill=BACKBONE_COLOR,
        )
        backbone.add(Tag("title", layout.title))
        dwg.add(backbone)

    def _draw_motifs(self, dwg, layout: Layout, settings: Settings) -> None:
        for block in layout.motifs:
            if block.feature.is_disorder:
                rect = dwg.rect(
                    insert=(block.x, block.y),
                    size=(block.width, block.height),
                    **self._disorder_fill(settings),
                )
            else:
                rect = dwg.rect(
                    insert=(block.x, block.y),
                    size=(block.width, block.height),
                    rx=settings.motif_corner_radius,
                    ry=settings.motif_corner_radius,
                    fill=block.fill,
                    filter=f"url(#{SHADOW_FILTER_ID})",
                )
            rect.add(Tag("title", block.feature.type))
            dwg.add(rect)

    def _draw_regions(self, dwg, layout: Layout, settings: Settings) -> None:
        for block, label in zip(layout.regions, layout.domain_labels):
            feature = block.feature
            group = dwg.g(class_="domain")
            group.translate(block.x, block.y)

            content = dwg.a(href=feature.link) if feature.link else dwg.g()
            content.add(Tag("title", feature.description or feature.text))
            content.add(
                dwg.rect(
                    insert=(0, 0),
                    size=(block.width, block.height),
                    fill=block.fill,
                    filter=f"url(#{SHADOW_FILTER_ID})",
                )
            )
            if label and block.width > settings.min_label_box_width:
                content.add(
                    dwg.text(
                        label,
                        insert=(block.width / 2, domain_baseline(settings)),
                        style=self._font_style(settings.domain_font_size, DOMAIN_TEXT_COLOR),
                        text_anchor="middle",
                    )
                )
            group.add(content)
            dwg.add(group)

    def _draw_axis(self, dwg, layout: Layout, settings: Settings) -> None:
        y = layout.axis_y
        tick_bottom = y + settings.axis_height / 3
        axis = dwg.g(class_="axis")
        axis.add(
            dwg.line(
                start=(layout.padding, y),
                end=(layout.canvas_width - layout.padding, y),
                stroke=AXIS_COLOR,
            )
        )
        axis.add(dwg.line(start=(layout.padding, y), end=(layout.padding, tick_bottom), stroke=AXIS_COLOR))

        for tick in self.axis_ticks(layout, settings):
            x = layout.x_for(tick.position)
            axis.add(dwg.line(start=(x, y), end=(x, tick_bottom), stroke=AXIS_COLOR))
            axis.add(
                dwg.text(
                    str(tick.position),
                    insert=(x, y + settings.axis_height),
                    style=self._font_style(settings.axis_font_size, AXIS_TEXT_COLOR),
                    text_anchor="middle",
                )
            )
        dwg.add(axis)

    def _draw_legend(self, dwg, layout: Layout, settings: Settings) -> None:
        legend = dwg.g(class_="legend")
        y = layout.legend_y
        for key, color in layout.legend.items():
            y += settings.legend_row_height
            if key == DISORDER_LEGEND_KEY:
                fill = self._disorder_fill(settings)
            else:
                fill = {"fill": color}
            legend.add(
                dwg.rect(
                    insert=(settings.legend_x, y),
                    size=(settings.legend_swatch_size, settings.legend_swatch_size),
                    filter=f"url(#{SHADOW_FILTER_ID})",
                    **fill,
                )
            )
            legend.add(
                dwg.text(
                    key,
                    insert=(legend_text_x(settings), y + settings.legend_font_size),
                    style=self._font_style(settings.legend_font_size, LEGEND_TEXT_COLOR),
                    text_anchor="start",
                )
            )
        dwg.add(legend)
