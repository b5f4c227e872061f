"""
Layout engine for lollipop diagrams

Turns a FeatureSet and parsed mutation ticks into a fully resolved
:class:`~lollipops.models.Layout`. All geometry lives here so that the SVG and
raster backends only paint what they are given.

Vertical structure, top to bottom::

    padding (+ padding again when mutation labels are shown)
    lollipop markers, staggered upwards where neighbours collide
    lollipop stems
    domain blocks, with motifs and the backbone centred on them
    axis (optional)
    legend rows (optional)
    padding
"""

from collections.abc import Sequence
from types import MappingProxyType

from PIL import ImageColor

from .constants import (
    BACKGROUND_COLOR,
    MOTIF_NAMES,
    PRIORITY_MOTIF,
    PRIORITY_MUTATION,
    PRIORITY_REGION,
    PRIORITY_SEQUENCE_END,
    PRIORITY_SEQUENCE_START,
    SUPPRESSED_MOTIF_TYPES,
)
from .errors import DataError
from .fonts import TextMeasurer
from .logging_config import get_logger
from .models import Block, Feature, FeatureSet, Layout, Tick
from .mutations import lollipop_radius
from .settings import Settings
from .text_fit import fit_label

logger = get_logger(__name__)

DISORDER_FILL = "#000000"


def blend_colors(a: str, b: str) -> str:
    """
    Straight average of two #RRGGBB colors

    Examples:
        >>> blend_colors("#FF0000", "#FFFFFF")
        '#FF7F7F'
    """
    rgb_a = ImageColor.getrgb(a)
    rgb_b = ImageColor.getrgb(b)
    return "#{:02X}{:02X}{:02X}".format(
        *((x + y) // 2 for x, y in zip(rgb_a[:3], rgb_b[:3]))
    )


def tick_order(tick: Tick) -> tuple[int, int]:
    """Sort key: position ascending, then priority descending"""
    return (tick.position, -tick.priority)


def auto_width(features: FeatureSet, settings: Settings, measurer: TextMeasurer) -> float:
    """
    Pick a canvas width wide enough for every region's short label

    Each region needs ``measure(text) + 2 * text_padding + 1`` pixels; spread
    over its share of the sequence that implies a full backbone width. The
    widest requirement wins, with ``min_auto_width`` as a floor.

    Args:
        features: Annotations to fit
        settings: Resolved settings (fonts and paddings in output pixels)
        measurer: Text measurement capability

    Returns:
        Canvas width in pixels, including both side paddings
    """
    width = settings.min_auto_width
    for region in features.regions:
        if region.is_point:
            continue
        share = region.span / features.length
        needed = (
            measurer.measure(region.text, settings.domain_font_size)
            + settings.text_padding * 2
            + 1
        )
        width = max(width, needed / share)
    return width + settings.padding * 2


def next_better(ticks: Sequence[Tick], i: int, max_dist: int) -> int:
    """
    Find a higher priority tick close ahead of tick ``i``

    Scans forward from ``i`` while positions stay within ``max_dist`` of tick
    ``i``.

    Returns:
        Index of the first tick with strictly greater priority, or ``i`` when
        there is none in range
    """
    origin = ticks[i]
    for j in range(i, len(ticks)):
        if ticks[j].position - origin.position > max_dist:
            return i
        if ticks[j].priority > origin.priority:
            return j
    return i


def thin_axis_ticks(ticks: Sequence[Tick], max_dist: int) -> list[Tick]:
    """
    Choose which ticks get an axis label

    Walks the sorted ticks greedily: a tick is skipped when it is closer than
    ``max_dist`` to the last labelled position, or when a higher priority tick
    follows within ``max_dist``. Both renderers label exactly these ticks.

    Args:
        ticks: Ticks sorted by (position asc, priority desc)
        max_dist: Minimum spacing in sequence positions

    Returns:
        Ticks to label, in axis order
    """
    drawn = []
    last_drawn = None
    for i, tick in enumerate(ticks):
        if last_drawn is not None and (
            tick.position == last_drawn or tick.position - last_drawn < max_dist
        ):
            continue
        if next_better(ticks, i, max_dist) != i:
            continue
        last_drawn = tick.position
        drawn.append(tick)
    return drawn


def axis_spacing(layout: Layout, settings: Settings) -> int:
    """Minimum distance between axis labels in sequence positions"""
    return round(settings.axis_label_spacing / layout.scale)


def visible_motifs(features: FeatureSet, settings: Settings) -> list[Feature]:
    """Motifs that are drawn under the given settings, in input order"""
    if settings.hide_motifs:
        return []
    visible = []
    for motif in features.motifs:
        if motif.type in SUPPRESSED_MOTIF_TYPES or motif.is_point:
            continue
        if motif.is_disorder and settings.hide_disordered:
            continue
        visible.append(motif)
    return visible


def stagger_offsets(pops: Sequence[Tick], radii: Sequence[float], pop_space: int) -> list[float]:
    """
    Vertical lift for each lollipop to clear its right-hand neighbours

    Every following marker within ``pop_space`` positions pushes the current
    one up by ``0.5 + 3 * radius`` of that neighbour.
    """
    offsets = []
    for i, pop in enumerate(pops):
        lift = 0.0
        for j in range(i + 1, len(pops)):
            if pops[j].position - pop.position > pop_space:
                break
            lift += 0.5 + radii[j] * 3.0
        offsets.append(lift)
    return offsets


def compute_layout(
    features: FeatureSet,
    mutations: Sequence[Tick],
    settings: Settings,
    measurer: TextMeasurer,
) -> Layout:
    """
    Resolve all diagram geometry

    Args:
        features: Protein annotations
        mutations: Merged mutation ticks from :func:`parse_changelist`
        settings: Settings already resolved for the output resolution
        measurer: Text measurement capability for label fitting

    Returns:
        Immutable Layout consumed by the renderers

    Raises:
        DataError: If the feature set is invalid or the canvas is too narrow
    """
    features.validate()
    length = features.length
    s = settings

    width = s.canvas_width or auto_width(features, s, measurer)
    scale = (width - s.padding * 2) / length
    if scale <= 0:
        raise DataError(
            f"Canvas width {width} leaves no room inside {s.padding}px padding"
        )
    logger.debug(f"Canvas width {width:.1f}px, {scale:.4f}px per residue")

    reach = s.lollipop_reach
    pops = sorted(mutations, key=tick_order)
    radii = [lollipop_radius(p.count, s.lollipop_radius) for p in pops]
    pop_space = int((s.lollipop_radius + 2) / scale)
    offsets = stagger_offsets(pops, radii, pop_space)
    max_staggered = reach + max(offsets, default=0.0)

    start_y = s.padding
    if s.show_labels:
        start_y += s.padding

    ticks = [
        Tick(position=0, priority=PRIORITY_SEQUENCE_START),
        Tick(position=length, priority=PRIORITY_SEQUENCE_END),
    ]

    domain_top = start_y
    stem_bottom = start_y
    if pops:
        start_y += max_staggered - reach
        pop_top = start_y + s.lollipop_radius
        stem_bottom = pop_top + s.lollipop_height
        domain_top = stem_bottom - (s.domain_height - s.backbone_height) / 2

        for pop, radius, lift in zip(pops, radii, offsets):
            ticks.append(
                Tick(
                    position=pop.position,
                    priority=PRIORITY_MUTATION,
                    count=pop.count,
                    color=pop.color,
                    is_lollipop=True,
                    label=pop.label,
                    x=s.padding + pop.position * scale,
                    y=pop_top - lift,
                    radius=radius,
                )
            )

    backbone_y = domain_top + (s.domain_height - s.backbone_height) / 2
    legend = {} if s.show_legend else None

    motif_blocks = []
    for motif in visible_motifs(features, s):
        x = s.padding + motif.start * scale
        if motif.is_disorder:
            block = Block(
                motif, x, backbone_y, motif.span * scale, s.backbone_height, DISORDER_FILL
            )
        else:
            ticks.append(Tick(position=motif.start, priority=PRIORITY_MOTIF))
            ticks.append(Tick(position=motif.end, priority=PRIORITY_MOTIF))
            block = Block(
                motif,
                x,
                domain_top + (s.domain_height - s.motif_height) / 2,
                motif.span * scale,
                s.motif_height,
                blend_colors(motif.color, BACKGROUND_COLOR),
            )
        motif_blocks.append(block)
        if legend is not None:
            legend[MOTIF_NAMES.get(motif.type, motif.type)] = block.fill

    region_blocks = []
    domain_labels = []
    for region in features.regions:
        if region.is_point:
            continue
        ticks.append(Tick(position=region.start, priority=PRIORITY_REGION))
        ticks.append(Tick(position=region.end, priority=PRIORITY_REGION))

        block_width = region.span * scale
        label = ""
        if block_width > s.min_label_box_width:
            label = fit_label(
                region.text,
                region.description,
                block_width,
                measurer,
                style=s.domain_label_style,
                font_size=s.domain_font_size,
                text_padding=s.text_padding,
                min_truncate_width=s.min_truncate_width,
            )
        region_blocks.append(
            Block(
                region,
                s.padding + region.start * scale,
                domain_top,
                block_width,
                s.domain_height,
                region.color,
            )
        )
        domain_labels.append(label)
        if legend is not None and region.description and label != region.description:
            legend[region.description] = region.color

    height = s.domain_height + s.padding * 2
    if pops:
        height += max_staggered
    axis_y = domain_top + s.domain_height + s.axis_padding
    legend_y = domain_top + s.domain_height
    if not s.hide_axis:
        height += s.axis_padding + s.axis_height
        legend_y = axis_y + s.axis_height
    if legend is not None:
        height += (1 + len(legend)) * s.legend_row_height

    ticks.sort(key=tick_order)

    return Layout(
        ticks=tuple(ticks),
        domain_labels=tuple(domain_labels),
        canvas_width=width,
        canvas_height=height,
        content_start_y=domain_top,
        scale=scale,
        padding=s.padding,
        backbone_y=backbone_y,
        stem_bottom=stem_bottom,
        axis_y=axis_y,
        legend_y=legend_y,
        motifs=tuple(motif_blocks),
        regions=tuple(region_blocks),
        legend=None if legend is None else MappingProxyType(legend),
        length=length,
        title=f"{features.identifier}, {features.description} ({length}aa)",
    )
