"""
Diagram configuration

Settings are immutable and built per render call. Raster output at a
different resolution uses :meth:`Settings.with_dpi`, which returns a new
value with every pixel constant scaled, leaving the caller's object intact.
"""

from dataclasses import dataclass, replace

from . import constants as c
from .constants import DomainLabelStyle

# Fields expressed in pixels, scaled together when the DPI changes
PIXEL_FIELDS = (
    "lollipop_radius",
    "lollipop_height",
    "backbone_height",
    "motif_height",
    "domain_height",
    "padding",
    "axis_padding",
    "axis_height",
    "text_padding",
    "domain_font_size",
    "axis_font_size",
    "label_font_size",
    "legend_font_size",
    "legend_row_height",
    "legend_swatch_size",
    "legend_x",
    "axis_label_spacing",
    "min_auto_width",
    "shadow_offset",
    "stem_width",
    "line_width",
    "motif_corner_radius",
    "min_label_box_width",
    "min_truncate_width",
)


@dataclass(frozen=True)
class Settings:
    """
    Configurable options for lollipop diagram generation

    Attributes:
        show_labels: Draw mutation text above lollipop markers
        show_legend: Draw a legend for colored regions
        hide_disordered: Skip disordered regions even when motifs are shown
        hide_motifs: Skip all motifs
        hide_axis: Skip the amino acid position axis
        solid_fill_only: Use a flat fill instead of the hatch pattern (SVG)
        domain_label_style: What to do with labels that do not fit
        synonymous_color: #RRGGBB for synonymous markers
        mutation_color: #RRGGBB for non-synonymous markers
        canvas_width: Image width, 0 picks a width that fits all labels
        dpi: Resolution the pixel constants are expressed at

    The remaining fields are pixel constants; see ``PIXEL_FIELDS``.

    Examples:
        >>> settings = Settings(show_legend=True, canvas_width=700)
        >>> hires = settings.with_dpi(300)
        >>> hires.padding
        62.5
        >>> settings.padding
        15.0
    """

    show_labels: bool = False
    show_legend: bool = False
    hide_disordered: bool = False
    hide_motifs: bool = False
    hide_axis: bool = False
    solid_fill_only: bool = False
    domain_label_style: DomainLabelStyle = DomainLabelStyle.TRUNCATE

    synonymous_color: str = c.SYNONYMOUS_COLOR
    mutation_color: str = c.MUTATION_COLOR

    lollipop_radius: float = c.LOLLIPOP_RADIUS
    lollipop_height: float = c.LOLLIPOP_HEIGHT
    backbone_height: float = c.BACKBONE_HEIGHT
    motif_height: float = c.MOTIF_HEIGHT
    domain_height: float = c.DOMAIN_HEIGHT
    padding: float = c.PADDING
    axis_padding: float = c.AXIS_PADDING
    axis_height: float = c.AXIS_HEIGHT
    text_padding: float = c.TEXT_PADDING

    domain_font_size: float = c.DOMAIN_FONT_SIZE
    axis_font_size: float = c.AXIS_FONT_SIZE
    label_font_size: float = c.LABEL_FONT_SIZE
    legend_font_size: float = c.LEGEND_FONT_SIZE
    legend_row_height: float = c.LEGEND_ROW_HEIGHT
    legend_swatch_size: float = c.LEGEND_SWATCH_SIZE
    legend_x: float = c.LEGEND_X

    axis_label_spacing: float = c.AXIS_LABEL_SPACING
    min_auto_width: float = c.MIN_AUTO_WIDTH
    shadow_offset: float = c.SHADOW_OFFSET
    stem_width: float = c.STEM_WIDTH
    line_width: float = c.LINE_WIDTH
    motif_corner_radius: float = c.MOTIF_CORNER_RADIUS
    min_label_box_width: float = c.MIN_LABEL_BOX_WIDTH
    min_truncate_width: float = c.MIN_TRUNCATE_WIDTH

    canvas_width: float = 0.0
    dpi: float = c.DEFAULT_DPI

    def __post_init__(self):
        if isinstance(self.domain_label_style, str):
            object.__setattr__(
                self, "domain_label_style", parse_label_style(self.domain_label_style)
            )
        if self.canvas_width < 0:
            raise ValueError(f"canvas_width must be >= 0, got {self.canvas_width}")
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive, got {self.dpi}")

    @property
    def dpi_scale(self) -> float:
        """Multiplier relative to the 72 DPI baseline"""
        return self.dpi / c.DEFAULT_DPI

    @property
    def lollipop_reach(self) -> float:
        """Vertical space of an unstaggered marker (radius plus stem)"""
        return self.lollipop_radius + self.lollipop_height

    def with_dpi(self, dpi: float) -> "Settings":
        """
        Derive settings with pixel constants scaled to a new resolution

        The factor is relative to this value's own DPI, so resolving an
        already resolved value again is a no-op. An explicit canvas width is
        kept as is: it names the output width in pixels.

        Args:
            dpi: Target resolution

        Returns:
            New Settings instance (self when the DPI is unchanged)
        """
        if dpi <= 0:
            raise ValueError(f"dpi must be positive, got {dpi}")
        if dpi == self.dpi:
            return self

        factor = dpi / self.dpi
        scaled = {name: getattr(self, name) * factor for name in PIXEL_FIELDS}
        return replace(self, dpi=dpi, **scaled)


def parse_label_style(value: str) -> DomainLabelStyle:
    """
    Convert a user-supplied label style name to the enum

    Accepts the legacy spelling "truncated".

    Raises:
        ValueError: If the name is unknown
    """
    name = value.strip().lower()
    if name == "truncated":
        name = DomainLabelStyle.TRUNCATE.value
    try:
        return DomainLabelStyle(name)
    except ValueError:
        valid = ", ".join(s.value for s in DomainLabelStyle)
        raise ValueError(
            f"Unknown domain label style: {value}. Valid styles: {valid}"
        ) from None
